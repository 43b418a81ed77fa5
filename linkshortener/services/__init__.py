from linkshortener.services.notifications import NotificationBaseSink, ConsoleNotificationSink
from linkshortener.services.link_service import LinkService
from linkshortener.services.sweeper import ExpirationSweeper


__all__ = [
    'NotificationBaseSink',
    'ConsoleNotificationSink',
    'LinkService',
    'ExpirationSweeper',
]

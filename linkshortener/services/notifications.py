"""Notification sinks informed when a link stops being resolvable.

Classes:
    NotificationBaseSink:
        Interface the link service calls on expiry and click limit events.

    ConsoleNotificationSink:
        Write one line per event to a text stream (stdout by default).
"""

import sys
import logging
from abc import ABC, abstractmethod
from typing import TextIO

from linkshortener.constants import LINK_EXPIRED, LINK_LIMIT_REACHED
from linkshortener.models import LinkModel


logger = logging.getLogger(__name__)


class NotificationBaseSink(ABC):
    """Interface for link event notifications

    Calls are fire-and-forget: the link service ignores return values and
    logs, but otherwise disregards, any exception a sink raises.
    """

    @abstractmethod
    def link_expired(self, owner_id: str, link: LinkModel) -> None:
        """Inform `owner_id` that `link` expired by time."""
        pass

    @abstractmethod
    def limit_reached(self, owner_id: str, link: LinkModel) -> None:
        """Inform `owner_id` that `link` reached its click limit."""
        pass


class ConsoleNotificationSink(NotificationBaseSink):
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def _write(self, message: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        print(message, file=stream, flush=True)

    def link_expired(self, owner_id: str, link: LinkModel) -> None:
        logger.info(
            'Link expired by time.',
            extra={'ownerId': owner_id, 'shortcode': link.shortcode, 'event': LINK_EXPIRED},
        )
        self._write(f'[Notification for {owner_id}] Link {link.shortcode} has expired')

    def limit_reached(self, owner_id: str, link: LinkModel) -> None:
        logger.info(
            'Link reached its click limit.',
            extra={'ownerId': owner_id, 'shortcode': link.shortcode, 'event': LINK_LIMIT_REACHED},
        )
        self._write(f'[Notification for {owner_id}] Link {link.shortcode} reached its click limit ({link.max_clicks})')

from linkshortener.models.link_model import LinkModel
from linkshortener.models.link_stats_model import LinkStatsModel
from linkshortener.models.resolution_model import ResolutionModel


__all__ = [
    'LinkModel',
    'LinkStatsModel',
    'ResolutionModel',
]

from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class LinkStatsModel:
    total: int = 0            # Number of links owned
    active: int = 0           # Links that can still be resolved
    inactive: int = 0         # Links expired by time or by clicks
    total_clicks: int = 0     # Sum of click counts
    mean_clicks: float = 0.0  # Average clicks per link, 0 without links
# fmt: on

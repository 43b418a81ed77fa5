"""In-memory mixin providing shared index setup and locking.

Responsibilities:
    - Initialize the shortcode and owner indices
    - Initialize the lock guarding both indices

Classes:
    - InMemoryStoreMixin: Base mixin to inject index storage & locking.

Example:
    Typical usage with a DAO implementation:

        >>> class LinkMemoryDAO(InMemoryStoreMixin, LinkBaseDAO):
        ...     pass
        ...
        >>> dao = LinkMemoryDAO()
        >>> dao.links
        {}
"""

import threading

from linkshortener.models import LinkModel


class InMemoryStoreMixin:
    """Mixin index storage and locking for in-memory DAOs.

    Attributes:
        links (dict[str, LinkModel]):
            Primary index: shortcode -> link.

        owners (dict[str, dict[str, LinkModel]]):
            Secondary index: owner id -> (shortcode -> link). The inner dict
            keeps one row per shortcode.

        lock (threading.RLock):
            Guards both indices. Held for the duration of a single DAO call,
            never across calls.
    """

    def __init__(self, lock: 'threading.RLock | None' = None):
        """Initialize empty indices

        Args:
            lock (threading.RLock | None):
                Pre-initialized lock. If None, a new re-entrant lock is created.
        """
        self.links: dict[str, LinkModel] = {}
        self.owners: dict[str, dict[str, LinkModel]] = {}
        self.lock = lock if lock is not None else threading.RLock()

    def _index(self, link: LinkModel) -> None:
        """Write `link` into both indices, dropping any row it replaces (lock must be held)"""
        previous = self.links.get(link.shortcode)
        if previous is not None and previous.owner_id != link.owner_id:
            self._unindex_owner(previous)

        self.links[link.shortcode] = link
        self.owners.setdefault(link.owner_id, {})[link.shortcode] = link

    def _unindex(self, shortcode: str) -> LinkModel | None:
        """Remove `shortcode` from both indices (lock must be held)"""
        link = self.links.pop(shortcode, None)
        if link is not None:
            self._unindex_owner(link)
        return link

    def _unindex_owner(self, link: LinkModel) -> None:
        owned = self.owners.get(link.owner_id)
        if owned is None:
            return
        owned.pop(link.shortcode, None)
        if not owned:
            del self.owners[link.owner_id]

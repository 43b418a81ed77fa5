"""Data Access Object (DAO) implementation for managing links in process memory

This module provides a thread-safe, in-memory implementation of LinkBaseDAO.
Links live only as long as the process.

Responsibilities:
    - Insert, replace, retrieve and remove links by shortcode;
    - Index links by owner;
    - Count clicks atomically with the activity check;
    - Sweep links that are no longer active.

Classes:
    LinkMemoryDAO:
        DAO for storing and retrieving LinkModel in a dictionary pair.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> from linkshortener.models import LinkModel
    >>> from linkshortener.dao.memory import LinkMemoryDAO

    >>> dao = LinkMemoryDAO()
    >>> link = LinkModel(
    ...     shortcode='abc123',
    ...     target='https://example.com/page',
    ...     owner_id='user-1',
    ...     max_clicks=10,
    ...     expires_at=datetime.now(UTC) + timedelta(days=1),
    ... )
    >>> dao.insert(link)
    <LinkMemoryDAO>

    >>> dao.hit('abc123').click_count
    1
"""

import logging
from datetime import datetime

from beartype import beartype

from linkshortener.models import LinkModel
from linkshortener.dao.base import LinkBaseDAO
from linkshortener.dao.memory.mixins import InMemoryStoreMixin
from linkshortener.dao.memory.helpers import synchronized
from linkshortener.dao.exceptions import LinkAlreadyExistsError


logger = logging.getLogger(__name__)


class LinkMemoryDAO(InMemoryStoreMixin, LinkBaseDAO):
    """In-memory Data Access Object (DAO) for managing links

    This class implements the LinkBaseDAO interface on top of two dictionaries
    guarded by one re-entrant lock (see InMemoryStoreMixin).

    Links are frozen dataclasses, so every link handed out by this DAO is a
    snapshot: changes made afterwards are only visible after fetching again.

    Methods:
        insert(link: LinkModel, **kwargs) -> LinkMemoryDAO:
            Insert a link. Raises LinkAlreadyExistsError when the shortcode is taken.

        save(link: LinkModel, **kwargs) -> LinkMemoryDAO:
            Insert or replace a link by shortcode.

        get(shortcode: str, **kwargs) -> LinkModel | None:
            Retrieve a link by shortcode.

        hit(shortcode: str, now: datetime | None = None, **kwargs) -> LinkModel | None:
            Count a click on an active link. None if absent or inactive.

        remove(shortcode: str, owner_id: str | None = None, **kwargs) -> bool:
            Remove a link from both indices, optionally only if owned by `owner_id`.

        sweep_expired(now: datetime | None = None, **kwargs) -> int:
            Remove every inactive link.
    """

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'

    @synchronized
    @beartype
    def insert(self, link: LinkModel, **kwargs) -> 'LinkMemoryDAO':
        """Insert a link, failing if its shortcode is already taken

        The existence check and the write happen under the same lock, so two
        concurrent inserts of one shortcode can't both succeed.

        Raises:
            LinkAlreadyExistsError:
                If a link with the same shortcode already exists.
        """
        if link.shortcode in self.links:
            raise LinkAlreadyExistsError(f"Link with code '{link.shortcode}' already exists.")

        self._index(link)
        return self

    @synchronized
    @beartype
    def save(self, link: LinkModel, **kwargs) -> 'LinkMemoryDAO':
        self._index(link)
        return self

    @synchronized
    @beartype
    def get(self, shortcode: str, **kwargs) -> LinkModel | None:
        return self.links.get(shortcode)

    @synchronized
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return shortcode in self.links

    @synchronized
    @beartype
    def find_by_owner(self, owner_id: str, **kwargs) -> list[LinkModel]:
        return list(self.owners.get(owner_id, {}).values())

    @synchronized
    @beartype
    def hit(self, shortcode: str, now: datetime | None = None, **kwargs) -> LinkModel | None:
        """Count one click on an active link

        NOTE: the activity check and the increment run under the same lock.
              Without it, two resolutions of a link with one click left could
              both see it active and push click_count past max_clicks.

        Returns:
            LinkModel | None:
                The stored link after the click, None if the shortcode
                doesn't exist or the link is inactive at `now`.

        Example:
            >>> dao.hit('abc123').click_count
            1
        """
        link = self.links.get(shortcode)
        if link is None or not link.is_active(now):
            return None

        clicked = link.clicked(now)
        self._index(clicked)
        return clicked

    @synchronized
    @beartype
    def remove(self, shortcode: str, owner_id: str | None = None, **kwargs) -> bool:
        link = self.links.get(shortcode)
        if link is None or (owner_id is not None and not link.belongs_to(owner_id)):
            return False

        self._unindex(shortcode)
        return True

    @synchronized
    @beartype
    def sweep_expired(self, now: datetime | None = None, **kwargs) -> int:
        """Remove every link that is inactive at `now`

        Returns:
            int: number of removed links.
        """
        expired = [shortcode for shortcode, link in self.links.items() if not link.is_active(now)]
        for shortcode in expired:
            self._unindex(shortcode)

        if expired:
            logger.debug('Swept inactive links.', extra={'removed': len(expired), 'remaining': len(self.links)})
        return len(expired)

    @synchronized
    def count(self, **kwargs) -> int:
        return len(self.links)

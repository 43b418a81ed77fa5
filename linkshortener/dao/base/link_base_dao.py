"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Store LinkModel objects under their shortcode and index them by owner.
    - Provide atomic click accounting for link resolution.
    - Reclaim links that are no longer active.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.models import LinkModel
        >>> from linkshortener.dao.memory import LinkMemoryDAO

        >>> dao = LinkMemoryDAO()
        >>> dao.insert(link)

        >>> retrieved = dao.get('a1b2c3')
        >>> print(retrieved.target)
        https://example.com/blog/article-123

        >>> [link.shortcode for link in dao.find_by_owner('user-1')]
        ['a1b2c3']
"""

from abc import ABC, abstractmethod
from datetime import datetime

from linkshortener.models import LinkModel


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs).

    Methods:
        insert(link: LinkModel, **kwargs) -> LinkBaseDAO:
            Insert a new link. Raises LinkAlreadyExistsError if the shortcode is taken.

        save(link: LinkModel, **kwargs) -> LinkBaseDAO:
            Insert or replace a link by shortcode.

        get(shortcode: str, **kwargs) -> LinkModel | None:
            Retrieve a link by shortcode. Returns None if not found.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is stored.

        find_by_owner(owner_id: str, **kwargs) -> list[LinkModel]:
            Retrieve all links of an owner. Empty list if there are none.

        hit(shortcode: str, now: datetime | None = None, **kwargs) -> LinkModel | None:
            Count one click on an active link. None if absent or inactive.

        remove(shortcode: str, **kwargs) -> bool:
            Remove a link. Returns whether it existed.

        sweep_expired(now: datetime | None = None, **kwargs) -> int:
            Remove all inactive links. Returns how many were removed.

        count(**kwargs) -> int:
            Number of stored links.

    Subclassing:
        Datastore-specific implementations must extend this class and
        implement all abstract methods. Every method must be atomic with
        respect to concurrent calls on the same DAO: once a call returns, a
        shortcode is present in both the shortcode and the owner index or in
        neither.
    """

    @abstractmethod
    def insert(self, link: LinkModel, **kwargs) -> 'LinkBaseDAO':
        """Insert a new link into the data store.

        Args:
            link (LinkModel):
                The link to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            LinkAlreadyExistsError:
                If a link with the same shortcode already exists.
        """
        pass

    @abstractmethod
    def save(self, link: LinkModel, **kwargs) -> 'LinkBaseDAO':
        """Insert a link or replace the link stored under the same shortcode.

        The owner index never holds two rows for one shortcode.

        Returns:
            LinkBaseDAO: self (for method chaining)
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> LinkModel | None:
        """Retrieve a link by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the link to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel | None: The link if found, otherwise None.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        pass

    @abstractmethod
    def find_by_owner(self, owner_id: str, **kwargs) -> list[LinkModel]:
        """Retrieve every link indexed for an owner.

        Returns:
            list[LinkModel]: a new list, empty when the owner has no links.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, now: datetime | None = None, **kwargs) -> LinkModel | None:
        """Count one click on a link.

        The activity check and the increment happen atomically: the click is
        counted only if the stored link is active at `now`.

        Args:
            shortcode (str):
                The shortcode of the resolved link.

            now (datetime | None):
                Moment of the click. Defaults to the current UTC time.

        Returns:
            LinkModel | None:
                The stored link after the click, or None if the shortcode
                doesn't exist or the link is inactive at `now`.
        """
        pass

    @abstractmethod
    def remove(self, shortcode: str, owner_id: str | None = None, **kwargs) -> bool:
        """Remove a link from every index.

        Args:
            shortcode (str): shortcode of the link
            owner_id (str | None): if given, only a link owned by `owner_id` is removed

        Returns:
            bool: True if a link was removed.
        """
        pass

    @abstractmethod
    def sweep_expired(self, now: datetime | None = None, **kwargs) -> int:
        """Remove every link that is inactive at `now`.

        Returns:
            int: number of removed links.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        pass

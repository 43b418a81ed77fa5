"""Link lifecycle orchestration

Classes:
    LinkService:
        Create, resolve, edit, delete and summarize links on behalf of owners.

Example:
    >>> from linkshortener.dao.memory import LinkMemoryDAO
    >>> from linkshortener.services import LinkService, ConsoleNotificationSink
    >>> from linkshortener.utils import AppSettings
    >>> service = LinkService(
    ...     dao=LinkMemoryDAO(),
    ...     settings=AppSettings(base_url='http://localhost:8080'),
    ...     notifier=ConsoleNotificationSink(),
    ... )
    >>> short_url = service.shorten('user-1', 'https://example.com', max_clicks=1)
    >>> service.resolve(short_url.rsplit('/', 1)[-1]).target
    'https://example.com'
"""

import logging
from datetime import datetime, timedelta, UTC

from linkshortener.constants import (
    ResolveStatus,
    LINK_CREATED,
    LINK_RESOLVED,
    LINK_NOT_FOUND,
    LINK_UNAVAILABLE,
    SHORTCODE_COLLISION,
)
from linkshortener.dao.base import LinkBaseDAO
from linkshortener.dao.exceptions import LinkAlreadyExistsError
from linkshortener.exceptions import ExhaustedRetriesError, InvalidInputError
from linkshortener.models import LinkModel, LinkStatsModel, ResolutionModel
from linkshortener.services.notifications import NotificationBaseSink
from linkshortener.types import ShortcodeGenerator
from linkshortener.utils.config import AppSettings
from linkshortener.utils.helpers import get_short_url, is_valid_url
from linkshortener.utils.shortener import generate_shortcode, fresh_salt


logger = logging.getLogger(__name__)


def _require_positive(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise InvalidInputError(f'{name} must be a positive integer (given value: {value!r}).')


class LinkService:
    """Orchestrate link operations for owners

    Every mutating operation is scoped to the acting owner. Acting on a link
    that doesn't exist and acting on someone else's link both return False,
    so non-owners can't probe which shortcodes exist.

    Attributes:
        dao (LinkBaseDAO):
            Link store.
        settings (AppSettings):
            Immutable application settings.
        notifier (NotificationBaseSink):
            Receives expiry and click limit events.
        generator (ShortcodeGenerator):
            Shortcode generator, `generate_shortcode` by default.
    """

    def __init__(
        self,
        dao: LinkBaseDAO,
        settings: AppSettings,
        notifier: NotificationBaseSink,
        generator: ShortcodeGenerator = generate_shortcode,
    ):
        self.dao = dao
        self.settings = settings
        self.notifier = notifier
        self.generator = generator

    def short_url(self, shortcode: str) -> str:
        return get_short_url(shortcode, self.settings.base_url)

    def shorten(self, owner_id: str, url: str, max_clicks: int | None = None) -> str:
        """Create a link and return its fully qualified short URL

        This method follows this procedure:
        - Step 1: Validate the URL and the click limit
        - Step 2: Generate a shortcode and insert the link, retrying with a
                  fresh salt while the shortcode is taken
        - Step 3: Return the short URL

        Args:
            owner_id (str):
                Acting owner.
            url (str):
                Original URL.
            max_clicks (int | None):
                Click limit. Defaults to `settings.default_max_clicks`.

        Returns:
            str: short URL, e.g. 'http://localhost:8080/aB3dE9x'

        Raises:
            InvalidInputError:
                If the URL is malformed or max_clicks isn't positive.
            ExhaustedRetriesError:
                If no free shortcode was found within `settings.max_collision_retries` attempts.
        """
        # 1- Validate input
        if not is_valid_url(url):
            raise InvalidInputError(f'Invalid URL: {url!r}')
        if max_clicks is None:
            max_clicks = self.settings.default_max_clicks
        _require_positive('max_clicks', max_clicks)

        # 2- Generate a shortcode and store the link
        # NOTE: insert() checks and writes under the store's lock, so the
        #       collision check can't race with another shorten() call.
        now = datetime.now(UTC)
        expires_at = now + timedelta(days=self.settings.default_ttl_days)
        for attempt in range(1, self.settings.max_collision_retries + 1):
            shortcode = self.generator(url, owner_id, fresh_salt(), self.settings.shortcode_length)
            link = LinkModel(
                shortcode=shortcode,
                target=url,
                owner_id=owner_id,
                max_clicks=max_clicks,
                expires_at=expires_at,
                created_at=now,
            )
            try:
                self.dao.insert(link)
            except LinkAlreadyExistsError:
                logger.warning(
                    'Shortcode collision. Retrying with a fresh salt.',
                    extra={'shortcode': shortcode, 'attempt': attempt, 'event': SHORTCODE_COLLISION},
                )
            else:
                break
        else:
            raise ExhaustedRetriesError(f'No free shortcode after {self.settings.max_collision_retries} attempts.')

        # 3- Return the short URL
        logger.info(
            'Shortened URL.',
            extra={'ownerId': owner_id, 'shortcode': shortcode, 'maxClicks': max_clicks, 'event': LINK_CREATED},
        )
        return self.short_url(shortcode)

    def resolve(self, shortcode: str) -> ResolutionModel:
        """Resolve a shortcode to its original URL, counting one click

        This method follows this procedure:
        - Step 1: Look up the link
        - Step 2: If it's inactive, notify the owner why and report it unavailable
        - Step 3: Count the click; notify the owner if it used up the last one
        - Step 4: Return the original URL

        Notification precedence for inactive links: expiry by time wins over
        the click limit when both hold.

        Returns:
            ResolutionModel:
                SUCCESS with the target URL, NOT_FOUND, or UNAVAILABLE.
        """
        # 1- Look up the link
        link = self.dao.get(shortcode)
        if link is None:
            logger.info('Link not found.', extra={'shortcode': shortcode, 'event': LINK_NOT_FOUND})
            return ResolutionModel(status=ResolveStatus.NOT_FOUND)

        # 2- Inactive links are never clicked
        now = datetime.now(UTC)
        if not link.is_active(now):
            return self._unavailable(link, now)

        # 3- Count the click
        # NOTE: hit() re-checks activity under the store's lock. The link may
        #       have been used up, edited or swept since step 1.
        clicked = self.dao.hit(shortcode, now)
        if clicked is None:
            current = self.dao.get(shortcode)
            if current is None:
                logger.info('Link removed during resolution.', extra={'shortcode': shortcode, 'event': LINK_NOT_FOUND})
                return ResolutionModel(status=ResolveStatus.NOT_FOUND)
            return self._unavailable(current, now)

        if clicked.click_count == clicked.max_clicks:
            self._notify(self.notifier.limit_reached, clicked)

        # 4- Return the original URL
        logger.info(
            'Resolved link.',
            extra={'shortcode': shortcode, 'clicks': clicked.click_count, 'maxClicks': clicked.max_clicks, 'event': LINK_RESOLVED},
        )
        return ResolutionModel(status=ResolveStatus.SUCCESS, target=clicked.target, link=clicked)

    def _unavailable(self, link: LinkModel, now: datetime) -> ResolutionModel:
        if link.is_expired(now):
            self._notify(self.notifier.link_expired, link)
        else:
            self._notify(self.notifier.limit_reached, link)

        logger.info(
            'Link unavailable.',
            extra={'shortcode': link.shortcode, 'expired': link.is_expired(now), 'event': LINK_UNAVAILABLE},
        )
        return ResolutionModel(status=ResolveStatus.UNAVAILABLE, link=link)

    def _notify(self, callback, link: LinkModel) -> None:
        try:
            callback(link.owner_id, link)
        except Exception:
            logger.exception('Notification sink failed.', extra={'shortcode': link.shortcode})

    def list_for_owner(self, owner_id: str) -> list[LinkModel]:
        return self.dao.find_by_owner(owner_id)

    def _owned(self, owner_id: str, shortcode: str) -> LinkModel | None:
        link = self.dao.get(shortcode)
        if link is None or not link.belongs_to(owner_id):
            return None
        return link

    def update_max_clicks(self, owner_id: str, shortcode: str, new_limit: int) -> bool:
        """Change the click limit of an owned link

        Click count, expiry, and every other field are preserved.

        Returns:
            bool: True on success, False if the link doesn't exist or isn't owned by `owner_id`.

        Raises:
            InvalidInputError: If `new_limit` isn't positive.
        """
        _require_positive('new_limit', new_limit)

        link = self._owned(owner_id, shortcode)
        if link is None:
            return False

        self.dao.save(link.with_max_clicks(new_limit))
        logger.info('Updated click limit.', extra={'shortcode': shortcode, 'maxClicks': new_limit})
        return True

    def extend_lifetime(self, owner_id: str, shortcode: str, additional_days: int) -> bool:
        """Push the expiry of an owned link back by `additional_days`

        The days are added to the current expiry, not to the current time.

        Returns:
            bool: True on success, False if the link doesn't exist or isn't owned by `owner_id`.

        Raises:
            InvalidInputError:
                If `additional_days` isn't positive or pushes the expiry past
                the largest representable date.
        """
        _require_positive('additional_days', additional_days)

        link = self._owned(owner_id, shortcode)
        if link is None:
            return False

        try:
            extended = link.with_extended_lifetime(additional_days)
        except OverflowError as e:
            raise InvalidInputError(f'additional_days is too large (given value: {additional_days}).') from e

        self.dao.save(extended)
        logger.info('Extended link lifetime.', extra={'shortcode': shortcode, 'expiresAt': extended.expires_at.isoformat()})
        return True

    def delete(self, owner_id: str, shortcode: str) -> bool:
        """Delete an owned link

        The ownership check and the removal run as one store operation. A link
        already swept as inactive reads as absent and yields False.

        Returns:
            bool: True if the link was removed, False if it doesn't exist or isn't owned by `owner_id`.
        """
        removed = self.dao.remove(shortcode, owner_id=owner_id)
        logger.info('Deleted link.', extra={'shortcode': shortcode, 'removed': removed})
        return removed

    def stats(self, owner_id: str) -> LinkStatsModel:
        """Summarize the links of an owner

        Returns:
            LinkStatsModel: all zeros when the owner has no links.
        """
        links = self.dao.find_by_owner(owner_id)
        if not links:
            return LinkStatsModel()

        now = datetime.now(UTC)
        active = sum(1 for link in links if link.is_active(now))
        total_clicks = sum(link.click_count for link in links)
        return LinkStatsModel(
            total=len(links),
            active=active,
            inactive=len(links) - active,
            total_clicks=total_clicks,
            mean_clicks=total_clicks / len(links),
        )

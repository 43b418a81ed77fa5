import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, UTC


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class LinkModel:
    """Represent a shortened URL owned by a single user.

    Links compare and hash by shortcode only: two models with the same
    shortcode are the same stored record, whatever their other fields hold.
    Whether a link is active is never stored, it is recomputed from the clock,
    expiry and click counters on every call to `is_active()`.

    Attributes:
        shortcode (str):
            The unique short identifier used to resolve the link.
        target (str):
            The original long URL that the shortcode resolves to.
        owner_id (str):
            Identifier of the user who created the link.
        max_clicks (int):
            Click ceiling, after which the link is no longer active.
        expires_at (datetime):
            Absolute expiry moment (timezone aware, UTC).
        click_count (int):
            Number of successful resolutions so far.
        created_at (datetime):
            Creation moment, defaults to now.
        id (str):
            Opaque unique identifier, defaults to a random UUID hex.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> link = LinkModel(
        ...     shortcode='abc123',
        ...     target='https://example.com/article/123',
        ...     owner_id='user-1',
        ...     max_clicks=1,
        ...     expires_at=datetime.now(UTC) + timedelta(days=1),
        ... )
        >>> link.is_active()
        True
        >>> link.clicked().is_active()
        False
    """

    # fmt: off
    shortcode: str
    target: str = field(compare=False)
    owner_id: str = field(compare=False)
    max_clicks: int = field(compare=False)
    expires_at: datetime = field(compare=False)
    click_count: int = field(default=0, compare=False)
    created_at: datetime = field(default_factory=_utcnow, compare=False)
    id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)
    # fmt: on

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once the expiry moment has been reached."""
        now = now or _utcnow()
        return now >= self.expires_at

    def is_exhausted(self) -> bool:
        """True once the click ceiling has been reached."""
        return self.click_count >= self.max_clicks

    def is_active(self, now: datetime | None = None) -> bool:
        """Check whether the link may still be resolved

        Args:
            now (datetime | None):
                Moment of the check. Defaults to the current UTC time.

        Returns:
            bool: `now < expires_at and click_count < max_clicks`
        """
        return not self.is_expired(now) and not self.is_exhausted()

    def belongs_to(self, owner_id: str) -> bool:
        return self.owner_id == owner_id

    def clicked(self, now: datetime | None = None) -> 'LinkModel':
        """Return a copy with one more click, or self if the link is inactive"""
        if not self.is_active(now):
            return self
        return replace(self, click_count=self.click_count + 1)

    def with_max_clicks(self, max_clicks: int) -> 'LinkModel':
        return replace(self, max_clicks=max_clicks)

    def with_extended_lifetime(self, days: int) -> 'LinkModel':
        return replace(self, expires_at=self.expires_at + timedelta(days=days))

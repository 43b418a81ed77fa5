from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest

from linkshortener.dao.memory import LinkMemoryDAO
from linkshortener.models import LinkModel
from linkshortener.services import LinkService, NotificationBaseSink
from linkshortener.utils import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url='http://testserver',
        default_ttl_days=1,
        default_max_clicks=5,
        shortcode_length=7,
        sweep_interval_seconds=60,
        max_collision_retries=3,
    )


@pytest.fixture
def dao() -> LinkMemoryDAO:
    return LinkMemoryDAO()


@pytest.fixture
def notifier() -> MagicMock:
    """Mock notification sink recording every event."""
    return MagicMock(spec=NotificationBaseSink)


@pytest.fixture
def service(dao, settings, notifier) -> LinkService:
    return LinkService(dao=dao, settings=settings, notifier=notifier)


@pytest.fixture
def make_link():
    """Build LinkModel instances with sensible defaults."""

    def _make_link(shortcode: str = 'abc123', **overrides) -> LinkModel:
        fields = {
            'target': 'https://example.com/article/123',
            'owner_id': 'owner-1',
            'max_clicks': 10,
            'expires_at': datetime.now(UTC) + timedelta(days=1),
        }
        fields.update(overrides)
        return LinkModel(shortcode=shortcode, **fields)

    return _make_link

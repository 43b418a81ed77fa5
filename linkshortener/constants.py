from enum import StrEnum


class Defaults:
    """Fallback values for application settings."""

    TTL_DAYS = 1  # Link lifetime in days
    MAX_CLICKS = 10  # Click ceiling used when the owner doesn't pass one
    SHORTCODE_LENGTH = 7
    SWEEP_INTERVAL_SECONDS = 60  # Period of the background expiration sweep
    MAX_COLLISION_RETRIES = 10


class Limits:
    """Upper bounds on settings and user input."""

    MAX_TTL_DAYS = 36_500  # Longest default link lifetime a configuration may set


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        PROJECT_ROOT = 'PROJECT_ROOT'
        CONFIG_PATH = 'CONFIG_PATH'
        LOG_LEVEL = 'LOG_LEVEL'


class ResolveStatus(StrEnum):
    """Outcome of resolving a shortcode."""

    SUCCESS = 'SUCCESS'
    NOT_FOUND = 'NOT_FOUND'
    UNAVAILABLE = 'UNAVAILABLE'


# Logging event names
LINK_CREATED = 'LINK_CREATED'
LINK_RESOLVED = 'LINK_RESOLVED'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
LINK_UNAVAILABLE = 'LINK_UNAVAILABLE'
LINK_LIMIT_REACHED = 'LINK_LIMIT_REACHED'
LINK_EXPIRED = 'LINK_EXPIRED'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'

"""Utility functions for application configuration management.

Settings are read once at startup from a YAML document and handed to the
service as an immutable `AppSettings` value. Nothing reads configuration
through a global after startup.

The configuration YAML follows this structure:

    base_url: http://localhost:8080/
    default_ttl_days: 1
    default_max_clicks: 10
    shortcode_length: 7
    sweep_interval_seconds: 60
    max_collision_retries: 10

Only `base_url` is mandatory; every other key falls back to
`linkshortener.constants.Defaults`.

Per-environment documents live in a `config/` directory at the project root:

    config/
    ├── local.yml
    └── test.yml

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    config_path() -> Path
        Return the configuration file to load, using `CONFIG_PATH` when set.

    load_config(path: str | Path | None = None) -> AppSettings
        Load and validate the configuration document.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> settings = load_config()
    >>> settings.base_url
    'http://localhost:8080/'
"""

import os
import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from linkshortener.constants import ENV, Defaults, Limits
from linkshortener.exceptions import BadConfigurationError, MissingConfigurationError
from linkshortener.types import ConfigDocument
from linkshortener.utils.helpers import is_valid_url, normalize_base_url
from linkshortener.utils.shortener import MAX_LENGTH


logger = logging.getLogger(__name__)


# fmt: off
@dataclass(frozen=True)
class AppSettings:
    base_url: str                                                  # Prefix of every short URL, ends with '/'
    default_ttl_days: int = Defaults.TTL_DAYS                      # Lifetime of new links
    default_max_clicks: int = Defaults.MAX_CLICKS                  # Click ceiling when none is given
    shortcode_length: int = Defaults.SHORTCODE_LENGTH              # Length of generated shortcodes
    sweep_interval_seconds: int = Defaults.SWEEP_INTERVAL_SECONDS  # Period of the expiration sweep
    max_collision_retries: int = Defaults.MAX_COLLISION_RETRIES    # Code generation attempts per link
# fmt: on

    def __post_init__(self):
        if not isinstance(self.base_url, str) or not is_valid_url(self.base_url):
            raise BadConfigurationError(f'base_url must be an absolute http, https or ftp URL (given value: {self.base_url!r}).')
        object.__setattr__(self, 'base_url', normalize_base_url(self.base_url))

        for name in ('default_ttl_days', 'default_max_clicks', 'shortcode_length', 'sweep_interval_seconds', 'max_collision_retries'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise BadConfigurationError(f'{name} must be a positive integer (given value: {value!r}).')

        if self.shortcode_length > MAX_LENGTH:
            raise BadConfigurationError(f'shortcode_length must not exceed {MAX_LENGTH} (given value: {self.shortcode_length}).')

        if self.default_ttl_days > Limits.MAX_TTL_DAYS:
            raise BadConfigurationError(f'default_ttl_days must not exceed {Limits.MAX_TTL_DAYS} (given value: {self.default_ttl_days}).')


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'test'
        >>> app_env()
        'test'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable. Falls back to the parent of
    the `linkshortener` package.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def config_path() -> Path:
    """Return the path of the configuration document for this environment

    Example:
        >>> os.environ['APP_ENV'] = 'local'
        >>> config_path()
        PosixPath('/srv/linkshortener/config/local.yml')
    """
    explicit = os.environ.get(ENV.App.CONFIG_PATH)
    if explicit:
        return Path(explicit)
    return project_root() / 'config' / f'{app_env()}.yml'


def _read_document(path: Path) -> ConfigDocument:
    try:
        with path.open('r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise MissingConfigurationError(f"Configuration file '{path}' not found.") from e
    except yaml.YAMLError as e:
        raise BadConfigurationError(f"Configuration file '{path}' is not valid YAML.") from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f"Configuration file '{path}' must contain a mapping.")
    return document


def load_config(path: str | Path | None = None) -> AppSettings:
    """Load application settings from a YAML document

    Args:
        path (str | Path | None):
            Configuration file. Defaults to `config_path()`.

    Returns:
        AppSettings: validated, immutable settings.

    Raises:
        MissingConfigurationError:
            If the configuration file doesn't exist.
        BadConfigurationError:
            If the document is malformed, misses `base_url`, has unknown keys
            or holds invalid values.
    """
    path = Path(path) if path is not None else config_path()
    logger.debug('Loading configuration.', extra={'configPath': str(path)})

    document = _read_document(path)
    if 'base_url' not in document:
        raise BadConfigurationError(f"Configuration file '{path}' is missing 'base_url'.")

    known = {f.name for f in fields(AppSettings)}
    unknown = sorted(set(document) - known)
    if unknown:
        unknown_list = ', '.join(f"'{key}'" for key in unknown)
        raise BadConfigurationError(f"Configuration file '{path}' has unknown keys: {unknown_list}")

    settings = AppSettings(**document)
    logger.debug('Loaded configuration.', extra={'configPath': str(path), 'baseUrl': settings.base_url})
    return settings

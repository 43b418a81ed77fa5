"""Unit tests for configuration loading in config.py.

Test coverage includes:

1. Environment helpers
   - app_env() default and override; config_path() resolution order.

2. Successful loading
   - Ensures a valid YAML document yields normalized AppSettings.
   - Ensures optional keys fall back to defaults.

3. Startup faults
   - Missing files raise MissingConfigurationError.
   - Malformed documents and invalid values raise BadConfigurationError.

4. Shipped configuration
   - The repository's config/local.yml loads.
"""

from pathlib import Path

import pytest
from pytest import MonkeyPatch

from linkshortener.constants import ENV, Defaults, Limits
from linkshortener.exceptions import BadConfigurationError, ConfigurationError, MissingConfigurationError
from linkshortener.utils.config import AppSettings, app_env, config_path, load_config, project_root


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.delenv(ENV.App.APP_ENV, raising=False)
    monkeypatch.delenv(ENV.App.CONFIG_PATH, raising=False)
    monkeypatch.delenv(ENV.App.PROJECT_ROOT, raising=False)


@pytest.fixture
def write_config(tmp_path: Path):
    def _write_config(content: str, name: str = 'local.yml') -> Path:
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return path

    return _write_config


# -------------------------------
# 1. Environment helpers
# -------------------------------


def test_app_env_defaults_to_local():
    assert app_env() == 'local'


def test_app_env_reads_environment(monkeypatch: MonkeyPatch):
    monkeypatch.setenv(ENV.App.APP_ENV, 'TEST')
    assert app_env() == 'test'


def test_config_path_prefers_config_path_env(monkeypatch: MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv(ENV.App.CONFIG_PATH, str(tmp_path / 'custom.yml'))
    assert config_path() == tmp_path / 'custom.yml'


def test_config_path_uses_project_root_and_app_env(monkeypatch: MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv(ENV.App.PROJECT_ROOT, str(tmp_path))
    monkeypatch.setenv(ENV.App.APP_ENV, 'test')
    assert config_path() == tmp_path / 'config' / 'test.yml'


# -------------------------------
# 2. Successful loading
# -------------------------------


def test_load_config_full_document(write_config):
    path = write_config(
        'base_url: http://sho.rt\n'
        'default_ttl_days: 2\n'
        'default_max_clicks: 3\n'
        'shortcode_length: 8\n'
        'sweep_interval_seconds: 30\n'
        'max_collision_retries: 4\n'
    )

    settings = load_config(path)

    assert settings == AppSettings(
        base_url='http://sho.rt/',
        default_ttl_days=2,
        default_max_clicks=3,
        shortcode_length=8,
        sweep_interval_seconds=30,
        max_collision_retries=4,
    )
    assert settings.base_url == 'http://sho.rt/'


def test_load_config_applies_defaults(write_config):
    settings = load_config(write_config('base_url: http://sho.rt/\n'))

    assert settings.default_ttl_days == Defaults.TTL_DAYS
    assert settings.default_max_clicks == Defaults.MAX_CLICKS
    assert settings.shortcode_length == Defaults.SHORTCODE_LENGTH
    assert settings.sweep_interval_seconds == Defaults.SWEEP_INTERVAL_SECONDS
    assert settings.max_collision_retries == Defaults.MAX_COLLISION_RETRIES


def test_load_config_reads_config_path_env(monkeypatch: MonkeyPatch, write_config):
    path = write_config('base_url: http://from-env\n', name='custom.yml')
    monkeypatch.setenv(ENV.App.CONFIG_PATH, str(path))

    assert load_config().base_url == 'http://from-env/'


# -------------------------------
# 3. Startup faults
# -------------------------------


def test_load_config_missing_file(tmp_path: Path):
    with pytest.raises(MissingConfigurationError):
        load_config(tmp_path / 'nope.yml')


@pytest.mark.parametrize(
    'content',
    [
        '',
        '- just\n- a list\n',
        'base_url: [unclosed\n',
        'default_ttl_days: 1\n',
        'base_url: http://sho.rt\nunknown_key: 1\n',
        'base_url: not-a-url\n',
        'base_url: http://sho.rt\ndefault_ttl_days: 0\n',
        'base_url: http://sho.rt\ndefault_ttl_days: 36501\n',
        'base_url: http://sho.rt\ndefault_ttl_days: 9000000\n',
        'base_url: http://sho.rt\ndefault_max_clicks: -5\n',
        'base_url: http://sho.rt\nshortcode_length: 17\n',
        'base_url: http://sho.rt\nshortcode_length: seven\n',
        'base_url: http://sho.rt\nsweep_interval_seconds: true\n',
        'base_url: http://sho.rt\nmax_collision_retries:\n',
    ],
)
def test_load_config_bad_document(write_config, content):
    with pytest.raises(BadConfigurationError):
        load_config(write_config(content))


def test_settings_accept_longest_lifetime():
    settings = AppSettings(base_url='http://sho.rt', default_ttl_days=Limits.MAX_TTL_DAYS)

    assert settings.default_ttl_days == Limits.MAX_TTL_DAYS


def test_settings_reject_lifetime_above_limit():
    with pytest.raises(BadConfigurationError, match='default_ttl_days must not exceed'):
        AppSettings(base_url='http://sho.rt', default_ttl_days=Limits.MAX_TTL_DAYS + 1)


def test_settings_bad_base_url_message_lists_schemes():
    with pytest.raises(BadConfigurationError, match='http, https or ftp'):
        AppSettings(base_url='mailto:someone@example.com')


def test_settings_accept_ftp_base_url():
    assert AppSettings(base_url='ftp://files.example.com').base_url == 'ftp://files.example.com/'


def test_configuration_errors_share_base_class():
    assert issubclass(MissingConfigurationError, ConfigurationError)
    assert issubclass(BadConfigurationError, ConfigurationError)
    assert MissingConfigurationError.error_code == 'config:missing_configuration_error'


# -------------------------------
# 4. Shipped configuration
# -------------------------------


@pytest.mark.parametrize('env', ['local', 'test'])
def test_shipped_configuration_loads(env):
    settings = load_config(project_root() / 'config' / f'{env}.yml')
    assert settings.base_url.endswith('/')

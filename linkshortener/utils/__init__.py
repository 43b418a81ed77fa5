from linkshortener.utils.config import AppSettings, app_env, project_root, config_path, load_config
from linkshortener.utils.helpers import get_short_url, is_valid_url, normalize_base_url
from linkshortener.utils.shortener import generate_shortcode, fresh_salt
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'AppSettings',
    'generate_shortcode',
    'fresh_salt',
    'app_env',
    'project_root',
    'config_path',
    'load_config',
    'get_short_url',
    'is_valid_url',
    'normalize_base_url',
    'initialize_logging',
]

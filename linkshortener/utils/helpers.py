"""Helper utilities shared by the link service and the console front end.

Functions:
    normalize_base_url(url: str) -> str
        Ensure a base URL ends with exactly one trailing slash
    get_short_url(shortcode: str, base_url: str) -> str
        Get string representation of short URL for a given shortcode
    is_valid_url(url: str) -> bool
        Check that a string is a syntactically well-formed absolute URL

Example:
    >>> from linkshortener.utils.helpers import get_short_url
    >>> get_short_url('abc123', 'http://localhost:8080')
    'http://localhost:8080/abc123'
"""

import urllib.parse


ALLOWED_SCHEMES = frozenset({'http', 'https', 'ftp'})


def normalize_base_url(url: str) -> str:
    """Return `url` with exactly one trailing slash

    Example:
        >>> normalize_base_url('http://localhost:8080')
        'http://localhost:8080/'
    """
    return f'{url.rstrip("/")}/'


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): public base URL of the service

    Returns:
        str: short url string representation
    """
    return f'{normalize_base_url(base_url)}{shortcode}'


def is_valid_url(url: str) -> bool:
    """Check that `url` parses as an absolute URL

    Only the syntax is checked: the scheme must be one of http, https or ftp,
    and a host name must be present. Nothing is resolved or fetched.

    Args:
        url (str): candidate URL

    Returns:
        bool: True if the URL is well-formed, False otherwise.

    Example:
        >>> is_valid_url('https://example.com/page')
        True
        >>> is_valid_url('example.com')
        False
    """
    if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
        return False

    try:
        components = urllib.parse.urlparse(url)
        # Accessing .port validates the port number
        components.port
    except ValueError:
        return False

    return components.scheme.lower() in ALLOWED_SCHEMES and bool(components.hostname)

"""Shortcode generation utility

This module provides a helper function for generating short, deterministic
hashes of a target URL and its owner, freshened by a salt value.

Functions:
    generate_shortcode(target, owner_id, salt=None, length=7):
        Generate a short hash suitable for use as a URL slug.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> code = generate_shortcode('https://example.com', 'user-1', salt='my_secret')
    >>> len(code)
    7
"""

import hashlib
import itertools
import string
import time


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits
MAX_LENGTH = hashlib.sha256().digest_size // 2  # one character per digest byte pair

_salt_counter = itertools.count()


def fresh_salt() -> str:
    """Return a salt that differs on every call within this process."""
    return f'{time.time_ns()}:{next(_salt_counter)}'


def generate_shortcode(target: str, owner_id: str, salt: str | None = None, length: int = 7) -> str:
    """Generate a short, deterministic URL hash from a target, owner and salt.

    The three inputs are concatenated and hashed with SHA-256. Each output
    character is taken from a pair of digest bytes: the i-th character is
    `ALPHABET[(digest[2i] + digest[2i + 1]) % 62]`.

    Args:
        target (str):
            Original URL being shortened.

        owner_id (str):
            Identifier of the link owner.

        salt (str, optional):
            Uniqueness token. Identical inputs always yield identical codes,
            so callers looking for a new code after a collision must pass a
            different salt. Defaults to a fresh salt (see `fresh_salt()`).

        length (int, optional):
            Length of the resulting shortcode, 1 to 16.
            Defaults to 7.

    Returns:
        str: A Base62 shortcode of exactly `length` characters.

    Example:
        >>> generate_shortcode('https://example.com', 'user-1', salt='a') == \\
        ...     generate_shortcode('https://example.com', 'user-1', salt='a')
        True
    """
    if not isinstance(target, str):
        raise TypeError(f'Target must be of type string (given type: {type(target)}).')
    if not isinstance(owner_id, str):
        raise TypeError(f'Owner ID must be of type string (given type: {type(owner_id)}).')
    if salt is None:
        salt = fresh_salt()
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if not 1 <= length <= MAX_LENGTH:
        raise ValueError(f'Length must be between 1 and {MAX_LENGTH} (given value: {length}).')

    digest = hashlib.sha256(f'{target}{owner_id}{salt}'.encode('utf-8')).digest()
    return ''.join(ALPHABET[(digest[2 * i] + digest[2 * i + 1]) % BASE] for i in range(length))

"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkAlreadyExistsError:
        Raised when attempting to insert a LinkModel whose shortcode is taken.

Example:
    >>> from linkshortener.dao.exceptions import LinkAlreadyExistsError
    >>> raise LinkAlreadyExistsError("Link with code 'abc123' already exists.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.LinkAlreadyExistsError: Link with code 'abc123' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class LinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a LinkModel that already exists in the data store."""

    pass

import functools
from typing import TypeVar, Any
from collections.abc import Callable


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def synchronized(method: F) -> F:
    """Run a DAO method while holding the DAO's lock

    Args:
        method (Callable[..., Any]):
            DAO method reading or mutating the in-memory indices.

    Returns:
        Callable[..., Any]:
            Wrapped method which holds `self.lock` for the whole call.

    Example:
        >>> @synchronized
        ... def count(self):
        ...     return len(self.links)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)

    return wrapper

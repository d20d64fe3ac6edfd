"""Exceptions raised by the shortlink core.

Classes:
    ShortenerError:
        Generic base class for shortlink exceptions.

    InvalidInputError:
        Raised for a missing/malformed target URL, slug or expiry.

    SlugConflictError:
        Raised when the requested slug is already live. The message never says
        which store holds it.

    CacheUnavailableError:
        Raised inside the cache adapter when Redis can't be reached. The adapter
        recovers from it locally; it never reaches callers of the cache.

    DurableStoreError:
        Raised when the durable store fails (connection issues, timeouts, etc.).
        There is no fallback store of record, so it always propagates.

Example:
    >>> from shortlink.exceptions import SlugConflictError
    >>> raise SlugConflictError("Please choose another short slug.")
    Traceback (most recent call last):
        ...
    shortlink.exceptions.SlugConflictError: Please choose another short slug.
"""


class ShortenerError(Exception):
    """Generic base class for shortlink exceptions."""

    pass


class InvalidInputError(ShortenerError, ValueError):
    """Exception raised when a create request carries invalid input."""

    pass


class SlugConflictError(ShortenerError):
    """Exception raised when a slug is already taken by a live record."""

    pass


class CacheUnavailableError(ShortenerError):
    """Exception raised when the cache can't be reached."""

    pass


class DurableStoreError(ShortenerError):
    """Exception raised when there is an error in the durable store.

    e.g. connection issues, timeouts, constraint violations other than the slug key, etc.
    """

    pass

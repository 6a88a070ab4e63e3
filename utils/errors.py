"""
utils/errors.py
---------------
Exception types shared by the data-access and service layers.
"""

from typing import Optional


class LightBnBError(Exception):
    """Base class for every error raised by this application."""


class ValidationError(LightBnBError, ValueError):
    """A filter, limit or input record is malformed or out of range."""


class QueryFailure(LightBnBError):
    """
    The database rejected or could not run a statement.

    Attributes:
        cause: The underlying driver exception, if any. It is also
            chained as ``__cause__`` when raised with ``from``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

"""
Exceptions raised while decoding bencoded data.
"""
from enum import Enum

__all__ = [
    "ErrorKind",
    "DecodeError",
    "TruncatedInput",
    "InvalidLength",
    "InvalidInteger",
    "UnexpectedToken",
    "NonByteStringKey",
    "NestingTooDeep",
    "UnsortedKey",
    "TrailingData",
]


class ErrorKind(Enum):
    """The ways a bencoded buffer can be malformed."""
    TRUNCATED_INPUT = "truncated input"
    INVALID_LENGTH = "invalid length"
    INVALID_INTEGER = "invalid integer"
    UNEXPECTED_TOKEN = "unexpected token"
    NON_BYTE_STRING_KEY = "non byte string key"
    NESTING_TOO_DEEP = "nesting too deep"
    UNSORTED_KEY = "unsorted key"
    TRAILING_DATA = "trailing data"


class DecodeError(ValueError):
    """
    Base class for decoding failures.

    Carries the byte ``offset`` where the malformation was detected and its
    ``kind``. Subclasses fix the kind, so callers can catch one of them or
    this class and switch on ``err.kind``.
    """
    kind: ErrorKind

    def __init__(self, offset: int, reason: str = ""):
        self.offset = offset
        self.reason = reason or self.kind.value
        super().__init__(f"{self.reason} at offset {offset}")

    def __repr__(self):
        return f"{type(self).__name__}(offset={self.offset}, reason={self.reason!r})"


class TruncatedInput(DecodeError):
    """The buffer ended before a value was complete."""
    kind = ErrorKind.TRUNCATED_INPUT


class InvalidLength(DecodeError):
    """A byte string length prefix is malformed."""
    kind = ErrorKind.INVALID_LENGTH


class InvalidInteger(DecodeError):
    """An integer body is empty, non-canonical, non-numeric or out of range."""
    kind = ErrorKind.INVALID_INTEGER


class UnexpectedToken(DecodeError):
    """A byte that starts no value was found where a value was expected."""
    kind = ErrorKind.UNEXPECTED_TOKEN


class NonByteStringKey(DecodeError):
    """A dictionary key is an integer, list or dictionary."""
    kind = ErrorKind.NON_BYTE_STRING_KEY


class NestingTooDeep(DecodeError):
    kind = ErrorKind.NESTING_TOO_DEEP


class UnsortedKey(DecodeError):
    """A dictionary key does not sort after the previous one (strict mode)."""
    kind = ErrorKind.UNSORTED_KEY


class TrailingData(DecodeError):
    kind = ErrorKind.TRAILING_DATA

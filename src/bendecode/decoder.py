"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import re
from typing import List as _List, Optional, Tuple

from . import config
from .errors import (
    InvalidInteger,
    InvalidLength,
    NestingTooDeep,
    NonByteStringKey,
    TrailingData,
    TruncatedInput,
    UnexpectedToken,
    UnsortedKey,
)
from .structure import Bytes, Dictionary, Integer, List, Value

__all__ = ["Decoder", "parse", "parse_one", "decode"]

_DIGITS = re.compile(rb"[0-9]*")
_INT_BODY = re.compile(rb"-?[0-9]*")

# len(str(2 ** 63))
_INT64_DIGITS = 19


def _as_buffer(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected bytes, not {type(data).__name__}.")


class _Reader:
    """
    Cursor over a single buffer. One is created per call, so a Decoder
    can be shared between threads.
    """
    def __init__(self, data: bytes, max_depth: int, strict: bool):
        self.data = data
        self.i = 0  # cursor index
        self.max_depth = max_depth
        self.strict = strict

    def at_end(self) -> bool:
        return self.i >= len(self.data)

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> bytes:
        if self.i >= len(self.data):
            raise TruncatedInput(self.i, "unexpected end of input")
        return self.data[self.i:self.i+1]

    def _consume(self, n=1):
        self.i += n

    # --------------------------
    # Parsing functions
    # --------------------------

    def parse_value(self, depth: int) -> Value:
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        if ch.isdigit():  # byte strings start with their length
            return self._parse_bytes()

        if ch == b'l':
            return self._parse_list(depth)

        if ch == b'd':
            return self._parse_dict(depth)

        raise UnexpectedToken(self.i, f"unexpected byte {ch!r}")

    def _parse_int(self) -> Integer:
        """Parses ``i<digits>e``. Only the canonical form is accepted."""
        start = self.i
        match = _INT_BODY.match(self.data, start + 1)
        end = match.end()

        if end >= len(self.data):
            raise TruncatedInput(end, "unterminated integer")
        if self.data[end:end+1] != b'e':
            raise InvalidInteger(end, f"unexpected byte {self.data[end:end+1]!r} in integer")

        body = match.group()
        negative = body.startswith(b'-')
        digits = body[1:] if negative else body

        if not digits:
            raise InvalidInteger(start, "integer has no digits")
        if digits.startswith(b'0') and (len(digits) > 1 or negative):
            raise InvalidInteger(start, f"non-canonical integer {body!r}")

        value = int(body) if len(digits) <= _INT64_DIGITS else None
        if value is None or not config.INT64_MIN <= value <= config.INT64_MAX:
            raise InvalidInteger(start, "integer out of 64-bit range")

        self.i = end + 1  # skip 'e'
        return Integer(value)

    def _parse_bytes(self) -> Bytes:
        """Parses ``<length>:<raw bytes>``. The body is taken verbatim."""
        start = self.i
        match = _DIGITS.match(self.data, start)
        colon = match.end()

        if colon >= len(self.data):
            raise TruncatedInput(colon, "unterminated byte string length")
        if self.data[colon:colon+1] != b':':
            raise InvalidLength(colon, f"expected ':' after length, found {self.data[colon:colon+1]!r}")

        length_bytes = match.group()
        if len(length_bytes) > 1 and length_bytes.startswith(b'0'):
            raise InvalidLength(start, f"leading zero in length {length_bytes!r}")
        if len(length_bytes) > len(str(len(self.data))):
            # longer than the whole buffer, whatever the digits are
            raise TruncatedInput(len(self.data), f"byte string length of {len(length_bytes)} digits exceeds input")

        length = int(length_bytes)
        body_start = colon + 1
        body_end = body_start + length
        if body_end > len(self.data):
            raise TruncatedInput(
                len(self.data),
                f"byte string needs {length} bytes, {len(self.data) - body_start} available",
            )

        self.i = body_end
        return Bytes(self.data[body_start:body_end])

    def _enter(self, depth: int):
        if depth + 1 > self.max_depth:
            raise NestingTooDeep(self.i, f"nesting exceeds max depth {self.max_depth}")

    def _parse_list(self, depth: int) -> List:
        self._enter(depth)
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != b'e':
            items.append(self.parse_value(depth + 1))

        self._consume(1)  # skip 'e'
        return List(items)

    def _parse_key(self) -> bytes:
        ch = self._peek()
        if ch.isdigit():
            return self._parse_bytes().value
        if ch in (b'i', b'l', b'd'):
            raise NonByteStringKey(self.i, f"dictionary key starts with {ch!r}")
        raise UnexpectedToken(self.i, f"unexpected byte {ch!r} in dictionary key")

    def _parse_dict(self, depth: int) -> Dictionary:
        self._enter(depth)
        self._consume(1)  # skip 'd'
        entries = {}
        previous: Optional[bytes] = None

        while self._peek() != b'e':
            key_offset = self.i
            key = self._parse_key()
            if self.strict and previous is not None and key <= previous:
                raise UnsortedKey(key_offset, f"key {key!r} does not sort after {previous!r}")
            previous = key
            # duplicate keys: the last one wins
            entries[key] = self.parse_value(depth + 1)

        self._consume(1)  # skip 'e'
        return Dictionary(entries)


class Decoder:
    """
    Decodes bencoded byte strings into ``Value`` trees.

    ``max_depth`` bounds list/dict nesting. With ``strict`` set, dictionary
    keys must appear in ascending bytewise order without duplicates.
    Defaults come from ``bendecode.config``.
    """
    def __init__(self, *, max_depth: Optional[int] = None, strict: Optional[bool] = None):
        self.max_depth = config.MAX_DEPTH if max_depth is None else max_depth
        self.strict = config.STRICT_KEY_ORDER if strict is None else strict
        if self.max_depth < 0:
            raise ValueError("max_depth must not be negative")

    def _reader(self, data) -> _Reader:
        return _Reader(_as_buffer(data), self.max_depth, self.strict)

    def parse(self, data) -> _List[Value]:
        """Decodes every top-level value in ``data``. Empty input gives []."""
        reader = self._reader(data)
        values = []
        while not reader.at_end():
            values.append(reader.parse_value(0))
        return values

    def parse_one(self, data) -> Tuple[bytes, Value]:
        """Decodes the value at the start of ``data``; returns (rest, value)."""
        reader = self._reader(data)
        value = reader.parse_value(0)
        return reader.data[reader.i:], value

    def decode(self, data) -> Value:
        """Decodes a buffer holding exactly one value."""
        reader = self._reader(data)
        value = reader.parse_value(0)
        if not reader.at_end():
            raise TrailingData(reader.i, f"{len(reader.data) - reader.i} bytes after value")
        return value


def parse(data, *, max_depth: Optional[int] = None, strict: Optional[bool] = None) -> _List[Value]:
    """
    Convenience function to decode all values in a bencoded buffer.
    """
    return Decoder(max_depth=max_depth, strict=strict).parse(data)


def parse_one(data, *, max_depth: Optional[int] = None, strict: Optional[bool] = None) -> Tuple[bytes, Value]:
    """
    Convenience function to decode one value and return the unread remainder.
    """
    return Decoder(max_depth=max_depth, strict=strict).parse_one(data)


def decode(data, *, max_depth: Optional[int] = None, strict: Optional[bool] = None) -> Value:
    """
    Convenience function to decode a buffer holding a single value.
    """
    return Decoder(max_depth=max_depth, strict=strict).decode(data)

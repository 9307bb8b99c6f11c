"""
Data structures for representing decoded bencode values.

A decoded value is exactly one of ``Integer``, ``Bytes``, ``List`` or
``Dictionary``. All four share the ``Value`` base, which only this module
may extend. Values are immutable and own their data.
"""
from collections.abc import Mapping, Sequence
from typing import Iterable, Iterator, Optional, Tuple, Union

from . import config

__all__ = [
    "Value",
    "Integer",
    "Bytes",
    "List",
    "Dictionary",
]


class Value:
    """Base class for all bencode values."""
    __slots__ = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(f"{cls.__name__}: bencode values cannot be extended")

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # --------------------------
    # Projections
    # --------------------------

    def as_integer(self) -> Optional[int]:
        """The integer held by an ``Integer``, otherwise None."""
        return None

    def as_bytes(self) -> Optional[bytes]:
        """The raw bytes held by a ``Bytes``, otherwise None."""
        return None

    def as_list(self) -> Optional[Tuple["Value", ...]]:
        """The elements of a ``List``, otherwise None."""
        return None

    def as_dictionary(self) -> Optional["Dictionary"]:
        """The ``Dictionary`` itself, otherwise None."""
        return None

    def to_python(self):
        """Converts the tree into plain int/bytes/list/dict objects."""
        raise NotImplementedError


class Integer(Value):
    """Represents a bencoded integer (64-bit signed)."""
    __slots__ = ("_value",)

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("Integer requires an int.")
        if not config.INT64_MIN <= value <= config.INT64_MAX:
            raise ValueError(f"Integer out of 64-bit range: {value}")
        object.__setattr__(self, "_value", value)

    @property
    def value(self) -> int:
        return self._value

    def as_integer(self) -> Optional[int]:
        return self._value

    def to_python(self) -> int:
        return self._value

    def __int__(self):
        return self._value

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return isinstance(other, Integer) and other._value == self._value

    def __hash__(self):
        return hash((Integer, self._value))

    def __repr__(self):
        return f"Integer({self._value})"


class Bytes(Value):
    """Represents a bencoded byte string. The content is not assumed to be text."""
    __slots__ = ("_value",)

    def __init__(self, value: Union[bytes, bytearray, memoryview]):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Bytes requires bytes.")
        object.__setattr__(self, "_value", bytes(value))

    @property
    def value(self) -> bytes:
        return self._value

    def as_bytes(self) -> Optional[bytes]:
        return self._value

    def to_python(self) -> bytes:
        return self._value

    def text(self, encoding: str = config.TEXT_ENCODING) -> str:
        """Decodes the bytes as text. Raises UnicodeDecodeError on bad data."""
        return self._value.decode(encoding)

    def __len__(self):
        return len(self._value)

    def __bytes__(self):
        return self._value

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return isinstance(other, Bytes) and other._value == self._value

    def __hash__(self):
        return hash((Bytes, self._value))

    def __repr__(self):
        return f"Bytes({self._value!r})"


class List(Value, Sequence):
    """Represents a bencoded list. Element order is the encoded order."""
    __slots__ = ("_value",)

    def __init__(self, value: Iterable[Value] = ()):
        items = tuple(value)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"List elements must be bencode values, not {type(item).__name__}.")
        object.__setattr__(self, "_value", items)

    @property
    def value(self) -> Tuple[Value, ...]:
        return self._value

    def as_list(self) -> Optional[Tuple[Value, ...]]:
        return self._value

    def to_python(self) -> list:
        return [item.to_python() for item in self._value]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return List(self._value[index])
        return self._value[index]

    def __len__(self):
        return len(self._value)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._value)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return isinstance(other, List) and other._value == self._value

    __hash__ = None

    def __repr__(self):
        return f"List({list(self._value)!r})"


class Dictionary(Value, Mapping):
    """
    Represents a bencoded dictionary.

    Keys are raw byte strings. Iteration follows insertion order, which for
    decoded values is the order the keys appeared in the input; lookups are
    by exact byte equality.
    """
    __slots__ = ("_value",)

    def __init__(self, value: Union[Mapping, Iterable[Tuple[bytes, Value]]] = ()):
        entries = dict(value)
        for key, item in entries.items():
            if not isinstance(key, bytes):
                raise TypeError("Dictionary keys must be bytes.")
            if not isinstance(item, Value):
                raise TypeError(f"Dictionary values must be bencode values, not {type(item).__name__}.")
        object.__setattr__(self, "_value", entries)

    @staticmethod
    def _key(key) -> bytes:
        # str keys are a shorthand for their encoded form
        if isinstance(key, str):
            return key.encode(config.TEXT_ENCODING)
        if isinstance(key, (bytearray, memoryview)):
            return bytes(key)
        return key

    @property
    def value(self) -> dict:
        return dict(self._value)

    def as_dictionary(self) -> Optional["Dictionary"]:
        return self

    def get(self, key, default=None) -> Optional[Value]:
        """Returns the value stored under ``key`` or ``default``."""
        return self._value.get(self._key(key), default)

    def to_python(self) -> dict:
        return {key: item.to_python() for key, item in self._value.items()}

    def __getitem__(self, key) -> Value:
        return self._value[self._key(key)]

    def __contains__(self, key):
        return self._key(key) in self._value

    def __len__(self):
        return len(self._value)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._value)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return isinstance(other, Dictionary) and other._value == self._value

    __hash__ = None

    def __repr__(self):
        return f"Dictionary({self._value!r})"

"""
Bencode encoder, the inverse of the decoder.
"""
from .structure import Bytes, Dictionary, Integer, List, Value
from . import config

__all__ = ["encode"]


def encode(obj) -> bytes:
    """Encodes a Value tree or plain Python object into bencoded bytes."""
    parts = []
    _encode_into(obj, parts)
    return b"".join(parts)


def _encode_into(obj, parts: list):
    if isinstance(obj, Value):
        _encode_value(obj, parts)
    elif isinstance(obj, bool):
        raise TypeError("Cannot bencode a bool")
    elif isinstance(obj, int):
        parts.append(encode_int(obj))
    elif isinstance(obj, (bytes, bytearray, memoryview)):
        parts.append(encode_bytes(bytes(obj)))
    elif isinstance(obj, str):
        parts.append(encode_str(obj))
    elif isinstance(obj, (list, tuple)):
        parts.append(b"l")
        for item in obj:
            _encode_into(item, parts)
        parts.append(b"e")
    elif isinstance(obj, dict):
        parts.append(b"d")
        # plain dicts are written in canonical (sorted) key order
        entries = sorted(((_key_to_bytes(k), v) for k, v in obj.items()), key=lambda kv: kv[0])
        for key_bytes, item in entries:
            parts.append(encode_bytes(key_bytes))
            _encode_into(item, parts)
        parts.append(b"e")
    else:
        raise TypeError(f"Cannot bencode object of type {type(obj).__name__}")


def _encode_value(value: Value, parts: list):
    if isinstance(value, Integer):
        parts.append(encode_int(value.value))
    elif isinstance(value, Bytes):
        parts.append(encode_bytes(value.value))
    elif isinstance(value, List):
        parts.append(b"l")
        for item in value:
            _encode_value(item, parts)
        parts.append(b"e")
    elif isinstance(value, Dictionary):
        parts.append(b"d")
        # decoded dictionaries keep the order they were read in
        for key, item in value.items():
            parts.append(encode_bytes(key))
            _encode_value(item, parts)
        parts.append(b"e")


def _key_to_bytes(key) -> bytes:
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode(config.TEXT_ENCODING)
    raise TypeError(f"Bencode dict keys must be bytes or str, not {type(key).__name__}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode(config.TEXT_ENCODING))

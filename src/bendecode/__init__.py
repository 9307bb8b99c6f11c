"""
Bencode package for decoding BitTorrent data into value trees.
"""
from .decoder import Decoder, decode, parse, parse_one
from .encoder import encode
from .errors import (
    DecodeError,
    ErrorKind,
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

__all__ = [
    'parse', 'parse_one', 'decode', 'Decoder', 'encode',
    'Value', 'Integer', 'Bytes', 'List', 'Dictionary',
    'DecodeError', 'ErrorKind', 'TruncatedInput', 'InvalidLength', 'InvalidInteger',
    'UnexpectedToken', 'NonByteStringKey', 'NestingTooDeep', 'UnsortedKey', 'TrailingData',
]

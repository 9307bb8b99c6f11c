import pytest

from bendecode import encode
from bendecode.decoder import decode, parse, parse_one
from bendecode.errors import (
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


@pytest.mark.parametrize(
    "data,error,offset",
    [
        # integers
        (b"i04e", InvalidInteger, 0),
        (b"i00e", InvalidInteger, 0),
        (b"i-0e", InvalidInteger, 0),
        (b"i-00e", InvalidInteger, 0),
        (b"i0040e", InvalidInteger, 0),
        (b"ie", InvalidInteger, 0),
        (b"i-e", InvalidInteger, 0),
        (b"i+3e", InvalidInteger, 1),
        (b"i--1e", InvalidInteger, 2),
        (b"i12x4e", InvalidInteger, 3),
        (b"i1.5e", InvalidInteger, 2),
        (b"i9223372036854775808e", InvalidInteger, 0),
        (b"i-9223372036854775809e", InvalidInteger, 0),
        (b"i123456789012345678901234567890e", InvalidInteger, 0),
        # byte strings
        (b"03:abc", InvalidLength, 0),
        (b"00:", InvalidLength, 0),
        (b"3x:abc", InvalidLength, 1),
        (b"3;abc", InvalidLength, 1),
        # tokens
        (b"x", UnexpectedToken, 0),
        (b"e", UnexpectedToken, 0),
        (b"-3:abc", UnexpectedToken, 0),
        (b"lxe", UnexpectedToken, 1),
        (b"i1ez", UnexpectedToken, 3),
        # dictionary keys
        (b"di1e1:ae", NonByteStringKey, 1),
        (b"dle1:ae", NonByteStringKey, 1),
        (b"dde1:ae", NonByteStringKey, 1),
        (b"dxe", UnexpectedToken, 1),
        (b"d1:ai1ei2e1:be", NonByteStringKey, 7),
    ],
)
def test_malformed_input(data, error, offset):
    with pytest.raises(error) as exc_info:
        parse(data)
    assert exc_info.value.offset == offset
    assert exc_info.value.kind is error.kind


@pytest.mark.parametrize(
    "data",
    [b"i", b"i4", b"i-", b"i42", b"1", b"12", b"4:", b"4:spa", b"9999:ab",
     b"l", b"l4:spam", b"li1e", b"d", b"d3:cow", b"d3:cow3:moo", b"lli1ee",
     b"1" + b"0" * 5000 + b":abc", b"l" + b"9" * 5000 + b":e"],
)
def test_truncated_input(data):
    with pytest.raises(TruncatedInput) as exc_info:
        parse(data)
    assert exc_info.value.kind is ErrorKind.TRUNCATED_INPUT


VALID_ENCODINGS = [
    b"i42e",
    b"i-3e",
    b"i0e",
    b"4:spam",
    b"0:",
    b"le",
    b"de",
    b"l4:spam4:eggse",
    b"d3:cow3:moo4:spam4:eggse",
    b"d4:spaml1:a1:bee",
    b"l4:spam4:eggsi22eli1ei2eee",
    encode({
        "announce": "http://tracker.example/announce",
        "info": {"length": 1024, "name": "file.bin", "piece length": 512, "pieces": b"\x00" * 40},
    }),
]


@pytest.mark.parametrize("data", VALID_ENCODINGS)
def test_every_prefix_is_truncated(data):
    for cut in range(1, len(data)):
        with pytest.raises(TruncatedInput):
            parse(data[:cut])


@pytest.mark.parametrize("data", VALID_ENCODINGS)
def test_valid_encodings_parse(data):
    assert len(parse(data)) == 1


def test_huge_length_prefix_reports_end_of_input():
    data = b"1" + b"0" * 5000 + b":abc"
    with pytest.raises(TruncatedInput) as exc_info:
        parse(data)
    assert exc_info.value.offset == len(data)


def test_truncated_offset_is_end_of_input():
    with pytest.raises(TruncatedInput) as exc_info:
        parse(b"l4:spam")
    assert exc_info.value.offset == 7


def test_error_message():
    with pytest.raises(DecodeError) as exc_info:
        parse(b"i04e")
    err = exc_info.value
    assert str(err) == "non-canonical integer b'04' at offset 0"
    assert "InvalidInteger" in repr(err)


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        parse(b"x")


def test_failure_is_deterministic():
    errors = []
    for _ in range(2):
        with pytest.raises(DecodeError) as exc_info:
            parse(b"d1:al1:b1:c3:de")
        errors.append((type(exc_info.value), exc_info.value.offset, str(exc_info.value)))
    assert errors[0] == errors[1]


def test_parse_one_on_empty_input():
    with pytest.raises(TruncatedInput) as exc_info:
        parse_one(b"")
    assert exc_info.value.offset == 0


def test_decode_rejects_trailing_data():
    with pytest.raises(TrailingData) as exc_info:
        decode(b"i1ei2e")
    assert exc_info.value.offset == 3


def test_nesting_limit():
    assert len(parse(b"l" * 3 + b"e" * 3, max_depth=3)) == 1

    with pytest.raises(NestingTooDeep) as exc_info:
        parse(b"l" * 4 + b"e" * 4, max_depth=3)
    assert exc_info.value.offset == 3

    with pytest.raises(NestingTooDeep):
        parse(b"d1:ad1:ad1:aleeee", max_depth=3)


def test_zero_depth_allows_scalars_only():
    assert parse(b"i1e4:spam", max_depth=0) == parse(b"i1e4:spam")
    with pytest.raises(NestingTooDeep):
        parse(b"le", max_depth=0)


def test_default_nesting_limit_stops_deep_input():
    data = b"l" * 100000 + b"e" * 100000
    with pytest.raises(NestingTooDeep):
        parse(data)


def test_default_nesting_limit_allows_reasonable_depth():
    depth = 200
    (value,) = parse(b"l" * depth + b"e" * depth)
    for _ in range(depth - 1):
        value = value[0]
    assert len(value) == 0


@pytest.mark.parametrize("data,offset", [(b"d1:bi1e1:ai2ee", 7), (b"d1:ai1e1:ai2ee", 7)])
def test_strict_key_order(data, offset):
    # permissive by default
    assert len(parse(data)) == 1

    with pytest.raises(UnsortedKey) as exc_info:
        parse(data, strict=True)
    assert exc_info.value.offset == offset


def test_strict_accepts_canonical():
    assert len(parse(b"d1:ai1e2:aai2e1:bi3ee", strict=True)) == 1

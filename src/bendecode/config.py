"""
Defaults for the decoder and the text helpers built on it.
"""
__all__ = [
    "MAX_DEPTH",
    "STRICT_KEY_ORDER",
    "INT64_MIN",
    "INT64_MAX",
    "TEXT_ENCODING",
]

# Deepest allowed list/dict nesting. Each level costs two Python frames.
MAX_DEPTH: int = 256

# Reject dictionaries whose keys are not in ascending bytewise order.
STRICT_KEY_ORDER: bool = False

INT64_MIN: int = -(2 ** 63)
INT64_MAX: int = 2 ** 63 - 1

TEXT_ENCODING: str = "utf-8"

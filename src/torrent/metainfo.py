import hashlib
from pathlib import Path
from typing import Optional, Union

from bendecode import Bytes, Dictionary, Integer, List, Value, parse, parse_one
from bendecode import config

PIECE_HASH_LEN = 20


def extract_info_bytes(raw: bytes) -> bytes:
    """
    Return the exact bencoded 'info' value of an already validated root
    dictionary. The SHA-1 infohash is taken over these raw bytes, which can
    differ from a re-encoding when the document is not canonical.
    """
    rest = raw[1:]  # skip 'd'
    info = None

    while rest[:1] != b"e":
        rest, key = parse_one(rest)
        start = len(raw) - len(rest)
        rest, _ = parse_one(rest)
        # duplicate keys: the last one wins, as in the decoded tree
        if key.as_bytes() == b"info":
            info = raw[start:len(raw) - len(rest)]

    return info


def _text(value: Optional[Value]) -> Optional[str]:
    raw = value.as_bytes() if value is not None else None
    return raw.decode(config.TEXT_ENCODING, errors="replace") if raw is not None else None


def _integer(value: Optional[Value]) -> Optional[int]:
    return value.as_integer() if value is not None else None


def _required(d: Dictionary, key: bytes, kind: type) -> Value:
    value = d.get(key)
    if not isinstance(value, kind):
        raise ValueError(f"Invalid torrent: {key.decode()!r} must be {kind.__name__}")
    return value


class TorrentMeta:
    """Read-only view over a decoded .torrent document."""

    def __init__(self, source: Union[Path, str, bytes]):
        if isinstance(source, (bytes, bytearray, memoryview)):
            self.path = None
            raw = bytes(source)
        else:
            self.path = Path(source)
            raw = self.path.read_bytes()

        values = parse(raw)
        if len(values) != 1 or not isinstance(values[0], Dictionary):
            raise ValueError("Invalid torrent: root must be a single dictionary")

        self.data = values[0]

        # ------------------ INFO ------------------
        if b"info" not in self.data:
            raise ValueError("Torrent missing 'info' dictionary")

        self.info = _required(self.data, b"info", Dictionary)
        self.info_bytes = extract_info_bytes(raw)
        self.info_hash = hashlib.sha1(self.info_bytes).digest()

        # ------------------ NAME ------------------
        self.name = _text(self.info.get(b"name"))

        # ------------------ ANNOUNCE URL ------------------
        self.announce = _text(self.data.get(b"announce"))

        # ------------------ ANNOUNCE-LIST ------------------
        self.announce_list = None
        ann_list = self.data.get(b"announce-list")

        if ann_list is not None and ann_list.as_list() is not None:
            tiers = []
            for tier in ann_list.as_list():
                urls = [_text(u) for u in (tier.as_list() or ()) if isinstance(u, Bytes)]
                if urls:
                    tiers.append(urls)
            if tiers:
                self.announce_list = tiers

        # ------------------ OPTIONAL FIELDS ------------------
        self.comment = _text(self.data.get(b"comment"))
        self.created_by = _text(self.data.get(b"created by"))
        self.creation_date = _integer(self.data.get(b"creation date"))
        self.private = _integer(self.info.get(b"private")) == 1

        # ------------------ PIECE LENGTH ------------------
        self.piece_length = _required(self.info, b"piece length", Integer).value
        if self.piece_length <= 0:
            raise ValueError("Invalid torrent: 'piece length' must be positive")

        # ------------------ PIECES ------------------
        raw_pieces = _required(self.info, b"pieces", Bytes).value
        if len(raw_pieces) % PIECE_HASH_LEN:
            raise ValueError(f"Invalid torrent: 'pieces' length {len(raw_pieces)} is not a multiple of 20")
        self.pieces = [raw_pieces[i:i+PIECE_HASH_LEN] for i in range(0, len(raw_pieces), PIECE_HASH_LEN)]

        # ------------------ FILES ------------------
        self.files: list = []
        if b"files" in self.info:
            for entry in _required(self.info, b"files", List):
                entry = entry.as_dictionary()
                if entry is None:
                    raise ValueError("Invalid torrent: file entry must be a dictionary")
                length = _required(entry, b"length", Integer).value
                parts = [_text(p) for p in _required(entry, b"path", List)]
                if not parts or None in parts:
                    raise ValueError("Invalid torrent: file path must be a list of strings")
                self.files.append({"length": length, "path": "/".join(parts)})
        else:
            length = _required(self.info, b"length", Integer).value
            self.files.append({"length": length, "path": self.name})

        self.total_length = sum(f["length"] for f in self.files)
        self.is_multi = b"files" in self.info
        self.is_single = not self.is_multi
        self.num_pieces = len(self.pieces)
        self.last_piece_length = (self.total_length % self.piece_length) or self.piece_length

    @classmethod
    def from_bytes(cls, data: bytes) -> "TorrentMeta":
        return cls(data)

    def __repr__(self):
        return (
            f"TorrentMeta(name={self.name!r}, files={len(self.files)}, pieces={self.num_pieces}, "
            f"multi={self.is_multi}, announce={self.announce!r})"
        )

import json
import os
import sys
from argparse import ArgumentParser
from pathlib import Path
from pprint import pformat
from typing import List, Optional

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from bendecode import DecodeError, Decoder, Value
from torrent.metainfo import TorrentMeta

HEX_PREFIX = "hex:"


def create_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Decode a bencoded file and print its contents.")
    parser.add_argument("file", type=Path)
    parser.add_argument("--strict", action="store_true", default=False,
                        help="require dictionary keys in canonical order")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="maximum list/dict nesting depth")
    parser.add_argument("--json", action="store_true", default=False,
                        help="print the decoded values as JSON")
    parser.add_argument("--torrent", action="store_true", default=False,
                        help="print a .torrent summary instead of the raw tree")
    return parser


def render(value: Value):
    """Turns a value tree into JSON-friendly objects. Binary strings become hex."""
    raw = value.as_bytes()
    if raw is not None:
        return _render_bytes(raw)
    items = value.as_list()
    if items is not None:
        return [render(item) for item in items]
    entries = value.as_dictionary()
    if entries is not None:
        return {_render_bytes(key): render(item) for key, item in entries.items()}
    return value.as_integer()


def _render_bytes(raw: bytes) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return HEX_PREFIX + raw.hex()
    # plain text never starts with HEX_PREFIX
    if text.isprintable() and not text.startswith(HEX_PREFIX):
        return text
    return HEX_PREFIX + raw.hex()


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    raw = args.file.read_bytes()
    print(f"[Decode] Read {len(raw)} bytes from {args.file}", file=sys.stderr)

    if args.torrent:
        try:
            meta = TorrentMeta.from_bytes(raw)
        except ValueError as e:
            print(f"[Decode] error: {e}", file=sys.stderr)
            return 1
        print(meta)
        print("announce:", meta.announce)
        print("announce_list:", meta.announce_list)
        print("info_hash:", meta.info_hash.hex())
        return 0

    try:
        values = Decoder(max_depth=args.max_depth, strict=args.strict).parse(raw)
    except DecodeError as e:
        print(f"[Decode] error: {e}", file=sys.stderr)
        return 1

    print(f"[Decode] {len(values)} top-level value(s)", file=sys.stderr)
    rendered = [render(v) for v in values]
    if args.json:
        print(json.dumps(rendered, indent=2))
    else:
        for item in rendered:
            print(pformat(item))
    return 0


if __name__ == "__main__":
    sys.exit(main())

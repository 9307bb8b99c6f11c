"""
Read-only views over decoded .torrent documents.
"""
from .metainfo import TorrentMeta

__all__ = ["TorrentMeta"]

"""Filesystem capabilities consumed by the sync core.

This package provides:
- ReadableFS / WritableFS: the two capability interfaces
- LocalFS: on-disk implementation rooted at a directory
- MemoryFS: in-memory implementation
"""

from tree_sync.fs.base import (
    DirEntry,
    FileInfo,
    ReadableFS,
    WritableFS,
    join_path,
    normalize_path,
    parent_path,
)
from tree_sync.fs.local import LocalFS
from tree_sync.fs.memory import MemoryFS

__all__ = [
    "DirEntry",
    "FileInfo",
    "ReadableFS",
    "WritableFS",
    "join_path",
    "normalize_path",
    "parent_path",
    "LocalFS",
    "MemoryFS",
]

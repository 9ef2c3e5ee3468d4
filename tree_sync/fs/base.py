"""Filesystem capability interfaces.

The sync core only talks to filesystems through these two interfaces, so the
same diff and apply logic works against an on-disk tree, an in-memory tree or
any other backend.

Paths are slash-separated and relative to the filesystem's own root. Both
``""`` and ``"."`` name the root. A missing path raises ``FileNotFoundError``;
any other failure raises an ``OSError`` subclass.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DirEntry:
    """A single entry of a directory listing.

    Attributes:
        name: Entry name (no slashes)
        is_dir: Whether the entry is a directory
    """
    name: str
    is_dir: bool


@dataclass(frozen=True)
class FileInfo:
    """Result of ``stat``.

    Attributes:
        size: Size in bytes
        mtime_ns: Modification time in nanoseconds since the epoch
        is_dir: Whether the path is a directory
    """
    size: int
    mtime_ns: int
    is_dir: bool = False


def normalize_path(path: str) -> str:
    """Normalize a relative slash path, mapping the root to ``""``.

    Raises:
        ValueError: If the path is absolute or escapes the root
    """
    if path.startswith("/"):
        raise ValueError(f"Path must be relative: {path!r}")
    parts = []
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            raise ValueError(f"Path escapes root: {path!r}")
        parts.append(part)
    return "/".join(parts)


def join_path(*parts: str) -> str:
    """Join slash path fragments, ignoring empty and root fragments."""
    return normalize_path("/".join(p for p in parts if p not in ("", ".")))


def parent_path(path: str) -> str:
    """Parent of a slash path; the parent of a top-level entry is the root."""
    path = normalize_path(path)
    if "/" not in path:
        return ""
    return path.rsplit("/", 1)[0]


class ReadableFS(ABC):
    """Read-only filesystem capability."""

    @abstractmethod
    def read_dir(self, path: str) -> List[DirEntry]:
        """List a directory, sorted by name."""
        pass

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Read a file's full content."""
        pass

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Size and modification time of a path."""
        pass


class WritableFS(ReadableFS):
    """Read-write filesystem capability."""

    @abstractmethod
    def mkdir_all(self, path: str, mode: int) -> None:
        """Create a directory and any missing parents. Idempotent."""
        pass

    @abstractmethod
    def write_file(self, path: str, data: bytes, mode: int) -> None:
        """Create or truncate a file and write ``data`` to it."""
        pass

    @abstractmethod
    def remove_all(self, path: str) -> None:
        """Remove a path and everything beneath it. Missing paths are ignored."""
        pass

    @abstractmethod
    def set_mtime(self, path: str, mtime_ns: int) -> None:
        """Set a file's modification time, in nanoseconds since the epoch."""
        pass

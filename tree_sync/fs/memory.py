"""In-memory filesystem."""

import errno
import os
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .base import DirEntry, FileInfo, WritableFS, normalize_path, parent_path


def _error(cls, code: int, path: str) -> OSError:
    return cls(code, os.strerror(code), path)


@dataclass
class _MemFile:
    data: bytes
    mtime_ns: int
    mode: int


class MemoryFS(WritableFS):
    """Filesystem kept entirely in memory.

    Every write stamps the file with a strictly increasing nanosecond
    modification time, so two writes never share an mtime. ``set_mtime``
    overrides it, as apply does to carry over source mtimes.

    Args:
        files: Optional initial content, mapping slash paths to bytes.
            Parent directories are created implicitly.
    """

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self._dirs = {""}
        self._files: Dict[str, _MemFile] = {}
        self._last_ns = 0
        for path, data in (files or {}).items():
            self.mkdir_all(parent_path(path), 0o755)
            self.write_file(path, data, 0o644)

    def _now(self) -> int:
        self._last_ns = max(time.time_ns(), self._last_ns + 1)
        return self._last_ns

    def _check_parent(self, path: str) -> None:
        parent = parent_path(path)
        if parent in self._files:
            raise _error(NotADirectoryError, errno.ENOTDIR, parent)
        if parent not in self._dirs:
            raise _error(FileNotFoundError, errno.ENOENT, parent)

    def read_dir(self, path: str) -> List[DirEntry]:
        path = normalize_path(path)
        if path in self._files:
            raise _error(NotADirectoryError, errno.ENOTDIR, path)
        if path not in self._dirs:
            raise _error(FileNotFoundError, errno.ENOENT, path)
        entries = [
            DirEntry(d.rsplit("/", 1)[-1], True)
            for d in self._dirs
            if d and parent_path(d) == path
        ]
        entries.extend(
            DirEntry(f.rsplit("/", 1)[-1], False)
            for f in self._files
            if parent_path(f) == path
        )
        entries.sort(key=lambda e: e.name)
        return entries

    def read_file(self, path: str) -> bytes:
        path = normalize_path(path)
        if path in self._dirs:
            raise _error(IsADirectoryError, errno.EISDIR, path)
        if path not in self._files:
            raise _error(FileNotFoundError, errno.ENOENT, path)
        return self._files[path].data

    def stat(self, path: str) -> FileInfo:
        path = normalize_path(path)
        if path in self._dirs:
            return FileInfo(size=0, mtime_ns=0, is_dir=True)
        if path not in self._files:
            raise _error(FileNotFoundError, errno.ENOENT, path)
        f = self._files[path]
        return FileInfo(size=len(f.data), mtime_ns=f.mtime_ns)

    def mkdir_all(self, path: str, mode: int) -> None:
        path = normalize_path(path)
        if path in self._files:
            raise _error(FileExistsError, errno.EEXIST, path)
        parts = path.split("/") if path else []
        for i in range(1, len(parts) + 1):
            current = "/".join(parts[:i])
            if current in self._files:
                raise _error(NotADirectoryError, errno.ENOTDIR, current)
            self._dirs.add(current)

    def write_file(self, path: str, data: bytes, mode: int) -> None:
        path = normalize_path(path)
        if path in self._dirs:
            raise _error(IsADirectoryError, errno.EISDIR, path)
        self._check_parent(path)
        self._files[path] = _MemFile(bytes(data), self._now(), mode)

    def remove_all(self, path: str) -> None:
        path = normalize_path(path)
        if not path:
            raise ValueError("Refusing to remove filesystem root")
        prefix = path + "/"
        self._files = {
            p: f for p, f in self._files.items()
            if p != path and not p.startswith(prefix)
        }
        self._dirs = {d for d in self._dirs if d != path and not d.startswith(prefix)}

    def set_mtime(self, path: str, mtime_ns: int) -> None:
        """Force a file's modification time; the write clock is unaffected."""
        path = normalize_path(path)
        if path not in self._files:
            raise _error(FileNotFoundError, errno.ENOENT, path)
        self._files[path].mtime_ns = mtime_ns

    def mode(self, path: str) -> int:
        """Mode a file was written with."""
        path = normalize_path(path)
        if path not in self._files:
            raise _error(FileNotFoundError, errno.ENOENT, path)
        return self._files[path].mode

    def files(self) -> Dict[str, bytes]:
        """Snapshot of every file's content, keyed by path."""
        return {p: f.data for p, f in sorted(self._files.items())}

    def dirs(self) -> List[str]:
        """Every directory except the root, sorted."""
        return sorted(d for d in self._dirs if d)

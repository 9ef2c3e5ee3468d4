"""On-disk filesystem rooted at a directory."""

import logging
import os
import shutil
import stat as stat_module
from pathlib import Path
from typing import List, Union

from .base import DirEntry, FileInfo, WritableFS, normalize_path


logger = logging.getLogger(__name__)


class LocalFS(WritableFS):
    """Filesystem backed by a directory on disk.

    All paths are resolved beneath ``root``; paths that would escape it raise
    ``ValueError``. The root itself does not need to exist until something is
    written.

    Symlinks are never followed when listing: a link is reported as a file,
    whatever it points at, so the diff cannot recurse through a link cycle.
    Reading a link reads its target, which raises ``IsADirectoryError`` for a
    link to a directory; skip such links by name.

    Example:
        fs = LocalFS("/srv/site")
        fs.write_file("index.html", b"<html/>", 0o644)
        fs.read_dir("")  # [DirEntry(name='index.html', is_dir=False)]
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"LocalFS({str(self.root)!r})"

    def _resolve(self, path: str) -> Path:
        rel = normalize_path(path)
        return self.root / rel if rel else self.root

    def read_dir(self, path: str) -> List[DirEntry]:
        entries = []
        with os.scandir(self._resolve(path)) as it:
            for entry in it:
                entries.append(DirEntry(entry.name, entry.is_dir(follow_symlinks=False)))
        entries.sort(key=lambda e: e.name)
        return entries

    def read_file(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def stat(self, path: str) -> FileInfo:
        st = os.stat(self._resolve(path))
        return FileInfo(
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            is_dir=stat_module.S_ISDIR(st.st_mode),
        )

    def mkdir_all(self, path: str, mode: int) -> None:
        os.makedirs(self._resolve(path), mode=mode, exist_ok=True)

    def write_file(self, path: str, data: bytes, mode: int) -> None:
        full = self._resolve(path)
        fd = os.open(full, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as f:
            f.write(data)

    def set_mtime(self, path: str, mtime_ns: int) -> None:
        os.utime(self._resolve(path), ns=(mtime_ns, mtime_ns))

    def remove_all(self, path: str) -> None:
        full = self._resolve(path)
        if full == self.root:
            raise ValueError(f"Refusing to remove filesystem root: {self.root}")
        try:
            if full.is_dir() and not full.is_symlink():
                shutil.rmtree(full)
            else:
                full.unlink()
        except FileNotFoundError:
            logger.debug(f"Nothing to remove at {full}")

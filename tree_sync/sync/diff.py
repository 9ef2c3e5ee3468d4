"""Diff engine.

Walks the source and target trees one directory level at a time and produces
the operations that make the target match the source. Nothing is written.

For each level the result is ordered creates, then deletes, then updates
(with the child levels of common directories nested inside the updates).
"""

import logging
from typing import List, Optional, Tuple

from tree_sync.config import SyncOptions
from tree_sync.fs.base import DirEntry, ReadableFS, join_path
from tree_sync.sync.entries import EntrySet, classify
from tree_sync.sync.ops import Op
from tree_sync.sync.stamp import get_stamper

logger = logging.getLogger(__name__)


class Differ:
    """Computes the operations for one source/target pair.

    Paths handed to the skip predicate and stored on operations are relative
    to the sync roots, so the same key addresses both trees.

    Attributes:
        options: Configuration for this call
        source: Filesystem to read from
        source_root: Root of the synced subtree in ``source``
        target: Filesystem to compare against
        target_root: Root of the synced subtree in ``target``
    """

    def __init__(
        self,
        options: SyncOptions,
        source: ReadableFS,
        source_root: str,
        target: ReadableFS,
        target_root: str,
    ):
        self.options = options
        self.source = source
        self.source_root = source_root
        self.target = target
        self.target_root = target_root
        self._stamp = get_stamper(options.stamp_strategy)

    def _source_path(self, path: str) -> str:
        return join_path(self.source_root, path)

    def _target_path(self, path: str) -> str:
        return join_path(self.target_root, path)

    def diff(self, path: str = "") -> List[Op]:
        """Diff the directory at ``path`` and everything beneath it."""
        source_entries = self.source.read_dir(self._source_path(path))
        try:
            target_entries = self.target.read_dir(self._target_path(path))
        except FileNotFoundError:
            target_entries = []

        target_set = EntrySet(target_entries)
        entries = classify(EntrySet(source_entries), target_set)

        ops: List[Op] = []
        ops.extend(self._create_ops(path, entries.creates))
        ops.extend(self._delete_ops(path, entries.deletes))
        ops.extend(self._update_ops(path, entries.updates, target_set))
        return ops

    def _read_source(self, path: str) -> Optional[Tuple[bytes, int]]:
        """Read a source file and its mtime, or None if it vanished since it was listed.

        The mtime is taken before the read, so a write racing the read leaves
        the target older than the source and the next run picks it up.
        """
        source_path = self._source_path(path)
        try:
            info = self.source.stat(source_path)
            return self.source.read_file(source_path), info.mtime_ns
        except FileNotFoundError:
            logger.debug(f"Source file vanished, skipping: {path}")
            return None

    def _create_ops(self, dir_path: str, entries: List[DirEntry]) -> List[Op]:
        ops: List[Op] = []
        for entry in entries:
            path = join_path(dir_path, entry.name)
            if self.options.skip(path, entry.is_dir):
                continue
            if not entry.is_dir:
                read = self._read_source(path)
                if read is None:
                    continue
                ops.append(self._emit(Op.create(path, *read)))
                continue
            # Nothing exists on the target side, so copy the whole subtree
            try:
                children = self.source.read_dir(self._source_path(path))
            except FileNotFoundError:
                logger.debug(f"Source directory vanished, skipping: {path}")
                continue
            ops.extend(self._create_ops(path, children))
        return ops

    def _delete_ops(self, dir_path: str, entries: List[DirEntry]) -> List[Op]:
        ops: List[Op] = []
        for entry in entries:
            path = join_path(dir_path, entry.name)
            if self.options.skip(path, entry.is_dir):
                continue
            ops.append(self._emit(Op.delete(path)))
        return ops

    def _update_ops(
        self,
        dir_path: str,
        entries: List[DirEntry],
        target_set: EntrySet,
    ) -> List[Op]:
        ops: List[Op] = []
        skip = self.options.skip
        for entry in entries:
            path = join_path(dir_path, entry.name)
            target_entry = target_set.get(entry.name)
            kind_changed = target_entry.is_dir != entry.is_dir
            if skip(path, entry.is_dir):
                continue
            if kind_changed and skip(path, target_entry.is_dir):
                continue

            if kind_changed:
                # Remove the old kind before writing the new one
                ops.append(self._emit(Op.delete(path)))
                ops.extend(self._create_ops(dir_path, [entry]))
                continue

            if entry.is_dir:
                ops.extend(self.diff(path))
                continue

            source_stamp = self._stamp(self.source, self._source_path(path))
            target_stamp = self._stamp(self.target, self._target_path(path))
            if source_stamp == target_stamp:
                continue
            read = self._read_source(path)
            if read is None:
                continue
            ops.append(self._emit(Op.update(path, *read)))
        return ops

    def _emit(self, op: Op) -> Op:
        logger.debug(f"Planned {op}")
        return op


def diff(
    options: SyncOptions,
    source: ReadableFS,
    source_root: str,
    target: ReadableFS,
    target_root: str,
) -> List[Op]:
    """Compute the operations that make ``target_root`` match ``source_root``.

    Args:
        options: Configuration (skip predicate, stamp strategy)
        source: Filesystem to read from
        source_root: Root of the synced subtree in ``source``
        target: Filesystem to compare against
        target_root: Root of the synced subtree in ``target``

    Returns:
        Ordered list of operations

    Raises:
        FileNotFoundError: If the source root does not exist
        OSError: On any other listing, stat or read failure
    """
    return Differ(options, source, source_root, target, target_root).diff()

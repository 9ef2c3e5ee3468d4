"""Public entry point: diff a source subtree against a target, then apply.

Each call is independent. Options are folded into a fresh SyncOptions, the
whole diff runs before any write, and the first error from either phase is
raised unchanged.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from tree_sync.config import Option, build_options
from tree_sync.fs.base import ReadableFS, WritableFS
from tree_sync.sync.apply import apply
from tree_sync.sync.diff import diff
from tree_sync.sync.ops import Op, OpType
from tree_sync.utils.logging import log_sync_summary

logger = logging.getLogger(__name__)


@dataclass
class SyncStats:
    """Statistics from a sync operation."""

    creates: int = 0
    updates: int = 0
    deletes: int = 0
    bytes_written: int = 0

    # Timing
    started_at: float = 0.0
    completed_at: float = 0.0
    duration_ms: float = 0.0

    operations: List[Op] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Whether anything was applied."""
        return bool(self.operations)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "creates": self.creates,
            "updates": self.updates,
            "deletes": self.deletes,
            "bytes_written": self.bytes_written,
            "duration_ms": self.duration_ms,
            "operations": [str(op) for op in self.operations],
        }


def plan(
    source: ReadableFS,
    source_root: str,
    target: ReadableFS,
    target_root: str,
    *options: Option,
) -> List[Op]:
    """Compute the operations a sync would apply, without writing anything."""
    return diff(build_options(*options), source, source_root, target, target_root)


def sync_dir(
    source: ReadableFS,
    source_root: str,
    target: WritableFS,
    target_root: str,
    *options: Option,
) -> SyncStats:
    """Sync ``source_root`` in ``source`` to ``target_root`` in ``target``.

    Args:
        source: Filesystem to read from (never written)
        source_root: Root of the synced subtree in ``source``
        target: Filesystem to write to
        target_root: Root of the synced subtree in ``target``
        *options: Option callables such as ``with_skip(...)``

    Returns:
        SyncStats describing the applied operations

    Raises:
        FileNotFoundError: If the source root does not exist
        OSError: The first I/O failure from diff or apply; already applied
            operations are not rolled back
    """
    stats = SyncStats(started_at=time.time())
    opts = build_options(*options)

    ops = diff(opts, source, source_root, target, target_root)
    apply(target, target_root, ops, opts)

    stats.operations = ops
    for op in ops:
        if op.type is OpType.CREATE:
            stats.creates += 1
        elif op.type is OpType.UPDATE:
            stats.updates += 1
        else:
            stats.deletes += 1
        if op.data is not None:
            stats.bytes_written += len(op.data)

    return _finalize_stats(stats, source_root, target_root)


def _finalize_stats(stats: SyncStats, source_root: str, target_root: str) -> SyncStats:
    stats.completed_at = time.time()
    stats.duration_ms = (stats.completed_at - stats.started_at) * 1000

    log_sync_summary(logger, source_root, target_root, stats.to_dict())

    return stats

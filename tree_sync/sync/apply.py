"""Apply engine.

Replays operations onto the target in order. The target is never read: every
decision was made during the diff. The first failure propagates and nothing
already applied is undone.
"""

import logging
from typing import Iterable, Optional

from tree_sync.config import SyncOptions
from tree_sync.fs.base import WritableFS, join_path, parent_path
from tree_sync.sync.ops import Op, OpType

logger = logging.getLogger(__name__)


def _stamp_mtime(target: WritableFS, path: str, op: Op) -> None:
    # Matching mtimes keep the metadata stamp equal on the next run
    if op.mtime_ns is not None:
        target.set_mtime(path, op.mtime_ns)


def apply_op(target: WritableFS, target_root: str, op: Op, options: SyncOptions) -> None:
    """Apply a single operation beneath ``target_root``."""
    path = join_path(target_root, op.path)
    if op.type is OpType.CREATE:
        target.mkdir_all(parent_path(path), options.dir_mode)
        target.write_file(path, op.data, options.file_mode)
        _stamp_mtime(target, path, op)
    elif op.type is OpType.UPDATE:
        target.write_file(path, op.data, options.file_mode)
        _stamp_mtime(target, path, op)
    elif op.type is OpType.DELETE:
        target.remove_all(path)
    else:
        raise ValueError(f"Unknown operation type: {op.type!r}")
    logger.debug(f"Applied {op}")


def apply(
    target: WritableFS,
    target_root: str,
    ops: Iterable[Op],
    options: Optional[SyncOptions] = None,
) -> None:
    """Apply operations in order, stopping at the first error.

    Args:
        target: Filesystem to write to
        target_root: Root of the synced subtree in ``target``
        ops: Operations from the diff
        options: Supplies file and directory modes (defaults if None)

    Raises:
        OSError: The first write or removal failure, unchanged
    """
    options = options or SyncOptions()
    for op in ops:
        apply_op(target, target_root, op, options)

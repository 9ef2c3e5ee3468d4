"""Synchronization core for tree_sync.

This module provides:
- diff: Compute create/update/delete operations for two trees
- apply: Replay operations onto a writable filesystem
- sync_dir: Diff then apply in one call
- plan: Diff only, for dry runs

Data flows one way: skip predicate -> diff -> operation list -> apply.
"""

from tree_sync.sync.apply import apply
from tree_sync.sync.diff import Differ, diff
from tree_sync.sync.engine import SyncStats, plan, sync_dir
from tree_sync.sync.ops import Op, OpType
from tree_sync.sync.stamp import MISSING_STAMP, content_stamp, stamp

__all__ = [
    "apply",
    "diff",
    "Differ",
    "plan",
    "sync_dir",
    "SyncStats",
    "Op",
    "OpType",
    "MISSING_STAMP",
    "stamp",
    "content_stamp",
]

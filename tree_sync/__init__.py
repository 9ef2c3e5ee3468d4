"""tree_sync - Make one directory tree match another.

Given a read-only source subtree and a read-write target subtree, tree_sync
computes the creates, updates and deletes that make the target identical to
the source, honoring caller-supplied skip rules, and applies them in order.

Key Features:
    - Filesystem-agnostic: works over any ReadableFS / WritableFS pair
    - Cheap change detection from size and modification time
    - Optional content hashing (xxhash when installed)
    - Composable skip predicates evaluated before recursion
    - Deterministic, name-ordered operation lists

Quick Start:
    from tree_sync import LocalFS, sync_dir, with_skip, skip_names

    stats = sync_dir(
        LocalFS("./build"), "",
        LocalFS("./public"), "",
        with_skip(skip_names(".git", "__pycache__")),
    )
    print(stats.to_dict())

Classes:
    SyncOptions: Per-call configuration
    StampStrategy: Enum for change stamps (METADATA, CONTENT)
    Op / OpType: Operations produced by the diff
    LocalFS / MemoryFS: Bundled filesystem implementations
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    StampStrategy,
    SyncOptions,
    with_modes,
    with_skip,
    with_stamp,
)
from .fs import DirEntry, FileInfo, LocalFS, MemoryFS, ReadableFS, WritableFS
from .skip import compose_skips, never_skip, skip_globs, skip_hidden, skip_names
from .sync import MISSING_STAMP, Op, OpType, SyncStats, apply, diff, plan, sync_dir
from .utils.logging import configure_logging

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Entry points
    "sync_dir",
    "plan",
    "diff",
    "apply",
    "SyncStats",
    "configure_logging",
    # Configuration
    "SyncOptions",
    "StampStrategy",
    "DEFAULT_FILE_MODE",
    "DEFAULT_DIR_MODE",
    "with_skip",
    "with_stamp",
    "with_modes",
    # Skip predicates
    "never_skip",
    "compose_skips",
    "skip_names",
    "skip_globs",
    "skip_hidden",
    # Operations
    "Op",
    "OpType",
    "MISSING_STAMP",
    # Filesystems
    "DirEntry",
    "FileInfo",
    "ReadableFS",
    "WritableFS",
    "LocalFS",
    "MemoryFS",
]

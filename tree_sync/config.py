"""Configuration dataclasses for tree_sync."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable

from tree_sync.skip import SkipFunc, compose_skips, never_skip


DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


class StampStrategy(Enum):
    """How a file's change stamp is computed."""
    METADATA = "metadata"  # size + mtime, no content read
    CONTENT = "content"    # hash of the full content


@dataclass(frozen=True)
class SyncOptions:
    """Configuration for a single sync call.

    Built once per call and passed down the recursion unchanged.

    Attributes:
        skip: Predicate over (path, is_dir); True excludes the path
        stamp_strategy: How update candidates are compared
        file_mode: Mode for written files
        dir_mode: Mode for created directories
    """
    skip: SkipFunc = field(default=never_skip, compare=False)
    stamp_strategy: StampStrategy = StampStrategy.METADATA
    file_mode: int = DEFAULT_FILE_MODE
    dir_mode: int = DEFAULT_DIR_MODE

    def __post_init__(self):
        """Validate modes and coerce the stamp strategy."""
        if isinstance(self.stamp_strategy, str):
            object.__setattr__(self, "stamp_strategy", StampStrategy(self.stamp_strategy))
        for name in ("file_mode", "dir_mode"):
            mode = getattr(self, name)
            if not isinstance(mode, int) or not 0 <= mode <= 0o7777:
                raise ValueError(f"Invalid {name}: {mode!r}")


Option = Callable[[SyncOptions], SyncOptions]


def with_skip(*skips: SkipFunc) -> Option:
    """Exclude paths matching any of the given predicates.

    Try to skip as high up in the tree as possible: skipping ``gen/out``
    does not stop ``gen`` from being deleted when the source has no ``gen``.
    """
    def option(opts: SyncOptions) -> SyncOptions:
        return replace(opts, skip=compose_skips([opts.skip, *skips]))
    return option


def with_stamp(strategy) -> Option:
    """Select the change stamp used for update candidates."""
    strategy = StampStrategy(strategy)

    def option(opts: SyncOptions) -> SyncOptions:
        return replace(opts, stamp_strategy=strategy)
    return option


def with_modes(file_mode: int = DEFAULT_FILE_MODE, dir_mode: int = DEFAULT_DIR_MODE) -> Option:
    """Override the modes used when writing files and directories."""
    def option(opts: SyncOptions) -> SyncOptions:
        return replace(opts, file_mode=file_mode, dir_mode=dir_mode)
    return option


def build_options(*options: Option) -> SyncOptions:
    """Fold options over the default configuration."""
    opts = SyncOptions()
    for option in options:
        opts = option(opts)
    return opts

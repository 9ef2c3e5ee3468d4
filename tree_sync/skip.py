"""Skip predicates.

A skip predicate is called as ``skip(path, is_dir)`` with the slash-separated
path relative to the sync root. Returning True excludes the path, and for a
directory everything beneath it, from the diff.
"""

import fnmatch
from typing import Callable, Iterable

SkipFunc = Callable[[str, bool], bool]


def never_skip(path: str, is_dir: bool) -> bool:
    """Default predicate: nothing is skipped."""
    return False


def compose_skips(skips: Iterable[SkipFunc]) -> SkipFunc:
    """Combine predicates so that any one of them returning True skips."""
    skips = tuple(skips)

    def skip(path: str, is_dir: bool) -> bool:
        for fn in skips:
            if fn(path, is_dir):
                return True
        return False

    return skip


def _basename(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


def skip_names(*names: str, dirs_only: bool = False) -> SkipFunc:
    """Skip entries whose name (last path segment) is one of ``names``."""
    wanted = frozenset(names)

    def skip(path: str, is_dir: bool) -> bool:
        if dirs_only and not is_dir:
            return False
        return _basename(path) in wanted

    return skip


def skip_globs(*patterns: str, dirs_only: bool = False) -> SkipFunc:
    """Skip entries whose path or name matches any glob pattern.

    Example:
        >>> skip = skip_globs("*.pyc", "build/*")
        >>> skip("pkg/mod.pyc", False)
        True
    """
    patterns = tuple(patterns)

    def skip(path: str, is_dir: bool) -> bool:
        if dirs_only and not is_dir:
            return False
        name = _basename(path)
        for pattern in patterns:
            if fnmatch.fnmatchcase(path, pattern) or fnmatch.fnmatchcase(name, pattern):
                return True
        return False

    return skip


def skip_hidden(path: str, is_dir: bool) -> bool:
    """Skip dotfiles and dot-directories."""
    return _basename(path).startswith(".")

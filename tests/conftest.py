"""Shared pytest fixtures for tree_sync tests.

Provides on-disk source/target trees under tmp_path and populated in-memory
filesystems, plus helpers for inspecting operation lists.
"""

import os
from pathlib import Path

import pytest

from tree_sync.fs import LocalFS, MemoryFS


def snapshot(root: Path) -> dict:
    """Map every file under ``root`` to its bytes, keyed by slash path."""
    result = {}
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            full = Path(dirpath) / name
            result[full.relative_to(root).as_posix()] = full.read_bytes()
    return result


def op_strings(ops) -> list:
    return [str(op) for op in ops]


@pytest.fixture
def tmp_dirs(tmp_path):
    """Create temporary source and target directories for testing."""
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    return {"source": source, "target": target, "root": tmp_path}


@pytest.fixture
def local_fs(tmp_dirs):
    """LocalFS instances over the temporary source and target directories."""
    return LocalFS(tmp_dirs["source"]), LocalFS(tmp_dirs["target"])


@pytest.fixture
def populated_dirs(tmp_dirs):
    """Temp directories with a sample source tree and an empty target."""
    source = tmp_dirs["source"]

    (source / "file1.txt").write_text("hello world")
    (source / "file2.json").write_text('{"key": "value"}')
    (source / "subdir").mkdir()
    (source / "subdir" / "nested.txt").write_text("nested content")
    (source / "subdir" / "deeper").mkdir()
    (source / "subdir" / "deeper" / "leaf.txt").write_text("leaf")
    (source / "data.bin").write_bytes(b"\x00\x01\x02\x03" * 100)

    return tmp_dirs


@pytest.fixture
def memory_source():
    """In-memory source tree."""
    return MemoryFS({
        "a.txt": b"alpha",
        "b.txt": b"bravo",
        "docs/index.md": b"# docs",
        "docs/guide/intro.md": b"intro",
        "ignored/cache.bin": b"\x00" * 8,
    })


@pytest.fixture
def memory_target():
    """Empty in-memory target."""
    return MemoryFS()

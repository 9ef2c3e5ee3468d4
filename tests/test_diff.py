"""Tests for tree_sync.sync.diff module.

Validates classification into operations, ordering, skip handling, kind
changes, and the tolerated not-found races.
"""

import errno

import pytest

from tree_sync.config import SyncOptions, build_options, with_skip, with_stamp
from tree_sync.fs import MemoryFS
from tree_sync.sync.diff import diff
from tree_sync.sync.ops import Op, OpType

from conftest import op_strings


def run_diff(source, target, *options, source_root="", target_root=""):
    return diff(build_options(*options), source, source_root, target, target_root)


class TestBasicDiff:
    """Test single-level classification."""

    def test_create(self):
        ops = run_diff(MemoryFS({"a.txt": b"hi"}), MemoryFS())
        assert ops == [Op.create("a.txt", b"hi")]

    def test_delete(self):
        ops = run_diff(MemoryFS(), MemoryFS({"old.txt": b"x"}))
        assert ops == [Op.delete("old.txt")]

    def test_unchanged_file(self):
        source = MemoryFS({"same.txt": b"abc"})
        target = MemoryFS({"same.txt": b"abc"})
        source.set_mtime("same.txt", 100)
        target.set_mtime("same.txt", 100)
        assert run_diff(source, target) == []

    def test_changed_file(self):
        source = MemoryFS({"x.txt": b"new content"})
        target = MemoryFS({"x.txt": b"old"})
        assert run_diff(source, target) == [Op.update("x.txt", b"new content")]

    def test_ops_carry_source_mtime(self):
        source = MemoryFS({"new.txt": b"n", "x.txt": b"new content"})
        target = MemoryFS({"x.txt": b"old"})
        source.set_mtime("new.txt", 42)
        source.set_mtime("x.txt", 43)
        ops = run_diff(source, target)
        assert [(str(op), op.mtime_ns) for op in ops] == [("create:new.txt", 42), ("update:x.txt", 43)]

    def test_same_size_same_mtime_is_missed_by_metadata_stamp(self):
        source = MemoryFS({"x.txt": b"aaaa"})
        target = MemoryFS({"x.txt": b"bbbb"})
        source.set_mtime("x.txt", 7)
        target.set_mtime("x.txt", 7)
        assert run_diff(source, target) == []

    def test_content_stamp_catches_same_size_change(self):
        source = MemoryFS({"x.txt": b"aaaa"})
        target = MemoryFS({"x.txt": b"bbbb"})
        source.set_mtime("x.txt", 7)
        target.set_mtime("x.txt", 7)
        ops = run_diff(source, target, with_stamp("content"))
        assert ops == [Op.update("x.txt", b"aaaa")]

    def test_content_stamp_ignores_mtime_only_change(self):
        source = MemoryFS({"x.txt": b"same"})
        target = MemoryFS({"x.txt": b"same"})
        source.set_mtime("x.txt", 1)
        target.set_mtime("x.txt", 2)
        assert run_diff(source, target, with_stamp("content")) == []

    def test_missing_target_root_is_empty(self):
        ops = run_diff(MemoryFS({"a.txt": b"hi"}), MemoryFS(), target_root="not/there")
        assert ops == [Op.create("a.txt", b"hi")]

    def test_missing_source_root_raises(self):
        with pytest.raises(FileNotFoundError):
            run_diff(MemoryFS(), MemoryFS(), source_root="nope")


class TestRecursion:
    """Test recursion into new and common directories."""

    def test_new_directory_copies_every_file(self):
        source = MemoryFS({"sub/inner.txt": b"i", "sub/deep/leaf.txt": b"l"})
        ops = run_diff(source, MemoryFS())
        assert op_strings(ops) == ["create:sub/deep/leaf.txt", "create:sub/inner.txt"]

    def test_deleted_directory_is_single_op(self):
        target = MemoryFS({"gone/a.txt": b"a", "gone/b/c.txt": b"c"})
        ops = run_diff(MemoryFS(), target)
        assert ops == [Op.delete("gone")]

    def test_common_directory_is_diffed(self):
        source = MemoryFS({"d/keep.txt": b"k", "d/new.txt": b"n"})
        target = MemoryFS({"d/keep.txt": b"k", "d/old.txt": b"o"})
        source.set_mtime("d/keep.txt", 5)
        target.set_mtime("d/keep.txt", 5)
        ops = run_diff(source, target)
        assert op_strings(ops) == ["create:d/new.txt", "delete:d/old.txt"]

    def test_empty_source_directory_produces_nothing(self):
        source = MemoryFS()
        source.mkdir_all("empty", 0o755)
        assert run_diff(source, MemoryFS()) == []

    def test_level_order_creates_deletes_updates(self):
        source = MemoryFS({"b_new.txt": b"n", "c_dir/f.txt": b"new content", "d.txt": b"changed"})
        target = MemoryFS({"a_old.txt": b"o", "c_dir/f.txt": b"old", "d.txt": b"x"})
        ops = run_diff(source, target)
        assert op_strings(ops) == [
            "create:b_new.txt",
            "delete:a_old.txt",
            "update:c_dir/f.txt",
            "update:d.txt",
        ]

    def test_roots_are_independent(self):
        source = MemoryFS({"build/out/a.txt": b"a"})
        target = MemoryFS({"www/stale.txt": b"s"})
        ops = run_diff(source, target, source_root="build/out", target_root="www")
        assert op_strings(ops) == ["create:a.txt", "delete:stale.txt"]

    def test_deterministic(self, memory_source):
        first = run_diff(memory_source, MemoryFS({"zz.txt": b"z"}))
        second = run_diff(memory_source, MemoryFS({"zz.txt": b"z"}))
        assert first == second


class TestSkip:
    """Test skip predicates during diff."""

    def test_skipped_directory_is_not_visited(self):
        source = MemoryFS({"ignored/a.txt": b"a", "keep.txt": b"k"})
        target = MemoryFS({"ignored/b.txt": b"b"})
        seen = []

        def skip(path, is_dir):
            seen.append(path)
            return path == "ignored"

        ops = run_diff(source, target, with_skip(skip))
        assert op_strings(ops) == ["create:keep.txt"]
        assert not any(p.startswith("ignored/") for p in seen)

    def test_skipped_create_and_delete(self):
        source = MemoryFS({"new.log": b"n"})
        target = MemoryFS({"old.log": b"o"})
        ops = run_diff(source, target, with_skip(lambda path, is_dir: path.endswith(".log")))
        assert ops == []

    def test_skipped_update(self):
        source = MemoryFS({"x.txt": b"new content"})
        target = MemoryFS({"x.txt": b"old"})
        assert run_diff(source, target, with_skip(lambda p, d: p == "x.txt")) == []

    def test_skip_receives_root_relative_paths(self):
        source = MemoryFS({"src/pkg/mod.py": b"m"})
        seen = []

        def skip(path, is_dir):
            seen.append((path, is_dir))
            return False

        run_diff(source, MemoryFS(), with_skip(skip), source_root="src")
        assert seen == [("pkg", True), ("pkg/mod.py", False)]

    def test_skipped_child_does_not_protect_missing_parent(self):
        target = MemoryFS({"gen/keep/me.txt": b"x"})
        ops = run_diff(MemoryFS(), target, with_skip(lambda p, d: p == "gen/keep"))
        assert ops == [Op.delete("gen")]


class TestKindChange:
    """A name that switches between file and directory."""

    def test_directory_becomes_file(self):
        source = MemoryFS({"x": b"now a file"})
        target = MemoryFS({"x/old.txt": b"o"})
        ops = run_diff(source, target)
        assert ops == [Op.delete("x"), Op.create("x", b"now a file")]

    def test_file_becomes_directory(self):
        source = MemoryFS({"x/a.txt": b"a", "x/b.txt": b"b"})
        target = MemoryFS({"x": b"was a file"})
        ops = run_diff(source, target)
        assert op_strings(ops) == ["delete:x", "create:x/a.txt", "create:x/b.txt"]

    def test_skip_on_either_kind_drops_it(self):
        source = MemoryFS({"x": b"file"})
        target = MemoryFS({"x/old.txt": b"o"})
        ops = run_diff(source, target, with_skip(lambda p, is_dir: p == "x" and is_dir))
        assert ops == []


class TestRaces:
    """Source changes between listing and reading."""

    def test_vanished_create_is_dropped(self):
        class Vanishing(MemoryFS):
            def read_file(self, path):
                if path == "gone.txt":
                    raise FileNotFoundError(errno.ENOENT, "gone", path)
                return super().read_file(path)

        source = Vanishing({"gone.txt": b"g", "here.txt": b"h"})
        ops = run_diff(source, MemoryFS())
        assert ops == [Op.create("here.txt", b"h")]

    def test_vanished_update_is_dropped(self):
        class Vanishing(MemoryFS):
            def read_file(self, path):
                raise FileNotFoundError(errno.ENOENT, "gone", path)

        source = Vanishing({"x.txt": b"new content"})
        target = MemoryFS({"x.txt": b"old"})
        assert run_diff(source, target) == []

    def test_vanished_directory_in_create_is_dropped(self):
        class Vanishing(MemoryFS):
            def read_dir(self, path):
                if path == "d":
                    raise FileNotFoundError(errno.ENOENT, "gone", path)
                return super().read_dir(path)

        assert run_diff(Vanishing({"d/f.txt": b"f"}), MemoryFS()) == []

    def test_other_read_errors_propagate(self):
        class Denied(MemoryFS):
            def read_file(self, path):
                raise PermissionError(errno.EACCES, "denied", path)

        with pytest.raises(PermissionError):
            run_diff(Denied({"a.txt": b"a"}), MemoryFS())

    def test_target_listing_errors_propagate(self):
        class Broken(MemoryFS):
            def read_dir(self, path):
                raise PermissionError(errno.EACCES, "denied", path)

        with pytest.raises(PermissionError):
            run_diff(MemoryFS({"a.txt": b"a"}), Broken())


def test_default_options_never_skip():
    ops = diff(SyncOptions(), MemoryFS({".hidden": b"h"}), "", MemoryFS(), "")
    assert ops[0].type is OpType.CREATE

"""Tests for the FileSystem store and its rankings."""

import pytest

from tvfs import FileSystem, Outcome


@pytest.fixture
def fs(clock):
    return FileSystem(clock=clock)


class TestFileSystemCreate:
    def test_create(self, fs):
        result = fs.create("a")
        assert isinstance(result, Outcome)
        assert result
        assert "a" in fs
        assert len(fs) == 1

    def test_create_duplicate(self, fs):
        fs.create("a")
        result = fs.create("a")
        assert not result
        assert result.reason == "exists"
        assert len(fs) == 1

    def test_filenames(self, fs):
        fs.create("a")
        fs.create("b")
        assert set(fs.filenames()) == {"a", "b"}

    def test_instances_are_independent(self, clock):
        one = FileSystem(clock=clock)
        two = FileSystem(clock=clock)
        one.create("a")
        assert "a" not in two


class TestFileSystemNotFound:
    def test_read(self, fs):
        assert fs.read("nope") is None

    def test_history(self, fs):
        assert fs.history("nope") is None

    @pytest.mark.parametrize(
        "call",
        [
            lambda fs: fs.insert("nope", "x"),
            lambda fs: fs.update("nope", "x"),
            lambda fs: fs.snapshot("nope", "m"),
            lambda fs: fs.rollback("nope"),
            lambda fs: fs.rollback("nope", 0),
        ],
    )
    def test_mutations(self, fs, call):
        result = call(fs)
        assert not result
        assert result.reason == "not_found"

    def test_tree(self, fs):
        assert fs.tree("nope") is None


class TestFileSystemEdits:
    def test_insert_read(self, fs):
        fs.create("a")
        assert fs.insert("a", "hello")
        assert fs.read("a") == "hello"

    def test_update(self, fs):
        fs.create("a")
        fs.insert("a", "hello")
        assert fs.update("a", "bye")
        assert fs.read("a") == "bye"

    def test_snapshot_fresh_file_already_sealed(self, fs):
        fs.create("a")
        result = fs.snapshot("a", "v0")
        assert not result
        assert result.reason == "already_sealed"

    def test_snapshot_then_insert_creates_version(self, fs):
        fs.create("a")
        fs.insert("a", "x")
        assert fs.snapshot("a", "v1")
        fs.insert("a", "y")
        tree = fs.tree("a")
        assert tree.version_count == 3
        assert [e.version_id for e in fs.history("a")] == [0, 1]
        fs.snapshot("a", "v2")
        assert [e.version_id for e in fs.history("a")] == [0, 1, 2]

    def test_rollback_at_root(self, fs):
        fs.create("a")
        result = fs.rollback("a")
        assert not result
        assert result.reason == "at_root"

    def test_rollback_unknown_version(self, fs):
        fs.create("a")
        result = fs.rollback("a", 9)
        assert not result
        assert result.reason == "unknown_version"

    def test_rollback_to_version(self, fs):
        fs.create("a")
        fs.insert("a", "one")
        fs.snapshot("a", "v1")
        fs.update("a", "two")
        assert fs.rollback("a", 1)
        assert fs.read("a") == "one"
        assert fs.rollback("a")
        assert fs.read("a") == ""


class TestFileSystemRecentFiles:
    def test_most_recent_first(self, fs):
        for name in ("a", "b", "c"):
            fs.create(name)
        assert [f.filename for f in fs.recent_files(3)] == ["c", "b", "a"]

    def test_touched_file_moves_up(self, fs):
        for name in ("a", "b", "c"):
            fs.create(name)
        fs.insert("a", "x")
        result = fs.recent_files(2)
        assert [f.filename for f in result] == ["a", "c"]
        assert result[0].last_modified == fs.tree("a").last_modified

    def test_no_stale_entries(self, fs):
        fs.create("a")
        fs.create("b")
        for i in range(5):
            fs.insert("a", str(i))
        result = fs.recent_files(10)
        assert [f.filename for f in result] == ["a", "b"]
        for f in result:
            assert f.last_modified == fs.tree(f.filename).last_modified

    def test_no_duplicates_after_snapshot(self, fs):
        fs.create("a")
        fs.insert("a", "x")
        fs.snapshot("a", "s")
        fs.rollback("a")
        assert [f.filename for f in fs.recent_files(5)] == ["a"]

    def test_k_limits(self, fs):
        for name in ("a", "b", "c"):
            fs.create(name)
        assert len(fs.recent_files(1)) == 1
        assert fs.recent_files(0) == []

    def test_empty(self, fs):
        assert fs.recent_files(3) == []

    def test_format(self, fs):
        fs.create("a")
        text = str(fs.recent_files(1)[0])
        assert text.startswith("a (Last Modified: ")
        assert text.endswith(")")


class TestFileSystemBiggestTrees:
    def _grow(self, fs, name, versions):
        fs.create(name)
        for i in range(versions - 1):
            fs.insert(name, str(i))
            fs.snapshot(name, f"v{i}")

    def test_largest_first(self, fs):
        self._grow(fs, "small", 3)
        self._grow(fs, "big", 7)
        result = fs.biggest_trees(2)
        assert [(t.filename, t.versions) for t in result] == [("big", 7), ("small", 3)]

    def test_ranking_follows_growth(self, fs):
        self._grow(fs, "small", 3)
        self._grow(fs, "big", 7)
        assert [t.filename for t in fs.biggest_trees(1)] == ["big"]
        for i in range(10):
            fs.insert("small", f"more{i}")
            fs.snapshot("small", f"m{i}")
        assert fs.tree("small").version_count == 13
        top = fs.biggest_trees(1)
        assert [(t.filename, t.versions) for t in top] == [("small", 13)]

    def test_in_place_edits_do_not_grow(self, fs):
        fs.create("a")
        fs.insert("a", "x")
        fs.insert("a", "y")
        fs.insert("a", "z")
        assert [(t.filename, t.versions) for t in fs.biggest_trees(5)] == [("a", 2)]

    def test_ties_break_on_filename(self, fs):
        fs.create("a")
        fs.create("b")
        assert [t.filename for t in fs.biggest_trees(2)] == ["b", "a"]

    def test_format(self, fs):
        fs.create("a")
        assert str(fs.biggest_trees(1)[0]) == "a (Versions: 1)"

"""
Tests for recursive tree encoding.

Tests entry serialization, pruning of empty directories, exclusion of
metadata directories and symbolic links, ordering policy, and error
propagation.
"""

import os

import pytest

from minigit.errors import EmptyTreeError, MalformedObjectError
from minigit.ids import compute_object_id
from minigit.store import ObjectStore
from minigit.tree import TreeEncoder, TreeEntry, parse_tree, read_tree, serialize_entries, write_tree


HI_BLOB = "45b983be36b73c0788dc9cbcb76cbb80fc7bb057"


@pytest.fixture
def store(tmp_path):
    """Object store in its own directory, outside the trees being encoded."""
    root = tmp_path / "repo"
    root.mkdir()
    return ObjectStore(root)


@pytest.fixture
def workdir(tmp_path):
    """Empty directory to build test hierarchies in."""
    path = tmp_path / "work"
    path.mkdir()
    return path


class TestTreeEntry:
    """Tests for entry serialization and parsing."""

    def test_serialize(self):
        entry = TreeEntry(name="x", entry_type="blob", child_id=HI_BLOB)
        assert entry.serialize() == f"blob {HI_BLOB} x\n".encode()

    def test_parse_name_with_spaces(self):
        entry = TreeEntry.parse(f"blob {HI_BLOB} my file.txt")

        assert entry == TreeEntry(name="my file.txt", entry_type="blob", child_id=HI_BLOB)

    @pytest.mark.parametrize(
        "line",
        [
            "blob",
            f"blob {HI_BLOB}",
            f"link {HI_BLOB} x",
            "blob 1234 x",
        ],
    )
    def test_parse_malformed(self, line):
        with pytest.raises(MalformedObjectError):
            TreeEntry.parse(line)

    def test_serialize_entries_keeps_order(self):
        entries = [
            TreeEntry(name="b", entry_type="blob", child_id=HI_BLOB),
            TreeEntry(name="a", entry_type="tree", child_id=HI_BLOB),
        ]

        assert serialize_entries(entries) == (
            f"blob {HI_BLOB} b\ntree {HI_BLOB} a\n".encode()
        )

    def test_parse_tree(self):
        payload = f"blob {HI_BLOB} x\ntree {HI_BLOB} sub dir\n".encode()

        assert parse_tree(payload) == [
            TreeEntry(name="x", entry_type="blob", child_id=HI_BLOB),
            TreeEntry(name="sub dir", entry_type="tree", child_id=HI_BLOB),
        ]

    def test_parse_tree_requires_trailing_newline(self):
        with pytest.raises(MalformedObjectError, match="newline"):
            parse_tree(f"blob {HI_BLOB} x".encode())


class TestWriteTree:
    """Tests for TreeEncoder.write_tree."""

    def test_single_file(self, store, workdir):
        (workdir / "a.txt").write_bytes(b"hi\n")

        oid = write_tree(store, workdir)
        obj = store.get(oid)

        assert obj.kind == "tree"
        assert obj.payload == f"blob {HI_BLOB} a.txt\n".encode()
        assert store.get(HI_BLOB).payload == b"hi\n"

    def test_empty_subdirectory_pruned(self, store, workdir):
        """A file x plus an empty directory y yields exactly 'blob B x\\n'."""
        (workdir / "x").write_bytes(b"hi\n")
        (workdir / "y").mkdir()

        oid = write_tree(store, workdir)

        assert store.get(oid).payload == f"blob {HI_BLOB} x\n".encode()
        assert oid == "81815f8192c65e7f524356bc133d8c514a9097b5"

    def test_nested_empty_directories_pruned(self, store, workdir):
        (workdir / "x").write_bytes(b"hi\n")
        (workdir / "a" / "b" / "c").mkdir(parents=True)

        oid = write_tree(store, workdir)

        assert [e.name for e in read_tree(store, oid)] == ["x"]

    def test_only_empty_subdirectory_raises(self, store, workdir):
        (workdir / "empty").mkdir()

        with pytest.raises(EmptyTreeError) as exc_info:
            write_tree(store, workdir)

        assert exc_info.value.directory == workdir

    def test_empty_directory_raises(self, store, workdir):
        with pytest.raises(EmptyTreeError):
            write_tree(store, workdir)

    def test_empty_tree_writes_nothing(self, store, workdir):
        (workdir / "empty").mkdir()

        with pytest.raises(EmptyTreeError):
            write_tree(store, workdir)

        assert not store.objects_dir.exists()

    def test_nested_directory(self, store, workdir):
        sub = workdir / "sub"
        sub.mkdir()
        (sub / "x").write_bytes(b"hi\n")

        oid = write_tree(store, workdir)
        subtree_id = "81815f8192c65e7f524356bc133d8c514a9097b5"

        assert store.get(oid).payload == f"tree {subtree_id} sub\n".encode()
        assert store.get(subtree_id).payload == f"blob {HI_BLOB} x\n".encode()

    def test_metadata_and_symlink_only_raises(self, store, workdir):
        """A metadata directory plus a symbolic link is nothing to snapshot."""
        git_dir = workdir / ".mini-git"
        git_dir.mkdir()
        (git_dir / "config.yaml").write_text("tree: {}\n")
        (workdir / ".git").mkdir()
        (workdir / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
        os.symlink(git_dir / "config.yaml", workdir / "link")

        with pytest.raises(EmptyTreeError):
            write_tree(store, workdir)

    def test_object_store_directory_is_not_snapshotted(self, store):
        """Walking the metadata directory itself finds nothing to snapshot."""
        store.put("blob", b"hi\n")
        git_dir = store.repository_root / ".mini-git"
        before = sorted(p for p in git_dir.rglob("*"))

        with pytest.raises(EmptyTreeError):
            write_tree(store, git_dir)

        assert sorted(p for p in git_dir.rglob("*")) == before

    def test_walk_rooted_in_git_directory(self, store, workdir):
        git_dir = workdir / ".git"
        (git_dir / "refs").mkdir(parents=True)
        (git_dir / "HEAD").write_text("ref: refs/heads/main\n")
        (git_dir / "refs" / "main").write_text("abc\n")

        with pytest.raises(EmptyTreeError):
            write_tree(store, git_dir)

    def test_symlinks_not_followed(self, store, workdir):
        (workdir / "x").write_bytes(b"hi\n")
        os.symlink(workdir, workdir / "loop")
        os.symlink(workdir / "x", workdir / "x-link")

        oid = write_tree(store, workdir)

        assert [e.name for e in read_tree(store, oid)] == ["x"]

    def test_same_content_deduplicated(self, store, workdir):
        (workdir / "a").write_bytes(b"hi\n")
        (workdir / "b").write_bytes(b"hi\n")

        oid = write_tree(store, workdir)
        entries = read_tree(store, oid)

        assert {e.child_id for e in entries} == {HI_BLOB}
        blobs = [p for p in store.objects_dir.rglob("*") if p.is_file()]
        assert len(blobs) == 2  # one blob, one tree

    def test_deterministic(self, store, workdir):
        (workdir / "a").write_text("alpha")
        (workdir / "sub").mkdir()
        (workdir / "sub" / "b").write_text("beta")

        assert write_tree(store, workdir) == write_tree(store, workdir)

    def test_unreadable_file_aborts_walk(self, store, workdir, monkeypatch):
        """Any error other than an empty subtree propagates."""
        (workdir / "a").write_text("alpha")

        def failing_hash_file(path):
            raise PermissionError(f"Permission denied: {path}")

        monkeypatch.setattr(store, "hash_file", failing_hash_file)

        with pytest.raises(PermissionError):
            write_tree(store, workdir)

    def test_missing_directory(self, store, workdir):
        with pytest.raises(FileNotFoundError):
            write_tree(store, workdir / "missing")

    def test_special_files_skipped(self, store, workdir):
        (workdir / "x").write_bytes(b"hi\n")
        os.mkfifo(workdir / "pipe")

        oid = write_tree(store, workdir)

        assert [e.name for e in read_tree(store, oid)] == ["x"]


class TestOrderingPolicy:
    """Tests for entry ordering in tree payloads."""

    def _make_files(self, workdir):
        for name in ["zeta", "alpha", "Mid", "beta"]:
            (workdir / name).write_text(name)

    def test_sorted_by_name_by_default(self, store, workdir):
        self._make_files(workdir)

        oid = TreeEncoder(store).write_tree(workdir)

        assert [e.name for e in read_tree(store, oid)] == ["Mid", "alpha", "beta", "zeta"]

    def test_sorted_id_matches_manual_serialization(self, store, workdir):
        self._make_files(workdir)

        oid = write_tree(store, workdir)

        expected = "".join(
            f"blob {compute_object_id('blob', name.encode())} {name}\n"
            for name in sorted(["zeta", "alpha", "Mid", "beta"])
        )
        assert oid == compute_object_id("tree", expected.encode())

    def test_listing_order_when_unsorted(self, store, workdir):
        self._make_files(workdir)

        oid = TreeEncoder(store, sort_entries=False).write_tree(workdir)
        listing = [p.name for p in workdir.iterdir()]

        assert [e.name for e in read_tree(store, oid)] == listing


class TestReadTree:
    """Tests for reading tree objects back."""

    def test_read_tree_rejects_other_kinds(self, store):
        oid = store.put("blob", b"hi\n")

        with pytest.raises(MalformedObjectError, match="Expected tree"):
            read_tree(store, oid)

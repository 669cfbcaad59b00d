"""Tests for sync/tree.py: directory pair synchronisation.

Covers idempotence, force semantics, dry-run equivalence and the
additive-only guarantee.
"""

import shutil

import pytest

from ai_specflow.sync.models import SyncOptions, SyncResult
from ai_specflow.sync.tree import sync_tree


@pytest.fixture
def source(tmp_path, make_tree):
    return make_tree(tmp_path / "source", {"a/b.txt": "X", "c.txt": "Y"})


class TestSyncTree:
    """Tests for sync_tree()."""

    def test_scenario_a_first_and_second_run(self, tmp_path, source, snapshot):
        target = tmp_path / "target"

        first = sync_tree(source, target, SyncOptions())

        assert first.created == ["a/b.txt", "c.txt"]
        assert first.updated == []
        assert first.skipped == []
        assert snapshot(target) == {"a/b.txt": b"X", "c.txt": b"Y"}

        second = sync_tree(source, target, SyncOptions())

        assert second.created == []
        assert second.updated == []
        assert second.skipped == ["a/b.txt", "c.txt"]

    def test_idempotent_bytes_unchanged(self, tmp_path, source, snapshot):
        target = tmp_path / "target"
        sync_tree(source, target, SyncOptions())
        before = snapshot(target)

        sync_tree(source, target, SyncOptions())

        assert snapshot(target) == before

    def test_force_overwrites_existing(self, tmp_path, source, make_tree):
        target = make_tree(tmp_path / "target", {"c.txt": "OLD"})

        result = sync_tree(source, target, SyncOptions(force=True))

        assert result.created == ["a/b.txt"]
        assert result.updated == ["c.txt"]
        assert (target / "c.txt").read_text() == "Y"

    def test_without_force_keeps_user_edits(
        self, tmp_path, source, make_tree
    ):
        target = make_tree(tmp_path / "target", {"c.txt": "OLD"})

        result = sync_tree(source, target, SyncOptions())

        assert result.skipped == ["c.txt"]
        assert (target / "c.txt").read_text() == "OLD"

    def test_never_deletes_target_only_files(
        self, tmp_path, source, make_tree
    ):
        target = make_tree(tmp_path / "target", {"extra.md": "mine"})

        sync_tree(source, target, SyncOptions(force=True))

        assert (target / "extra.md").read_text() == "mine"

    def test_every_path_in_exactly_one_bucket(
        self, tmp_path, source, make_tree
    ):
        target = make_tree(tmp_path / "target", {"a/b.txt": "old"})

        result = sync_tree(source, target, SyncOptions())
        buckets = result.created + result.updated + result.skipped

        assert sorted(buckets) == ["a/b.txt", "c.txt"]
        assert len(buckets) == len(set(buckets)) == result.total

    def test_empty_source(self, tmp_path):
        source = tmp_path / "empty"
        source.mkdir()

        assert sync_tree(source, tmp_path / "t", SyncOptions()) == SyncResult()

    @pytest.mark.parametrize("force", [False, True])
    def test_dry_run_equivalence(
        self, tmp_path, source, make_tree, snapshot, force
    ):
        start = {"c.txt": "OLD", "keep.md": "k"}
        real = make_tree(tmp_path / "real", start)
        dry = make_tree(tmp_path / "dry", start)
        dry_before = snapshot(dry)

        real_result = sync_tree(source, real, SyncOptions(force=force))
        dry_result = sync_tree(
            source, dry, SyncOptions(force=force, dry_run=True)
        )

        assert dry_result == real_result
        assert snapshot(dry) == dry_before

    def test_dry_run_missing_target_root(self, tmp_path, source):
        target = tmp_path / "nowhere"

        result = sync_tree(source, target, SyncOptions(dry_run=True))

        assert result.created == ["a/b.txt", "c.txt"]
        assert not target.exists()

    def test_write_failure_aborts(self, tmp_path, source, make_tree):
        """A file where a directory is needed stops the tree with OSError."""
        target = make_tree(tmp_path / "target", {"a": "not a dir"})

        with pytest.raises(OSError):
            sync_tree(source, target, SyncOptions())

    def test_source_copy_of_bundled_tree(self, tmp_path, bundled_root, snapshot):
        source = tmp_path / "ai"
        shutil.copytree(bundled_root / ".ai", source)

        result = sync_tree(source, tmp_path / "t", SyncOptions())

        assert result.created == sorted(snapshot(source))

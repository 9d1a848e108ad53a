"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from bazelify.core.models import BazelFile, BazelTarget, group_targets_by_directory


class TestBazelFile:
    def test_root_path(self):
        """Root files have a bare basename as path."""
        assert BazelFile("", "WORKSPACE", "").path == "WORKSPACE"

    def test_nested_path(self):
        """Nested files join dir and basename with a slash."""
        assert BazelFile("foo/bar", "BUILD.bazel", "").path == "foo/bar/BUILD.bazel"

    def test_immutable(self):
        """Files cannot be modified after construction."""
        f = BazelFile("", "BUILD", "")
        with pytest.raises(dataclasses.FrozenInstanceError):
            f.contents = "changed"  # type: ignore[misc]


class TestGroupTargetsByDirectory:
    def test_groups_and_keeps_order(self):
        """Targets are keyed by directory; order inside a directory is preserved."""
        targets = [
            BazelTarget(name="b", content="B", directory="x"),
            BazelTarget(name="c", content="C", directory="y"),
            BazelTarget(name="a", content="A", directory="x"),
        ]
        grouped = group_targets_by_directory(targets)
        assert list(grouped) == ["x", "y"]
        assert [t.name for t in grouped["x"]] == ["b", "a"]

    def test_empty(self):
        """No targets means no directories."""
        assert group_targets_by_directory([]) == {}

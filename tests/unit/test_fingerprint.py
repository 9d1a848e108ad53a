"""Tests for file list fingerprints."""

from __future__ import annotations

import json

import pytest

from bazelify.build.files import create_bazel_files
from bazelify.build.fingerprint import (
    FILES_SCHEME,
    FINGERPRINT_FILE,
    STATE_DIR,
    Fingerprint,
    compute_digest,
    fingerprint_files,
    fingerprint_path,
    load_fingerprint,
    save_fingerprint,
)
from bazelify.core.errors import WriteError
from bazelify.core.models import BazelFile


class TestFingerprint:
    def test_matches_equal(self):
        """Equal but distinct fingerprints match."""
        fp1 = Fingerprint(scheme="bazelify:test:v1", digest="abc123", components={"a": "1"})
        fp2 = Fingerprint(scheme="bazelify:test:v1", digest="abc123", components={"a": "1"})
        assert fp1.matches(fp2) is True

    def test_matches_different_scheme(self):
        """Different scheme means no match, even with same digest."""
        fp1 = Fingerprint(scheme="bazelify:test:v1", digest="abc123", components={})
        fp2 = Fingerprint(scheme="bazelify:test:v2", digest="abc123", components={})
        assert fp1.matches(fp2) is False

    def test_matches_none(self):
        """Matching against None returns False."""
        fp = Fingerprint(scheme="bazelify:test:v1", digest="abc123", components={})
        assert fp.matches(None) is False

    def test_explain_diff_names_changed_paths(self):
        """Diff identifies which files changed, were added or removed."""
        fp1 = Fingerprint(scheme=FILES_SCHEME, digest="a", components={"BUILD": "1", "x/BUILD.bazel": "2"})
        fp2 = Fingerprint(scheme=FILES_SCHEME, digest="b", components={"BUILD": "1", "y/BUILD.bazel": "3"})
        assert fp1.explain_diff(fp2) == ["x/BUILD.bazel changed", "y/BUILD.bazel changed"]

    def test_explain_diff_none(self):
        """Diff against None returns 'no stored fingerprint'."""
        fp = Fingerprint(scheme=FILES_SCHEME, digest="a", components={})
        assert fp.explain_diff(None) == ["no stored fingerprint"]

    def test_from_dict_none_on_empty(self):
        """from_dict returns None for empty/missing data."""
        assert Fingerprint.from_dict({}) is None
        assert Fingerprint.from_dict({"digest": "abc"}) is None

    def test_to_dict_from_dict(self):
        """A stored fingerprint matches the one it came from."""
        fp = fingerprint_files([BazelFile("", "BUILD", "")])
        assert fp.matches(Fingerprint.from_dict(fp.to_dict()))


class TestComputeDigest:
    def test_sorted_order(self):
        """Component order doesn't matter (sorted internally)."""
        assert compute_digest({"b": "2", "a": "1"}) == compute_digest({"a": "1", "b": "2"})

    def test_different_values(self):
        """Different values produce different digests."""
        assert compute_digest({"a": "1"}) != compute_digest({"a": "2"})


class TestFingerprintFiles:
    def test_same_input_same_fingerprint(self, sample_rule_shims, sample_targets):
        """Two assemblies of the same input fingerprint identically."""
        fp1 = fingerprint_files(create_bazel_files(sample_rule_shims, sample_targets, True))
        fp2 = fingerprint_files(create_bazel_files(sample_rule_shims, sample_targets, True))
        assert fp1.matches(fp2)
        assert fp1.scheme == FILES_SCHEME

    def test_mode_changes_fingerprint(self, sample_rule_shims, sample_targets):
        """Native and overlay output are distinguishable."""
        native = fingerprint_files(create_bazel_files(sample_rule_shims, sample_targets, False))
        overlay = fingerprint_files(create_bazel_files(sample_rule_shims, sample_targets, True))
        assert not native.matches(overlay)
        assert "providers.bzl" not in " ".join(native.components)

    def test_one_component_per_file(self):
        """Components are keyed by relative path."""
        fp = fingerprint_files([BazelFile("", "WORKSPACE", ""), BazelFile("a", "BUILD.bazel", "x")])
        assert sorted(fp.components) == ["WORKSPACE", "a/BUILD.bazel"]


class TestStoredFingerprint:
    def test_save_and_load(self, tmp_output_dir):
        """A saved fingerprint loads back and matches."""
        fp = fingerprint_files([BazelFile("", "WORKSPACE", ""), BazelFile("a", "BUILD.bazel", "x")])
        path = save_fingerprint(fp, tmp_output_dir)
        assert path == tmp_output_dir / STATE_DIR / FINGERPRINT_FILE
        loaded = load_fingerprint(tmp_output_dir)
        assert fp.matches(loaded)
        assert loaded.components == fp.components

    def test_save_replaces_previous(self, tmp_output_dir):
        """Only the latest fingerprint is kept."""
        save_fingerprint(fingerprint_files([BazelFile("", "BUILD", "old")]), tmp_output_dir)
        fp = fingerprint_files([BazelFile("", "BUILD", "new")])
        save_fingerprint(fp, tmp_output_dir)
        assert fp.matches(load_fingerprint(tmp_output_dir))
        assert [p.name for p in (tmp_output_dir / STATE_DIR).iterdir()] == [FINGERPRINT_FILE]

    def test_missing(self, tmp_output_dir):
        """No stored fingerprint loads as None."""
        assert load_fingerprint(tmp_output_dir) is None

    @pytest.mark.parametrize(
        "raw",
        [b"{not json", b"\xff\xfe", b"[1, 2]", b'{"scheme": "x", "digest": 3}'],
    )
    def test_unreadable_is_none(self, tmp_output_dir, raw):
        """Corrupt or foreign fingerprint files are ignored."""
        path = fingerprint_path(tmp_output_dir)
        path.parent.mkdir()
        path.write_bytes(raw)
        assert load_fingerprint(tmp_output_dir) is None

    def test_stored_as_json(self, tmp_output_dir):
        """The stored file is plain JSON of the fingerprint."""
        fp = fingerprint_files([BazelFile("", "BUILD", "")])
        save_fingerprint(fp, tmp_output_dir)
        assert json.loads(fingerprint_path(tmp_output_dir).read_text()) == fp.to_dict()

    def test_save_error_wrapped(self, tmp_output_dir):
        """A blocked state directory surfaces as WriteError."""
        (tmp_output_dir / STATE_DIR).write_text("a file, not a directory")
        with pytest.raises(WriteError):
            save_fingerprint(fingerprint_files([]), tmp_output_dir)

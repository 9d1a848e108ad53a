"""Shared test fixtures for bazelify."""

from __future__ import annotations

import json

import pytest

from bazelify.core.models import BazelTarget, RuleShim


@pytest.fixture
def tmp_output_dir(tmp_path):
    """Clean output directory for each test."""
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def sample_targets():
    """Pre-rendered targets in two directories, deliberately out of order."""
    return {
        "system/core": [
            BazelTarget(name="libcutils", content='cc_library(name = "libcutils")', directory="system/core"),
            BazelTarget(name="libbase", content='cc_library(name = "libbase")', directory="system/core"),
        ],
        "external/zlib": [
            BazelTarget(name="libz", content='cc_library(name = "libz")', directory="external/zlib"),
        ],
    }


@pytest.fixture
def sample_rule_shims():
    """Rule shims as produced by an external schema generator."""
    return {
        "cc": RuleShim(
            name="cc",
            content="def _cc_library_impl(ctx):\n    pass\n",
            rules=("cc_library", "cc_binary"),
        ),
        "android_app": RuleShim(
            name="android_app",
            content="def _android_app_impl(ctx):\n    pass\n",
            rules=("android_app",),
        ),
    }


@pytest.fixture
def manifest_data():
    """Decoded manifest with one directory and one rule shim."""
    return {
        "overlay_mode": False,
        "targets": {
            "foo/bar": [
                {"name": "b_target", "content": 'cc_binary(name = "b_target")'},
                {"name": "a_target", "content": 'cc_library(name = "a_target")'},
            ],
        },
        "rule_shims": {
            "cc": {"content": "# cc rules\n", "rules": ["cc_library", "cc_binary"]},
        },
    }


@pytest.fixture
def manifest_file(tmp_path, manifest_data):
    """manifest_data written as a JSON file."""
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest_data))
    return path

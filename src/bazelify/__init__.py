"""bazelify - Generate Bazel BUILD files from a pre-rendered module graph.

Usage:
    from bazelify import BazelTarget, create_bazel_files, write_files

    targets = {
        "foo/bar": [
            BazelTarget(name="libbar", content='cc_library(name = "libbar")'),
        ],
    }
    files = create_bazel_files({}, targets, overlay_mode=False)
    write_files(files, "out/")
"""

from bazelify.build.files import create_bazel_files
from bazelify.build.manifest import Manifest, load_manifest
from bazelify.build.targets import create_build_files
from bazelify.build.writer import write_files
from bazelify.convert.module_types import canonicalize_module_type
from bazelify.convert.properties import should_generate_attribute, should_skip_field
from bazelify.core.models import BazelFile, BazelTarget, RuleShim, group_targets_by_directory

__all__ = [
    "BazelFile",
    "BazelTarget",
    "Manifest",
    "RuleShim",
    "canonicalize_module_type",
    "create_bazel_files",
    "create_build_files",
    "group_targets_by_directory",
    "load_manifest",
    "should_generate_attribute",
    "should_skip_field",
    "write_files",
]

__version__ = "0.1.0"

"""File assembly — the complete, ordered list of files for a Bazel workspace."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from bazelify.build.starlark import (
    PROVIDERS_BZL,
    PROVIDERS_BZL_NAME,
    RULES_SUBDIR,
    SOONG_MODULE_BZL_NAME,
    generate_soong_module_bzl,
)
from bazelify.build.targets import create_build_files
from bazelify.core.models import BazelFile, BazelTarget, RuleShim, new_file


def create_bazel_files(
    rule_shims: Mapping[str, RuleShim],
    build_to_targets: Mapping[str, Sequence[BazelTarget]],
    overlay_mode: bool,
) -> list[BazelFile]:
    """Assemble every file of the generated workspace.

    The root WORKSPACE and BUILD files and the rules package BUILD file are
    always emitted, empty. In overlay (queryview) mode the providers file, one
    .bzl file per rule shim and the aggregate soong_module.bzl follow. The
    per-directory BUILD.bazel files come last.

    Performs no I/O; writing the result is up to the caller.
    """
    files = [
        new_file("", "WORKSPACE", ""),
        # Marks the top level directory as a package.
        new_file("", "BUILD", ""),
        new_file(RULES_SUBDIR, "BUILD", ""),
    ]

    if overlay_mode:
        # Only used by queryview.
        files.append(new_file(RULES_SUBDIR, PROVIDERS_BZL_NAME, PROVIDERS_BZL))
        for bzl_name in sorted(rule_shims):
            files.append(new_file(RULES_SUBDIR, bzl_name + ".bzl", rule_shims[bzl_name].content))
        files.append(new_file(RULES_SUBDIR, SOONG_MODULE_BZL_NAME, generate_soong_module_bzl(rule_shims)))

    files.extend(create_build_files(build_to_targets, overlay_mode))
    return files

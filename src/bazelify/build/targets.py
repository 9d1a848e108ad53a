"""Target aggregation — one BUILD.bazel per directory, deterministic content."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from bazelify.build.starlark import BUILD_FILE_NAME, SOONG_MODULE_LOAD
from bazelify.core.models import BazelFile, BazelTarget, new_file


def render_build_file(targets: Sequence[BazelTarget], overlay_mode: bool) -> str:
    """Serialize one directory's targets, sorted by name.

    The sort is stable: targets sharing a name are all kept, in input order.
    """
    content = SOONG_MODULE_LOAD if overlay_mode else ""
    for target in sorted(targets, key=lambda t: t.name):
        content += "\n\n"
        content += target.content
    return content


def create_build_files(
    build_to_targets: Mapping[str, Sequence[BazelTarget]],
    overlay_mode: bool,
) -> list[BazelFile]:
    """Return one BUILD.bazel file per directory, in sorted directory order."""
    files: list[BazelFile] = []
    for directory in sorted(build_to_targets):
        content = render_build_file(build_to_targets[directory], overlay_mode)
        files.append(new_file(directory, BUILD_FILE_NAME, content))
    return files

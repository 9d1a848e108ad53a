"""Core data models for bazelify."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class BazelTarget:
    """A named, pre-rendered Bazel target destined for one BUILD file."""

    name: str
    content: str
    directory: str = ""


@dataclass(frozen=True)
class RuleShim:
    """A generated .bzl fragment bridging a module type into Bazel's rule loading."""

    name: str
    content: str
    rules: tuple[str, ...] = ()  # rule symbols defined by this shim file


@dataclass(frozen=True)
class BazelFile:
    """Write-once output record: a file to be written verbatim under the output root."""

    dir: str
    basename: str
    contents: str

    @property
    def path(self) -> str:
        """Relative path of this file, e.g. "WORKSPACE" or "foo/bar/BUILD.bazel"."""
        if not self.dir:
            return self.basename
        return posixpath.join(self.dir, self.basename)


def new_file(directory: str, basename: str, contents: str) -> BazelFile:
    return BazelFile(dir=directory, basename=basename, contents=contents)


def group_targets_by_directory(targets: Iterable[BazelTarget]) -> dict[str, list[BazelTarget]]:
    """Key targets by their directory, keeping input order within each directory."""
    grouped: dict[str, list[BazelTarget]] = {}
    for target in targets:
        grouped.setdefault(target.directory, []).append(target)
    return grouped

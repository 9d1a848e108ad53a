"""Diffing generated files against an existing output tree."""

from __future__ import annotations

import difflib
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from bazelify.core.models import BazelFile


@dataclass
class FileDiff:
    """Diff result for a single file present on disk with other contents."""

    path: str
    content_diff: str  # unified diff, on disk -> generated


@dataclass
class DiffResult:
    """Result of comparing a generated file list with an output tree."""

    added: list[str] = field(default_factory=list)  # paths not on disk yet
    changed: list[FileDiff] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.changed)


def diff_file(path: str, old: str, new: str) -> FileDiff:
    content_diff = "".join(difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    ))
    return FileDiff(path=path, content_diff=content_diff)


def diff_files(files: Sequence[BazelFile], output_dir: str | Path) -> DiffResult:
    """Compare files with what is currently under output_dir.

    Files on disk that are not part of ``files`` are ignored.
    """
    root = Path(output_dir)
    result = DiffResult()
    for f in files:
        on_disk = root / f.path
        if not on_disk.is_file():
            result.added.append(f.path)
            continue
        old = on_disk.read_bytes()
        if old == f.contents.encode():
            result.unchanged.append(f.path)
        else:
            result.changed.append(diff_file(f.path, old.decode(errors="replace"), f.contents))
    return result

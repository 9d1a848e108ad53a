"""Writing generated files to the output tree."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from bazelify.core.errors import WriteError, atomic_write
from bazelify.core.logging import ConversionLogger
from bazelify.core.models import BazelFile

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Paths (relative to the output root) written or left untouched."""

    written: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)


def write_files(
    files: Sequence[BazelFile],
    output_dir: str | Path,
    run_logger: ConversionLogger | None = None,
) -> WriteResult:
    """Write each file verbatim under output_dir.

    Files whose current contents already match are not rewritten.
    """
    root = Path(output_dir)
    result = WriteResult()

    for f in files:
        target = root / f.path
        try:
            if target.is_file() and target.read_bytes() == f.contents.encode():
                result.unchanged.append(f.path)
                if run_logger is not None:
                    run_logger.file_unchanged(f.path)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            atomic_write(target, f.contents)
        except OSError as e:
            raise WriteError(f"cannot write {target}: {e}") from e

        result.written.append(f.path)
        logger.debug("Wrote %s (%d bytes)", target, len(f.contents))
        if run_logger is not None:
            run_logger.file_written(f.path, len(f.contents))

    return result

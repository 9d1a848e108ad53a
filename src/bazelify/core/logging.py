"""Structured logging and verbosity levels for bazelify runs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # Summary panel only
    VERBOSE = 1   # + per-file status
    DEBUG = 2     # + unchanged files, timing


@dataclass
class RunLog:
    """Structured log of a complete generate run.

    The dict format is::

        {
            "run_id": "20240315T101500Z",
            "written": ["WORKSPACE", "foo/BUILD.bazel"],
            "unchanged": ["BUILD"],
            "total_files": 3,
            "total_time": 0.02,
        }
    """

    run_id: str = ""
    written: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    total_time: float = 0.0

    @property
    def total_files(self) -> int:
        return len(self.written) + len(self.unchanged)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "written": list(self.written),
            "unchanged": list(self.unchanged),
            "total_files": self.total_files,
            "total_time": self.total_time,
        }


@dataclass
class RunSummary:
    """Human-readable summary of a generate run."""

    total_time: float = 0.0
    total_files: int = 0
    written: int = 0
    unchanged: int = 0


class ConversionLogger:
    """Structured logger for bazelify runs.

    Writes JSONL log files to log_dir and emits console output via Rich
    based on verbosity level.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
        console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.console = console or Console()
        self.run_log = RunLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._log_file = None
        self._log_path: Path | None = None
        self._start: float = 0.0

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_path = log_dir / f"{self.run_log.run_id}.jsonl"
            self._log_file = open(self._log_path, "a")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file."""
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            self._log_file.write(json.dumps(event) + "\n")
            self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        if self.verbosity >= min_verbosity:
            self.console.print(message)

    # -- Run lifecycle --

    def run_start(self, output_dir: str, file_count: int, overlay_mode: bool) -> None:
        """Log the start of a generate run."""
        self._start = time.time()
        self._write_event({
            "event": "run_start",
            "output_dir": output_dir,
            "file_count": file_count,
            "overlay_mode": overlay_mode,
        })

    def file_written(self, path: str, size: int) -> None:
        """Log that a file was (re)written."""
        self.run_log.written.append(path)
        self._write_event({"event": "file_written", "path": path, "size": size})
        self._console_print(f"  [green]+[/green] {path}", Verbosity.VERBOSE)

    def file_unchanged(self, path: str) -> None:
        """Log that a file already had the expected contents."""
        self.run_log.unchanged.append(path)
        self._write_event({"event": "file_unchanged", "path": path})
        self._console_print(f"  [cyan]=[/cyan] {path} [dim](unchanged)[/dim]", Verbosity.DEBUG)

    def run_finish(self) -> None:
        """Log the completion of a run and close the log file."""
        self.run_log.total_time = time.time() - self._start if self._start else 0.0
        self._write_event({
            "event": "run_finish",
            "total_time": round(self.run_log.total_time, 3),
            "written": len(self.run_log.written),
            "unchanged": len(self.run_log.unchanged),
        })
        self._console_print(
            f"[dim]Finished in {self.run_log.total_time:.2f}s[/dim]",
            Verbosity.DEBUG,
        )
        self.close()

    def get_summary(self) -> RunSummary:
        """Get a human-readable summary of the run."""
        return RunSummary(
            total_time=self.run_log.total_time,
            total_files=self.run_log.total_files,
            written=len(self.run_log.written),
            unchanged=len(self.run_log.unchanged),
        )

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None

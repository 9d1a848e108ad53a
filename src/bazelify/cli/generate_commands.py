"""Generate commands — bazelify generate, bazelify plan."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.panel import Panel
from rich.table import Table

from bazelify.build.fingerprint import fingerprint_files, save_fingerprint
from bazelify.build.manifest import load_manifest
from bazelify.build.writer import write_files
from bazelify.cli.main import console, manifest_argument, overlay_option, resolve_config, setup_logging
from bazelify.core.errors import BazelifyError
from bazelify.core.logging import ConversionLogger, Verbosity


@click.command()
@manifest_argument
@click.option("--output-dir", "-o", default=None, help="Root of the generated Bazel tree")
@overlay_option
@click.option("--log-dir", default=None, help="Write a JSONL run log into this directory")
@click.option("--verbose", "-v", count=True, help="Verbosity level: -v per-file, -vv debug details")
def generate(
    manifest_path: str, output_dir: str | None, overlay: bool | None, log_dir: str | None, verbose: int
):
    """Write BUILD files for the targets in MANIFEST_PATH.

    MANIFEST_PATH is a JSON or YAML file of pre-rendered targets and rule shims.
    """
    setup_logging(verbose)
    config = resolve_config(output_dir, overlay, verbose, log_dir)

    try:
        manifest = load_manifest(manifest_path)
    except BazelifyError as e:
        console.print(f"[red]Error loading manifest:[/red] {e}")
        sys.exit(1)

    overlay_mode = manifest.resolve_mode(config.overlay_mode)
    files = manifest.assemble(overlay_mode)

    console.print(
        Panel(
            f"[bold]Manifest:[/bold] {manifest_path}\n"
            f"[bold]Output:[/bold] {config.output_dir}\n"
            f"[bold]Mode:[/bold] {'queryview overlay' if overlay_mode else 'native'}\n"
            f"[bold]Directories:[/bold] {len(manifest.build_to_targets)}\n"
            f"[bold]Targets:[/bold] {manifest.target_count}",
            title="[bold cyan]bazelify generate[/bold cyan]",
            border_style="cyan",
        )
    )

    run_logger = ConversionLogger(
        verbosity=Verbosity(min(config.verbosity, Verbosity.DEBUG)),
        log_dir=Path(config.log_dir) if config.log_dir else None,
        console=console,
    )
    run_logger.run_start(config.output_dir, len(files), overlay_mode)
    try:
        write_files(files, config.output_dir, run_logger)
        save_fingerprint(fingerprint_files(files), config.output_dir)
    except BazelifyError as e:
        run_logger.close()
        console.print(f"[red]Error writing files:[/red] {e}")
        sys.exit(1)
    run_logger.run_finish()

    summary = run_logger.get_summary()
    console.print(
        f"[green]Done:[/green] {summary.written} written, "
        f"{summary.unchanged} unchanged ({summary.total_files} files)"
    )


@click.command()
@manifest_argument
@overlay_option
def plan(manifest_path: str, overlay: bool | None):
    """Show the files MANIFEST_PATH would produce, without writing anything."""
    config = resolve_config(None, overlay)

    try:
        manifest = load_manifest(manifest_path)
    except BazelifyError as e:
        console.print(f"[red]Error loading manifest:[/red] {e}")
        sys.exit(1)

    files = manifest.assemble(config.overlay_mode)

    table = Table(title="Planned Files", box=box.ROUNDED)
    table.add_column("Path", style="bold")
    table.add_column("Bytes", justify="right")
    for f in files:
        table.add_row(f.path, str(len(f.contents)))
    console.print(table)

    fingerprint = fingerprint_files(files)
    console.print(f"[bold]Files:[/bold] {len(files)}  [bold]Fingerprint:[/bold] {fingerprint.digest[:16]}")

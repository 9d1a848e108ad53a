"""Check command — compare an output tree with what would be generated."""

from __future__ import annotations

import sys

import click
from rich.syntax import Syntax

from bazelify.build.diff import diff_files
from bazelify.build.fingerprint import fingerprint_files, load_fingerprint
from bazelify.build.manifest import load_manifest
from bazelify.cli.main import console, manifest_argument, overlay_option, resolve_config
from bazelify.core.errors import BazelifyError


@click.command()
@manifest_argument
@click.option("--output-dir", "-o", default=None, help="Root of the generated Bazel tree")
@overlay_option
def check(manifest_path: str, output_dir: str | None, overlay: bool | None):
    """Exit non-zero if the output tree is out of date with MANIFEST_PATH."""
    config = resolve_config(output_dir, overlay)

    try:
        manifest = load_manifest(manifest_path)
    except BazelifyError as e:
        console.print(f"[red]Error loading manifest:[/red] {e}")
        sys.exit(1)

    files = manifest.assemble(config.overlay_mode)
    result = diff_files(files, config.output_dir)

    stored = load_fingerprint(config.output_dir)
    current = fingerprint_files(files)
    if stored is None:
        console.print("[dim]No fingerprint from a previous generate run.[/dim]")
    elif not current.matches(stored):
        reasons = ", ".join(current.explain_diff(stored))
        console.print(f"[yellow]Inputs changed since last generate:[/yellow] {reasons}")

    if not result.has_changes:
        console.print(f"[green]Up to date:[/green] {len(result.unchanged)} files")
        return

    for path in result.added:
        console.print(f"  [green]+[/green] {path} [dim](missing)[/dim]")
    for file_diff in result.changed:
        console.print(f"  [yellow]~[/yellow] {file_diff.path}")
        console.print(Syntax(file_diff.content_diff, "diff", theme="monokai"))

    console.print(
        f"[red]Out of date:[/red] {len(result.added)} missing, "
        f"{len(result.changed)} changed, {len(result.unchanged)} unchanged"
    )
    sys.exit(1)

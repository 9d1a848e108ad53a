"""bazelify CLI — main entry point and shared utilities."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from bazelify.core.config import ConversionConfig

console = Console()


def setup_logging(verbose: int) -> None:
    """Configure stdlib logging based on -v count."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def manifest_argument(fn):
    """Shared Click argument decorator for MANIFEST_PATH."""
    return click.argument(
        "manifest_path",
        type=click.Path(exists=True, dir_okay=False),
    )(fn)


def overlay_option(fn):
    """Shared --overlay/--no-overlay flag; unset means manifest/env decides."""
    return click.option(
        "--overlay/--no-overlay",
        "overlay",
        default=None,
        help="Emit queryview overlay files (providers, rule shims, soong_module.bzl)",
    )(fn)


def resolve_config(
    output_dir: str | None,
    overlay: bool | None,
    verbose: int = 0,
    log_dir: str | None = None,
) -> ConversionConfig:
    """CLI flags over env vars over defaults."""
    return ConversionConfig.from_dict({
        "output_dir": output_dir,
        "overlay_mode": overlay,
        "verbosity": verbose,
        "log_dir": log_dir,
    })


@click.group()
def main():
    """bazelify — generate Bazel BUILD files from pre-rendered module targets."""
    pass


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from bazelify.cli.check_commands import check  # noqa: E402
from bazelify.cli.generate_commands import generate, plan  # noqa: E402

main.add_command(generate)
main.add_command(plan)
main.add_command(check)

"""bazelify command-line interface."""

from bazelify.cli.main import cli, main

__all__ = ["cli", "main"]

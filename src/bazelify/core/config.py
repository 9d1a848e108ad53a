"""Configuration resolution — CLI > explicit config > env > defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def parse_bool(value: str | bool | None) -> bool:
    """Interpret env-style boolean strings ("1", "true", "yes", "on")."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


@dataclass
class ConversionConfig:
    """Configuration for a conversion run.

    Config precedence: explicit config > env vars > defaults.

    Environment variables:
    - BAZELIFY_OUTPUT_DIR: root of the generated Bazel tree
    - BAZELIFY_OVERLAY_MODE: emit queryview overlay files (1/true/yes/on)
    - BAZELIFY_LOG_DIR: where JSONL run logs go (unset: no run log is written)

    An unset overlay_mode means the manifest decides.
    """

    output_dir: str = "./bazel-out-tree"
    overlay_mode: bool | None = None  # None defers to the manifest
    verbosity: int = 0
    log_dir: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ConversionConfig:
        """Create ConversionConfig from a dict, applying env var overrides.

        Config precedence: explicit dict values > env vars > class defaults.
        """
        config = cls()

        env_output_dir = os.environ.get("BAZELIFY_OUTPUT_DIR")
        if env_output_dir:
            config.output_dir = env_output_dir
        env_overlay = os.environ.get("BAZELIFY_OVERLAY_MODE")
        if env_overlay:
            config.overlay_mode = parse_bool(env_overlay)
        env_log_dir = os.environ.get("BAZELIFY_LOG_DIR")
        if env_log_dir:
            config.log_dir = env_log_dir

        if data.get("output_dir") is not None:
            config.output_dir = data["output_dir"]
        if data.get("overlay_mode") is not None:
            config.overlay_mode = parse_bool(data["overlay_mode"])
        if data.get("verbosity") is not None:
            config.verbosity = int(data["verbosity"])
        if data.get("log_dir") is not None:
            config.log_dir = data["log_dir"]

        return config

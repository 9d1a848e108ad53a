"""Manifest loading — pre-rendered targets and rule shims from JSON or YAML."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bazelify.build.files import create_bazel_files
from bazelify.core.errors import ManifestError
from bazelify.core.models import BazelFile, BazelTarget, RuleShim

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    """Everything an external renderer hands over for one conversion."""

    build_to_targets: dict[str, list[BazelTarget]] = field(default_factory=dict)
    rule_shims: dict[str, RuleShim] = field(default_factory=dict)
    overlay_mode: bool = False

    @property
    def target_count(self) -> int:
        return sum(len(targets) for targets in self.build_to_targets.values())

    def resolve_mode(self, overlay_mode: bool | None = None) -> bool:
        """An explicit mode wins; None falls back to the manifest's own."""
        return self.overlay_mode if overlay_mode is None else overlay_mode

    def assemble(self, overlay_mode: bool | None = None) -> list[BazelFile]:
        """Assemble the file list, optionally overriding the manifest's mode."""
        return create_bazel_files(self.rule_shims, self.build_to_targets, self.resolve_mode(overlay_mode))


def _require_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ManifestError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _parse_targets(raw: Any) -> dict[str, list[BazelTarget]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ManifestError("'targets' must be a mapping of directory to target list")

    build_to_targets: dict[str, list[BazelTarget]] = {}
    for directory, entries in raw.items():
        directory = _require_str(directory, "targets")
        if not isinstance(entries, list):
            raise ManifestError(f"targets[{directory!r}]: expected a list of targets")
        targets = []
        for i, entry in enumerate(entries):
            where = f"targets[{directory!r}][{i}]"
            if not isinstance(entry, dict):
                raise ManifestError(f"{where}: expected a mapping with 'name' and 'content'")
            if "name" not in entry or "content" not in entry:
                raise ManifestError(f"{where}: missing 'name' or 'content'")
            targets.append(BazelTarget(
                name=_require_str(entry["name"], f"{where}.name"),
                content=_require_str(entry["content"], f"{where}.content"),
                directory=directory,
            ))
        build_to_targets[directory] = targets
    return build_to_targets


def _parse_rule_shims(raw: Any) -> dict[str, RuleShim]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ManifestError("'rule_shims' must be a mapping of shim name to shim")

    shims: dict[str, RuleShim] = {}
    for name, entry in raw.items():
        name = _require_str(name, "rule_shims")
        where = f"rule_shims[{name!r}]"
        if not isinstance(entry, dict) or "content" not in entry:
            raise ManifestError(f"{where}: expected a mapping with 'content'")
        rules = entry.get("rules", [])
        if not isinstance(rules, list):
            raise ManifestError(f"{where}.rules: expected a list of rule names")
        shims[name] = RuleShim(
            name=name,
            content=_require_str(entry["content"], f"{where}.content"),
            rules=tuple(_require_str(r, f"{where}.rules") for r in rules),
        )
    return shims


def parse_manifest(data: Any) -> Manifest:
    """Build a Manifest from already-decoded JSON/YAML data."""
    if not isinstance(data, dict):
        raise ManifestError("manifest root must be a mapping")
    overlay_mode = data.get("overlay_mode", False)
    if not isinstance(overlay_mode, bool):
        raise ManifestError("'overlay_mode' must be a boolean")
    return Manifest(
        build_to_targets=_parse_targets(data.get("targets")),
        rule_shims=_parse_rule_shims(data.get("rule_shims")),
        overlay_mode=overlay_mode,
    )


def load_manifest(path: str | Path) -> Manifest:
    """Load a manifest file. Format is chosen by extension (.json, .yaml, .yml)."""
    path = Path(path)
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"cannot read manifest {path}: {e}") from e

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise ManifestError(f"unsupported manifest format: {path.name}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ManifestError(f"cannot parse manifest {path}: {e}") from e

    manifest = parse_manifest(data)
    logger.debug(
        "Loaded manifest %s: %d directories, %d targets, %d rule shims",
        path, len(manifest.build_to_targets), manifest.target_count, len(manifest.rule_shims),
    )
    return manifest

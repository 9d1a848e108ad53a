"""Fingerprinting of generated file lists for caching and change detection."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from bazelify.core.errors import WriteError, atomic_write
from bazelify.core.models import BazelFile

logger = logging.getLogger(__name__)

FILES_SCHEME = "bazelify:files:v1"

# Stored next to the generated tree by `generate`, read back by `check`.
STATE_DIR = ".bazelify"
FINGERPRINT_FILE = "fingerprint.json"


@dataclass(frozen=True)
class Fingerprint:
    """A self-describing, versioned hash of a generated file list.

    Components map each file path to the hash of its contents, so two
    fingerprints can explain which files differ.
    """

    scheme: str
    digest: str  # SHA256 hex (full)
    components: dict[str, str]  # path -> content hash

    def matches(self, other: Fingerprint | None) -> bool:
        """Match requires same scheme AND same digest."""
        if other is None:
            return False
        return self.scheme == other.scheme and self.digest == other.digest

    def explain_diff(self, other: Fingerprint | None) -> list[str]:
        """Human-readable list of reasons these fingerprints differ."""
        if other is None:
            return ["no stored fingerprint"]
        if self.scheme != other.scheme:
            return [f"scheme changed ({other.scheme} -> {self.scheme})"]
        changed = []
        for k in sorted(set(self.components) | set(other.components)):
            if self.components.get(k) != other.components.get(k):
                changed.append(f"{k} changed")
        return changed or ["unknown"]

    def to_dict(self) -> dict:
        return {
            "scheme": self.scheme,
            "digest": self.digest,
            "components": dict(self.components),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Fingerprint | None:
        """Deserialize from a dict. Returns None if data is empty/missing."""
        if not data or "scheme" not in data:
            return None
        return cls(
            scheme=data["scheme"],
            digest=data["digest"],
            components=data.get("components", {}),
        )


def content_hash(contents: str) -> str:
    return hashlib.sha256(contents.encode()).hexdigest()[:16]


def compute_digest(components: dict[str, str]) -> str:
    """Deterministic digest from sorted component hashes."""
    parts = "|".join(f"{k}={v}" for k, v in sorted(components.items()))
    return hashlib.sha256(parts.encode()).hexdigest()


def fingerprint_files(files: Sequence[BazelFile]) -> Fingerprint:
    """Fingerprint a file list; equal lists always produce matching fingerprints."""
    components = {f.path: content_hash(f.contents) for f in files}
    return Fingerprint(
        scheme=FILES_SCHEME,
        digest=compute_digest(components),
        components=components,
    )


def fingerprint_path(output_dir: str | Path) -> Path:
    return Path(output_dir) / STATE_DIR / FINGERPRINT_FILE


def save_fingerprint(fingerprint: Fingerprint, output_dir: str | Path) -> Path:
    """Record the fingerprint of the last generated tree, replacing any previous one."""
    path = fingerprint_path(output_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write(path, json.dumps(fingerprint.to_dict(), indent=2, sort_keys=True))
    except OSError as e:
        raise WriteError(f"cannot write {path}: {e}") from e
    return path


def load_fingerprint(output_dir: str | Path) -> Fingerprint | None:
    """Fingerprint stored by the last generate run. None if absent or unreadable."""
    path = fingerprint_path(output_dir)
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_bytes().decode("utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable fingerprint %s: %s", path, e)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("digest"), str):
        logger.warning("Ignoring malformed fingerprint %s", path)
        return None
    return Fingerprint.from_dict(data)

"""Property filtering — which module properties may become Bazel attributes.

Two checks gate what a target renderer may emit:

- ``should_generate_attribute`` rejects property names that Bazel either
  generates itself, reserves, or cannot yet express as a static attribute.
- ``should_skip_field`` rejects fields of a module definition that cannot be
  set from a source module file at all: unexported fields, and fields that are
  only populated by a later graph-transformation (mutator) pass.

Module definitions declare their fields as dataclasses. Mutator-only fields are
tagged with ``field(metadata={"origin": FieldOrigin.MUTATED})`` and fields whose
name starts with an underscore are treated as unexported. ``property_schema``
reads those declarations once per class into a tuple of ``FieldSpec``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

# Certain module property names are ignored here, for the reasons commented.
IGNORED_PROP_NAMES: frozenset[str] = frozenset({
    "name",        # redundant, the target name is always generated separately
    "from",        # reserved keyword
    "in",          # reserved keyword
    "arch",        # interface prop type is not supported yet
    "multilib",    # interface prop type is not supported yet
    "target",      # interface prop type is not supported yet
    "visibility",  # Bazel has native visibility semantics
    "features",    # built-in Bazel attribute, cannot be overridden
})


class FieldOrigin(str, Enum):
    """Where a module field's value comes from."""

    SOURCE = "source"    # settable from a module definition file
    MUTATED = "mutated"  # populated by a graph-transformation pass only


@dataclass(frozen=True)
class FieldSpec:
    """Declared eligibility of a single module-definition field."""

    name: str
    exported: bool = True
    origin: FieldOrigin = FieldOrigin.SOURCE


def should_generate_attribute(prop: str) -> bool:
    """Return True if a property with this name may be emitted as an attribute."""
    return prop not in IGNORED_PROP_NAMES


def should_skip_field(spec: FieldSpec) -> bool:
    """Return True if a field cannot be set from a source module definition."""
    if not spec.exported:
        return True
    return spec.origin is FieldOrigin.MUTATED


@lru_cache(maxsize=None)
def property_schema(module_cls: type) -> tuple[FieldSpec, ...]:
    """Build the field schema of a module-definition dataclass.

    The result is computed once per class and cached.
    """
    if not dataclasses.is_dataclass(module_cls):
        raise TypeError(f"{module_cls.__name__} is not a dataclass")
    specs = []
    for f in dataclasses.fields(module_cls):
        origin = FieldOrigin(f.metadata.get("origin", FieldOrigin.SOURCE))
        specs.append(FieldSpec(name=f.name, exported=not f.name.startswith("_"), origin=origin))
    return tuple(specs)


def convertible_fields(module_cls: type) -> tuple[str, ...]:
    """Names of fields on module_cls that may be rendered as Bazel attributes."""
    return tuple(
        spec.name
        for spec in property_schema(module_cls)
        if not should_skip_field(spec) and should_generate_attribute(spec.name)
    )


def filter_properties(props: Mapping[str, Any]) -> dict[str, Any]:
    """Drop properties that must not be emitted, keeping the original order."""
    return {k: v for k, v in props.items() if should_generate_attribute(k)}

"""Module type canonicalization."""

from __future__ import annotations

TEST_RULE_SUFFIX = "_test"


def canonicalize_module_type(module_type: str) -> str:
    """Rename module types that would pick up Bazel's test-only semantics.

    Bazel marks rules ending in "_test" as testonly and requires every rule
    depending on them to be testonly too. The source module system has no
    such constraint, so "*_test" types are renamed to "*_test_".
    """
    if module_type.endswith(TEST_RULE_SUFFIX):
        return module_type + "_"
    return module_type

"""Fixed Starlark sources emitted alongside the generated BUILD files."""

from __future__ import annotations

from collections.abc import Mapping

from bazelify.core.models import RuleShim

RULES_SUBDIR = "build/bazel/queryview_rules"
RULES_PACKAGE = "//" + RULES_SUBDIR

BUILD_FILE_NAME = "BUILD.bazel"
PROVIDERS_BZL_NAME = "providers.bzl"
SOONG_MODULE_BZL_NAME = "soong_module.bzl"

# Preamble of queryview BUILD files. Overlay targets are soong_module macro
# calls and need it loaded; native targets are self-contained.
SOONG_MODULE_LOAD = f"""package(default_visibility = ["//visibility:public"])
load("{RULES_PACKAGE}:{SOONG_MODULE_BZL_NAME}", "soong_module")
"""

PROVIDERS_BZL = """SoongModuleInfo = provider(
    fields = {
        "name": "Name of module",
        "type": "Type of module",
        "variant": "Variant of module",
    },
)
"""

# %(loads)s and %(rule_map)s are filled in by generate_soong_module_bzl.
SOONG_MODULE_BZL_TEMPLATE = """
%(loads)s

load("%(package)s:%(providers)s", "SoongModuleInfo")

def _generic_soong_module_impl(ctx):
    return [
        SoongModuleInfo(
            name = ctx.attr.module_name,
            type = ctx.attr.module_type,
            variant = ctx.attr.module_variant,
        ),
    ]

generic_soong_module = rule(
    implementation = _generic_soong_module_impl,
    attrs = {
        "module_name": attr.string(mandatory = True),
        "module_type": attr.string(mandatory = True),
        "module_variant": attr.string(),
        "module_deps": attr.label_list(providers = [SoongModuleInfo]),
    },
)

soong_module_rule_map = {
%(rule_map)s}

_SUPPORTED_TYPES = ["bool", "int", "string"]

def _is_supported_type(value):
    if type(value) in _SUPPORTED_TYPES:
        return True
    elif type(value) == "list":
        supported = True
        for v in value:
            supported = supported and type(v) in _SUPPORTED_TYPES
        return supported
    else:
        return False

# soong_module is a macro that supports arbitrary kwargs, and uses module_type to
# expand to the right underlying shim.
def soong_module(name, module_type, **kwargs):
    soong_module_rule = soong_module_rule_map.get(module_type)

    if soong_module_rule == None:
        # No dedicated shim for this module type, fall back to the generic rule.
        generic_soong_module(
            name = name,
            module_type = module_type,
            module_name = kwargs.pop("module_name", ""),
            module_variant = kwargs.pop("module_variant", ""),
            module_deps = kwargs.pop("module_deps", []),
        )
    else:
        supported_kwargs = dict()
        for key, value in kwargs.items():
            if _is_supported_type(value):
                supported_kwargs[key] = value
        soong_module_rule(
            name = name,
            **supported_kwargs,
        )
"""


def generate_soong_module_bzl(rule_shims: Mapping[str, RuleShim]) -> str:
    """Render soong_module.bzl, loading every shim rule and mapping it by module type."""
    loads: list[str] = []
    rule_map = ""
    for bzl_name in sorted(rule_shims):
        shim = rule_shims[bzl_name]
        if not shim.rules:
            # load() requires at least one symbol.
            continue
        symbols = "".join(f', "{rule}"' for rule in shim.rules)
        loads.append(f'load("{RULES_PACKAGE}:{bzl_name}.bzl"{symbols})')
        for rule in shim.rules:
            rule_map += f'    "{rule}": {rule},\n'

    return SOONG_MODULE_BZL_TEMPLATE % {
        "loads": "\n".join(loads),
        "package": RULES_PACKAGE,
        "providers": PROVIDERS_BZL_NAME,
        "rule_map": rule_map,
    }

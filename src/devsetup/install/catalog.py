"""Tool catalog.

Built-in install recipes and the conversion from recipe mappings (built-in
or from a config file) into ToolSpec descriptors.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from devsetup.bootstrap.versions import LATEST, get_tool_version
from devsetup.install.models import ToolSpec
from devsetup.install.strategies import (
    BinaryDownloadStrategy,
    GoInstallStrategy,
    InstallStrategy,
    package_manager_chain,
)

# Recipe keys understood by build_tool_spec.
RECIPE_KEYS = frozenset({
    "enabled",
    "version",
    "package",
    "package_managers",
    "go_module",
    "download_url",
    "install_hint",
    "version_args",
})

BUILTIN_TOOLS: Dict[str, Dict[str, Any]] = {
    "shellcheck": {
        "package_managers": ["brew", "apt-get", "dnf", "yum"],
        "install_hint": "See: https://github.com/koalaman/shellcheck#installing",
    },
    "shfmt": {
        "package_managers": ["brew"],
        "go_module": "mvdan.cc/sh/v3/cmd/shfmt",
        "download_url": (
            "https://github.com/mvdan/sh/releases/download/"
            "{version}/shfmt_{bare_version}_{os}_{arch}"
        ),
        "install_hint": "See: https://github.com/mvdan/sh#shfmt",
    },
}


def build_strategies(recipe: Mapping[str, Any]) -> Tuple[InstallStrategy, ...]:
    """Build the ordered strategy list for a recipe.

    Order: host package managers, then Go, then release download.
    """
    strategies: List[InstallStrategy] = []
    managers = recipe.get("package_managers")
    if managers:
        strategies.extend(package_manager_chain(managers, recipe.get("package")))
    if recipe.get("go_module"):
        strategies.append(GoInstallStrategy(recipe["go_module"]))
    if recipe.get("download_url"):
        strategies.append(BinaryDownloadStrategy(recipe["download_url"]))
    return tuple(strategies)


def build_tool_spec(name: str, recipe: Optional[Mapping[str, Any]] = None) -> ToolSpec:
    """Convert a recipe mapping into a ToolSpec.

    Args:
        name: Tool (executable) name.
        recipe: Recipe mapping; defaults to the built-in recipe for ``name``.

    Returns:
        ToolSpec with its strategies in priority order.
    """
    data: Mapping[str, Any] = recipe if recipe is not None else BUILTIN_TOOLS.get(name, {})
    version = data.get("version") or get_tool_version(name, default=LATEST)
    version_args = data.get("version_args") or ["--version"]
    if isinstance(version_args, str):
        version_args = [version_args]

    return ToolSpec(
        name=name,
        version=str(version),
        strategies=build_strategies(data),
        install_hint=data.get("install_hint"),
        version_args=tuple(str(arg) for arg in version_args),
    )


def build_tool_specs(overrides: Optional[Mapping[str, Any]] = None) -> Tuple[ToolSpec, ...]:
    """Build the tool manifest from built-in recipes plus config overrides.

    An override mapping is merged key-by-key over the built-in recipe of the
    same name; unknown names define new tools. ``enabled: false`` (or a
    bare ``false``) drops a tool.
    """
    recipes: Dict[str, Dict[str, Any]] = {name: dict(recipe) for name, recipe in BUILTIN_TOOLS.items()}

    for name, override in (overrides or {}).items():
        if override is False:
            recipes.pop(name, None)
            continue
        merged = dict(recipes.get(name, {}))
        merged.update(override or {})
        recipes[name] = merged

    return tuple(
        build_tool_spec(name, recipe)
        for name, recipe in recipes.items()
        if recipe.get("enabled", True)
    )

"""Centralized tool version management.

Reads pinned tool versions from pyproject.toml [tool.devsetup.tools].
This is the single source of truth for devsetup-managed tool versions.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from devsetup.core.logging import get_logger

LOGGER = get_logger(__name__)

# "latest" means: let the package manager pick, no pinned release.
LATEST = "latest"

# Hardcoded fallback versions (kept in sync with pyproject.toml)
# These are used if pyproject.toml cannot be read at runtime
_FALLBACK_VERSIONS: Dict[str, str] = {
    "shellcheck": LATEST,
    "shfmt": "v3.12.0",
}


def _pyproject_path() -> Path:
    # Structure: src/devsetup/bootstrap/versions.py -> ../../../pyproject.toml
    return Path(__file__).parent.parent.parent.parent / "pyproject.toml"


@lru_cache(maxsize=1)
def _load_pyproject_versions() -> Dict[str, str]:
    """Load tool versions from devsetup's pyproject.toml.

    Returns:
        Dictionary mapping tool names to versions.
    """
    pyproject_path = _pyproject_path()

    if not pyproject_path.exists():
        # Installed package - pyproject.toml not available
        return _FALLBACK_VERSIONS.copy()

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        LOGGER.debug(f"Could not read {pyproject_path}: {e}")
        return _FALLBACK_VERSIONS.copy()

    versions = {
        str(tool): str(version)
        for tool, version in data.get("tool", {}).get("devsetup", {}).get("tools", {}).items()
    }

    # Fill in any missing tools from fallbacks
    for tool, version in _FALLBACK_VERSIONS.items():
        versions.setdefault(tool, version)

    return versions


def get_tool_version(tool_name: str, default: Optional[str] = None) -> str:
    """Get the pinned version for a specific tool.

    Args:
        tool_name: Name of the tool (e.g., 'shfmt').
        default: Optional default version if tool not found.

    Returns:
        Version string for the tool.

    Raises:
        KeyError: If tool not found and no default provided.
    """
    versions = _load_pyproject_versions()

    if tool_name in versions:
        return versions[tool_name]

    if default is not None:
        return default

    raise KeyError(f"Unknown tool: {tool_name}. Available: {list(versions.keys())}")

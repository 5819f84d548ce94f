"""Tool presence checks.

Resolution goes through shutil.which, which applies the same PATH and
PATHEXT rules the shell uses for external commands. Unlike ``command -v``
it only sees executables on disk: shell builtins, functions and aliases
never count as present. Absence is a normal result, never an error.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import Optional, Sequence

from devsetup.core.logging import get_logger
from devsetup.core.subprocess_runner import run_command

LOGGER = get_logger(__name__)


def find_tool(name: str, search_path: Optional[str] = None) -> Optional[str]:
    """Return the resolved path of an executable, or None.

    Args:
        name: Executable name.
        search_path: Optional PATH-style string; defaults to the process PATH.
    """
    return shutil.which(name, path=search_path)


def is_tool_present(name: str, search_path: Optional[str] = None) -> bool:
    """Check whether an executable is reachable on the search path."""
    present = find_tool(name, search_path) is not None
    LOGGER.debug(f"{name}: {'present' if present else 'absent'}")
    return present


def get_tool_version_line(
    name: str,
    version_args: Sequence[str] = ("--version",),
    timeout: float = 10.0,
    search_path: Optional[str] = None,
) -> Optional[str]:
    """Return the first useful line of ``<tool> --version``.

    shellcheck prints a banner line first, so lines containing "version"
    are preferred over the first line.

    Returns:
        Version line, or None if the tool could not report one.
    """
    executable = find_tool(name, search_path)
    if executable is None:
        return None
    try:
        result = run_command([executable, *version_args], timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        LOGGER.debug(f"Could not query {name} version: {e}")
        return None
    if result.returncode != 0:
        return None

    lines = [line.strip() for line in (result.stdout or "").splitlines() if line.strip()]
    if not lines:
        return None
    for line in lines:
        if line.lower().startswith("version"):
            return line
    return lines[0]

"""Privilege detection for install targets.

Elevation is only requested when the current user cannot do the work
directly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence

from devsetup.core.logging import get_logger

LOGGER = get_logger(__name__)

SUDO = "sudo"


def is_root() -> bool:
    """Return True if the process runs with an effective UID of 0."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def _nearest_existing(path: Path) -> Path:
    while not path.exists() and path != path.parent:
        path = path.parent
    return path


def is_writable(directory: Path) -> bool:
    """Check whether the current user can create files in a directory.

    A directory that does not exist yet is writable if its nearest
    existing ancestor is.
    """
    target = _nearest_existing(directory)
    return target.is_dir() and os.access(target, os.W_OK | os.X_OK)


def needs_elevation(directory: Path) -> bool:
    """Return True if writing into ``directory`` requires sudo."""
    return not is_root() and not is_writable(directory)


def elevate(cmd: Sequence[str], required: bool) -> List[str]:
    """Prefix a command with sudo when ``required`` is set."""
    if required and not is_root():
        LOGGER.info(f"Elevated privileges required for: {cmd[0]}")
        return [SUDO, *cmd]
    return list(cmd)

"""Subprocess helpers for running external tools.

Every command runs with a bounded timeout; callers translate failures into
their own error types.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from devsetup.core.logging import get_logger

LOGGER = get_logger(__name__)

# Seconds to wait for a package manager, download or git command.
DEFAULT_TIMEOUT = 300.0

CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]


def run_command(
    cmd: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    capture_output: bool = True,
) -> subprocess.CompletedProcess:
    """Run a command to completion.

    Args:
        cmd: Command and arguments to run.
        cwd: Working directory for the command.
        timeout: Timeout in seconds (None waits forever).
        capture_output: Whether to capture stdout/stderr.

    Returns:
        CompletedProcess with text output.

    Raises:
        subprocess.TimeoutExpired: If the command times out.
        OSError: If the command cannot be started.
    """
    cmd_list: List[str] = [str(part) for part in cmd]
    LOGGER.debug(f"Running: {' '.join(cmd_list)}")
    return subprocess.run(
        cmd_list,
        capture_output=capture_output,
        text=True,
        encoding="utf-8",
        errors="replace",
        cwd=str(cwd) if cwd is not None else None,
        timeout=timeout,
    )


def describe_failure(result: subprocess.CompletedProcess) -> str:
    """Return the most useful line of a failed command's output."""
    output = (result.stderr or "").strip() or (result.stdout or "").strip()
    if not output:
        return f"exit code {result.returncode}"
    last_line = output.splitlines()[-1]
    return f"exit code {result.returncode}: {last_line}"

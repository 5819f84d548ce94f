"""Data types for tool installation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from devsetup.bootstrap.platform import PlatformInfo
from devsetup.bootstrap.presence import is_tool_present
from devsetup.bootstrap.versions import LATEST
from devsetup.core.subprocess_runner import DEFAULT_TIMEOUT, CommandRunner, run_command

if TYPE_CHECKING:
    from devsetup.install.strategies import InstallStrategy

# Default install target for downloaded binaries.
DEFAULT_INSTALL_DIR = Path("/usr/local/bin")

PresenceCheck = Callable[[str, Optional[str]], bool]


class InstallStatus(str, Enum):
    """Outcome of provisioning one tool."""

    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass(frozen=True)
class ToolSpec:
    """Descriptor of a tool to provision.

    Attributes:
        name: Executable name, also used for presence checks.
        version: Pinned release (e.g. "v3.12.0") or "latest".
        strategies: Install strategies in priority order.
        install_hint: Shown when every strategy failed.
        version_args: Arguments that make the tool print its version.
    """

    name: str
    version: str = LATEST
    strategies: Tuple["InstallStrategy", ...] = ()
    install_hint: Optional[str] = None
    version_args: Tuple[str, ...] = ("--version",)

    @property
    def is_pinned(self) -> bool:
        return self.version != LATEST

    @property
    def bare_version(self) -> str:
        """Version without a leading "v" ("v3.12.0" -> "3.12.0")."""
        return self.version[1:] if self.version.startswith("v") else self.version


def _default_presence(name: str, search_path: Optional[str] = None) -> bool:
    return is_tool_present(name, search_path)


@dataclass(frozen=True)
class InstallContext:
    """Everything a strategy needs besides the tool itself.

    Attributes:
        platform: Normalized host platform.
        install_dir: Directory on PATH receiving downloaded binaries.
        timeout: Bound in seconds for every command and download.
        runner: Callable used to run external commands.
        presence_check: Callable answering "is this executable on PATH?".
        search_path: Optional PATH override for presence checks.
    """

    platform: PlatformInfo
    install_dir: Path = DEFAULT_INSTALL_DIR
    timeout: float = DEFAULT_TIMEOUT
    runner: CommandRunner = run_command
    presence_check: PresenceCheck = _default_presence
    search_path: Optional[str] = None

    def is_present(self, name: str) -> bool:
        return self.presence_check(name, self.search_path)

    def run(self, cmd):
        """Run an external command bounded by the context timeout."""
        return self.runner(cmd, timeout=self.timeout)

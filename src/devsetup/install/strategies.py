"""Install strategies.

Each strategy is one concrete way of getting a tool onto PATH. A strategy
returns normally on success and raises StrategyError on failure; the
installer then moves on to the next strategy in the tool's list.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from devsetup.bootstrap.download import download_to_temp, ensure_https
from devsetup.bootstrap.privileges import elevate, needs_elevation
from devsetup.core.errors import StrategyError, StrategyUnavailableError
from devsetup.core.logging import get_logger
from devsetup.core.subprocess_runner import describe_failure
from devsetup.install.models import InstallContext, ToolSpec

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class PackageManagerCommands:
    """How to drive one host package manager."""

    install: Tuple[str, ...]
    refresh: Optional[Tuple[str, ...]] = None
    needs_root: bool = True


# Host package managers in fallback order.
PACKAGE_MANAGERS: Dict[str, PackageManagerCommands] = {
    "brew": PackageManagerCommands(install=("brew", "install"), needs_root=False),
    "apt-get": PackageManagerCommands(
        install=("apt-get", "install", "-y"),
        refresh=("apt-get", "update"),
    ),
    "dnf": PackageManagerCommands(install=("dnf", "install", "-y")),
    "yum": PackageManagerCommands(install=("yum", "install", "-y")),
}

DEFAULT_PACKAGE_MANAGERS: Tuple[str, ...] = tuple(PACKAGE_MANAGERS)


class InstallStrategy(ABC):
    """Base class for install strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy identifier shown in logs and summaries."""

    @abstractmethod
    def attempt(self, tool: ToolSpec, context: InstallContext) -> None:
        """Try to install ``tool``.

        Raises:
            StrategyUnavailableError: If the strategy cannot run on this host.
            StrategyError: If the strategy ran and failed.
            FatalSetupError: If the whole run must stop.
        """

    def _run(self, cmd: Sequence[str], context: InstallContext) -> subprocess.CompletedProcess:
        """Run a command, converting every failure into StrategyError."""
        try:
            result = context.run(list(cmd))
        except subprocess.TimeoutExpired as e:
            raise StrategyError(
                f"{self.name}: '{' '.join(cmd)}' timed out after {context.timeout:.0f}s"
            ) from e
        except OSError as e:
            raise StrategyError(f"{self.name}: could not run '{cmd[0]}': {e}") from e

        if result.returncode != 0:
            raise StrategyError(f"{self.name}: '{' '.join(cmd)}' failed ({describe_failure(result)})")
        return result

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class PackageManagerStrategy(InstallStrategy):
    """Install through a host package manager (brew, apt-get, dnf, yum)."""

    def __init__(self, manager: str, package: Optional[str] = None) -> None:
        if manager not in PACKAGE_MANAGERS:
            raise ValueError(
                f"Unknown package manager: {manager}. "
                f"Supported: {', '.join(PACKAGE_MANAGERS)}"
            )
        self._manager = manager
        self._commands = PACKAGE_MANAGERS[manager]
        self._package = package

    @property
    def name(self) -> str:
        return self._manager

    @property
    def manager(self) -> str:
        return self._manager

    def package_for(self, tool: ToolSpec) -> str:
        return self._package or tool.name

    def attempt(self, tool: ToolSpec, context: InstallContext) -> None:
        if not context.is_present(self._manager):
            raise StrategyUnavailableError(f"{self._manager} not found")

        LOGGER.info(f"Using {self._manager} to install {tool.name}")
        if tool.is_pinned:
            LOGGER.debug(f"{self._manager} installs its own {tool.name} version, not {tool.version}")

        if self._commands.refresh:
            self._run(elevate(self._commands.refresh, self._commands.needs_root), context)
        install_cmd = [*self._commands.install, self.package_for(tool)]
        self._run(elevate(install_cmd, self._commands.needs_root), context)


class GoInstallStrategy(InstallStrategy):
    """Install with ``go install <module>@<version>``."""

    def __init__(self, module: str) -> None:
        self._module = module

    @property
    def name(self) -> str:
        return "go"

    def attempt(self, tool: ToolSpec, context: InstallContext) -> None:
        if not context.is_present("go"):
            raise StrategyUnavailableError("go not found")

        LOGGER.info(f"Using Go to install {tool.name}")
        self._run(["go", "install", f"{self._module}@{tool.version}"], context)


class BinaryDownloadStrategy(InstallStrategy):
    """Download a prebuilt release binary and move it onto PATH.

    The URL template may use {name}, {version}, {bare_version}, {os} and
    {arch}. Only pinned versions can be downloaded, and only into an
    install directory that is on the search path.
    """

    def __init__(self, url_template: str) -> None:
        self._url_template = url_template

    @property
    def name(self) -> str:
        return "download"

    @property
    def url_template(self) -> str:
        return self._url_template

    def resolve_url(self, tool: ToolSpec, context: InstallContext) -> str:
        try:
            return self._url_template.format(
                name=tool.name,
                version=tool.version,
                bare_version=tool.bare_version,
                os=context.platform.os,
                arch=context.platform.arch,
            )
        except (KeyError, IndexError) as e:
            raise StrategyError(f"Invalid download URL template {self._url_template!r}: {e}") from e

    def attempt(self, tool: ToolSpec, context: InstallContext) -> None:
        if not tool.is_pinned:
            raise StrategyUnavailableError(f"download requires a pinned {tool.name} version")

        url = self.resolve_url(tool, context)
        ensure_https(url)
        if not self._on_search_path(context):
            raise StrategyUnavailableError(
                f"install directory {context.install_dir} is not on PATH; "
                "add it to PATH or set install_dir"
            )

        LOGGER.info(f"Downloading from: {url}")
        temp_path = download_to_temp(url, timeout=context.timeout)
        try:
            temp_path.chmod(0o755)
            self._place(temp_path, context.install_dir / tool.name, context)
        finally:
            # No-op after a successful move
            temp_path.unlink(missing_ok=True)

        LOGGER.info(f"{tool.name} {tool.version} installed to {context.install_dir / tool.name}")

    @staticmethod
    def _on_search_path(context: InstallContext) -> bool:
        search_path = context.search_path
        if search_path is None:
            search_path = os.environ.get("PATH", "")
        target = context.install_dir.expanduser().resolve()
        return any(
            Path(entry).expanduser().resolve() == target
            for entry in search_path.split(os.pathsep)
            if entry
        )

    def _place(self, source: Path, destination: Path, context: InstallContext) -> None:
        if needs_elevation(destination.parent):
            LOGGER.info(f"Installing to {destination.parent} requires sudo")
            self._run(elevate(["mv", str(source), str(destination)], required=True), context)
            return

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(destination))
        except OSError as e:
            raise StrategyError(f"Could not move {source} to {destination}: {e}") from e


def package_manager_chain(
    managers: Sequence[str] = DEFAULT_PACKAGE_MANAGERS,
    package: Optional[str] = None,
) -> List[InstallStrategy]:
    """Build one PackageManagerStrategy per manager, in the given order."""
    return [PackageManagerStrategy(manager, package) for manager in managers]

"""VS Code extension installation through the ``code`` CLI."""

from __future__ import annotations

import subprocess
from typing import Callable, Iterable, List, Set

from devsetup.bootstrap.presence import is_tool_present
from devsetup.core.logging import get_logger
from devsetup.core.models import OutcomeKind, StepCategory, StepOutcome
from devsetup.core.subprocess_runner import DEFAULT_TIMEOUT, CommandRunner, describe_failure, run_command

LOGGER = get_logger(__name__)

CODE_CLI = "code"

DEFAULT_EXTENSIONS = (
    "GitHub.copilot",
    "GitHub.copilot-chat",
    "esbenp.prettier-vscode",
    "ms-python.black-formatter",
    "redhat.vscode-yaml",
    "streetsidesoftware.code-spell-checker",
    "vivaxy.vscode-conventional-commits",
)


class ExtensionInstaller:
    """Installs missing editor extensions."""

    def __init__(
        self,
        runner: CommandRunner = run_command,
        timeout: float = DEFAULT_TIMEOUT,
        presence_check: Callable[[str], bool] = is_tool_present,
    ) -> None:
        self._runner = runner
        self._timeout = timeout
        self._presence_check = presence_check

    def installed_extensions(self) -> Set[str]:
        """Return installed extension IDs, lowercased."""
        result = self._runner([CODE_CLI, "--list-extensions"], timeout=self._timeout)
        if result.returncode != 0:
            raise subprocess.SubprocessError(f"code --list-extensions failed ({describe_failure(result)})")
        return {line.strip().lower() for line in result.stdout.splitlines() if line.strip()}

    def install(self, extensions: Iterable[str]) -> List[StepOutcome]:
        """Install every extension that is not installed yet.

        Returns:
            One outcome per extension, or a single skipped outcome when the
            VS Code CLI is unavailable.
        """
        wanted = list(extensions)
        if not wanted:
            return []

        if not self._presence_check(CODE_CLI):
            return [
                StepOutcome(
                    StepCategory.EXTENSIONS,
                    "vscode",
                    OutcomeKind.SKIPPED,
                    "VS Code CLI 'code' not found; install recommended extensions when prompted",
                )
            ]

        try:
            installed = self.installed_extensions()
        except (OSError, subprocess.SubprocessError) as e:
            LOGGER.warning(f"Could not list VS Code extensions: {e}")
            return [
                StepOutcome(
                    StepCategory.EXTENSIONS,
                    "vscode",
                    OutcomeKind.FAILED,
                    f"could not list extensions: {e}",
                    remediation="install the recommended extensions from VS Code",
                )
            ]

        return [self._install_one(ext, installed) for ext in wanted]

    def _install_one(self, extension: str, installed: Set[str]) -> StepOutcome:
        if extension.lower() in installed:
            return StepOutcome(StepCategory.EXTENSIONS, extension, OutcomeKind.SKIPPED, "already installed")

        LOGGER.info(f"Installing {extension}...")
        try:
            result = self._runner([CODE_CLI, "--install-extension", extension], timeout=self._timeout)
        except (OSError, subprocess.SubprocessError) as e:
            return self._failed(extension, str(e))
        if result.returncode != 0:
            return self._failed(extension, describe_failure(result))

        installed.add(extension.lower())
        return StepOutcome(StepCategory.EXTENSIONS, extension, OutcomeKind.SUCCESS, "installed")

    @staticmethod
    def _failed(extension: str, detail: str) -> StepOutcome:
        return StepOutcome(
            StepCategory.EXTENSIONS,
            extension,
            OutcomeKind.FAILED,
            f"could not install ({detail})",
            remediation=f"run: code --install-extension {extension}",
        )

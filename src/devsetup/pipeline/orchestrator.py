"""Setup orchestration.

Runs the steps of a project setup in a fixed order:

1. Platform detection (fatal on unknown hardware)
2. Tool provisioning (presence check -> install -> verification, per tool)
3. Starter files
4. Git repository and commit template
5. Editor extensions

Every step records a StepOutcome. A tool failure never blocks the next
tool; only a FatalSetupError stops the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from devsetup.bootstrap.platform import PlatformInfo, get_platform_info
from devsetup.bootstrap.presence import get_tool_version_line, is_tool_present
from devsetup.config.models import SetupConfig
from devsetup.core.errors import FatalSetupError
from devsetup.core.logging import get_logger
from devsetup.core.models import OutcomeKind, SetupReport, StepCategory, StepOutcome
from devsetup.core.subprocess_runner import CommandRunner, run_command
from devsetup.install.installer import InstallResult, ToolInstaller
from devsetup.install.models import InstallContext, InstallStatus, ToolSpec
from devsetup.scaffold.extensions import ExtensionInstaller
from devsetup.scaffold.git import GitSetup
from devsetup.scaffold.starter_files import StarterFileBootstrapper

LOGGER = get_logger(__name__)

VersionProbe = Callable[[ToolSpec, Optional[str]], Optional[str]]


def _probe_version(tool: ToolSpec, search_path: Optional[str]) -> Optional[str]:
    return get_tool_version_line(tool.name, tool.version_args, search_path=search_path)


class SetupOrchestrator:
    """Sequences platform detection, tool installs and project scaffolding."""

    def __init__(
        self,
        config: SetupConfig,
        project_root: Path,
        runner: CommandRunner = run_command,
        presence_check: Callable[[str, Optional[str]], bool] = is_tool_present,
        platform_detector: Callable[[], PlatformInfo] = get_platform_info,
        version_probe: VersionProbe = _probe_version,
        search_path: Optional[str] = None,
    ) -> None:
        self._config = config
        self._project_root = project_root
        self._runner = runner
        self._presence_check = presence_check
        self._platform_detector = platform_detector
        self._version_probe = version_probe
        self._search_path = search_path

    @property
    def config(self) -> SetupConfig:
        return self._config

    def _is_present(self, name: str) -> bool:
        return self._presence_check(name, self._search_path)

    def run(self) -> SetupReport:
        """Run every configured step and return the collected outcomes."""
        report = SetupReport()
        if not self._provision(report, install_tools=not self._config.skip_tools):
            return report

        self.bootstrap_files(report)
        self.setup_git(report)
        if not self._config.skip_extensions:
            self.install_extensions(report)
        return report

    def run_tools(self) -> SetupReport:
        """Detect the platform and provision the configured tools only."""
        report = SetupReport()
        self._provision(report, install_tools=True)
        return report

    def _provision(self, report: SetupReport, install_tools: bool) -> bool:
        """Run the platform and tool phases.

        Returns:
            False if a fatal error stopped the run.
        """
        try:
            platform_info = self.detect_platform(report)
            if install_tools:
                self.provision_tools(platform_info, report)
        except FatalSetupError as e:
            LOGGER.error(str(e))
            category = StepCategory.PLATFORM if not report.outcomes else StepCategory.TOOLS
            report.add(
                StepOutcome(
                    category,
                    category.value,
                    OutcomeKind.FATAL,
                    str(e),
                    remediation=e.remediation,
                )
            )
            return False
        return True

    def detect_platform(self, report: SetupReport) -> PlatformInfo:
        """Detect the host platform.

        Raises:
            UnsupportedPlatformError: If the OS or architecture is unknown.
        """
        platform_info = self._platform_detector()
        LOGGER.info(f"Detected platform: {platform_info.os} {platform_info.arch}")
        report.add(
            StepOutcome(
                StepCategory.PLATFORM,
                "platform",
                OutcomeKind.SUCCESS,
                f"detected {platform_info.os} {platform_info.arch}",
            )
        )
        return platform_info

    def install_context(self, platform_info: PlatformInfo) -> InstallContext:
        return InstallContext(
            platform=platform_info,
            install_dir=self._config.install_dir,
            timeout=self._config.timeout,
            runner=self._runner,
            presence_check=self._presence_check,
            search_path=self._search_path,
        )

    def provision_tools(self, platform_info: PlatformInfo, report: SetupReport) -> None:
        """Install every configured tool, one at a time."""
        installer = ToolInstaller(self.install_context(platform_info))
        for tool in self._config.tools:
            result = installer.ensure(tool)
            report.add(self._tool_outcome(tool, result))

    def _tool_outcome(self, tool: ToolSpec, result: InstallResult) -> StepOutcome:
        if result.status == InstallStatus.FAILED:
            return StepOutcome(
                StepCategory.TOOLS,
                tool.name,
                OutcomeKind.FAILED,
                result.message,
                remediation=tool.install_hint or f"install {tool.name} manually",
            )

        # Post-install verification
        if not self._is_present(tool.name):
            return StepOutcome(
                StepCategory.TOOLS,
                tool.name,
                OutcomeKind.FAILED,
                "not found on PATH after installation",
                remediation=tool.install_hint or f"install {tool.name} manually",
            )

        version_line = self._version_probe(tool, self._search_path)
        suffix = f" ({version_line})" if version_line else ""
        if result.status == InstallStatus.ALREADY_PRESENT:
            return StepOutcome(StepCategory.TOOLS, tool.name, OutcomeKind.SKIPPED, f"already installed{suffix}")
        return StepOutcome(StepCategory.TOOLS, tool.name, OutcomeKind.SUCCESS, f"{result.message}{suffix}")

    def bootstrap_files(self, report: SetupReport) -> None:
        bootstrapper = StarterFileBootstrapper(self._config.starter_files)
        for outcome in bootstrapper.bootstrap(self._project_root):
            report.add(outcome)

    def setup_git(self, report: SetupReport) -> None:
        git = GitSetup(
            runner=self._runner,
            timeout=self._config.timeout,
            presence_check=self._is_present,
        )
        settings = self._config.git
        if settings.init:
            report.add(git.init_repository(self._project_root, settings.initial_commit_message))
        if settings.commit_template:
            report.add(git.configure_commit_template(self._project_root, settings.commit_template))

    def install_extensions(self, report: SetupReport) -> None:
        installer = ExtensionInstaller(
            runner=self._runner,
            timeout=self._config.timeout,
            presence_check=self._is_present,
        )
        for outcome in installer.install(self._config.extensions):
            report.add(outcome)

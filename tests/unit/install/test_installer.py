"""Tests for the tool installer."""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from devsetup.core.errors import InsecureDownloadError, StrategyError, StrategyUnavailableError
from devsetup.install.installer import ToolInstaller
from devsetup.install.models import InstallContext, InstallStatus, ToolSpec
from devsetup.install.strategies import InstallStrategy


class ScriptedStrategy(InstallStrategy):
    """Strategy whose behavior is fixed up front."""

    def __init__(
        self,
        name: str,
        log: List[str],
        error: Optional[Exception] = None,
        provides: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._name = name
        self._log = log
        self._error = error
        self._provides = provides

    @property
    def name(self) -> str:
        return self._name

    def attempt(self, tool: ToolSpec, context: InstallContext) -> None:
        self._log.append(self._name)
        if self._error is not None:
            raise self._error
        if self._provides is not None:
            self._provides(tool.name)


@pytest.fixture
def context(runner, presence, linux_amd64):
    return InstallContext(platform=linux_amd64, runner=runner, presence_check=presence)


class TestEnsure:
    """Tests for ToolInstaller.ensure."""

    def test_present_tool_is_not_installed(self, context, presence) -> None:
        presence.add("shellcheck")
        log: List[str] = []
        tool = ToolSpec("shellcheck", strategies=(ScriptedStrategy("brew", log),))

        result = ToolInstaller(context).ensure(tool)

        assert result.status == InstallStatus.ALREADY_PRESENT
        assert result.succeeded
        assert log == []

    def test_absent_tool_is_installed(self, context, presence) -> None:
        log: List[str] = []
        tool = ToolSpec("shellcheck", strategies=(ScriptedStrategy("brew", log, provides=presence.add),))

        result = ToolInstaller(context).ensure(tool)

        assert result.status == InstallStatus.INSTALLED
        assert result.strategy == "brew"
        assert result.message == "installed via brew"


class TestInstall:
    """Tests for strategy fallthrough."""

    def test_falls_through_to_next_strategy(self, context, presence) -> None:
        log: List[str] = []
        tool = ToolSpec(
            "shfmt",
            "v3.12.0",
            strategies=(
                ScriptedStrategy("brew", log, error=StrategyUnavailableError("brew not found")),
                ScriptedStrategy("go", log, error=StrategyError("go: build failed")),
                ScriptedStrategy("download", log, provides=presence.add),
            ),
        )

        result = ToolInstaller(context).install(tool)

        assert log == ["brew", "go", "download"]
        assert result.status == InstallStatus.INSTALLED
        assert result.strategy == "download"
        assert result.errors == ("brew not found", "go: build failed")

    def test_stops_at_first_success(self, context, presence) -> None:
        log: List[str] = []
        tool = ToolSpec(
            "shellcheck",
            strategies=(
                ScriptedStrategy("brew", log, provides=presence.add),
                ScriptedStrategy("apt-get", log, provides=presence.add),
            ),
        )

        ToolInstaller(context).install(tool)

        assert log == ["brew"]

    def test_success_without_tool_on_path_falls_through(self, context, presence) -> None:
        log: List[str] = []
        tool = ToolSpec(
            "shfmt",
            "v3.12.0",
            strategies=(
                ScriptedStrategy("go", log),
                ScriptedStrategy("download", log, provides=presence.add),
            ),
        )

        result = ToolInstaller(context).install(tool)

        assert log == ["go", "download"]
        assert result.strategy == "download"
        assert result.errors == ("go finished but shfmt is not on PATH",)

    def test_all_strategies_fail(self, context) -> None:
        log: List[str] = []
        tool = ToolSpec(
            "shellcheck",
            strategies=(
                ScriptedStrategy("brew", log, error=StrategyUnavailableError("brew not found")),
                ScriptedStrategy("apt-get", log, error=StrategyError("apt-get: exit code 100")),
            ),
        )

        result = ToolInstaller(context).install(tool)

        assert result.status == InstallStatus.FAILED
        assert not result.succeeded
        assert result.message == "all install strategies failed (last: apt-get: exit code 100)"
        assert len(result.errors) == 2

    def test_no_strategies(self, context) -> None:
        result = ToolInstaller(context).install(ToolSpec("shellcheck"))
        assert result.status == InstallStatus.FAILED
        assert result.message == "no install strategy configured"

    def test_fatal_error_propagates(self, context, presence) -> None:
        log: List[str] = []
        tool = ToolSpec(
            "shfmt",
            "v3.12.0",
            strategies=(
                ScriptedStrategy("download", log, error=InsecureDownloadError("Only HTTPS URLs are supported")),
                ScriptedStrategy("go", log, provides=presence.add),
            ),
        )

        with pytest.raises(InsecureDownloadError):
            ToolInstaller(context).install(tool)
        assert log == ["download"]

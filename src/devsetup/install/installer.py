"""Tool installer.

Walks a tool's strategies in priority order and stops at the first one
that leaves the tool reachable on PATH.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from devsetup.core.errors import StrategyError, StrategyUnavailableError
from devsetup.core.logging import get_logger
from devsetup.install.models import InstallContext, InstallStatus, ToolSpec

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class InstallResult:
    """Result of provisioning one tool.

    Attributes:
        tool: Tool name.
        status: Final install status.
        strategy: Name of the strategy that installed the tool, if any.
        message: Human-readable summary.
        errors: One entry per failed strategy, in attempt order.
    """

    tool: str
    status: InstallStatus
    strategy: Optional[str] = None
    message: str = ""
    errors: Tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status != InstallStatus.FAILED


class ToolInstaller:
    """Installs tools using their ordered strategy lists."""

    def __init__(self, context: InstallContext) -> None:
        self._context = context

    @property
    def context(self) -> InstallContext:
        return self._context

    def ensure(self, tool: ToolSpec) -> InstallResult:
        """Install ``tool`` unless it is already on PATH."""
        if self._context.is_present(tool.name):
            LOGGER.info(f"{tool.name} is already installed")
            return InstallResult(
                tool=tool.name,
                status=InstallStatus.ALREADY_PRESENT,
                message="already installed",
            )
        return self.install(tool)

    def install(self, tool: ToolSpec) -> InstallResult:
        """Try every strategy of ``tool`` until one succeeds.

        Strategy failures are collected, not raised. FatalSetupError
        propagates to the caller.
        """
        if not tool.strategies:
            return InstallResult(
                tool=tool.name,
                status=InstallStatus.FAILED,
                message="no install strategy configured",
            )

        LOGGER.info(f"Installing {tool.name}...")
        errors = []
        for strategy in tool.strategies:
            try:
                strategy.attempt(tool, self._context)
            except StrategyUnavailableError as e:
                LOGGER.debug(f"Skipping {strategy.name} for {tool.name}: {e}")
                errors.append(str(e))
                continue
            except StrategyError as e:
                LOGGER.warning(f"{strategy.name} could not install {tool.name}: {e}")
                errors.append(str(e))
                continue

            if self._context.is_present(tool.name):
                return InstallResult(
                    tool=tool.name,
                    status=InstallStatus.INSTALLED,
                    strategy=strategy.name,
                    message=f"installed via {strategy.name}",
                    errors=tuple(errors),
                )

            unreachable = f"{strategy.name} finished but {tool.name} is not on PATH"
            LOGGER.warning(unreachable)
            errors.append(unreachable)

        return InstallResult(
            tool=tool.name,
            status=InstallStatus.FAILED,
            message=_failure_message(errors),
            errors=tuple(errors),
        )


def _failure_message(errors) -> str:
    if not errors:
        return "all install strategies failed"
    return f"all install strategies failed (last: {errors[-1]})"

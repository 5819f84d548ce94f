"""devsetup subcommands.

Each subcommand is a Command; the runner picks one by name and hands it
the parsed arguments and the loaded configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devsetup.config.models import SetupConfig


class Command(ABC):
    """A devsetup subcommand."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Subcommand name as typed on the command line."""

    @abstractmethod
    def execute(self, args: Namespace, config: "SetupConfig") -> int:
        """Run the subcommand.

        Args:
            args: Parsed command-line arguments.
            config: Configuration loaded for the target project.

        Returns:
            Process exit code (see devsetup.cli.exit_codes).
        """


# ruff: noqa: E402
from devsetup.cli.commands.install import InstallCommand
from devsetup.cli.commands.setup import SetupCommand
from devsetup.cli.commands.status import StatusCommand

__all__ = [
    "Command",
    "InstallCommand",
    "SetupCommand",
    "StatusCommand",
]

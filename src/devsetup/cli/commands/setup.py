"""Setup command implementation.

Full project setup:
1. Detects the platform
2. Installs missing developer tools
3. Creates missing starter files
4. Initializes git and the commit template
5. Installs editor extensions
"""

from __future__ import annotations

import sys
from argparse import Namespace
from dataclasses import replace
from pathlib import Path
from typing import IO, Optional

import questionary
from questionary import Style

from devsetup.cli.commands import Command
from devsetup.cli.exit_codes import EXIT_INVALID_USAGE, exit_code_for
from devsetup.config.models import SetupConfig
from devsetup.core.logging import get_logger
from devsetup.pipeline.orchestrator import SetupOrchestrator
from devsetup.reporters.summary_reporter import SummaryReporter

LOGGER = get_logger(__name__)

# Custom questionary style
STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("instruction", "fg:gray"),
])


class SetupCommand(Command):
    """Idempotent project setup command."""

    def __init__(self, version: str, output: Optional[IO[str]] = None):
        """Initialize SetupCommand.

        Args:
            version: Current devsetup version string.
            output: Stream for the summary (default: stdout).
        """
        self._version = version
        self._output = output

    @property
    def name(self) -> str:
        """Command identifier."""
        return "setup"

    def execute(self, args: Namespace, config: SetupConfig) -> int:
        """Execute the setup command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded devsetup configuration.

        Returns:
            Exit code.
        """
        output = self._output or sys.stdout
        project_root = Path(args.path).resolve()

        if not project_root.is_dir():
            print(f"Error: {project_root} is not a directory", file=output)
            return EXIT_INVALID_USAGE

        config = self._confirm_git_init(args, config, project_root)

        print(f"devsetup v{self._version}: setting up {project_root}\n", file=output)
        report = SetupOrchestrator(config, project_root).run()
        SummaryReporter().report(report, output)

        return exit_code_for(report, config.strict)

    def _confirm_git_init(self, args: Namespace, config: SetupConfig, project_root: Path) -> SetupConfig:
        """Ask before creating a repository when running interactively."""
        if not config.git.init or (project_root / ".git").exists():
            return config
        if getattr(args, "yes", False) or not sys.stdin.isatty():
            return config

        confirmed = questionary.confirm(
            "No git repository found. Initialize one with an initial commit?",
            default=True,
            style=STYLE,
        ).ask()

        if confirmed:
            return config
        LOGGER.info("Skipping git initialization")
        return replace(config, git=replace(config.git, init=False))

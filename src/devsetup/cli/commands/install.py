"""Install command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path
from typing import IO, Optional

from devsetup.cli.commands import Command
from devsetup.cli.exit_codes import EXIT_INVALID_USAGE, exit_code_for
from devsetup.config.models import SetupConfig
from devsetup.pipeline.orchestrator import SetupOrchestrator
from devsetup.reporters.summary_reporter import SummaryReporter


class InstallCommand(Command):
    """Installs developer tools without touching the project."""

    def __init__(self, output: Optional[IO[str]] = None):
        self._output = output

    @property
    def name(self) -> str:
        """Command identifier."""
        return "install"

    def execute(self, args: Namespace, config: SetupConfig) -> int:
        """Execute the install command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded devsetup configuration.

        Returns:
            Exit code. Unknown tool names are invalid usage.
        """
        output = self._output or sys.stdout

        if args.tools:
            try:
                config = config.with_tools(args.tools)
            except KeyError as e:
                print(f"Error: {e.args[0]}", file=output)
                return EXIT_INVALID_USAGE

        report = SetupOrchestrator(config, Path(args.path).resolve()).run_tools()
        SummaryReporter(show_next_steps=False).report(report, output)

        return exit_code_for(report, config.strict)

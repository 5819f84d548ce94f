"""Entry point logic of the devsetup command.

Parses arguments, configures logging, loads the project configuration and
dispatches to the selected subcommand.
"""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from importlib.metadata import version, PackageNotFoundError

from devsetup.cli.arguments import build_parser
from devsetup.cli.commands import Command, InstallCommand, SetupCommand, StatusCommand
from devsetup.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from devsetup.config import load_config
from devsetup.config.loader import ConfigError
from devsetup.config.models import SetupConfig
from devsetup.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)

DEFAULT_COMMAND = "setup"

COMMAND_NAMES = frozenset({"setup", "install", "status"})

# Options accepted before the subcommand
GLOBAL_FLAGS = frozenset({"--version", "--debug", "--verbose", "-v", "--quiet", "-q"})


def _with_default_command(argv: List[str]) -> List[str]:
    """Insert the setup command when none is given.

    ``devsetup --strict .`` becomes ``devsetup setup --strict .``; global
    flags stay in front of the inserted command.
    """
    if "--version" in argv or any(arg in COMMAND_NAMES for arg in argv):
        return argv
    split = 0
    while split < len(argv) and argv[split] in GLOBAL_FLAGS:
        split += 1
    return [*argv[:split], DEFAULT_COMMAND, *argv[split:]]


def get_version() -> str:
    """Get devsetup version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("devsetup")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from devsetup import __version__
        return __version__


class CLIRunner:
    """Parses devsetup arguments and runs the selected subcommand."""

    def __init__(self) -> None:
        """Build the parser and one instance of every subcommand."""
        self.parser = build_parser()
        self._version = get_version()
        self.setup_cmd = SetupCommand(version=self._version)
        self.install_cmd = InstallCommand()
        self.status_cmd = StatusCommand(version=self._version)

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run devsetup with the given arguments.

        Args:
            argv: Arguments without the program name (defaults to sys.argv[1:]).

        Returns:
            Exit code from devsetup.cli.exit_codes.
        """
        argv_list = list(argv) if argv is not None else sys.argv[1:]

        # A bare --help is not an error
        if argv_list in (["--help"], ["-h"]):
            self.parser.print_help()
            return EXIT_SUCCESS

        try:
            args = self.parser.parse_args(_with_default_command(argv_list))
        except SystemExit as e:
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        # Before anything logs
        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
        )

        # --version short-circuits config loading
        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = self._get_command(args.command)
        try:
            config = self._load_config(args)
        except ConfigError as e:
            LOGGER.error(str(e))
            print(f"Error: {e}")
            return EXIT_INVALID_USAGE

        return command.execute(args, config)

    def _get_command(self, name: str) -> Command:
        commands: Dict[str, Command] = {
            self.setup_cmd.name: self.setup_cmd,
            self.install_cmd.name: self.install_cmd,
            self.status_cmd.name: self.status_cmd,
        }
        return commands[name]

    def _load_config(self, args: Namespace) -> SetupConfig:
        """Load configuration for the project the command targets.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        project_root = Path(getattr(args, "path", ".")).resolve()
        return load_config(
            project_root=project_root,
            cli_config_path=getattr(args, "config", None),
            cli_overrides=self._cli_overrides(args),
        )

    @staticmethod
    def _cli_overrides(args: Namespace) -> Dict[str, Any]:
        """Collect config overrides from command-line flags."""
        overrides: Dict[str, Any] = {
            "install_dir": getattr(args, "install_dir", None),
            "timeout": getattr(args, "timeout", None),
            "strict": getattr(args, "strict", None),
            "skip_tools": getattr(args, "skip_tools", None),
            "skip_extensions": getattr(args, "skip_extensions", None),
        }
        if getattr(args, "no_git", False):
            overrides["git"] = {"init": False}
        return overrides

"""Status command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path
from typing import IO, Optional

from devsetup.bootstrap.platform import get_platform_info
from devsetup.bootstrap.presence import find_tool, get_tool_version_line
from devsetup.bootstrap.privileges import needs_elevation
from devsetup.cli.commands import Command
from devsetup.cli.exit_codes import EXIT_FATAL, EXIT_SUCCESS
from devsetup.config.models import SetupConfig
from devsetup.core.errors import UnsupportedPlatformError


class StatusCommand(Command):
    """Shows platform, tool and starter file status."""

    def __init__(self, version: str, output: Optional[IO[str]] = None):
        """Initialize StatusCommand.

        Args:
            version: Current devsetup version string.
            output: Stream to print to (default: stdout).
        """
        self._version = version
        self._output = output

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace, config: SetupConfig) -> int:
        """Execute the status command.

        Returns:
            Exit code (0, or 2 on an unsupported platform).
        """
        output = self._output or sys.stdout
        project_root = Path(args.path).resolve()

        print(f"devsetup version: {self._version}", file=output)
        try:
            platform_info = get_platform_info()
        except UnsupportedPlatformError as e:
            print(f"Platform: {e}", file=output)
            return EXIT_FATAL

        install_dir = config.install_dir
        access = "requires sudo" if needs_elevation(install_dir) else "writable"
        print(f"Platform: {platform_info.tag}", file=output)
        print(f"Install directory: {install_dir} ({access})", file=output)
        if config.sources:
            print(f"Config: {', '.join(config.sources)}", file=output)
        print(file=output)

        print("Tools:", file=output)
        for tool in config.tools:
            location = find_tool(tool.name)
            if location:
                version_line = get_tool_version_line(tool.name, tool.version_args) or "version unknown"
                status = f"installed at {location} ({version_line})"
            else:
                strategies = ", ".join(s.name for s in tool.strategies) or "none"
                status = f"not installed (pinned: {tool.version}; strategies: {strategies})"
            print(f"  {tool.name}: {status}", file=output)
        print(file=output)

        print("Starter files:", file=output)
        for starter in config.starter_files:
            exists = (project_root / starter.path).exists()
            print(f"  {starter.path}: {'present' if exists else 'missing'}", file=output)

        return EXIT_SUCCESS

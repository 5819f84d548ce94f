"""Argument parser construction for devsetup CLI.

This module builds the argument parser with subcommands:
- devsetup setup   - Install tools and bootstrap the project (default)
- devsetup install - Install developer tools only
- devsetup status  - Show platform, tool and starter file status
"""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show devsetup version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )


def _add_config_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a devsetup config file (default: .devsetup.yml in the project).",
    )


def _add_install_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--install-dir",
        help="Directory on PATH for downloaded binaries (default: /usr/local/bin).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Timeout in seconds for each external command or download (default: 300).",
    )


def _build_setup_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'setup' subcommand parser."""
    setup_parser = subparsers.add_parser(
        "setup",
        help="Install developer tools and bootstrap the project (default).",
        description=(
            "Detect the platform, install missing tools, create starter files, "
            "initialize git and install editor extensions. Safe to re-run."
        ),
    )
    _add_config_options(setup_parser)
    _add_install_options(setup_parser)
    setup_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit non-zero when any step fails, not only on fatal errors.",
    )
    setup_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not prompt for confirmation.",
    )
    setup_parser.add_argument(
        "--skip-tools",
        action="store_true",
        default=None,
        help="Do not install developer tools.",
    )
    setup_parser.add_argument(
        "--skip-extensions",
        action="store_true",
        default=None,
        help="Do not install VS Code extensions.",
    )
    setup_parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not initialize a git repository.",
    )
    setup_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory to set up (default: current directory).",
    )


def _build_install_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'install' subcommand parser."""
    install_parser = subparsers.add_parser(
        "install",
        help="Install developer tools only.",
        description="Install the configured tools, or only the named ones.",
    )
    _add_config_options(install_parser)
    _add_install_options(install_parser)
    install_parser.add_argument(
        "--path",
        default=".",
        help="Project directory used to find .devsetup.yml (default: current directory).",
    )
    install_parser.add_argument(
        "tools",
        nargs="*",
        help="Tools to install (default: all configured tools).",
    )


def _build_status_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'status' subcommand parser."""
    status_parser = subparsers.add_parser(
        "status",
        help="Show platform, tool and starter file status.",
        description="Report what a setup run would find, without changing anything.",
    )
    _add_config_options(status_parser)
    status_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory to inspect (default: current directory).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="devsetup",
        description="devsetup - idempotent developer environment bootstrap.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  devsetup                 Run the full setup in the current directory\n"
            "  devsetup install shfmt   Install shfmt only\n"
            "  devsetup status          Show what is installed\n"
        ),
    )
    _add_global_options(parser)

    subparsers = parser.add_subparsers(dest="command", title="commands")
    _build_setup_parser(subparsers)
    _build_install_parser(subparsers)
    _build_status_parser(subparsers)

    return parser

"""Logging setup for devsetup.

Diagnostics go to stderr through the standard logging module; the per-step
summary is printed to stdout by the reporters, so the two never interleave
in redirected output.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Set the root log level from the CLI flags.

    ``--quiet`` wins over ``--debug``, which wins over ``--verbose``.
    Without flags only warnings (failed install strategies, config typos)
    are shown.
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # force: the CLI may be run several times in one process
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the logger for a devsetup module."""
    return logging.getLogger(name or "devsetup")

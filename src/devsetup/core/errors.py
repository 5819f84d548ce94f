"""Error taxonomy for devsetup.

Fatal errors stop the whole run. Strategy errors are recoverable: the
installer falls through to the next strategy.
"""

from __future__ import annotations

from typing import Optional


class SetupError(Exception):
    """Base class for all devsetup errors."""


class FatalSetupError(SetupError):
    """Error that terminates the run immediately.

    Attributes:
        remediation: Optional hint telling the user how to recover.
    """

    def __init__(self, message: str, remediation: Optional[str] = None) -> None:
        super().__init__(message)
        self.remediation = remediation


class UnsupportedPlatformError(FatalSetupError):
    """Host OS or CPU architecture is not recognized."""


class InsecureDownloadError(FatalSetupError):
    """A download location does not use HTTPS."""


class StrategyError(SetupError):
    """A single install strategy failed."""


class StrategyUnavailableError(StrategyError):
    """The strategy cannot run on this host (e.g. its package manager is absent)."""


class DownloadError(StrategyError):
    """Downloading a release binary failed."""

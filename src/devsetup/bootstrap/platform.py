"""Host platform detection.

Maps ``uname -s`` / ``uname -m`` style values onto the tokens used in
release download URLs: ``darwin`` or ``linux``, and ``amd64`` or ``arm64``.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Optional

from devsetup.core.errors import UnsupportedPlatformError

SUPPORTED_OS = frozenset({"darwin", "linux"})

SUPPORTED_ARCH = frozenset({"amd64", "arm64"})

# Raw machine names (lowercased) -> release token
_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


def normalize_arch(machine: str) -> Optional[str]:
    """Return the release token for a machine name, or None if unknown."""
    return _ARCH_MAP.get(machine.lower())


def normalize_os(system: str) -> Optional[str]:
    """Return the release token for an OS name, or None if unsupported."""
    lowered = system.lower()
    return lowered if lowered in SUPPORTED_OS else None


def detect_os(system: Optional[str] = None) -> str:
    """Resolve the OS token.

    Args:
        system: Raw OS name; defaults to platform.system().

    Raises:
        UnsupportedPlatformError: If the OS is neither macOS nor Linux.
    """
    raw = system if system is not None else platform.system()
    token = normalize_os(raw)
    if token is None:
        raise UnsupportedPlatformError(
            f"Unsupported operating system: {raw}. "
            f"Supported: {', '.join(sorted(SUPPORTED_OS))}",
            remediation=f"install the tools for {raw} manually",
        )
    return token


def detect_arch(machine: Optional[str] = None) -> str:
    """Resolve the architecture token.

    Args:
        machine: Raw machine name; defaults to platform.machine().

    Raises:
        UnsupportedPlatformError: If the architecture is unknown.
    """
    raw = machine if machine is not None else platform.machine()
    token = normalize_arch(raw)
    if token is None:
        raise UnsupportedPlatformError(
            f"Unsupported architecture: {raw}. "
            f"Supported: {', '.join(sorted(SUPPORTED_ARCH))}",
            remediation=f"install the tools for architecture {raw} manually",
        )
    return token


@dataclass(frozen=True)
class PlatformInfo:
    """Normalized host platform.

    Attributes:
        os: ``darwin`` or ``linux``.
        arch: ``amd64`` or ``arm64``.
    """

    os: str
    arch: str

    @property
    def tag(self) -> str:
        """``<os>-<arch>``, e.g. "linux-amd64"."""
        return f"{self.os}-{self.arch}"


def get_platform_info(
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> PlatformInfo:
    """Detect the host platform.

    The architecture is checked first: unknown hardware has no fallback.

    Raises:
        UnsupportedPlatformError: If the platform is not supported.
    """
    arch = detect_arch(machine)
    return PlatformInfo(os=detect_os(system), arch=arch)

"""Tool installation: descriptors, strategies and the strategy-walking installer."""

from devsetup.install.catalog import BUILTIN_TOOLS, build_tool_spec, build_tool_specs
from devsetup.install.installer import InstallResult, ToolInstaller
from devsetup.install.models import InstallContext, InstallStatus, ToolSpec
from devsetup.install.strategies import (
    BinaryDownloadStrategy,
    GoInstallStrategy,
    InstallStrategy,
    PackageManagerStrategy,
)

__all__ = [
    "BUILTIN_TOOLS",
    "build_tool_spec",
    "build_tool_specs",
    "InstallResult",
    "ToolInstaller",
    "InstallContext",
    "InstallStatus",
    "ToolSpec",
    "BinaryDownloadStrategy",
    "GoInstallStrategy",
    "InstallStrategy",
    "PackageManagerStrategy",
]

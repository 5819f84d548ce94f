"""
Bootstrap module for devsetup host introspection.

This module handles:
- Platform detection (OS + architecture)
- Tool presence checks on the search path
- Privilege detection for install directories
- Secure release downloads
- Pinned tool versions
"""

from devsetup.bootstrap.platform import get_platform_info, PlatformInfo
from devsetup.bootstrap.presence import is_tool_present, get_tool_version_line
from devsetup.bootstrap.versions import get_tool_version

__all__ = [
    "get_platform_info",
    "PlatformInfo",
    "is_tool_present",
    "get_tool_version_line",
    "get_tool_version",
]

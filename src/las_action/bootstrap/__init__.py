"""
Bootstrap module for the scanner binary.

This module handles:
- Platform detection (OS + architecture)
- Install locations inside the runner tool cache
- Download, extraction and keyed caching of the scanner release
"""

from las_action.bootstrap.installer import Installer, InstallResult
from las_action.bootstrap.platform import PlatformInfo, get_platform_info

__all__ = [
    "Installer",
    "InstallResult",
    "PlatformInfo",
    "get_platform_info",
]

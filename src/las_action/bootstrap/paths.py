"""Path management for the scanner install inside the runner tool cache.

Directory structure:
    $RUNNER_TOOL_CACHE/
        eliblock/
            less-advanced-security/
                v{version}/
                    {os}-{arch}/
                        less-advanced-security
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from las_action.bootstrap.platform import PlatformInfo

SCANNER_OWNER = "eliblock"
SCANNER_REPO = "less-advanced-security"
SCANNER_BINARY = SCANNER_REPO


def version_tag(version: str) -> str:
    """Return the release tag for a scanner version ("0.2.0" -> "v0.2.0")."""
    return f"v{version}"


@dataclass(frozen=True)
class ToolCachePaths:
    """Resolves scanner install locations under a tool-cache root."""

    root: Path

    _OWNER_DIR: ClassVar[str] = SCANNER_OWNER
    _REPO_DIR: ClassVar[str] = SCANNER_REPO

    @property
    def tool_dir(self) -> Path:
        """Directory holding every installed scanner version."""
        return self.root / self._OWNER_DIR / self._REPO_DIR

    def install_dir(self, tag: str, platform_info: PlatformInfo) -> Path:
        """Get the install directory for a tag and platform.

        Args:
            tag: Version tag, e.g. "v0.2.0".
            platform_info: Target platform.

        Returns:
            Path to the version and platform specific directory.
        """
        return self.tool_dir / tag / platform_info.bundle_name

    def executable(self, tag: str, platform_info: PlatformInfo) -> Path:
        """Path of the scanner executable for a tag and platform."""
        return self.install_dir(tag, platform_info) / SCANNER_BINARY

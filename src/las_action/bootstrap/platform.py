"""Platform detection for the scanner download.

Detects OS and architecture and maps them onto the names used by the
scanner's release assets.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Iterable, Optional

from las_action.core.errors import UnsupportedPlatformError

# Supported operating systems (lowercase)
SUPPORTED_OS = ("darwin", "linux")

# Supported host architectures, before normalization
SUPPORTED_ARCH = ("arm", "arm64", "x64")

# Darwin releases ship a single universal binary
DARWIN_ARCH = "all"

# Raw platform.machine() values to host architecture names
_MACHINE_MAP = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "arm": "arm",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
}

# Host architecture names to release asset names
_ARCH_ALIASES = {
    "arm": "arm64",
    "x64": "amd64",
}


def _quoted(values: Iterable[str]) -> str:
    return ", ".join(f"'{v}'" for v in values)


def host_arch(machine: str) -> Optional[str]:
    """Map a raw machine string to a host architecture name.

    Args:
        machine: Raw architecture string from platform.machine()

    Returns:
        Host architecture name or None if unknown.
    """
    return _MACHINE_MAP.get(machine.lower())


def normalize_arch(os_name: str, arch: str) -> str:
    """Normalize a supported host architecture to its release asset name."""
    if os_name == "darwin":
        return DARWIN_ARCH
    return _ARCH_ALIASES.get(arch, arch)


def detect_os() -> str:
    """Detect the current operating system.

    Returns:
        Lowercase OS name (darwin or linux).

    Raises:
        UnsupportedPlatformError: If the OS is not supported.
    """
    system = platform.system().lower()
    if system not in SUPPORTED_OS:
        raise UnsupportedPlatformError(
            f"Platform '{system}' is not supported. "
            f"Supported platforms are {_quoted(SUPPORTED_OS)}"
        )
    return system


def detect_arch() -> str:
    """Detect the current CPU architecture.

    Returns:
        Host architecture name (arm, arm64 or x64).

    Raises:
        UnsupportedPlatformError: If the architecture is not supported.
    """
    machine = platform.machine()
    arch = host_arch(machine)
    if arch not in SUPPORTED_ARCH:
        raise UnsupportedPlatformError(
            f"Architecture '{machine}' is not supported. "
            f"Supported architectures are {_quoted(SUPPORTED_ARCH)}"
        )
    return arch


@dataclass(frozen=True)
class PlatformInfo:
    """Target platform of a scanner build.

    Attributes:
        os: Operating system (darwin, linux).
        arch: Normalized architecture (amd64, arm64, all).
    """

    os: str
    arch: str

    @property
    def bundle_name(self) -> str:
        """Directory name for this platform.

        Example: "linux-amd64", "darwin-all"
        """
        return f"{self.os}-{self.arch}"

    @property
    def asset_suffix(self) -> str:
        """Release asset suffix for this platform.

        Example: "linux_amd64", "darwin_all"
        """
        return f"{self.os}_{self.arch}"


def get_platform_info() -> PlatformInfo:
    """Detect and return current platform information.

    Raises:
        UnsupportedPlatformError: If the platform is not supported.
    """
    os_name = detect_os()
    return PlatformInfo(os=os_name, arch=normalize_arch(os_name, detect_arch()))

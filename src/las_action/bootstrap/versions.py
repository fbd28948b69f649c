"""Scanner version management.

Reads the pinned scanner version from pyproject.toml [tool.las_action.tools],
falling back to the version this release was tested with.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

# Import tomllib (Python 3.11+) or tomli (Python 3.10)
try:
    if sys.version_info >= (3, 11):
        import tomllib

        _tomllib: Any = tomllib
    else:
        import tomli

        _tomllib = tomli
except ImportError:
    _tomllib = None  # Will use fallback versions


# Hardcoded fallback versions (kept in sync with pyproject.toml)
_FALLBACK_VERSIONS: Dict[str, str] = {
    "less-advanced-security": "0.2.0",
}


@lru_cache(maxsize=1)
def _load_pyproject_versions() -> Dict[str, str]:
    """Load tool versions from the project's pyproject.toml.

    Returns:
        Dictionary mapping tool names to versions.
    """
    if _tomllib is None:
        return _FALLBACK_VERSIONS.copy()

    # Structure: src/las_action/bootstrap/versions.py -> ../../../pyproject.toml
    pyproject_path = Path(__file__).parent.parent.parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        # Installed package - pyproject.toml not available
        return _FALLBACK_VERSIONS.copy()

    try:
        with open(pyproject_path, "rb") as f:
            data = _tomllib.load(f)
    except (OSError, ValueError):
        return _FALLBACK_VERSIONS.copy()

    versions = dict(_FALLBACK_VERSIONS)
    tools_section = data.get("tool", {}).get("las_action", {}).get("tools", {})
    versions.update({str(k): str(v) for k, v in tools_section.items()})
    return versions


def get_tool_version(tool_name: str, default: Optional[str] = None) -> str:
    """Get the pinned version for a tool.

    Raises:
        KeyError: If tool not found and no default provided.
    """
    versions = _load_pyproject_versions()

    if tool_name in versions:
        return versions[tool_name]

    if default is not None:
        return default

    raise KeyError(f"Unknown tool: {tool_name}. Available: {list(versions.keys())}")


def get_scanner_version() -> str:
    """Return the pinned less-advanced-security version."""
    return get_tool_version("less-advanced-security")

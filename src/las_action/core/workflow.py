"""Side effects on the Actions runner: search path and job failure."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)


def add_path(directory: Union[str, Path], github_path: Optional[str] = None) -> bool:
    """Add a directory to the execution search path.

    Prepends to PATH for this process and its children, and appends to the
    GITHUB_PATH file (when given) so later steps see it too. A directory
    that is already on PATH is left alone.

    Args:
        directory: Directory to add.
        github_path: Path to the runner's GITHUB_PATH file, if any.

    Returns:
        True if the directory was added, False if it was already present.
    """
    directory = str(directory)
    current = os.environ.get("PATH", "")
    if directory in current.split(os.pathsep):
        LOGGER.debug(f"{directory} already on PATH")
        return False

    if github_path:
        with open(github_path, "a", encoding="utf-8") as f:
            f.write(f"{directory}{os.linesep}")

    os.environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory
    LOGGER.debug(f"Added {directory} to PATH")
    return True


def set_failed(message: str) -> None:
    """Report the job as failed with a user-visible message.

    The caller is responsible for exiting with a non-zero status.
    """
    LOGGER.error(message)

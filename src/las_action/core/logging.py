from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

# Workflow command prefixes understood by the Actions runner
_COMMAND_PREFIXES = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


def _escape_data(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Render log records as GitHub Actions workflow commands.

    INFO records are printed as-is; the runner shows them in the job log.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _COMMAND_PREFIXES.get(record.levelno)
        if prefix is None:
            return message
        return f"{prefix}{_escape_data(message)}"


def in_github_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when running inside a GitHub Actions job."""
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS", "").lower() == "true"


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Configure root logging level based on CLI flags.

    Precedence:
    - quiet → ERROR
    - debug (or RUNNER_DEBUG=1) → DEBUG
    - verbose or running in Actions → INFO
    - default → WARNING
    """

    env = os.environ if environ is None else environ
    actions = in_github_actions(env)

    if quiet:
        level = logging.ERROR
    elif debug or env.get("RUNNER_DEBUG") == "1":
        level = logging.DEBUG
    elif verbose or actions:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = logging.StreamHandler()
    if actions:
        handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    logging.basicConfig(level=level, handlers=[handler], force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name if name is not None else __name__)

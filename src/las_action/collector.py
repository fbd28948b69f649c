"""Collecting the scanner arguments from the action environment.

The collector validates every input up front and produces an immutable
ScanRequest, which serializes to the scanner's command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from las_action.config.environment import ActionEnvironment
from las_action.config.event import get_head_sha, get_pr_number, load_event
from las_action.core.errors import InputError
from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)

KEY_FILE_NAME = "app_key.pem"


@dataclass(frozen=True)
class ScanRequest:
    """Arguments for a single scanner invocation."""

    app_id: str
    install_id: str
    key_path: str
    sha: str
    repo: str
    pr: int
    sarif_path: str
    filter_annotations: bool
    check_name_override: str = ""

    def to_cli_args(self) -> List[str]:
        """Serialize to the scanner's ``--key=value`` argument list."""
        args = [
            f"--app_id={self.app_id}",
            f"--install_id={self.install_id}",
            f"--key_path={self.key_path}",
            f"--repo={self.repo}",
            f"--pr={self.pr}",
            f"--sha={self.sha}",
            f"--sarif_path={self.sarif_path}",
            f"--filter_annotations={str(self.filter_annotations).lower()}",
        ]
        if self.check_name_override:
            args.append(f"--check_name={self.check_name_override}")
        return args


def key_file_path(env: ActionEnvironment) -> Path:
    """Return the fixed location of the app key file for this runner."""
    return env.runner_temp / KEY_FILE_NAME


def write_key_file(env: ActionEnvironment) -> str:
    """Write the app signing key to the runner temp directory.

    Returns:
        Path of the written key file.
    """
    key = env.get_input("github_app_key", required=True)
    key_path = key_file_path(env)
    key_path.parent.mkdir(parents=True, exist_ok=True)

    LOGGER.debug(f"Writing key to '{key_path}'.")
    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(key)
    return str(key_path)


def clean_key(env: ActionEnvironment) -> None:
    """Delete the app key file if it exists."""
    key_file_path(env).unlink(missing_ok=True)
    LOGGER.debug("Removed app key file")


def get_sarif_path(env: ActionEnvironment) -> str:
    """Return the sarif_path input after checking the file exists."""
    sarif_path = env.get_input("sarif_path", required=True)
    if not os.path.isfile(sarif_path):
        raise InputError(f'"sarif_path" {sarif_path} has no file')

    LOGGER.debug(f"Found sarif path {sarif_path} and confirmed some file is there.")
    return sarif_path


def collect_scan_request(env: ActionEnvironment) -> ScanRequest:
    """Build a ScanRequest from the action environment.

    The app key is written to disk as a side effect; callers must run
    clean_key() afterwards whether or not this succeeds.

    Raises:
        ConfigError: If any input, environment variable or the event
            payload is missing or invalid.
    """
    app_id = env.get_input("github_app_id", required=True)
    install_id = env.get_input("github_app_install_id", required=True)
    key_path = write_key_file(env)

    event = load_event(env)
    sha = get_head_sha(event)
    pr = get_pr_number(event)

    repo = env.require_repository()
    LOGGER.debug(f"Found repo {repo}")

    return ScanRequest(
        app_id=app_id,
        install_id=install_id,
        key_path=key_path,
        sha=sha,
        repo=repo,
        pr=pr,
        sarif_path=get_sarif_path(env),
        filter_annotations=env.get_boolean_input("filter_annotations"),
        check_name_override=env.get_input("check_name"),
    )

"""Reading pull request metadata from the triggering event payload."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from las_action.config.environment import ActionEnvironment
from las_action.core.errors import EventPayloadError
from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)


def load_event(env: ActionEnvironment) -> Dict[str, Any]:
    """Load the JSON event payload referenced by GITHUB_EVENT_PATH.

    Raises:
        EventPayloadError: If the path is unset, the file is missing or
            unreadable, or the file is not valid JSON.
    """
    if not env.event_path or not os.path.exists(env.event_path):
        raise EventPayloadError("GITHUB_EVENT_PATH is null or the file does not exist")

    try:
        with open(env.event_path, encoding="utf-8") as f:
            event = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EventPayloadError(
            f"github event at '{env.event_path}' is not valid JSON: {e}"
        ) from e
    except OSError as e:
        raise EventPayloadError(f"github event at '{env.event_path}' could not be read: {e}") from e

    if event is not None and not isinstance(event, dict):
        raise EventPayloadError(f"github event at '{env.event_path}' is not an object")
    return event or {}


def _pull_request(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    pull_request = event.get("pull_request") if event else None
    return pull_request if isinstance(pull_request, dict) else None


def get_pr_number(event: Dict[str, Any]) -> int:
    """Return the pull request number from an event payload."""
    pull_request = _pull_request(event)
    if not pull_request:
        raise EventPayloadError("github event was empty or had no pull request")

    number = pull_request.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        raise EventPayloadError(
            f"github event pull request number is not an integer: {number!r}"
        )

    LOGGER.debug(f"Found PR number {number}")
    return number


def get_head_sha(event: Dict[str, Any]) -> str:
    """Return the head commit SHA of the pull request in an event payload."""
    pull_request = _pull_request(event)
    if not pull_request or not isinstance(pull_request.get("head"), dict):
        raise EventPayloadError(
            "github event was empty or had no pull request or the pull request had no head"
        )

    sha = pull_request["head"].get("sha")
    if not sha:
        raise EventPayloadError("github event pull request head had no sha")

    LOGGER.debug(f"Found SHA {sha}")
    return sha

"""Snapshot of the runner environment.

Components receive an ActionEnvironment instead of reading os.environ,
so tests can build one from a plain dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from las_action.core.errors import EnvironmentConfigError, InputError
from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)

INPUT_PREFIX = "INPUT_"
DEFAULT_RUNNER_TEMP = "/tmp"

# YAML 1.2 core schema booleans, as accepted by the Actions toolkit
TRUE_VALUES = frozenset({"true", "True", "TRUE"})
FALSE_VALUES = frozenset({"false", "False", "FALSE"})


def input_env_name(name: str) -> str:
    """Return the environment variable the runner uses for an input."""
    return INPUT_PREFIX + name.replace(" ", "_").upper()


@dataclass(frozen=True)
class ActionEnvironment:
    """Resolved configuration for a single action run.

    Attributes:
        inputs: Action inputs keyed by their lowercase name.
        runner_temp: Runner-scoped temporary directory.
        tool_cache: Runner tool-cache root ("" when unset).
        repository: owner/repo identifier of the triggering repository.
        event_path: Path to the JSON event payload.
        github_path: File the runner reads extra PATH entries from.
        cache_dir: Root of the keyed scanner cache; None disables it.
    """

    inputs: Mapping[str, str] = field(default_factory=dict)
    runner_temp: Path = Path(DEFAULT_RUNNER_TEMP)
    tool_cache: str = ""
    repository: Optional[str] = None
    event_path: Optional[str] = None
    github_path: Optional[str] = None
    cache_dir: Optional[Path] = None

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str],
        file_inputs: Optional[Mapping[str, str]] = None,
    ) -> "ActionEnvironment":
        """Build an environment snapshot.

        Args:
            environ: Process environment (usually os.environ).
            file_inputs: Inputs loaded from a local inputs file. Values set
                through INPUT_* variables take precedence.
        """
        inputs: Dict[str, str] = {}
        for name, value in (file_inputs or {}).items():
            inputs[name.lower()] = value
        for key, value in environ.items():
            if key.startswith(INPUT_PREFIX):
                inputs[key[len(INPUT_PREFIX):].lower()] = value

        tool_cache = environ.get("RUNNER_TOOL_CACHE", "")
        if not tool_cache:
            LOGGER.warning("Expected RUNNER_TOOL_CACHE to be defined")

        cache_dir = environ.get("LAS_CACHE_DIR")
        return cls(
            inputs=inputs,
            runner_temp=Path(environ.get("RUNNER_TEMP") or DEFAULT_RUNNER_TEMP),
            tool_cache=tool_cache,
            repository=environ.get("GITHUB_REPOSITORY") or None,
            event_path=environ.get("GITHUB_EVENT_PATH") or None,
            github_path=environ.get("GITHUB_PATH") or None,
            cache_dir=Path(cache_dir) if cache_dir else None,
        )

    def get_input(self, name: str, required: bool = False) -> str:
        """Return the trimmed value of an input.

        Raises:
            InputError: If the input is required and missing or empty.
        """
        value = self.inputs.get(name.replace(" ", "_").lower(), "").strip()
        if required and not value:
            raise InputError(f"'{name}' not found in action input")
        return value

    def get_boolean_input(self, name: str) -> bool:
        """Return a required boolean input.

        Raises:
            InputError: If the input is missing or not a recognised boolean.
        """
        value = self.get_input(name, required=True)
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise InputError(
            f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}. "
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
        )

    def require_repository(self) -> str:
        """Return the owner/repo identifier.

        Raises:
            EnvironmentConfigError: If GITHUB_REPOSITORY is not set.
        """
        if not self.repository:
            raise EnvironmentConfigError("GITHUB_REPOSITORY is not set")
        return self.repository

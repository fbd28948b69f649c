"""Loading action inputs from a YAML file.

Lets the action run outside of GitHub Actions: the file supplies the
values the runner would otherwise pass as INPUT_* variables.
Supports environment variable expansion (${VAR} or ${VAR:-default}).
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from las_action.core.errors import ConfigError
from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def expand_env_vars(value: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Expand ${VAR} and ${VAR:-default} references in a string.

    Unknown variables without a default expand to an empty string.
    """
    env = os.environ if environ is None else environ

    def replace(match: re.Match) -> str:
        var_name = match.group(1)
        default = match.group(2)
        value = env.get(var_name)
        if value is None or (value == "" and default is not None):
            return default if default is not None else ""
        return value

    return ENV_VAR_PATTERN.sub(replace, value)


def _stringify(value: Any) -> str:
    # YAML booleans must round-trip to the literal form the runner would pass
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_inputs_file(
    path: Path, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Load action inputs from a YAML mapping.

    Args:
        path: Path to the inputs file.
        environ: Environment used for ${VAR} expansion (defaults to os.environ).

    Returns:
        Mapping of input name to string value.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or is not
            a flat mapping.
    """
    if not path.exists():
        raise ConfigError(f"Inputs file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Inputs file {path} must contain a mapping")

    inputs: Dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            raise ConfigError(f"Input '{key}' in {path} must be a scalar value")
        inputs[str(key)] = expand_env_vars(_stringify(value), environ)

    LOGGER.debug(f"Loaded {len(inputs)} input(s) from {path}")
    return inputs

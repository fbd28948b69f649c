"""Action configuration: environment snapshot, inputs file and event payload."""

from las_action.config.environment import ActionEnvironment
from las_action.config.loader import load_inputs_file

__all__ = [
    "ActionEnvironment",
    "load_inputs_file",
]

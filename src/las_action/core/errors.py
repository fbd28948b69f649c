"""Exceptions raised by the action.

Everything fatal derives from ActionError so the runner can turn it into
a single failure message.
"""

from __future__ import annotations


class ActionError(Exception):
    """Base class for fatal action errors."""

    pass


class ConfigError(ActionError):
    """Configuration loading or parsing error."""

    pass


class InputError(ConfigError):
    """A required action input is missing or has an invalid value."""

    pass


class EnvironmentConfigError(ConfigError):
    """A required runner environment variable is not set."""

    pass


class EventPayloadError(ConfigError):
    """The triggering event payload is missing or malformed."""

    pass


class InstallError(ActionError):
    """Error downloading, extracting or locating the scanner binary."""

    pass


class UnsupportedPlatformError(InstallError):
    """The host OS or architecture has no published scanner build."""

    pass


class ScannerError(ActionError):
    """The scanner exited with a non-zero status."""

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode

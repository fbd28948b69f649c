"""Running one scan end to end.

Argument collection and scanner installation are independent, so they
run side by side; the scanner is then invoked with the collected
arguments. The app key file is removed on every exit path.
"""

from __future__ import annotations

import subprocess
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from las_action.bootstrap.installer import Installer, InstallResult
from las_action.collector import ScanRequest, clean_key, collect_scan_request
from las_action.config.environment import ActionEnvironment
from las_action.core.errors import ConfigError, InstallError, ScannerError
from las_action.core.logging import get_logger
from las_action.core.workflow import set_failed

LOGGER = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_SCANNER_ERROR = 2
EXIT_INVALID_USAGE = 3
EXIT_BOOTSTRAP_FAILURE = 4

CommandRunner = Callable[[Sequence[str]], int]


def run_command(cmd: Sequence[str]) -> int:
    """Run a command with output going straight to the job log."""
    LOGGER.info(f"[command]{' '.join(cmd)}")
    return subprocess.run(list(cmd), check=False).returncode


def prepare(
    env: ActionEnvironment,
    version: str,
    installer: Optional[Installer] = None,
) -> Tuple[ScanRequest, InstallResult]:
    """Collect the scan request and install the scanner concurrently.

    The first failure observed is raised. The sibling is not interrupted;
    leaving the executor waits for it to finish.
    """
    installer = installer or Installer(env)
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="las-action") as executor:
        request_future = executor.submit(collect_scan_request, env)
        install_future = executor.submit(installer.install, version)

        done, _ = wait([request_future, install_future], return_when=FIRST_EXCEPTION)
        for future in done:
            error = future.exception()
            if error is not None:
                raise error

        return request_future.result(), install_future.result()


def invoke_scanner(
    executable: Path, args: List[str], command_runner: CommandRunner = run_command
) -> None:
    """Print the scanner version, then run the scan.

    Raises:
        ScannerError: If the scan exits non-zero.
    """
    version_code = command_runner([str(executable), "--version"])
    if version_code != 0:
        LOGGER.warning(f"'{executable} --version' exited with code {version_code}")

    returncode = command_runner([str(executable), *args])
    if returncode != 0:
        raise ScannerError(
            f"The process '{executable}' failed with exit code {returncode}", returncode
        )


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, ConfigError):
        return EXIT_INVALID_USAGE
    if isinstance(error, InstallError):
        return EXIT_BOOTSTRAP_FAILURE
    return EXIT_SCANNER_ERROR


def run(
    env: ActionEnvironment,
    version: str,
    installer: Optional[Installer] = None,
    command_runner: CommandRunner = run_command,
) -> int:
    """Run the action and return the process exit code."""
    try:
        request, install = prepare(env, version, installer)
        LOGGER.debug(f"Using {install.executable} ({install.source})")
        invoke_scanner(install.executable, request.to_cli_args(), command_runner)
    except Exception as e:
        set_failed(str(e))
        return _exit_code_for(e)
    finally:
        clean_key(env)

    return EXIT_SUCCESS

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from las_action.bootstrap.versions import get_scanner_version
from las_action.config.environment import ActionEnvironment
from las_action.config.loader import load_inputs_file
from las_action.core.errors import ConfigError
from las_action.core.logging import configure_logging, get_logger
from las_action.core.workflow import set_failed
from las_action.runner import EXIT_INVALID_USAGE, EXIT_SUCCESS, run

LOGGER = get_logger(__name__)


def _get_version() -> str:
    try:
        return version("less-advanced-security-action")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from las_action import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="las-action",
        description=(
            "Install less-advanced-security and submit a SARIF report "
            "as pull request annotations."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show las-action version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--inputs",
        type=Path,
        metavar="FILE",
        help="YAML file with action inputs, for running outside GitHub Actions.",
    )
    parser.add_argument(
        "--scanner-version",
        metavar="VERSION",
        help="less-advanced-security version to install (default: pinned version).",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.
    """

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    # Configure logging as early as possible.
    configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

    if args.version:
        print(_get_version())
        return EXIT_SUCCESS

    try:
        file_inputs = load_inputs_file(args.inputs) if args.inputs else None
    except ConfigError as e:
        set_failed(str(e))
        return EXIT_INVALID_USAGE

    env = ActionEnvironment.from_environ(os.environ, file_inputs=file_inputs)
    scanner_version = args.scanner_version or get_scanner_version()
    LOGGER.debug(f"Running less-advanced-security {scanner_version}")
    return run(env, scanner_version)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())

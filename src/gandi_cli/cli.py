"""Command-line entrypoint for the Gandi CLI."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

import httpx

from . import NAME, __version__
from .api import COMMANDS
from .command import Command, build_parser_tree, dispatch
from .config import CONFIG_ENV_PREFIX, CONFIG_PATH_ENV, load_config
from .errors import GandiError
from .logging import LOG_FORMATS, LOG_LEVELS, configure_logging, get_logger


LOG_LEVEL_ENV = f"{CONFIG_ENV_PREFIX}LOG_LEVEL"

logger = get_logger("gandi.cli")


def _build_parser(
    commands: Sequence[Command], environ: Mapping[str, str]
) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=NAME,
        description=(
            "Command line client for the Gandi v5 API. Results are printed for "
            "humans unless --json, --yaml or --toml is given. Examples: "
            "`gandi list domains`, `gandi show domain example.com --json`."
        ),
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    config_default = environ.get(CONFIG_PATH_ENV)
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path(config_default).expanduser() if config_default else None,
        help=(
            f"Path to a TOML config file (env: {CONFIG_PATH_ENV}). Without it, "
            "the API key and endpoint come from GANDI_APIKEY and GANDI_API_ENDPOINT."
        ),
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        help=f"Log verbosity on stderr (env: {LOG_LEVEL_ENV}). Defaults to WARNING.",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default="plain",
        help="Log record format.",
    )

    subparsers = parser.add_subparsers(dest="group", metavar="GROUP")
    build_parser_tree(subparsers, commands)
    return parser


def _build_client(transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    # http:// endpoints answer with a redirect to https
    return httpx.Client(transport=transport, follow_redirects=True)


def run(
    argv: Optional[Iterable[str]] = None,
    *,
    client: Optional[httpx.Client] = None,
    environ: Optional[Mapping[str, str]] = None,
    commands: Sequence[Command] = COMMANDS,
) -> Optional[Command]:
    """Parse ``argv`` and run the selected command.

    Returns the command that ran, or ``None`` when the arguments select
    no command. Any failure is raised as a :class:`GandiError`.
    """

    env = os.environ if environ is None else environ
    parser = _build_parser(commands, env)
    args = parser.parse_args(args=argv)
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} (env: {LOG_LEVEL_ENV})")
    configure_logging(args.log_level, args.log_format)
    logger.debug("Starting gandi cli")

    config = load_config(args.config, env)

    if client is not None:
        return dispatch(commands, config, args, client)
    with _build_client() as http_client:
        return dispatch(commands, config, args, http_client)


def main(argv: Optional[Iterable[str]] = None) -> None:
    try:
        command = run(argv)
    except GandiError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.stderr.write("Aborted by user.\n")
        sys.exit(130)
    if command is not None:
        logger.debug("Command gandi ended successfully", extra={"command": " ".join(command.path)})


if __name__ == "__main__":
    main()

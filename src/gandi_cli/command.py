"""Command contract shared by every API binding.

A command is located in the parsed CLI tree by its ``group`` and ``name``
(``gandi <group> <name>``). It only has to say how to build its request
and how to print its result for humans; sending the request, checking
the status, decoding the body and rendering JSON/YAML/TOML is done here,
identically for every command.
"""

from __future__ import annotations

import abc
import argparse
import functools
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import Configuration
from .display import Format, add_format_options, render, write
from .errors import HttpStatusError, SerializationError, TransportError
from .logging import get_logger, redact_mapping


COMMAND_PATH_DEST = "_command_path"

logger = get_logger("gandi.command")


class Command(abc.ABC):
    """Base class for a ``gandi <group> <name>`` subcommand."""

    group: ClassVar[str]
    name: ClassVar[str]
    help: ClassVar[str] = ""
    item_type: ClassVar[Any]

    @property
    def path(self) -> Tuple[str, ...]:
        """Parser path; a space in ``name`` nests one more level."""

        return (self.group, *self.name.split())

    @functools.cached_property
    def adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(self.item_type)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Declare the command's own flags and positionals."""

    @abc.abstractmethod
    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        """Build the http request that will be executed."""

    @abc.abstractmethod
    def display_human_result(self, item: Any) -> None:
        """Display to stdout when no machine format is requested."""

    def display_human_headers(self, headers: httpx.Headers) -> None:
        """Override to display extra information from the response headers."""

    def subcommand(self, subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
        """Register the leaf parser of this command."""

        parser = subparsers.add_parser(self.path[-1], help=self.help, description=self.help)
        self.add_arguments(parser)
        add_format_options(parser)
        parser.set_defaults(**{COMMAND_PATH_DEST: self.path})
        return parser

    def can_handle(self, args: argparse.Namespace) -> Optional[argparse.Namespace]:
        """Return the leaf arguments when they select this command."""

        if tuple(getattr(args, COMMAND_PATH_DEST, None) or ()) == self.path:
            return args
        return None

    def handle(
        self, config: Configuration, args: argparse.Namespace, client: httpx.Client
    ) -> bool:
        """Process the command when the arguments select it; no-op otherwise."""

        params = self.can_handle(args)
        if params is None:
            return False
        self.process(config, params, client)
        return True

    def process(
        self, config: Configuration, args: argparse.Namespace, client: httpx.Client
    ) -> None:
        """Send the request and display the result."""

        fmt = Format.from_args(args)
        request = self.build_request(config, args)
        logger.debug(
            "Sending request",
            extra={
                "method": request.method,
                "url": str(request.url),
                "headers": redact_mapping(dict(request.headers)),
            },
        )
        try:
            response = client.send(request)
        except httpx.RequestError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        logger.debug(
            "Received response",
            extra={"status": response.status_code, "url": str(request.url)},
        )

        if not response.is_success:
            raise HttpStatusError(_status_text(response), _body_text(response))

        try:
            item = self.adapter.validate_json(response.content)
        except ValidationError as exc:
            raise SerializationError("json", str(exc)) from exc

        self.display_result(item, fmt)
        if fmt is Format.HUMAN:
            self.display_human_headers(response.headers)

    def display_result(self, item: Any, fmt: Format) -> None:
        """Display the decoded item in the requested format."""

        if fmt is Format.HUMAN:
            self.display_human_result(item)
            return
        write(render(self.to_data(item), fmt))

    def to_data(self, item: Any) -> Any:
        """Dump ``item`` to plain JSON-compatible data using API field names."""

        return self.adapter.dump_python(item, mode="json", by_alias=True)


def _status_text(response: httpx.Response) -> str:
    if response.reason_phrase:
        return f"{response.status_code} {response.reason_phrase}"
    return str(response.status_code)


def _body_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (httpx.HTTPError, UnicodeDecodeError, LookupError):
        return ""


def build_parser_tree(
    subparsers: argparse._SubParsersAction, commands: Iterable[Command]
) -> None:
    """Create the nested ``group [sub-group] command`` parsers for ``commands``."""

    nodes: Dict[Tuple[str, ...], argparse._SubParsersAction] = {(): subparsers}
    for command in commands:
        path = command.path
        for depth in range(1, len(path)):
            prefix = path[:depth]
            if prefix in nodes:
                continue
            parent = nodes[path[: depth - 1]]
            group_parser = parent.add_parser(prefix[-1], help=_GROUP_HELP.get(prefix, ""))
            nodes[prefix] = group_parser.add_subparsers(
                dest=f"_{'_'.join(prefix)}_command", metavar="COMMAND", required=True
            )
        command.subcommand(nodes[path[:-1]])


_GROUP_HELP = {
    ("check",): "Check availability of resources",
    ("show",): "Display one resource",
    ("list",): "List resources",
    ("list", "dns"): "List LiveDNS resources of a domain",
}


def dispatch(
    commands: Iterable[Command],
    config: Configuration,
    args: argparse.Namespace,
    client: httpx.Client,
) -> Optional[Command]:
    """Process the first command selected by ``args``.

    At most one command runs; returns it, or ``None`` when nothing matched.
    """

    for command in commands:
        if command.handle(config, args, client):
            return command
    return None

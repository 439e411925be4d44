"""Request parameter adapters.

Each adapter declares its own CLI flags, is built from the parsed
namespace and decorates an outgoing :class:`httpx.Request` with query
parameters. Adapters add disjoint keys, so they compose in any order.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

import httpx


def _with_param(request: httpx.Request, key: str, value: str) -> httpx.Request:
    return httpx.Request(
        request.method,
        request.url.copy_add_param(key, value),
        headers=request.headers,
    )


@dataclass(frozen=True)
class Pagination:
    """Page selection for list endpoints."""

    page: str = "1"
    per_page: str = "100"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-p", "--page", default="1", help="Page Number")
        parser.add_argument(
            "--per-page",
            dest="per_page",
            default="100",
            help="Number of element per page",
        )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Pagination":
        return cls(
            page=str(getattr(args, "page", None) or "1"),
            per_page=str(getattr(args, "per_page", None) or "100"),
        )

    def apply(self, request: httpx.Request) -> httpx.Request:
        request = _with_param(request, "page", self.page)
        return _with_param(request, "per_page", self.per_page)


@dataclass(frozen=True)
class SharingSpace:
    """Restricts a query to the resources of one organization."""

    sharing_id: str = ""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-s",
            "--sharing-id",
            dest="sharing_id",
            default="",
            help="The Organization ID",
        )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SharingSpace":
        return cls(sharing_id=getattr(args, "sharing_id", None) or "")

    def apply(self, request: httpx.Request) -> httpx.Request:
        if not self.sharing_id:
            return request
        return _with_param(request, "sharing_id", self.sharing_id)


@dataclass(frozen=True)
class Fqdn:
    """Domain name given as the first positional argument."""

    fqdn: str

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("fqdn", metavar="FQDN", help="domain name to query")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Fqdn":
        return cls(fqdn=args.fqdn)

    def route(self, template: str) -> str:
        """Fill the ``{fqdn}`` placeholder of a route template."""

        return template.format(fqdn=self.fqdn)

    def apply(self, request: httpx.Request) -> httpx.Request:
        return _with_param(request, "name", self.fqdn)

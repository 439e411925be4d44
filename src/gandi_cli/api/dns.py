"""LiveDNS endpoints.

See https://api.gandi.net/docs/livedns/
"""

from __future__ import annotations

import argparse
from datetime import datetime
from email.utils import format_datetime
from typing import List

import httpx

from ..command import Command
from ..config import Configuration
from ..display import print_blank, print_info, print_line
from ..params import Fqdn
from .common import ApiModel


RECORDS_ROUTE = "/v5/livedns/domains/{fqdn}/records"
SNAPSHOTS_ROUTE = "/v5/livedns/domains/{fqdn}/snapshots"


class Record(ApiModel):
    """A DNS resource record set."""

    rrset_href: str
    rrset_ttl: int
    rrset_name: str
    # A, AAAA, ALIAS, CAA, CDS, CNAME, DNAME, DS, KEY, LOC, MX, NS, ...
    rrset_type: str
    rrset_values: List[str]


class Snapshot(ApiModel):
    id: str
    created_at: datetime
    name: str


class DnsRecordsListCommand(Command):
    group = "list"
    name = "dns records"
    help = "List the DNS records of a domain"
    item_type = List[Record]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Fqdn.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request(Fqdn.from_args(args).route(RECORDS_ROUTE))

    def display_human_result(self, item: List[Record]) -> None:
        """One zone-file line per value."""

        for record in item:
            for value in record.rrset_values:
                print_line(f"{record.rrset_name} {record.rrset_ttl} IN {record.rrset_type} {value}")


class DnsSnapshotsListCommand(Command):
    group = "list"
    name = "dns snapshots"
    help = "List the LiveDNS snapshots of a domain"
    item_type = List[Snapshot]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Fqdn.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request(Fqdn.from_args(args).route(SNAPSHOTS_ROUTE))

    def display_human_result(self, item: List[Snapshot]) -> None:
        for snapshot in item:
            print_blank()
            print_info("Id", snapshot.id)
            print_info("Name", snapshot.name)
            print_info("Created at", format_datetime(snapshot.created_at))

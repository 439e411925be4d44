"""Bindings of the Gandi v5 API routes.

``COMMANDS`` is the ordered dispatch table: the first entry selected by
the parsed arguments is the one that runs.
"""

from __future__ import annotations

from typing import Tuple

from ..command import Command
from .dns import DnsRecordsListCommand, DnsSnapshotsListCommand
from .domain import (
    DomainCheckCommand,
    DomainContactsShowCommand,
    DomainGlueRecordsShowCommand,
    DomainListCommand,
    DomainShowCommand,
)
from .organization import OrganizationListCommand, UserInfoShowCommand


COMMANDS: Tuple[Command, ...] = (
    DomainCheckCommand(),
    DomainShowCommand(),
    DomainContactsShowCommand(),
    DomainGlueRecordsShowCommand(),
    UserInfoShowCommand(),
    DomainListCommand(),
    OrganizationListCommand(),
    DnsRecordsListCommand(),
    DnsSnapshotsListCommand(),
)

__all__ = ["COMMANDS"]

"""Domain endpoints: availability check, listing and details.

See https://api.gandi.net/docs/domains/
"""

from __future__ import annotations

import argparse
from datetime import datetime
from typing import Dict, List, Optional

import httpx
from pydantic import Field

from ..command import Command
from ..config import Configuration
from ..display import print_blank, print_flag, print_info, print_list, print_tags
from ..params import Fqdn, Pagination, SharingSpace
from .common import ApiModel, Dates, SharingSpaceInfo


CHECK_ROUTE = "/v5/domain/check"
LIST_ROUTE = "/v5/domain/domains"
SHOW_ROUTE = "/v5/domain/domains/{fqdn}"
CONTACTS_ROUTE = "/v5/domain/domains/{fqdn}/contacts"
GLUE_RECORDS_ROUTE = "/v5/domain/domains/{fqdn}/hosts"

TOTAL_COUNT_HEADER = "Total-Count"


# ---------------------------------------------------------------------------
# check domain
# ---------------------------------------------------------------------------


class Tax(ApiModel):
    name: str
    type_: str = Field(alias="type")
    rate: float


class PriceOptions(ApiModel):
    # sunrise, landrush, golive; loosely documented upstream
    period: Optional[str] = None


class Period(ApiModel):
    name: str
    starts_at: datetime
    ends_at: datetime


class Price(ApiModel):
    min_duration: int
    max_duration: int
    duration_unit: str
    discount: Optional[bool] = None
    price_before_taxes: float
    price_after_taxes: float
    options: PriceOptions = Field(default_factory=PriceOptions)


class Product(ApiModel):
    process: Optional[str] = None
    status: str
    name: str
    prices: Optional[List[Price]] = None
    taxes: List[Tax] = Field(default_factory=list)
    period: Optional[List[Period]] = None


class DomainCheck(ApiModel):
    """Domain availability, as returned by the API."""

    currency: str
    grid: str
    products: Optional[List[Product]] = None


class DomainCheckCommand(Command):
    group = "check"
    name = "domain"
    help = "Check domain availability and prices"
    item_type = DomainCheck

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Fqdn.add_arguments(parser)
        SharingSpace.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        request = Fqdn.from_args(args).apply(config.build_request(CHECK_ROUTE))
        return SharingSpace.from_args(args).apply(request)

    def display_human_result(self, item: DomainCheck) -> None:
        for product in item.products or []:
            process = product.process or "???"
            if product.status != "available":
                print_info(f"{process} {product.name}", product.status)
                continue
            for price in product.prices or []:
                durations = (
                    f"{price.min_duration}{price.duration_unit}"
                    f"->{price.max_duration}{price.duration_unit}"
                )
                period = price.options.period or "golive"
                print_info(
                    f"{process} {product.name} {durations} {period}",
                    f"{price.price_after_taxes:.2f} {item.currency}",
                )


# ---------------------------------------------------------------------------
# list domains
# ---------------------------------------------------------------------------


class NameServer(ApiModel):
    # abc, livedns or other
    current: str
    hosts: Optional[List[str]] = None


class Domain(ApiModel):
    """Domain summary, as returned by the listing."""

    id: str
    orga_owner: str
    owner: str
    sharing_id: Optional[str] = None
    fqdn: str
    fqdn_unicode: str
    autorenew: bool
    tld: str
    tags: Optional[List[str]] = None
    dates: Dates
    nameserver: NameServer


class DomainListCommand(Command):
    group = "list"
    name = "domains"
    help = "List domains"
    item_type = List[Domain]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Pagination.add_arguments(parser)
        SharingSpace.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        request = Pagination.from_args(args).apply(config.build_request(LIST_ROUTE))
        return SharingSpace.from_args(args).apply(request)

    def display_human_result(self, item: List[Domain]) -> None:
        for domain in item:
            print_blank()
            print_info("fqdn", domain.fqdn_unicode)
            print_info("id", domain.id)
            print_info("organization", domain.orga_owner)
            if domain.owner != domain.orga_owner:
                print_info("owner", domain.owner)
            print_flag("autorenew", domain.autorenew)
            print_tags(domain.tags)

    def display_human_headers(self, headers: httpx.Headers) -> None:
        # Passed through as sent; no numeric check.
        total_count = headers.get(TOTAL_COUNT_HEADER, "MISSING")
        print_blank()
        print_info("Total Count of domains", total_count)


# ---------------------------------------------------------------------------
# show contacts
# ---------------------------------------------------------------------------


class Contact(ApiModel):
    """Contact information."""

    # Never set for the owner contact.
    same_as_owner: Optional[bool] = None
    # 0: person, 1: company, 2: association, 3: public body, 4: reseller
    type_: int = Field(alias="type")
    orgname: Optional[str] = None
    given: str
    family: str
    streetaddr: str
    zip: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: str
    email: str
    mail_obfuscated: Optional[bool] = None
    # pending, done, failed, deleted, none
    reachability: Optional[str] = None
    validation: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    mobile: Optional[str] = None
    data_obfuscated: Optional[bool] = None
    extra_parameters: Optional[Dict[str, str]] = None
    siren: Optional[str] = None
    brand_number: Optional[str] = None
    jo_announce_number: Optional[str] = None
    jo_announce_page: Optional[str] = None
    jo_declaration_date: Optional[str] = None
    jo_publication_date: Optional[str] = None
    sharing_id: Optional[str] = None


class Contacts(ApiModel):
    owner: Contact
    admin: Contact
    tech: Contact
    bill: Contact


def format_contact(contact: Contact, sharing_space: Optional[SharingSpaceInfo] = None) -> str:
    """Render a contact as ``"Given Family" <email>`` or ``"Orgname" <email>``."""

    if contact.type_ == 0:
        text = f'"{contact.given} {contact.family}" <{contact.email}>'
    else:
        text = f'"{contact.orgname or "NO ORGNAME SET"}" <{contact.email}>'
    if sharing_space is not None:
        text = f"{text} ({sharing_space.name})"
    return text


def print_contacts(contacts: Contacts, sharing_space: Optional[SharingSpaceInfo] = None) -> None:
    print_info("owner", format_contact(contacts.owner, sharing_space))
    for role in ("admin", "tech", "bill"):
        contact: Contact = getattr(contacts, role)
        if not contact.same_as_owner:
            print_info(role, format_contact(contact))


class DomainContactsShowCommand(Command):
    group = "show"
    name = "contacts"
    help = "Show the contacts of a domain"
    item_type = Contacts

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Fqdn.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request(Fqdn.from_args(args).route(CONTACTS_ROUTE))

    def display_human_result(self, item: Contacts) -> None:
        print_contacts(item)


# ---------------------------------------------------------------------------
# show domain
# ---------------------------------------------------------------------------


class Autorenew(ApiModel):
    href: str
    dates: Optional[List[str]] = None
    # unit is not documented
    duration: Optional[int] = None
    enabled: bool
    # sharing id paying the renewal
    org_id: Optional[str] = None


class DomainDetails(ApiModel):
    """Domain information, as returned by the API."""

    id: str
    fqdn: str
    fqdn_unicode: str
    tld: str
    can_tld_lock: Optional[bool] = None
    authinfo: Optional[str] = None
    nameservers: Optional[List[str]] = None
    services: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    sharing_space: SharingSpaceInfo
    autorenew: Autorenew
    dates: Dates
    contacts: Contacts


class DomainShowCommand(Command):
    group = "show"
    name = "domain"
    help = "Show domain information"
    item_type = DomainDetails

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Fqdn.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request(Fqdn.from_args(args).route(SHOW_ROUTE))

    def display_human_result(self, item: DomainDetails) -> None:
        print_info("id", item.id)
        print_info("fqdn", item.fqdn_unicode)
        print_flag("autorenew", item.autorenew.enabled)
        print_list("nameservers", item.nameservers)
        print_list("services", item.services)
        print_contacts(item.contacts, item.sharing_space)
        print_tags(item.tags)


# ---------------------------------------------------------------------------
# show glue-records
# ---------------------------------------------------------------------------


class GlueRecord(ApiModel):
    fqdn: str
    fqdn_unicode: str
    # host name, without the domain part
    name: str
    href: str
    ips: List[str]


class DomainGlueRecordsShowCommand(Command):
    group = "show"
    name = "glue-records"
    help = "Show the glue records of a domain"
    item_type = List[GlueRecord]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Fqdn.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request(Fqdn.from_args(args).route(GLUE_RECORDS_ROUTE))

    def display_human_result(self, item: List[GlueRecord]) -> None:
        for glue in item:
            print_blank()
            print_info("fqdn", glue.fqdn_unicode)
            print_info("name", glue.name)
            print_list("ips", glue.ips)

"""Organization endpoints.

See https://api.gandi.net/docs/organization/
"""

from __future__ import annotations

import argparse
from typing import List, Optional

import httpx
from pydantic import Field

from ..command import Command
from ..config import Configuration
from ..display import print_blank, print_flag, print_info, print_line
from ..params import Pagination, SharingSpace
from .common import ApiModel


ORGANIZATIONS_ROUTE = "/v5/organization/organizations"
USER_INFO_ROUTE = "/v5/organization/user-info"


class Organization(ApiModel):
    """Organization information, as returned by the API."""

    id: str
    name: str
    type_: str = Field(alias="type")
    corporate: Optional[bool] = None
    reseller: Optional[bool] = None
    email: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    # company, association or public body name
    orgname: Optional[str] = None
    siren: Optional[str] = None
    vat_number: Optional[str] = None


class OrganizationListCommand(Command):
    group = "list"
    name = "organizations"
    help = "List the organizations of the user"
    item_type = List[Organization]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        Pagination.add_arguments(parser)
        SharingSpace.add_arguments(parser)

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        request = Pagination.from_args(args).apply(config.build_request(ORGANIZATIONS_ROUTE))
        return SharingSpace.from_args(args).apply(request)

    def display_human_result(self, item: List[Organization]) -> None:
        for organization in item:
            print_blank()
            print_info("id", organization.id)
            print_info("type", organization.type_)
            print_info("name", organization.name)
            if organization.orgname:
                print_info("orgname", organization.orgname)
            elif organization.firstname and organization.lastname:
                print_info("orgname", f"{organization.firstname} {organization.lastname}")
            if organization.email:
                print_info("email", organization.email)
            if organization.reseller:
                print_flag("reseller", True)
            if organization.corporate:
                print_flag("corporate", True)


class UserInfo(ApiModel):
    """User information, as returned by the API."""

    # sharing id of the user
    id: str
    username: str
    email: str
    lang: str
    name: str
    city: Optional[str] = None
    country: Optional[str] = None
    fax: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    state: Optional[str] = None
    streetaddr: Optional[str] = None
    streetaddr2: Optional[str] = None
    zip: Optional[str] = None


class UserInfoShowCommand(Command):
    group = "show"
    name = "user-info"
    help = "Show information about the owner of the API key"
    item_type = UserInfo

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request(USER_INFO_ROUTE)

    def display_human_result(self, item: UserInfo) -> None:
        print_line("User Information")
        print_blank()
        print_info("id", item.id)
        print_info("username", item.username)
        print_info("email", item.email)
        print_info("lang", item.lang)

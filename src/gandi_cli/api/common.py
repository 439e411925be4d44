"""Models shared by several endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Base model for API payloads.

    Unknown fields are ignored; fields whose API name is a Python keyword
    are declared with a trailing underscore and an alias.
    """

    model_config = ConfigDict(populate_by_name=True)


class SharingSpaceInfo(ApiModel):
    """Organization owning a resource."""

    id: str
    name: str
    reseller: Optional[bool] = None


class Dates(ApiModel):
    """Domain's life cycle dates."""

    registry_created_at: datetime
    updated_at: datetime
    authinfo_expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    deletes_at: Optional[datetime] = None
    hold_begins_at: Optional[datetime] = None
    hold_ends_at: Optional[datetime] = None
    pending_delete_ends_at: Optional[datetime] = None
    registry_ends_at: Optional[datetime] = None
    renew_begins_at: Optional[datetime] = None
    restore_ends_at: Optional[datetime] = None

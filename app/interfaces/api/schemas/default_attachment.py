"""Schemas for default attachment endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DefaultAttachmentBase(BaseModel):
    name: str | None = None
    type: str | None = Field(default=None, max_length=255)
    created_by: str | None = Field(default=None, max_length=255)
    applicant_type: int | None = None
    is_required: bool | None = None
    active: bool | None = None


class DefaultAttachmentCreate(DefaultAttachmentBase):
    """Payload required to register a requirement.

    Omitted ``applicant_type``, ``is_required`` and ``active`` take the
    database defaults (0, true and true).
    """

    model_config = ConfigDict(extra="forbid")


class DefaultAttachmentUpdate(DefaultAttachmentBase):
    """Full replacement of the editable fields; omitted fields become null."""

    model_config = ConfigDict(extra="forbid")


class DefaultAttachmentRead(DefaultAttachmentBase):
    id: int
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class DefaultAttachmentPageRead(BaseModel):
    items: list[DefaultAttachmentRead]
    total_count: int

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "DefaultAttachmentCreate",
    "DefaultAttachmentPageRead",
    "DefaultAttachmentRead",
    "DefaultAttachmentUpdate",
]

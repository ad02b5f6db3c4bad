"""Domain entities describing default attachment requirements."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class DefaultAttachment:
    """A document every applicant of a given type is asked to attach.

    ``None`` means "unset": on insert the store applies its defaults to
    ``active`` (true), ``is_required`` (true) and ``applicant_type`` (0).
    ``id`` and ``created_at`` are always assigned by the store.
    """

    id: int | None = None
    active: bool | None = None
    created_at: datetime | None = None
    created_by: str | None = None
    name: str | None = None
    applicant_type: int | None = None
    type: str | None = None
    is_required: bool | None = None


@dataclass
class DefaultAttachmentPage:
    """One page of a search together with the total number of matches."""

    items: list[DefaultAttachment] = field(default_factory=list)
    total_count: int = 0


__all__ = ["DefaultAttachment", "DefaultAttachmentPage"]

"""Use case for registering a default attachment requirement."""

from sqlalchemy.orm import Session

from app.domain.entities import DefaultAttachment
from app.infrastructure.repositories import DefaultAttachmentRepository


def create_default_attachment(
    session: Session,
    *,
    name: str | None,
    type: str | None = None,
    created_by: str | None = None,
    applicant_type: int | None = None,
    is_required: bool | None = None,
    active: bool | None = None,
) -> DefaultAttachment:
    """Store a new requirement; ``None`` fields take the column defaults."""

    repository = DefaultAttachmentRepository(session)
    entity = DefaultAttachment(
        active=active,
        created_by=created_by,
        name=name,
        applicant_type=applicant_type,
        type=type,
        is_required=is_required,
    )
    return repository.add(entity)

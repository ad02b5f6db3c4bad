"""Use case for listing every default attachment requirement."""

from sqlalchemy.orm import Session

from app.domain.entities import DefaultAttachment
from app.infrastructure.repositories import DefaultAttachmentRepository


def list_default_attachments(session: Session) -> list[DefaultAttachment]:
    """Return all requirements, newest first."""

    repository = DefaultAttachmentRepository(session)
    return repository.list_all()

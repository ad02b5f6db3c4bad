"""Use case for retrieving a single default attachment requirement."""

from sqlalchemy.orm import Session

from app.domain.entities import DefaultAttachment
from app.infrastructure.repositories import DefaultAttachmentRepository


def get_default_attachment(session: Session, attachment_id: int) -> DefaultAttachment:
    """Return the requirement identified by ``attachment_id`` or raise an error."""

    repository = DefaultAttachmentRepository(session)
    attachment = repository.get(attachment_id)
    if attachment is None:
        raise ValueError("Adjunto predeterminado no encontrado")
    return attachment

"""Use case for deleting a default attachment requirement."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import DefaultAttachmentRepository


def delete_default_attachment(session: Session, attachment_id: int) -> None:
    """Remove a requirement or raise an error if it does not exist."""

    repository = DefaultAttachmentRepository(session)
    if not repository.delete(attachment_id):
        raise ValueError("Adjunto predeterminado no encontrado")

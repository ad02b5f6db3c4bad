"""Use case for updating a default attachment requirement."""

from sqlalchemy.orm import Session

from app.domain.entities import DefaultAttachment
from app.infrastructure.repositories import DefaultAttachmentRepository


def update_default_attachment(
    session: Session,
    attachment_id: int,
    *,
    name: str | None,
    type: str | None,
    created_by: str | None,
    applicant_type: int | None,
    is_required: bool | None,
    active: bool | None,
) -> DefaultAttachment:
    """Overwrite every editable field, including setting them to ``None``."""

    repository = DefaultAttachmentRepository(session)
    entity = DefaultAttachment(
        id=attachment_id,
        active=active,
        created_by=created_by,
        name=name,
        applicant_type=applicant_type,
        type=type,
        is_required=is_required,
    )
    if not repository.update(entity):
        raise ValueError("Adjunto predeterminado no encontrado")

    updated = repository.get(attachment_id)
    if updated is None:  # pragma: no cover - removed concurrently
        raise ValueError("Adjunto predeterminado no encontrado")
    return updated

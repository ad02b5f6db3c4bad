"""Use case for the paged, searchable and sortable requirement listing."""

from sqlalchemy.orm import Session

from app.domain.entities import DefaultAttachmentPage
from app.infrastructure.repositories import DefaultAttachmentRepository


def search_default_attachments(
    session: Session,
    *,
    page_index: int = 0,
    page_size: int = 10,
    search_field: str | None = None,
    search_query: str | None = None,
    sort_order: str | None = None,
) -> DefaultAttachmentPage:
    """Return one page of requirements matching ``search_query``.

    ``page_index`` is zero based. Unknown ``sort_order`` values fall back to
    newest first.
    """

    repository = DefaultAttachmentRepository(session)
    return repository.search(
        page_index=page_index,
        page_size=page_size,
        search_field=search_field,
        search_query=search_query,
        sort_order=sort_order,
    )

"""Routes for managing default attachment requirements."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.default_attachments import (
    create_default_attachment as create_default_attachment_uc,
    delete_default_attachment as delete_default_attachment_uc,
    get_default_attachment as get_default_attachment_uc,
    list_default_attachments as list_default_attachments_uc,
    search_default_attachments as search_default_attachments_uc,
    update_default_attachment as update_default_attachment_uc,
)
from app.interfaces.api.dependencies import get_tenant_db
from app.interfaces.api.schemas import (
    DefaultAttachmentCreate,
    DefaultAttachmentPageRead,
    DefaultAttachmentRead,
    DefaultAttachmentUpdate,
)

router = APIRouter(prefix="/default-attachments", tags=["default_attachments"])


@router.get("/", response_model=DefaultAttachmentPageRead)
def search_default_attachments(
    page_index: int = Query(0),
    page_size: int = Query(10),
    search_field: str | None = Query(None),
    search_query: str | None = Query(None),
    sort_order: str | None = Query(None),
    db: Session = Depends(get_tenant_db),
) -> DefaultAttachmentPageRead:
    """Return one page of requirements and the total number of matches."""

    page = search_default_attachments_uc(
        db,
        page_index=page_index,
        page_size=page_size,
        search_field=search_field,
        search_query=search_query,
        sort_order=sort_order,
    )
    return DefaultAttachmentPageRead.model_validate(page)


@router.get("/all", response_model=list[DefaultAttachmentRead])
def list_default_attachments(
    db: Session = Depends(get_tenant_db),
) -> list[DefaultAttachmentRead]:
    attachments = list_default_attachments_uc(db)
    return [DefaultAttachmentRead.model_validate(attachment) for attachment in attachments]


@router.get("/{attachment_id}", response_model=DefaultAttachmentRead)
def read_default_attachment(
    attachment_id: int, db: Session = Depends(get_tenant_db)
) -> DefaultAttachmentRead:
    try:
        attachment = get_default_attachment_uc(db, attachment_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return DefaultAttachmentRead.model_validate(attachment)


@router.post(
    "/", response_model=DefaultAttachmentRead, status_code=status.HTTP_201_CREATED
)
def create_default_attachment(
    payload: DefaultAttachmentCreate, db: Session = Depends(get_tenant_db)
) -> DefaultAttachmentRead:
    attachment = create_default_attachment_uc(
        db,
        name=payload.name,
        type=payload.type,
        created_by=payload.created_by,
        applicant_type=payload.applicant_type,
        is_required=payload.is_required,
        active=payload.active,
    )
    return DefaultAttachmentRead.model_validate(attachment)


@router.put("/{attachment_id}", response_model=DefaultAttachmentRead)
def update_default_attachment(
    attachment_id: int,
    payload: DefaultAttachmentUpdate,
    db: Session = Depends(get_tenant_db),
) -> DefaultAttachmentRead:
    try:
        attachment = update_default_attachment_uc(
            db,
            attachment_id,
            name=payload.name,
            type=payload.type,
            created_by=payload.created_by,
            applicant_type=payload.applicant_type,
            is_required=payload.is_required,
            active=payload.active,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return DefaultAttachmentRead.model_validate(attachment)


@router.delete("/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_default_attachment(
    attachment_id: int, db: Session = Depends(get_tenant_db)
) -> Response:
    try:
        delete_default_attachment_uc(db, attachment_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)

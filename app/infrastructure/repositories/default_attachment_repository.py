"""Persistence layer for default attachment requirements."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.domain.entities import DefaultAttachment, DefaultAttachmentPage
from app.infrastructure.default_attachment_queries import (
    build_insert_plan,
    build_search_criterion,
    normalize_paging,
    resolve_ordering,
)
from app.infrastructure.models import DefaultAttachmentModel
from app.utils import ensure_app_timezone


class DefaultAttachmentRepository:
    """Provide CRUD, search, sort and paging over ``DefaultAttachments``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, attachment: DefaultAttachment) -> DefaultAttachment:
        """Insert ``attachment`` and return it as stored.

        Unset ``active``, ``is_required`` and ``applicant_type`` are left out of
        the statement so the column defaults apply.
        """

        plan = build_insert_plan(attachment)
        result = self.session.execute(plan.statement())
        primary_key = result.inserted_primary_key
        if primary_key is None or primary_key[0] is None:
            self.session.rollback()
            raise RuntimeError("Failed to insert default attachment: no id was returned")
        self.session.commit()

        attachment_id = int(primary_key[0])
        stored = self.get(attachment_id)
        return stored if stored is not None else replace(attachment, id=attachment_id)

    def list_all(self) -> list[DefaultAttachment]:
        query = self.session.query(DefaultAttachmentModel).order_by(
            desc(DefaultAttachmentModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, attachment_id: int) -> DefaultAttachment | None:
        model = self.session.get(DefaultAttachmentModel, attachment_id)
        return self._to_entity(model) if model else None

    def update(self, attachment: DefaultAttachment) -> bool:
        """Overwrite every editable field of the row with ``attachment.id``.

        Returns ``False`` when no such row exists. ``id`` and ``created_at``
        are never modified.
        """

        if attachment.id is None:
            return False
        model = self.session.get(DefaultAttachmentModel, attachment.id)
        if model is None:
            return False

        model.active = attachment.active
        model.name = attachment.name
        model.type = attachment.type
        model.is_required = attachment.is_required
        model.created_by = attachment.created_by
        model.applicant_type = attachment.applicant_type
        self.session.add(model)
        self.session.commit()
        return True

    def delete(self, attachment_id: int) -> bool:
        """Delete a row by id.

        Returns ``True`` when a record was removed and ``False`` when the
        requested row was not found.
        """

        model = self.session.get(DefaultAttachmentModel, attachment_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    def search(
        self,
        *,
        page_index: int = 0,
        page_size: int = 10,
        search_field: str | None = None,
        search_query: str | None = None,
        sort_order: str | None = None,
    ) -> DefaultAttachmentPage:
        """Return one page of matching rows and the total number of matches.

        ``search_field`` is accepted for callers that already send it; every
        searchable column is always considered.
        """

        page_index, page_size = normalize_paging(page_index, page_size)

        query = self.session.query(DefaultAttachmentModel)
        criterion = build_search_criterion(search_query)
        if criterion is not None:
            query = query.filter(criterion)

        total_count = query.count()
        models: Sequence[DefaultAttachmentModel] = (
            query.order_by(*resolve_ordering(sort_order))
            .offset(page_index * page_size)
            .limit(page_size)
            .all()
        )
        return DefaultAttachmentPage(
            items=[self._to_entity(model) for model in models],
            total_count=total_count,
        )

    @staticmethod
    def _to_entity(model: DefaultAttachmentModel) -> DefaultAttachment:
        return DefaultAttachment(
            id=model.id,
            active=model.active,
            created_at=ensure_app_timezone(model.created_at),
            created_by=model.created_by,
            name=model.name,
            applicant_type=model.applicant_type,
            type=model.type,
            is_required=model.is_required,
        )


__all__ = ["DefaultAttachmentRepository"]

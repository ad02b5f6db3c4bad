"""SQL building blocks for default attachment searches and inserts.

Search terms only ever reach the database as bound parameters and sort keys
are looked up in a closed whitelist, so no caller-supplied text is ever
rendered into a statement.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, false, func, insert, literal_column, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.dml import Insert

from app.domain.entities import DefaultAttachment
from app.infrastructure.models import DefaultAttachmentModel

DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_KEY = "IdDesc"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INTEGER_LITERAL = re.compile(r"^\s*[+-]?\d+\s*$")
_EMPTY_TEXT = literal_column("''")
_ZERO = literal_column("0")


def normalize_paging(page_index: int, page_size: int) -> tuple[int, int]:
    """Clamp a negative page index to 0 and a non-positive page size to 10."""

    return max(page_index, 0), page_size if page_size > 0 else DEFAULT_PAGE_SIZE


def parse_bool_literal(value: str) -> bool | None:
    """Return the boolean spelled by ``value`` (``true``/``false``) or ``None``."""

    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def parse_int_literal(value: str) -> int | None:
    """Return ``value`` as a 32-bit integer or ``None`` when it is not one."""

    if not _INTEGER_LITERAL.match(value):
        return None
    number = int(value)
    if number < _INT32_MIN or number > _INT32_MAX:
        return None
    return number


def build_search_criterion(search_query: str | None) -> ColumnElement[bool] | None:
    """Return the filter for ``search_query`` or ``None`` to match every row.

    Text columns are matched by substring. A query that reads as a boolean also
    matches ``IsRequired``/``Active`` and one that reads as an integer also
    matches ``ApplicantType``. All alternatives are OR-combined.
    """

    if search_query is None or not search_query.strip():
        return None

    model = DefaultAttachmentModel
    alternatives: list[ColumnElement[bool]] = [
        and_(column.is_not(None), column.contains(search_query, autoescape=True))
        for column in (model.name, model.created_by, model.type)
    ]

    flag = parse_bool_literal(search_query)
    if flag is not None:
        alternatives.append(model.is_required == flag)
        alternatives.append(model.active == flag)

    number = parse_int_literal(search_query)
    if number is not None:
        alternatives.append(model.applicant_type == number)

    return or_(*alternatives)


@dataclass(frozen=True)
class SortTerm:
    """One ``ORDER BY`` entry; ``null_as`` replaces NULLs before comparing."""

    attribute: str
    descending: bool = False
    null_as: ColumnElement[Any] | None = None

    def expression(self) -> ColumnElement[Any]:
        column = getattr(DefaultAttachmentModel, self.attribute)
        if self.null_as is not None:
            column = func.coalesce(column, self.null_as)
        return column.desc() if self.descending else column.asc()


_ID_DESC = SortTerm("id", descending=True)


def _ascending_and_descending(*specs: tuple[str, ColumnElement[Any] | None]):
    ascending = tuple(SortTerm(name, False, null_as) for name, null_as in specs)
    descending = tuple(SortTerm(name, True, null_as) for name, null_as in specs)
    return ascending + (_ID_DESC,), descending + (_ID_DESC,)


_NAME, _NAME_DESC = _ascending_and_descending(("name", _EMPTY_TEXT))
_TYPE, _TYPE_DESC = _ascending_and_descending(
    ("type", _EMPTY_TEXT), ("is_required", false())
)
_IS_REQUIRED, _IS_REQUIRED_DESC = _ascending_and_descending(
    ("is_required", false()), ("type", _EMPTY_TEXT)
)
_ACTIVE, _ACTIVE_DESC = _ascending_and_descending(("active", false()))
_APPLICANT_TYPE, _APPLICANT_TYPE_DESC = _ascending_and_descending(
    ("applicant_type", _ZERO)
)
_CREATED_AT, _CREATED_AT_DESC = _ascending_and_descending(("created_at", None))

SORT_ORDERS: Mapping[str, tuple[SortTerm, ...]] = {
    "Id": (SortTerm("id"),),
    "IdDesc": (_ID_DESC,),
    "Name": _NAME,
    "NameDesc": _NAME_DESC,
    "Type": _TYPE,
    "TypeDesc": _TYPE_DESC,
    "IsRequired": _IS_REQUIRED,
    "IsRequiredDesc": _IS_REQUIRED_DESC,
    "Active": _ACTIVE,
    "ActiveDesc": _ACTIVE_DESC,
    "ApplicantType": _APPLICANT_TYPE,
    "ApplicantTypeDesc": _APPLICANT_TYPE_DESC,
    "CreatedAt": _CREATED_AT,
    "CreatedAtDesc": _CREATED_AT_DESC,
}


def resolve_sort_terms(sort_key: str | None) -> tuple[SortTerm, ...]:
    """Map ``sort_key`` to its ordering; unknown or blank keys sort by newest id."""

    key = (sort_key or "").strip()
    return SORT_ORDERS.get(key, SORT_ORDERS[DEFAULT_SORT_KEY])


def resolve_ordering(sort_key: str | None) -> list[ColumnElement[Any]]:
    return [term.expression() for term in resolve_sort_terms(sort_key)]


# Column name -> entity attribute.
_ALWAYS_SENT = (("Name", "name"), ("CreatedBy", "created_by"), ("Type", "type"))
_SENT_WHEN_SET = (
    ("Active", "active"),
    ("IsRequired", "is_required"),
    ("ApplicantType", "applicant_type"),
)


@dataclass(frozen=True)
class InsertPlan:
    """Columns and values of one ``INSERT INTO DefaultAttachments``.

    Columns left out of the plan receive their server default. ``CreatedAt``
    is never part of a plan.
    """

    values: Mapping[str, Any]

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self.values)

    def statement(self) -> Insert:
        return insert(DefaultAttachmentModel.__table__).values(**self.values)


def build_insert_plan(attachment: DefaultAttachment) -> InsertPlan:
    """Return the insert plan for ``attachment``.

    ``Name``, ``CreatedBy`` and ``Type`` are always sent (NULL when unset);
    ``Active``, ``IsRequired`` and ``ApplicantType`` only when they are set.
    """

    values: dict[str, Any] = {
        column: getattr(attachment, attribute) for column, attribute in _ALWAYS_SENT
    }
    for column, attribute in _SENT_WHEN_SET:
        value = getattr(attachment, attribute)
        if value is not None:
            values[column] = value
    return InsertPlan(values=values)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT_KEY",
    "InsertPlan",
    "SORT_ORDERS",
    "SortTerm",
    "build_insert_plan",
    "build_search_criterion",
    "normalize_paging",
    "parse_bool_literal",
    "parse_int_literal",
    "resolve_ordering",
    "resolve_sort_terms",
]

"""SQL compilation hooks for the default attachments schema.

SQL Server gets named default constraints (``DF_<Table>_<Column>``) so that
tables created by the API match tables created by earlier deployments, and
the insertion timestamp keeps its offset (``SYSDATETIMEOFFSET()``). Four-byte
integers use the ``INT`` spelling. Other dialects fall back to SQLAlchemy's regular column rendering.

Usage: imported for side-effects by the ORM models.
"""

from __future__ import annotations

from sqlalchemy import DateTime, Integer
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.schema import CreateColumn
from sqlalchemy.sql.expression import FunctionElement


class current_offset_timestamp(FunctionElement):
    """Current timestamp including the server's UTC offset."""

    type = DateTime(timezone=True)
    name = "current_offset_timestamp"
    inherit_cache = True


@compiles(current_offset_timestamp)
def _compile_offset_timestamp(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(current_offset_timestamp, "mssql")
def _compile_offset_timestamp_mssql(element, compiler, **kw):
    return "SYSDATETIMEOFFSET()"


@compiles(current_offset_timestamp, "postgresql")
def _compile_offset_timestamp_postgresql(element, compiler, **kw):
    return "now()"


class Int32(Integer):
    """Four-byte integer, spelled ``INT`` on SQL Server."""


@compiles(Int32, "mssql")
def _compile_int32_mssql(type_, compiler, **kw):
    return "INT"


def default_constraint_name(table_name: str, column_name: str) -> str:
    return f"DF_{table_name}_{column_name}"


@compiles(CreateColumn, "mssql")
def _compile_named_default_mssql(element, compiler, **kw):
    column = element.element
    if column.server_default is None or column.primary_key or column.table is None:
        return compiler.visit_create_column(element, **kw)

    preparer = compiler.preparer
    type_clause = compiler.dialect.type_compiler_instance.process(
        column.type, type_expression=column
    )
    nullability = "NULL" if column.nullable else "NOT NULL"
    constraint = preparer.quote(default_constraint_name(column.table.name, column.name))
    default = compiler.get_column_default_string(column)
    return (
        f"{preparer.format_column(column)} {type_clause} {nullability} "
        f"CONSTRAINT {constraint} DEFAULT {default}"
    )


__all__ = ["Int32", "current_offset_timestamp", "default_constraint_name"]

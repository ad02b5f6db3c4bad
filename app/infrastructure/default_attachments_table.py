"""Create, evolve and seed the ``DefaultAttachments`` table in tenant databases.

Each database moves from an unknown state to a ready one: a missing table is
created, an existing table gets any column it lacks, and an empty table
optionally receives the default rows. Running the routine again on a ready
database only performs existence checks and a row count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from sqlalchemy import (
    DDL,
    Column,
    MetaData,
    Table,
    UnicodeText,
    func,
    insert,
    inspect,
    select,
)
from sqlalchemy.engine import Connection, Dialect
from sqlalchemy.schema import CreateColumn

from app.config import ConfigurationError, get_settings
from app.domain.entities import TenantProvisioningResult
from app.infrastructure.database import (
    build_engine,
    default_schema,
    describe_connection,
    resolve_connection_string,
)
from app.infrastructure.models import DefaultAttachmentModel

logger = logging.getLogger(__name__)

TABLE_NAME = DefaultAttachmentModel.__tablename__
EXPECTED_COLUMNS: tuple[str, ...] = (
    "Active",
    "CreatedAt",
    "CreatedBy",
    "Name",
    "ApplicantType",
    "Type",
    "IsRequired",
)

# ApplicantType: 0 = any applicant, 1 = business, 2 = individual.
SEED_ROWS: tuple[Mapping[str, object], ...] = (
    {
        "Active": True,
        "CreatedBy": "System",
        "Name": "사업자등록증 사본",
        "ApplicantType": 1,
        "Type": "Document",
        "IsRequired": True,
    },
    {
        "Active": True,
        "CreatedBy": "System",
        "Name": "신분증 사본",
        "ApplicantType": 2,
        "Type": "Document",
        "IsRequired": True,
    },
    {
        "Active": True,
        "CreatedBy": "System",
        "Name": "기타 참고자료(선택)",
        "ApplicantType": 0,
        "Type": "Etc",
        "IsRequired": False,
    },
)

_attachments_table = DefaultAttachmentModel.__table__

# Owned by the tenant registry; never created from here.
_registry_metadata = MetaData()
tenants_table = Table(
    "Tenants",
    _registry_metadata,
    Column("ConnectionString", UnicodeText()),
)


def list_tenant_connection_strings(connection: Connection) -> list[str]:
    """Return the non-blank connection strings registered in ``Tenants``."""

    rows = connection.execute(select(tenants_table.c.ConnectionString)).scalars()
    return [value.strip() for value in rows if value and value.strip()]


def is_registered_tenant(connection: Connection, connection_string: str) -> bool:
    return connection_string.strip() in list_tenant_connection_strings(connection)


def ensure_table(connection: Connection) -> tuple[bool, tuple[str, ...]]:
    """Create the table or add the columns it is missing.

    Returns whether the table was created and the names of the added columns.
    """

    schema = default_schema(connection.dialect)
    inspector = inspect(connection)
    if not inspector.has_table(TABLE_NAME, schema=schema):
        _attachments_table.create(bind=connection, checkfirst=False)
        logger.info("%s table created.", TABLE_NAME)
        return True, ()

    existing = {
        column["name"].lower()
        for column in inspector.get_columns(TABLE_NAME, schema=schema)
    }
    added: list[str] = []
    for column_name in EXPECTED_COLUMNS:
        if column_name.lower() in existing:
            continue
        connection.execute(
            DDL(add_column_ddl(connection.dialect, _attachments_table.c[column_name]))
        )
        added.append(column_name)

    if added:
        logger.info("%s columns added: %s", TABLE_NAME, ", ".join(added))
    return False, tuple(added)


def add_column_ddl(dialect: Dialect, column: Column) -> str:
    """Return the ``ALTER TABLE ... ADD`` statement for ``column`` on ``dialect``."""

    preparer = dialect.identifier_preparer
    table_name = preparer.quote(column.table.name)
    schema = default_schema(dialect)
    if schema is not None:
        table_name = f"{preparer.quote_schema(schema)}.{table_name}"
    column_spec = CreateColumn(column).compile(dialect=dialect)
    return f"ALTER TABLE {table_name} ADD {column_spec}"


def seed_if_empty(connection: Connection) -> int:
    """Insert the default rows when the table has none; return how many were inserted."""

    row_count = connection.execute(
        select(func.count()).select_from(_attachments_table)
    ).scalar_one()
    if row_count:
        return 0

    connection.execute(insert(_attachments_table), [dict(row) for row in SEED_ROWS])
    logger.info("%s seed inserted: %d", TABLE_NAME, len(SEED_ROWS))
    return len(SEED_ROWS)


class DefaultAttachmentsTableBuilder:
    """Provision the table in the master database or in every tenant database.

    Provisioning is best effort: a failing database is logged and reported in
    the returned results while the remaining databases are still processed.
    """

    def __init__(self, master_connection_string: str, *, enable_seeding: bool = True) -> None:
        self.master_connection_string = master_connection_string
        self.enable_seeding = enable_seeding

    def provision_database(self, connection_string: str) -> TenantProvisioningResult:
        """Provision one database, raising on any failure."""

        engine = build_engine(connection_string)
        try:
            with engine.begin() as connection:
                created, added = ensure_table(connection)
                seeded = seed_if_empty(connection) if self.enable_seeding else 0
        finally:
            engine.dispose()

        return TenantProvisioningResult(
            database=describe_connection(connection_string),
            succeeded=True,
            table_created=created,
            added_columns=added,
            seeded_rows=seeded,
        )

    def provision_all(self, connection_strings: Iterable[str]) -> list[TenantProvisioningResult]:
        results: list[TenantProvisioningResult] = []
        for connection_string in connection_strings:
            results.append(self._provision_safely(connection_string, kind="tenant"))
        return results

    def provision_master(self) -> TenantProvisioningResult:
        return self._provision_safely(self.master_connection_string, kind="master")

    def provision_tenants(self) -> list[TenantProvisioningResult]:
        """Provision every database listed in the master ``Tenants`` table."""

        try:
            connection_strings = self.get_tenant_connection_strings()
        except Exception:
            logger.exception(
                "Could not read tenant connection strings from %s.",
                describe_connection(self.master_connection_string),
            )
            return []
        return self.provision_all(connection_strings)

    def get_tenant_connection_strings(self) -> list[str]:
        engine = build_engine(self.master_connection_string)
        try:
            with engine.connect() as connection:
                return list_tenant_connection_strings(connection)
        finally:
            engine.dispose()

    def _provision_safely(self, connection_string: str, *, kind: str) -> TenantProvisioningResult:
        label = describe_connection(connection_string)
        try:
            result = self.provision_database(connection_string)
        except Exception as exc:
            logger.exception("Error processing %s database %s.", kind, label)
            return TenantProvisioningResult(database=label, succeeded=False, error=str(exc))

        logger.info("%s table processed for %s database %s.", TABLE_NAME, kind, label)
        return result


def run_provisioning(
    *, for_master: bool, enable_seeding: bool | None = None
) -> list[TenantProvisioningResult]:
    """Provision the configured master database or all of its tenants.

    Configuration problems are logged instead of raised so that application
    start-up is never blocked by provisioning.
    """

    settings = get_settings()
    try:
        master_connection_string = resolve_connection_string()
    except ConfigurationError:
        logger.exception("Error while processing %s table.", TABLE_NAME)
        return []

    builder = DefaultAttachmentsTableBuilder(
        master_connection_string,
        enable_seeding=settings.enable_seeding if enable_seeding is None else enable_seeding,
    )
    if for_master:
        return [builder.provision_master()]
    return builder.provision_tenants()


__all__ = [
    "DefaultAttachmentsTableBuilder",
    "EXPECTED_COLUMNS",
    "SEED_ROWS",
    "TABLE_NAME",
    "add_column_ddl",
    "ensure_table",
    "is_registered_tenant",
    "list_tenant_connection_strings",
    "run_provisioning",
    "seed_if_empty",
    "tenants_table",
]

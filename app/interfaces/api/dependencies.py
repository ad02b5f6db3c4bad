"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Header, HTTPException, status
from sqlalchemy.orm import Session

from app.infrastructure.database import session_scope
from app.infrastructure.default_attachments_table import is_registered_tenant

TENANT_CONNECTION_HEADER = "X-Tenant-Connection"


def get_tenant_db(
    tenant_connection: str | None = Header(default=None, alias=TENANT_CONNECTION_HEADER),
) -> Generator[Session, None, None]:
    """Yield a session on the tenant database named by the request.

    Requests without the header work on the master database. A tenant
    connection string must be registered in the master ``Tenants`` table.
    """

    if tenant_connection is None or not tenant_connection.strip():
        with session_scope() as db:
            yield db
        return

    connection_string = tenant_connection.strip()
    with session_scope() as master:
        registered = is_registered_tenant(master.connection(), connection_string)
    if not registered:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant no registrado",
        )

    with session_scope(connection_string) as db:
        yield db

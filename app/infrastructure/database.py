"""Database configuration and session management.

Every tenant owns its own database, so engines are built per connection
string. The connection string is either a SQLAlchemy URL or a raw SQL Server
connection string as stored in the ``Tenants`` registry.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import logging
import re
import threading
import urllib.parse

from sqlalchemy import create_engine
from sqlalchemy.engine import Dialect, Engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import ConfigurationError, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)

_ODBC_DRIVER_PATTERN = re.compile(r"(?i)driver\s*=\s*(\{[^}]+\}|[^;]+)")
_ODBC_SECRET_PATTERN = re.compile(r"(?i)\b(pwd|password)\s*=\s*(\{[^}]*\}|[^;]*)")


def _pick_best_sql_server_driver(installed: Sequence[str]) -> str | None:
    """Return the newest installed SQL Server ODBC driver."""

    if not installed:
        return None

    def driver_sort_key(name: str) -> tuple[int, str]:
        version_match = re.search(r"(\d+)", name)
        version = int(version_match.group(1)) if version_match else -1
        return (version, name)

    return sorted(installed, key=driver_sort_key)[-1]


def _ensure_sql_server_driver(raw_connection: str) -> str:
    """Ensure the ODBC driver referenced in the connection string exists locally."""

    driver_match = _ODBC_DRIVER_PATTERN.search(raw_connection)
    if not driver_match:
        return raw_connection

    driver_token = driver_match.group(1).strip()
    brace_wrapped = driver_token.startswith("{") and driver_token.endswith("}")
    driver_name = driver_token[1:-1] if brace_wrapped else driver_token

    import pyodbc

    installed_drivers = pyodbc.drivers()
    lookup = {d.lower(): d for d in installed_drivers}
    normalized_name = driver_name.lower()
    if normalized_name in lookup:
        return raw_connection

    sql_server_drivers = [d for d in installed_drivers if "sql server" in d.lower()]
    replacement = _pick_best_sql_server_driver(sql_server_drivers)
    if replacement is None:
        raise RuntimeError(
            "The configured ODBC driver '%s' is not installed. Install it or update the connection string to use a "
            "driver that exists on this machine." % driver_name
        )

    logger.warning(
        "Configured ODBC driver '%s' is not installed. Falling back to '%s'.",
        driver_name,
        replacement,
    )

    replacement_token = f"{{{replacement}}}" if brace_wrapped else replacement
    return (
        raw_connection[: driver_match.start(1)]
        + replacement_token
        + raw_connection[driver_match.end(1) :]
    )


def _is_sqlalchemy_url(connection_string: str) -> bool:
    return "://" in connection_string


def build_odbc_conn_str(connection_string: str) -> str:
    """Return ``connection_string`` with an ODBC driver clause in front if it lacks one."""

    candidate = connection_string.strip().rstrip(";")
    if _ODBC_DRIVER_PATTERN.search(candidate):
        return candidate + ";"
    driver = get_settings().odbc_driver
    return f"Driver={{{driver}}};{candidate};"


def to_sqlalchemy_url(connection_string: str) -> str:
    """Translate a stored connection string into a SQLAlchemy database URL."""

    candidate = connection_string.strip()
    if _is_sqlalchemy_url(candidate):
        return candidate

    odbc_connection = _ensure_sql_server_driver(build_odbc_conn_str(candidate))
    params = urllib.parse.quote_plus(odbc_connection)
    return f"mssql+pyodbc:///?odbc_connect={params}"


def resolve_connection_string(connection_string: str | None = None) -> str:
    """Return ``connection_string`` or the configured default connection.

    Raises :class:`ConfigurationError` when neither is available.
    """

    if connection_string is not None and connection_string.strip():
        return connection_string.strip()

    default_connection = get_settings().database_url
    if default_connection is None or not default_connection.strip():
        raise ConfigurationError(
            "DATABASE_URL is not configured and no connection string was provided."
        )
    return default_connection.strip()


def describe_connection(connection_string: str) -> str:
    """Return a representation of ``connection_string`` safe to write to logs."""

    candidate = connection_string.strip()
    if not _is_sqlalchemy_url(candidate):
        return _ODBC_SECRET_PATTERN.sub(lambda match: f"{match.group(1)}=***", candidate)
    try:
        return make_url(candidate).render_as_string(hide_password=True)
    except ArgumentError:
        return "<invalid connection string>"


# Unqualified tables live in these schemas, whatever the login's default is.
DEFAULT_SCHEMAS: dict[str, str] = {"mssql": "dbo"}


def default_schema(dialect: Dialect) -> str | None:
    """Return the schema unqualified tables are resolved against on ``dialect``."""

    return DEFAULT_SCHEMAS.get(dialect.name)


def build_engine(connection_string: str) -> Engine:
    """Create a new engine for ``connection_string``. The caller must dispose it."""

    url = make_url(to_sqlalchemy_url(connection_string))
    schema = DEFAULT_SCHEMAS.get(url.get_backend_name())
    if schema is None:
        return create_engine(url, pool_pre_ping=True)
    return create_engine(
        url,
        pool_pre_ping=True,
        execution_options={"schema_translate_map": {None: schema}},
    )


_engines: dict[str, Engine] = {}
_engines_lock = threading.Lock()


def get_engine(connection_string: str) -> Engine:
    """Return the pooled engine shared by all sessions of one database.

    Engines are kept for the lifetime of the process. Only the configured
    master database and the databases registered in its ``Tenants`` table are
    ever opened through here, so the registry is bounded by the tenant count.
    """

    with _engines_lock:
        engine = _engines.get(connection_string)
        if engine is None:
            engine = build_engine(connection_string)
            _engines[connection_string] = engine
        return engine


def reset_engines() -> None:
    """Dispose every pooled engine so the next session builds a fresh one."""

    with _engines_lock:
        engines = list(_engines.values())
        _engines.clear()
    for engine in engines:
        engine.dispose()


@contextmanager
def session_scope(connection_string: str | None = None) -> Iterator[Session]:
    """Yield a session bound to the tenant database and close it afterwards."""

    engine = get_engine(resolve_connection_string(connection_string))
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()

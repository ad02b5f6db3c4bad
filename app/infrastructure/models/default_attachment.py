"""SQLAlchemy model for default attachment requirements."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Integer,
    Unicode,
    UnicodeText,
    text,
)
from sqlalchemy.dialects.mssql import DATETIMEOFFSET, NVARCHAR
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.infrastructure.sql_compiler import Int32, current_offset_timestamp

# SQLite only auto-increments INTEGER primary keys.
_identity_type = BigInteger().with_variant(Integer(), "sqlite")
_offset_datetime_type = DateTime(timezone=True).with_variant(DATETIMEOFFSET(), "mssql")
_long_text_type = UnicodeText().with_variant(NVARCHAR(), "mssql")


class DefaultAttachmentModel(Base):
    """Database representation of a default attachment requirement."""

    __tablename__ = "DefaultAttachments"

    id = Column("Id", _identity_type, primary_key=True, autoincrement=True)
    active = Column(
        "Active", Boolean, nullable=True, server_default=expression.true()
    )
    created_at = Column(
        "CreatedAt",
        _offset_datetime_type,
        nullable=True,
        server_default=current_offset_timestamp(),
    )
    created_by = Column("CreatedBy", Unicode(255), nullable=True)
    name = Column("Name", _long_text_type, nullable=True)
    applicant_type = Column(
        "ApplicantType", Int32(), nullable=True, server_default=text("0")
    )
    type = Column("Type", Unicode(255), nullable=True)
    is_required = Column(
        "IsRequired", Boolean, nullable=True, server_default=expression.true()
    )


__all__ = ["DefaultAttachmentModel"]

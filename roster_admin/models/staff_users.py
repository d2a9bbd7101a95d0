"""Staff user model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
    func,
)

metadata = MetaData()

staff_users = Table(
    "staff_users",
    metadata,
    # Natural key used as the login identifier
    Column("employee_code", String(20), primary_key=True),
    Column("display_name", Text, nullable=False),
    # passlib hash string, never the plain password
    Column("password_hash", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

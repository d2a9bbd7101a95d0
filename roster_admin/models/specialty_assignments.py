"""Physician specialty assignment model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    text,
)

metadata = MetaData()

specialty_assignments = Table(
    "specialty_assignments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Matches staff_users.employee_code; orphans are tolerated on read
    Column("employee_code", String(20), nullable=False, index=True),
    Column("specialty_code", String(3), nullable=False),
    # Always derived from specialty_code via SPECIALTY_BILLING_CODES
    Column("billing_code", String(6), nullable=False),
    # Bot visibility flag: "SI" / "NO" (legacy rows may differ in case)
    Column("visibility", String(10), nullable=False, server_default=text("'NO'")),
    # Insurer code, NULL means no contract
    Column("contract_code", String(10)),
    Column("is_primary", Boolean, nullable=False, server_default=text("false")),
)

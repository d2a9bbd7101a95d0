"""Insurer reference model definition using SQLAlchemy Core."""

from sqlalchemy import Column, MetaData, String, Table, Text

metadata = MetaData()

insurers = Table(
    "insurers",
    metadata,
    Column("code", String(10), primary_key=True),
    Column("label", Text, nullable=False),
)

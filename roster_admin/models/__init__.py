"""Database models."""

from sqlalchemy import MetaData

from roster_admin.models.insurers import insurers
from roster_admin.models.insurers import metadata as insurers_metadata
from roster_admin.models.specialty_assignments import metadata as assignments_metadata
from roster_admin.models.specialty_assignments import specialty_assignments
from roster_admin.models.staff_users import metadata as staff_metadata
from roster_admin.models.staff_users import staff_users


def combined_metadata() -> MetaData:
    """Merge the per-model MetaData objects into one, for create_all and Alembic."""
    metadata = MetaData()
    for source in (staff_metadata, assignments_metadata, insurers_metadata):
        for table in source.tables.values():
            table.to_metadata(metadata)
    return metadata


__all__ = [
    "combined_metadata",
    "insurers",
    "specialty_assignments",
    "staff_users",
]

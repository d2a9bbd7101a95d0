"""Script to create the schema directly, for local SQLite runs without Alembic."""

import asyncio

from roster_admin.database import engine
from roster_admin.models import combined_metadata


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(combined_metadata().create_all)

    await engine.dispose()
    print("✓ Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db())

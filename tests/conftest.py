import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

# Load environment variables from .env file
load_dotenv()

# Tests never need a real server database or Redis
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-roster-admin")  # pragma: allowlist secret
os.environ.setdefault("LOG_FORMAT", "console")

from roster_admin.config import settings  # noqa: E402
from roster_admin.core.security import create_session_token, get_password_hash  # noqa: E402
from roster_admin.database import get_db  # noqa: E402
from roster_admin.dependencies import get_cache_manager  # noqa: E402
from roster_admin.main import app  # noqa: E402
from roster_admin.models import (  # noqa: E402
    combined_metadata,
    insurers,
    specialty_assignments,
    staff_users,
)

metadata = combined_metadata()

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Safety check: never drop tables in the configured application database
if not TEST_DATABASE_URL.startswith("sqlite") and TEST_DATABASE_URL == settings.database_url:
    raise RuntimeError("TEST_DATABASE_URL must not point at the application database")

STAFF_PASSWORD = "correct-horse-battery"  # pragma: allowlist secret


def _make_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection keeps the in-memory database alive
        return create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on freshly created tables."""
    engine = _make_engine()

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client without a session cookie."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def session_token(staff_members) -> str:
    """Valid session token for the first seeded staff member."""
    return create_session_token("1001", "Ana Gómez")


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient, session_token: str) -> AsyncClient:
    """Test HTTP client carrying a valid session cookie."""
    client.cookies.set(settings.session_cookie_name, session_token)
    return client


@pytest_asyncio.fixture
async def staff_members(db_session: AsyncSession) -> list[dict]:
    """Seed staff users with hashed passwords."""
    password_hash = get_password_hash(STAFF_PASSWORD)
    members = [
        {"employee_code": "1001", "display_name": "Ana Gómez", "password_hash": password_hash},
        {"employee_code": "1002", "display_name": "Luis Pérez", "password_hash": password_hash},
        # Staff member without any specialty rows
        {"employee_code": "1003", "display_name": "Marta Ruiz", "password_hash": password_hash},
    ]
    await db_session.execute(insert(staff_users), members)
    await db_session.commit()
    return members


@pytest_asyncio.fixture
async def assignments(db_session: AsyncSession, staff_members) -> list[dict]:
    """
    Seed specialty assignment rows.

    1001 has two rows with diverging flags; the 022 row is primary.
    1002 has one legacy lowercase inactive row.
    9999 has a row but no staff record.
    """
    rows = [
        {
            "id": 1,
            "employee_code": "1001",
            "specialty_code": "016",
            "billing_code": "890201",
            "visibility": "SI",
            "contract_code": "EPS001",
            "is_primary": False,
        },
        {
            "id": 2,
            "employee_code": "1001",
            "specialty_code": "022",
            "billing_code": "890203",
            "visibility": "NO",
            "contract_code": "EPS008",
            "is_primary": True,
        },
        {
            "id": 3,
            "employee_code": "1002",
            "specialty_code": "062",
            "billing_code": "890262",
            "visibility": "no",
            "contract_code": None,
            "is_primary": False,
        },
        {
            "id": 4,
            "employee_code": "9999",
            "specialty_code": "016",
            "billing_code": "890201",
            "visibility": "SI",
            "contract_code": None,
            "is_primary": False,
        },
    ]
    await db_session.execute(insert(specialty_assignments), rows)
    await db_session.commit()
    return rows


@pytest_asyncio.fixture
async def insurer_rows(db_session: AsyncSession) -> list[dict]:
    """Seed insurer reference data."""
    rows = [
        {"code": "EPS008", "label": "Compensar"},
        {"code": "EPS037", "label": "Nueva EPS"},
        {"code": "EPS005", "label": "Sanitas"},
        {"code": "EPS002", "label": "Salud Total"},
    ]
    await db_session.execute(insert(insurers), rows)
    await db_session.commit()
    return rows

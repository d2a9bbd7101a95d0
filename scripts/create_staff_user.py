#!/usr/bin/env python3
"""
Create a staff user, or reset the password of an existing one.

Passwords are stored as salted hashes; the plain value is read from the
terminal and never echoed.

Usage:
    python scripts/create_staff_user.py <employee_code> "<display name>"
"""

import asyncio
import getpass
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from sqlalchemy import select, update  # noqa: E402

from roster_admin.core.security import get_password_hash  # noqa: E402
from roster_admin.database import AsyncSessionLocal, engine  # noqa: E402
from roster_admin.models.staff_users import staff_users  # noqa: E402


async def upsert_staff_user(employee_code: str, display_name: str, password: str) -> bool:
    """Insert the staff user or update name and password. Returns True if created."""
    password_hash = get_password_hash(password)

    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(staff_users.c.employee_code).where(
                staff_users.c.employee_code == employee_code
            )
        )
        exists = result.first() is not None

        if exists:
            await session.execute(
                update(staff_users)
                .where(staff_users.c.employee_code == employee_code)
                .values(display_name=display_name, password_hash=password_hash)
            )
        else:
            await session.execute(
                staff_users.insert().values(
                    employee_code=employee_code,
                    display_name=display_name,
                    password_hash=password_hash,
                )
            )
        await session.commit()

    await engine.dispose()
    return not exists


def main() -> int:
    if len(sys.argv) != 3:
        print(__doc__)
        return 2

    employee_code, display_name = sys.argv[1].strip(), sys.argv[2].strip()
    if not employee_code or not display_name:
        print("❌ Employee code and display name are required")
        return 2

    password = getpass.getpass("Password: ")
    if not password or password != getpass.getpass("Repeat password: "):
        print("❌ Passwords are empty or do not match")
        return 1

    created = asyncio.run(upsert_staff_user(employee_code, display_name, password))
    print(f"✅ Staff user {employee_code} {'created' if created else 'updated'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

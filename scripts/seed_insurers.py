#!/usr/bin/env python3
"""
Load insurer reference rows from a CSV file with ``code,label`` columns.

Existing codes get their label updated. The cached insurer list is dropped
afterwards so the panel picks up the change.

Usage:
    python scripts/seed_insurers.py insurers.csv
"""

import asyncio
import csv
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from sqlalchemy import select, update  # noqa: E402

from roster_admin.core.redis_client import CacheManager, get_redis_client  # noqa: E402
from roster_admin.core.specialties import is_valid_contract_code  # noqa: E402
from roster_admin.database import AsyncSessionLocal, engine  # noqa: E402
from roster_admin.models.insurers import insurers  # noqa: E402
from roster_admin.services.insurer_service import InsurerService  # noqa: E402


def read_insurers(path: Path) -> list[dict[str, str]]:
    """Read and validate insurer rows; codes are upper-cased."""
    rows = []
    with path.open(newline="", encoding="utf-8") as handle:
        for line_number, record in enumerate(csv.DictReader(handle), start=2):
            code = (record.get("code") or "").strip().upper()
            label = (record.get("label") or "").strip()
            if not is_valid_contract_code(code) or not label:
                raise ValueError(f"line {line_number}: invalid insurer row {record!r}")
            rows.append({"code": code, "label": label})
    return rows


async def seed(rows: list[dict[str, str]]) -> tuple[int, int]:
    """Upsert insurer rows. Returns (inserted, updated)."""
    inserted = updated = 0

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(insurers.c.code))
        existing = set(result.scalars().all())

        for row in rows:
            if row["code"] in existing:
                await session.execute(
                    update(insurers).where(insurers.c.code == row["code"]).values(label=row["label"])
                )
                updated += 1
            else:
                await session.execute(insurers.insert().values(**row))
                existing.add(row["code"])
                inserted += 1

        await session.commit()

    await engine.dispose()
    return inserted, updated


def main() -> int:
    if len(sys.argv) != 2:
        print(__doc__)
        return 2

    try:
        rows = read_insurers(Path(sys.argv[1]))
    except (OSError, ValueError) as e:
        print(f"❌ {e}")
        return 1

    inserted, updated = asyncio.run(seed(rows))
    InsurerService(CacheManager(get_redis_client())).invalidate()

    print(f"✅ Insurers loaded: {inserted} inserted, {updated} updated")
    return 0


if __name__ == "__main__":
    sys.exit(main())

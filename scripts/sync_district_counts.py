"""Bring the prefectures table in line with the compiled district counts.

Startup seeding only inserts missing prefectures. After a reapportionment
the compiled table changes and existing rows need updating; this script
does that.

Safe to run multiple times (idempotent).

Usage:
    # Dry run (default, changes nothing):
    python scripts/sync_district_counts.py

    # Apply changes:
    python scripts/sync_district_counts.py --apply
"""

from __future__ import annotations

import asyncio
import os
import sys

from senkyoku.db.engine import create_engine, create_tables, get_session
from senkyoku.db.repository import Repository
from senkyoku.models.constants import DISTRICT_COUNTS


async def sync_district_counts(apply: bool = False) -> None:
    db_url = os.environ.get("DATABASE_URL")
    if not db_url:
        print("ERROR: DATABASE_URL not set.")
        sys.exit(1)

    engine = create_engine(db_url)
    await create_tables(engine)

    async with get_session(engine) as session:
        repo = Repository(session)
        current = await repo.get_all_district_counts()

        changes = 0
        for name, count in DISTRICT_COUNTS.items():
            stored = current.get(name)
            if stored == count:
                continue
            changes += 1
            print(f"  {name}: {stored if stored is not None else '-'} -> {count}")
            if apply:
                await repo.upsert_district_count(name, count)

        extra = sorted(set(current) - set(DISTRICT_COUNTS))
        for name in extra:
            print(f"  {name}: not a known prefecture (left untouched)")

    await engine.dispose()

    if changes == 0:
        print("Already in sync.")
    elif apply:
        print(f"Updated {changes} prefecture(s).")
    else:
        print(f"{changes} prefecture(s) differ. Re-run with --apply to update.")


if __name__ == "__main__":
    asyncio.run(sync_district_counts(apply="--apply" in sys.argv))

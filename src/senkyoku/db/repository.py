"""Repository pattern for database access.

Wraps SQLAlchemy async sessions. The prefecture table is written only by
seeding and admin tooling; slash commands only read it.
"""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from senkyoku.db.models import PrefectureRow


class Repository:
    """Async repository for all database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Prefectures ---

    async def get_district_count(self, name: str) -> int | None:
        """Return the district count for a prefecture, or None if no row exists."""
        stmt = select(PrefectureRow.district_count).where(PrefectureRow.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all_district_counts(self) -> dict[str, int]:
        stmt = select(PrefectureRow).order_by(PrefectureRow.name)
        result = await self.session.execute(stmt)
        return {row.name: row.district_count for row in result.scalars().all()}

    async def upsert_district_count(self, name: str, district_count: int) -> PrefectureRow:
        """Insert or update a prefecture's district count."""
        row = await self.session.get(PrefectureRow, name)
        if row is not None:
            row.district_count = district_count
        else:
            row = PrefectureRow(name=name, district_count=district_count)
            self.session.add(row)
        await self.session.flush()
        return row

    async def seed_district_counts(self, counts: Mapping[str, int]) -> int:
        """Insert rows for prefectures that are missing. Existing rows are kept.

        Returns the number of rows inserted.
        """
        existing = await self.get_all_district_counts()
        inserted = 0
        for name, count in counts.items():
            if name in existing:
                continue
            self.session.add(PrefectureRow(name=name, district_count=count))
            inserted += 1
        await self.session.flush()
        return inserted

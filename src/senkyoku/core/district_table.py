"""Authoritative district counts per prefecture.

Two interchangeable sources sit behind the ``DistrictTable`` protocol:

- ``StaticDistrictTable`` reads a mapping fixed at process start.
- ``DatabaseDistrictTable`` queries the ``prefectures`` table per request.

The planner only ever sees the integer that comes back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from sqlalchemy.exc import SQLAlchemyError

from senkyoku.core.errors import DistrictLookupError
from senkyoku.db.engine import get_session
from senkyoku.db.repository import Repository
from senkyoku.models.constants import DISTRICT_COUNTS

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from senkyoku.config import Settings

logger = logging.getLogger(__name__)


class DistrictTable(Protocol):
    """Source of the highest valid district index for a prefecture."""

    async def max_district(self, prefecture: str) -> int | None:
        """Return the district count, or None when the prefecture is unknown."""
        ...


class StaticDistrictTable:
    """District counts compiled into the process. Safe to share across tasks."""

    def __init__(self, counts: Mapping[str, int] = DISTRICT_COUNTS) -> None:
        self._counts: Mapping[str, int] = MappingProxyType(dict(counts))

    async def max_district(self, prefecture: str) -> int | None:
        return self._counts.get(prefecture)

    def __len__(self) -> int:
        return len(self._counts)


class DatabaseDistrictTable:
    """District counts read from the ``prefectures`` table.

    Each lookup opens its own session. A failed query raises
    DistrictLookupError; a missing row returns None.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def max_district(self, prefecture: str) -> int | None:
        try:
            async with get_session(self.engine) as session:
                return await Repository(session).get_district_count(prefecture)
        except SQLAlchemyError as exc:
            logger.warning("district_lookup_failed prefecture=%s err=%s", prefecture, exc)
            raise DistrictLookupError(prefecture, str(exc)) from exc


async def require_max_district(table: DistrictTable, prefecture: str) -> int:
    """Look up a prefecture's district count, treating a missing entry as an error."""
    count = await table.max_district(prefecture)
    if count is None or count < 1:
        raise DistrictLookupError(prefecture, "no district count on record")
    return count


def build_district_table(
    settings: Settings,
    engine: AsyncEngine | None = None,
) -> DistrictTable:
    """Pick the district-count source configured in settings."""
    if settings.senkyoku_district_source == "database":
        if engine is None:
            msg = "database district source requires an engine"
            raise ValueError(msg)
        logger.info("district_table_source=database")
        return DatabaseDistrictTable(engine)
    logger.info("district_table_source=static")
    return StaticDistrictTable()

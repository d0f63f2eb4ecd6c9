"""SQLAlchemy ORM models for the senkyoku database.

One table: ``prefectures``, the authoritative district count per
prefecture, read by the database-backed district table.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class PrefectureRow(Base):
    """District count for one prefecture, keyed by its role name."""

    __tablename__ = "prefectures"

    name: Mapped[str] = mapped_column(String(10), primary_key=True)
    district_count: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        CheckConstraint("district_count >= 1", name="ck_prefectures_district_count"),
    )

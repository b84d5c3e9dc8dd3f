"""User ORM — persists user profile records.

Invariants:
    - id is a service-generated UUID primary key, never reused
    - email is unique (authoritative guard against concurrent duplicate writes)
    - created_at set once; updated_at set on every successful write
    - age is nullable

Design Decisions:
    - Generic Uuid type over the Postgres dialect type: same model runs on
      asyncpg in production and aiosqlite in tests
    - created_at indexed: listings are ordered newest first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from profile_service.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User profile record."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

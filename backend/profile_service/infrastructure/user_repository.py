"""SQL User Repository — UserRepository implementation over an AsyncSession.

Invariants:
    - Every public method is one parameterized statement (plus its commit for writes)
    - A unique-constraint violation on email is reported as ConflictError,
      whichever request loses the race
    - Any other store failure propagates unchanged

Design Decisions:
    - Bulk UPDATE/DELETE with rowcount: a write that touches zero rows is
      reported as "not found" instead of trusting the earlier existence check
"""

import logging
from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from profile_service.core.errors import ConflictError
from profile_service.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """User persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def list_page(self, limit: int, offset: int) -> Sequence[User]:
        result = await self.db.execute(
            select(User)
            .order_by(User.created_at.desc())
            .limit(limit)
            .offset(offset),
        )
        return result.scalars().all()

    async def get(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def exists(self, user_id: UUID) -> bool:
        result = await self.db.execute(
            select(User.id).where(User.id == user_id),
        )
        return result.scalar_one_or_none() is not None

    async def email_taken(
        self, email: str, exclude_id: UUID | None = None,
    ) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def insert(self, user_id: UUID, fields: dict, now: datetime) -> User:
        user = User(id=user_id, created_at=now, updated_at=now, **fields)
        self.db.add(user)
        await self._commit()
        return user

    async def update(
        self, user_id: UUID, changes: dict, now: datetime,
    ) -> User | None:
        try:
            result = await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(**changes, updated_at=now)
                .execution_options(synchronize_session=False),
            )
        except IntegrityError as e:
            await self._reject_duplicate(e)
        if result.rowcount == 0:
            await self.db.rollback()
            return None
        await self._commit()
        return await self.db.get(User, user_id, populate_existing=True)

    async def delete(self, user_id: UUID) -> bool:
        result = await self.db.execute(
            delete(User)
            .where(User.id == user_id)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self._reject_duplicate(e)

    async def _reject_duplicate(self, e: IntegrityError) -> None:
        await self.db.rollback()
        logger.warning(f"Unique constraint rejected write: {e.orig}")
        raise ConflictError("Email already exists") from e

"""Service test fixtures — in-memory UserRepository double.

Invariants:
    - FakeUserRepository satisfies the UserRepository Protocol structurally
    - Every repository call is recorded in `calls` so tests can assert that
      an operation did (or did not) touch the store
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import pytest

from profile_service.core.errors import ConflictError


@dataclass
class FakeUser:
    id: UUID
    name: str
    email: str
    age: int | None
    created_at: datetime
    updated_at: datetime


class FakeUserRepository:
    """Dict-backed repository; mirrors the SQL repository's contract."""

    def __init__(self):
        self.rows: dict[UUID, FakeUser] = {}
        self.calls: list[str] = []
        self.race_on_write = False

    async def count(self) -> int:
        self.calls.append("count")
        return len(self.rows)

    async def list_page(self, limit: int, offset: int) -> list[FakeUser]:
        self.calls.append("list_page")
        ordered = sorted(self.rows.values(), key=lambda u: u.created_at, reverse=True)
        return ordered[offset:offset + limit]

    async def get(self, user_id: UUID) -> FakeUser | None:
        self.calls.append("get")
        return self.rows.get(user_id)

    async def exists(self, user_id: UUID) -> bool:
        self.calls.append("exists")
        return user_id in self.rows

    async def email_taken(self, email: str, exclude_id: UUID | None = None) -> bool:
        self.calls.append("email_taken")
        if self.race_on_write:
            return False
        return any(u.email == email and u.id != exclude_id for u in self.rows.values())

    async def insert(self, user_id: UUID, fields: dict, now: datetime) -> FakeUser:
        self.calls.append("insert")
        self._reject_duplicate(fields.get("email"), user_id)
        user = FakeUser(id=user_id, created_at=now, updated_at=now, **fields)
        self.rows[user_id] = user
        return user

    async def update(self, user_id: UUID, changes: dict, now: datetime) -> FakeUser | None:
        self.calls.append("update")
        user = self.rows.get(user_id)
        if user is None:
            return None
        if "email" in changes:
            self._reject_duplicate(changes["email"], user_id)
        for key, value in changes.items():
            setattr(user, key, value)
        user.updated_at = now
        return user

    async def delete(self, user_id: UUID) -> bool:
        self.calls.append("delete")
        return self.rows.pop(user_id, None) is not None

    def _reject_duplicate(self, email: str | None, user_id: UUID) -> None:
        if any(u.email == email and u.id != user_id for u in self.rows.values()):
            raise ConflictError("Email already exists")


@pytest.fixture
def repository():
    return FakeUserRepository()

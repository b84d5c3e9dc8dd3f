"""Boundary Protocols — contracts between the user operations and the store.

Invariants:
    - Operations NEVER import the ORM session or SQL — only these Protocols
    - Implementations provided by the shell via dependency injection
    - Every method is a single store round-trip; no method opens a transaction
      spanning more than one statement

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for user records handed back by a repository."""
    id: UUID
    name: str
    email: str
    age: int | None
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence — implemented by the shell."""
    async def count(self) -> int: ...
    async def list_page(self, limit: int, offset: int) -> Sequence[UserLike]: ...
    async def get(self, user_id: UUID) -> UserLike | None: ...
    async def exists(self, user_id: UUID) -> bool: ...
    async def email_taken(
        self, email: str, exclude_id: UUID | None = None,
    ) -> bool: ...
    async def insert(
        self, user_id: UUID, fields: dict, now: datetime,
    ) -> UserLike: ...
    async def update(
        self, user_id: UUID, changes: dict, now: datetime,
    ) -> UserLike | None: ...
    async def delete(self, user_id: UUID) -> bool: ...

"""User Operations — list, get, create, update, delete against a UserRepository.

Invariants:
    - Every operation returns Ok(value) or Err(HttpError); classified failures never raise
    - Store failures (connection, timeout) are NOT caught here: they propagate to the
      global handler as 500s
    - Ids are generated here (uuid4), never taken from the client
    - created_at == updated_at on create; updated_at refreshed on every update
    - Update rejects an empty change set before any store access
    - A page past the end is answered from the count alone: the offset is never
      sent to the store, whatever its size

Design Decisions:
    - Pre-checks (existence, email uniqueness) are separate round-trips from the write;
      the unique column is the authoritative guard and its violation surfaces as
      ConflictError from the repository
    - Pure rule checks live in core/enforce_user_rules.py; this class only sequences IO
"""

import logging
import uuid
from datetime import datetime, timezone
from uuid import UUID

from profile_service.core.enforce_user_rules import (
    check_email_available, check_has_updates, check_user_found,
)
from profile_service.core.errors import ConflictError, NotFoundError
from profile_service.core.outcome import Err, Ok, Outcome
from profile_service.core.paginate import page_meta, page_offset
from profile_service.core.repository_protocols import UserLike, UserRepository
from profile_service.schemas.user import CreateUser, Pagination, UpdateUser

logger = logging.getLogger(__name__)


class UserOperations:
    """The user resource's domain operations."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list_users(self, window: Pagination) -> Outcome[dict]:
        """One page of users, newest first, plus pagination metadata."""
        total = await self.repository.count()
        offset = page_offset(window.page, window.limit)
        users = (
            await self.repository.list_page(window.limit, offset)
            if offset < total else []
        )
        return Ok({
            "data": list(users),
            "pagination": page_meta(window.page, window.limit, total),
        })

    async def get_user(self, user_id: UUID) -> Outcome[UserLike]:
        user = await self.repository.get(user_id)
        if error := check_user_found(user):
            return Err(error)
        return Ok(user)

    async def create_user(self, data: CreateUser) -> Outcome[UserLike]:
        """Insert a new user after checking the email is free."""
        taken = await self.repository.email_taken(data.email)
        if error := check_email_available(taken):
            return Err(error)

        now = datetime.now(timezone.utc)
        try:
            user = await self.repository.insert(
                uuid.uuid4(), data.model_dump(), now,
            )
        except ConflictError as e:
            return Err(e)
        logger.info("User created", extra={"user_id": str(user.id)})
        return Ok(user)

    async def update_user(
        self, user_id: UUID, data: UpdateUser,
    ) -> Outcome[UserLike]:
        """Apply only the supplied fields to an existing user."""
        changes = data.changes()
        if error := check_has_updates(changes):
            return Err(error)

        if not await self.repository.exists(user_id):
            return Err(NotFoundError("User not found"))

        if "email" in changes:
            taken = await self.repository.email_taken(
                changes["email"], exclude_id=user_id,
            )
            if error := check_email_available(taken):
                return Err(error)

        try:
            user = await self.repository.update(
                user_id, changes, datetime.now(timezone.utc),
            )
        except ConflictError as e:
            return Err(e)
        if user is None:
            return Err(NotFoundError("User not found"))
        logger.info(
            f"User updated: {sorted(changes)}", extra={"user_id": str(user_id)},
        )
        return Ok(user)

    async def delete_user(self, user_id: UUID) -> Outcome[dict]:
        """Hard-delete a user."""
        if not await self.repository.delete(user_id):
            return Err(NotFoundError("User not found"))
        logger.info("User deleted", extra={"user_id": str(user_id)})
        return Ok({"message": "User deleted successfully", "id": user_id})

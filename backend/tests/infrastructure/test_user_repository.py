"""SqlUserRepository against an in-memory SQLite store.

Invariants:
    - list_page is newest-first and honors limit/offset
    - Unique-email violations surface as ConflictError on insert and update
    - Writes against a missing id report "not found" (None / False)
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from profile_service.core.errors import ConflictError
from profile_service.infrastructure.user_repository import SqlUserRepository

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def repository(test_db):
    return SqlUserRepository(test_db)


async def _insert(repository, email, name="Some User", at=T0):
    return await repository.insert(
        uuid4(), {"name": name, "email": email, "age": None}, at,
    )


async def test_insert_then_get(repository):
    user = await _insert(repository, "a@example.com", name="Alice")
    fetched = await repository.get(user.id)
    assert fetched.name == "Alice"
    assert fetched.email == "a@example.com"
    assert await repository.exists(user.id)


async def test_get_missing_returns_none(repository):
    assert await repository.get(uuid4()) is None
    assert not await repository.exists(uuid4())


async def test_count_and_list_page_newest_first(repository):
    for i in range(3):
        await _insert(repository, f"u{i}@example.com", at=T0 + timedelta(minutes=i))
    assert await repository.count() == 3

    first = await repository.list_page(limit=2, offset=0)
    second = await repository.list_page(limit=2, offset=2)
    assert [u.email for u in first] == ["u2@example.com", "u1@example.com"]
    assert [u.email for u in second] == ["u0@example.com"]


async def test_email_taken_excludes_own_id(repository):
    user = await _insert(repository, "a@example.com")
    assert await repository.email_taken("a@example.com")
    assert not await repository.email_taken("a@example.com", exclude_id=user.id)
    assert not await repository.email_taken("b@example.com")


async def test_duplicate_insert_raises_conflict(repository):
    await _insert(repository, "dup@example.com")
    with pytest.raises(ConflictError):
        await _insert(repository, "dup@example.com")
    assert await repository.count() == 1


async def test_update_applies_changes_and_timestamp(repository):
    user = await _insert(repository, "a@example.com", name="Alice")
    later = T0 + timedelta(hours=1)

    updated = await repository.update(user.id, {"name": "Alicia"}, later)

    assert updated.name == "Alicia"
    assert updated.email == "a@example.com"
    assert updated.updated_at.replace(tzinfo=timezone.utc) == later


async def test_update_to_taken_email_raises_conflict(repository):
    await _insert(repository, "a@example.com")
    other = await _insert(repository, "b@example.com")
    with pytest.raises(ConflictError):
        await repository.update(other.id, {"email": "a@example.com"}, T0)
    assert (await repository.get(other.id)).email == "b@example.com"


async def test_update_missing_returns_none(repository):
    assert await repository.update(uuid4(), {"name": "Nobody"}, T0) is None


async def test_delete_reports_whether_a_row_was_removed(repository):
    user = await _insert(repository, "a@example.com")
    assert await repository.delete(user.id) is True
    assert await repository.delete(user.id) is False
    assert await repository.count() == 0

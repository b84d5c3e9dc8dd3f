"""Seed script — inserts the sample users once."""

from profile_service.db.seed import SAMPLE_USERS, seed


async def test_seed_populates_empty_database_once(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"

    assert await seed(url) == len(SAMPLE_USERS)
    assert await seed(url) == 0

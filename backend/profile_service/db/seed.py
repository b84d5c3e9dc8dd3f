"""Seed Script — creates the schema and inserts sample users into an empty database.

Usage:
    python -m profile_service.db.seed

Invariants:
    - Idempotent: does nothing when the users table already has rows
    - Goes through UserOperations, so seeded rows obey the same rules as API writes
"""

import asyncio
import logging

from profile_service.config import get_settings
from profile_service.core.outcome import Err
from profile_service.db.session import create_schema, create_session_factory
from profile_service.infrastructure.observability import setup_logging
from profile_service.infrastructure.user_repository import SqlUserRepository
from profile_service.schemas.user import CreateUser
from profile_service.services.user_operations import UserOperations

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"name": "Alice Johnson", "email": "alice.johnson@example.com", "age": 28},
    {"name": "Bob Smith", "email": "bob.smith@example.com", "age": 35},
    {"name": "Carol Williams", "email": "carol.williams@example.com", "age": 42},
]


async def seed(database_url: str) -> int:
    """Insert SAMPLE_USERS if the table is empty. Returns how many were inserted."""
    engine, session_factory = create_session_factory(database_url)
    try:
        await create_schema(engine)
        async with session_factory() as db:
            repository = SqlUserRepository(db)
            if await repository.count() > 0:
                logger.info("Database already seeded")
                return 0
            operations = UserOperations(repository)
            inserted = 0
            for sample in SAMPLE_USERS:
                outcome = await operations.create_user(CreateUser(**sample))
                if isinstance(outcome, Err):
                    logger.warning(f"Skipped {sample['email']}: {outcome.error.message}")
                    continue
                inserted += 1
            logger.info(f"Seeded {inserted} sample users")
            return inserted
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(seed(settings.database_url))


if __name__ == "__main__":
    main()

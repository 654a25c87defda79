"""Script to initialize the database."""

import asyncio

from sqlalchemy import text

from app.database import engine
from app.models.centers import metadata as centers_metadata
from app.models.citizen_registrations import metadata as citizen_registrations_metadata
from app.models.users import metadata as users_metadata


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    async with engine.begin() as conn:
        # Enable pgcrypto extension
        await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))

        for metadata in (users_metadata, centers_metadata, citizen_registrations_metadata):
            await conn.run_sync(metadata.create_all)

        print("✓ Database initialized successfully!")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init_db())

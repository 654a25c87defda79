"""User store operations."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.redis_client import CacheManager
from app.models.users import users
from app.schemas.users import UserCreate


class UserService:
    """Service for user operations."""

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    def _invalidate_dashboard(self) -> None:
        if self.cache:
            self.cache.invalidate_dashboard()

    async def create_user(self, db: AsyncSession, user_data: UserCreate) -> dict:
        """Create a new user."""
        query = (
            users.insert()
            .values(
                firebase_uid=user_data.firebase_uid,
                email=user_data.email,
                email_verified=user_data.email_verified,
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                display_name=user_data.display_name,
                role=user_data.role,
            )
            .returning(users)
        )

        result = await db.execute(query)
        await db.commit()
        user = result.mappings().first()

        if not user:
            raise ValueError("Failed to create user")

        self._invalidate_dashboard()
        return dict(user)

    async def get_user_by_id(self, db: AsyncSession, user_id: UUID) -> dict | None:
        """Get user by internal ID."""
        query = select(users).where(users.c.id == user_id)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_firebase_uid(self, db: AsyncSession, firebase_uid: str) -> dict | None:
        """Get user by Firebase UID."""
        query = select(users).where(users.c.firebase_uid == firebase_uid)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_email(self, db: AsyncSession, email: str) -> dict | None:
        """Get user by email."""
        query = select(users).where(users.c.email == email)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def list_users(self, db: AsyncSession) -> list[dict]:
        """Get every user, newest first."""
        query = select(users).order_by(users.c.created_at.desc())
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def list_firebase_uids(self, db: AsyncSession) -> set[str]:
        """Get the Firebase UID of every user."""
        result = await db.execute(select(users.c.firebase_uid))
        return set(result.scalars().all())

    async def update_role(self, db: AsyncSession, user_id: UUID, role: str) -> dict | None:
        """Set a user's role."""
        query = (
            update(users)
            .where(users.c.id == user_id)
            .values(role=role, updated_at=datetime.now(UTC))
            .returning(users)
        )

        result = await db.execute(query)
        await db.commit()
        user = result.mappings().first()

        if not user:
            return None

        self._invalidate_dashboard()
        return dict(user)

    async def mark_email_verified(self, db: AsyncSession, firebase_uid: str) -> dict | None:
        """Record that the provider has verified the user's email."""
        query = (
            update(users)
            .where(users.c.firebase_uid == firebase_uid)
            .values(email_verified=True, updated_at=datetime.now(UTC))
            .returning(users)
        )

        result = await db.execute(query)
        await db.commit()
        user = result.mappings().first()
        return dict(user) if user else None

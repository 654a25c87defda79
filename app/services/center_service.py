"""Center store operations."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.core.redis_client import CacheManager
from app.models.centers import centers
from app.schemas.centers import CenterRegistrationRequest


class CenterService:
    """Service for center operations."""

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    def _invalidate_dashboard(self) -> None:
        if self.cache:
            self.cache.invalidate_dashboard()

    async def create_center(
        self,
        db: AsyncSession,
        center_data: CenterRegistrationRequest,
        uid: str | None = None,
    ) -> dict:
        """Create a pending (unverified) center."""
        query = (
            centers.insert()
            .values(
                uid=uid,
                center_name=center_data.center_name,
                email=center_data.email,
                district=center_data.district,
                address=center_data.address,
                verified=False,
            )
            .returning(centers)
        )

        try:
            result = await db.execute(query)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictException("A center with this email is already registered.") from e

        center = result.mappings().first()
        if not center:
            raise ValueError("Failed to create center")

        self._invalidate_dashboard()
        return dict(center)

    async def get_center(self, db: AsyncSession, center_id: UUID) -> dict | None:
        """Get center by ID."""
        query = select(centers).where(centers.c.id == center_id)
        result = await db.execute(query)
        center = result.mappings().first()
        return dict(center) if center else None

    async def get_center_by_email(self, db: AsyncSession, email: str) -> dict | None:
        """Get center by contact email."""
        query = select(centers).where(centers.c.email == email)
        result = await db.execute(query)
        center = result.mappings().first()
        return dict(center) if center else None

    async def list_centers(self, db: AsyncSession) -> list[dict]:
        """Get every center, newest first."""
        query = select(centers).order_by(centers.c.created_at.desc())
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def list_uids(self, db: AsyncSession) -> set[str]:
        """Get the Firebase UID of every center that has one."""
        result = await db.execute(select(centers.c.uid).where(centers.c.uid.is_not(None)))
        return set(result.scalars().all())

    async def mark_verified(self, db: AsyncSession, center_id: UUID) -> dict | None:
        """
        Set ``verified`` on a center.

        Returns:
            The updated center, or None if it does not exist
        """
        query = (
            update(centers)
            .where(centers.c.id == center_id)
            .values(verified=True, updated_at=datetime.now(UTC))
            .returning(centers)
        )

        result = await db.execute(query)
        await db.commit()
        center = result.mappings().first()

        if not center:
            return None

        self._invalidate_dashboard()
        return dict(center)

    async def delete_center(self, db: AsyncSession, center_id: UUID) -> bool:
        """Delete a center (hard delete)."""
        query = delete(centers).where(centers.c.id == center_id)
        result = await db.execute(query)
        await db.commit()

        self._invalidate_dashboard()
        return result.rowcount > 0  # type: ignore[attr-defined]

"""Administrative workflow: user roles and center approval."""

from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.config import settings
from app.core.exceptions import (
    AppException,
    ForbiddenException,
    NotFoundException,
    SelfModificationException,
)
from app.core.firebase import FirebaseIdentityProvider
from app.core.redis_client import DASHBOARD_CENTERS_KEY, DASHBOARD_USERS_KEY, CacheManager
from app.schemas.admin import (
    AdminUserSummary,
    CenterActionRequest,
    CenterSummary,
    UpdateUserRoleRequest,
)
from app.schemas.results import ActionResult
from app.services.center_service import CenterService
from app.services.user_service import UserService

logger = get_logger(__name__)

ADMIN_ROLE = "authority"


class AdminService:
    """
    Privileged single-record mutations for the admin dashboard.

    Every operation validates its payload, re-reads the acting user's role
    from the database, and returns an ``ActionResult`` instead of raising.
    """

    def __init__(
        self,
        db: AsyncSession,
        identity_provider: FirebaseIdentityProvider,
        cache_manager: CacheManager | None = None,
    ):
        self.db = db
        self.identity_provider = identity_provider
        self.cache = cache_manager
        self.users = UserService(cache_manager)
        self.centers = CenterService(cache_manager)

    async def require_admin(self, admin_firebase_uid: str) -> dict:
        """Resolve the actor and make sure they hold the admin role."""
        admin_user = await self.users.get_user_by_firebase_uid(self.db, admin_firebase_uid)
        if not admin_user or admin_user["role"] != ADMIN_ROLE:
            logger.warning("admin_permission_denied", actor=admin_firebase_uid)
            raise ForbiddenException("Permission denied. Not an administrator.")
        return admin_user

    async def get_users(self) -> ActionResult:
        """List users for the dashboard."""
        try:
            if self.cache:
                cached = self.cache.get_json(DASHBOARD_USERS_KEY)
                if cached is not None:
                    return ActionResult.ok(users=cached)

            rows = await self.users.list_users(self.db)
            user_list = [
                AdminUserSummary.model_validate(row).model_dump(mode="json", by_alias=True)
                for row in rows
            ]

            if self.cache:
                self.cache.set_json(
                    DASHBOARD_USERS_KEY, user_list, ttl=settings.dashboard_cache_ttl
                )

            return ActionResult.ok(users=user_list)
        except Exception:
            logger.exception("users_fetch_failed")
            return ActionResult.fail("Failed to fetch users.")

    async def get_centers(self) -> ActionResult:
        """List centers for the dashboard."""
        try:
            if self.cache:
                cached = self.cache.get_json(DASHBOARD_CENTERS_KEY)
                if cached is not None:
                    return ActionResult.ok(centers=cached)

            rows = await self.centers.list_centers(self.db)
            center_list = [CenterSummary.from_row(row).model_dump(mode="json") for row in rows]

            if self.cache:
                self.cache.set_json(
                    DASHBOARD_CENTERS_KEY, center_list, ttl=settings.dashboard_cache_ttl
                )

            return ActionResult.ok(centers=center_list)
        except Exception:
            logger.exception("centers_fetch_failed")
            return ActionResult.fail("Failed to fetch centers.")

    async def update_user_role(self, data: Any) -> ActionResult:
        """
        Change another user's role.

        Checks, in order: payload shape, actor is an administrator, target
        exists, target is not the actor.
        """
        try:
            request = UpdateUserRoleRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            admin_user = await self.require_admin(request.admin_firebase_uid)

            target_user = await self.users.get_user_by_id(self.db, request.target_user_id)
            if not target_user:
                raise NotFoundException("Target user not found.")

            if admin_user["firebase_uid"] == target_user["firebase_uid"]:
                raise SelfModificationException()

            updated = await self.users.update_role(self.db, target_user["id"], request.new_role)
            if not updated:
                raise NotFoundException("Target user not found.")

            logger.info(
                "user_role_updated",
                target_user_id=str(request.target_user_id),
                old_role=target_user["role"],
                new_role=request.new_role,
                actor=request.admin_firebase_uid,
            )
            return ActionResult.ok()
        except AppException as e:
            return ActionResult.from_exception(e)
        except Exception:
            logger.exception("user_role_update_failed", target_user_id=str(request.target_user_id))
            return ActionResult.fail("An internal error occurred while updating the role.")

    async def verify_center(self, data: Any) -> ActionResult:
        """Approve a center. Approving an approved center is a no-op success."""
        try:
            request = CenterActionRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            await self.require_admin(request.admin_firebase_uid)

            center = await self.centers.mark_verified(self.db, request.center_id)
            if not center:
                raise NotFoundException("Center not found.")

            logger.info(
                "center_verified",
                center_id=str(request.center_id),
                actor=request.admin_firebase_uid,
            )
            return ActionResult.ok()
        except AppException as e:
            return ActionResult.from_exception(e)
        except Exception:
            logger.exception("center_verify_failed", center_id=str(request.center_id))
            return ActionResult.fail("An internal error occurred while verifying the center.")

    async def reject_center(self, data: Any) -> ActionResult:
        """
        Reject a center and delete its registration.

        The center's identity provider account, if any, is deleted first on a
        best-effort basis. The database record is always deleted.
        """
        try:
            request = CenterActionRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            await self.require_admin(request.admin_firebase_uid)

            center = await self.centers.get_center(self.db, request.center_id)
            if not center:
                raise NotFoundException("Center not found.")

            if center["uid"]:
                try:
                    await self.identity_provider.delete_account(center["uid"])
                except Exception as e:
                    logger.warning(
                        "identity_account_delete_failed",
                        uid=center["uid"],
                        center_id=str(request.center_id),
                        error=str(e),
                    )

            await self.centers.delete_center(self.db, request.center_id)

            logger.info(
                "center_rejected",
                center_id=str(request.center_id),
                actor=request.admin_firebase_uid,
            )
            return ActionResult.ok()
        except AppException as e:
            return ActionResult.from_exception(e)
        except Exception:
            logger.exception("center_reject_failed", center_id=str(request.center_id))
            return ActionResult.fail("An internal error occurred while rejecting the center.")

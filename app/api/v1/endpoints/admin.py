"""Admin dashboard endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.exceptions import AppException, UnauthorizedException
from app.dependencies import CacheManagerDep, DatabaseSession, IdentityProviderDep
from app.schemas.results import ActionResult
from app.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_admin_service(
    db: DatabaseSession,
    identity_provider: IdentityProviderDep,
    cache_manager: CacheManagerDep,
) -> AdminService:
    """Build the admin workflow for this request."""
    return AdminService(db, identity_provider, cache_manager)


AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
Payload = Annotated[Any, Body()]


async def _session_uid(
    service: AdminService,
    authorization: str | None,
) -> tuple[str | None, ActionResult | None]:
    """Verify the bearer ID token and return the uid it was issued to."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None, ActionResult.fail("Authentication required.", status_code=401)

    try:
        session = await service.identity_provider.verify_session(
            authorization.split(" ", 1)[1].strip()
        )
    except UnauthorizedException as e:
        return None, ActionResult.from_exception(e)

    return session.get("uid"), None


async def check_actor_token(
    service: AdminService,
    authorization: str | None,
    payload: Any,
) -> ActionResult | None:
    """
    Match the bearer ID token against ``adminFirebaseUid``.

    Only enforced when ENFORCE_ACTOR_TOKEN is set. The workflow re-checks the
    actor's role either way.

    Returns:
        A failure result, or None when the caller may proceed
    """
    if not settings.enforce_actor_token:
        return None

    uid, denied = await _session_uid(service, authorization)
    if denied:
        return denied

    actor = None
    if isinstance(payload, dict):
        actor = payload.get("adminFirebaseUid", payload.get("admin_firebase_uid"))

    if not actor or uid != actor:
        return ActionResult.fail("Session does not match the acting administrator.", status_code=401)

    return None


async def check_dashboard_token(
    service: AdminService,
    authorization: str | None,
) -> ActionResult | None:
    """
    Require an administrator's bearer ID token to read the dashboard lists.

    Only enforced when ENFORCE_ACTOR_TOKEN is set.
    """
    if not settings.enforce_actor_token:
        return None

    uid, denied = await _session_uid(service, authorization)
    if denied:
        return denied

    try:
        await service.require_admin(uid or "")
    except AppException as e:
        return ActionResult.from_exception(e)

    return None


@router.get("/users", summary="List all users (admin dashboard)")
async def list_users(
    service: AdminServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """
    Get every user with their role.

    Returns:
        ``{"success": true, "users": [...]}`` or ``{"success": false, "error": ...}``
    """
    denied = await check_dashboard_token(service, authorization)
    if denied:
        return denied.to_response()

    result = await service.get_users()
    return result.to_response()


@router.get("/centers", summary="List all centers (admin dashboard)")
async def list_centers(
    service: AdminServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """
    Get every center with its verification state.

    Returns:
        ``{"success": true, "centers": [...]}`` or ``{"success": false, "error": ...}``
    """
    denied = await check_dashboard_token(service, authorization)
    if denied:
        return denied.to_response()

    result = await service.get_centers()
    return result.to_response()


@router.patch("/users/role", summary="Change a user's role (admin only)")
async def update_user_role(
    payload: Payload,
    service: AdminServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """
    Change another user's role.

    Body: ``{"targetUserId", "newRole", "adminFirebaseUid"}``.
    """
    denied = await check_actor_token(service, authorization, payload)
    if denied:
        return denied.to_response()

    result = await service.update_user_role(payload)
    return result.to_response()


@router.post("/centers/verify", summary="Approve a center (admin only)")
async def verify_center(
    payload: Payload,
    service: AdminServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """
    Mark a center as verified.

    Body: ``{"centerId", "adminFirebaseUid"}``.
    """
    denied = await check_actor_token(service, authorization, payload)
    if denied:
        return denied.to_response()

    result = await service.verify_center(payload)
    return result.to_response()


@router.post("/centers/reject", summary="Reject and delete a center (admin only)")
async def reject_center(
    payload: Payload,
    service: AdminServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """
    Delete a center registration and, best effort, its Firebase account.

    Body: ``{"centerId", "adminFirebaseUid"}``. This cannot be undone.
    """
    denied = await check_actor_token(service, authorization, payload)
    if denied:
        return denied.to_response()

    result = await service.reject_center(payload)
    return result.to_response()

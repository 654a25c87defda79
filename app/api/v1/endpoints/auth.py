"""Sign-up and email verification endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.dependencies import CacheManagerDep, DatabaseSession, IdentityProviderDep
from app.services.registration_service import RegistrationService

router = APIRouter()


def get_registration_service(
    db: DatabaseSession,
    identity_provider: IdentityProviderDep,
    cache_manager: CacheManagerDep,
) -> RegistrationService:
    return RegistrationService(db, identity_provider, cache_manager)


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]


@router.post("/signup", tags=["Authentication"], summary="Create a citizen account")
async def signup(
    payload: Annotated[Any, Body()],
    service: RegistrationServiceDep,
) -> JSONResponse:
    """
    Create the Firebase account, send the verification email and store the profile.

    Body: ``{"firstName", "lastName", "email", "password"}``.
    """
    result = await service.signup(payload)
    return result.to_response()


@router.post(
    "/verification/resend",
    tags=["Authentication"],
    summary="Resend the verification email",
)
async def resend_verification_email(
    payload: Annotated[Any, Body()],
    service: RegistrationServiceDep,
) -> JSONResponse:
    """
    Resend the verification email to the signed-in account.

    Body: ``{"email", "idToken"}``.
    """
    result = await service.resend_verification_email(payload)
    return result.to_response()


@router.post(
    "/verification/sync",
    tags=["Authentication"],
    summary="Record a completed email verification",
)
async def sync_email_verification(
    payload: Annotated[Any, Body()],
    service: RegistrationServiceDep,
) -> JSONResponse:
    """
    Copy the email-verified flag from a fresh ID token onto the profile.

    Body: ``{"idToken"}``.
    """
    result = await service.sync_email_verification(payload)
    return result.to_response()

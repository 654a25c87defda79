"""Center registration endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from app.api.v1.endpoints.auth import RegistrationServiceDep

router = APIRouter(prefix="/centers", tags=["Centers"])


@router.post("", summary="Register a vaccination center")
async def register_center(
    payload: Annotated[Any, Body()],
    service: RegistrationServiceDep,
) -> JSONResponse:
    """
    Register a center. It stays unverified until an administrator approves it.

    Body: ``{"centerName", "email", "district", "address", "password"?}``.
    """
    result = await service.register_center(payload)
    return result.to_response()

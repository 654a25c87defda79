"""Citizen vaccination registration endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from app.dependencies import DatabaseSession
from app.services.citizen_service import CitizenService

router = APIRouter(prefix="/citizens", tags=["Citizens"])


@router.post("/registrations", summary="Register a citizen for vaccination")
async def register_citizen(
    payload: Annotated[Any, Body()],
    db: DatabaseSession,
) -> JSONResponse:
    """
    Store a vaccination registration.

    Body: ``{"fullName", "day", "month", "year", "idType", "idNumber", "contact"}``.
    """
    result = await CitizenService(db).register_citizen(payload)
    return result.to_response()

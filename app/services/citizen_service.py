"""Citizen vaccination registration."""

from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.models.citizen_registrations import citizen_registrations
from app.schemas.citizens import CitizenRegistrationRequest
from app.schemas.results import ActionResult

logger = get_logger(__name__)

DUPLICATE_ID_MESSAGE = "This ID is already registered."


class CitizenService:
    """Service for citizen registration operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_identity_document(self, id_type: str, id_number: str) -> dict | None:
        """Find a registration by identity document."""
        query = select(citizen_registrations).where(
            citizen_registrations.c.id_type == id_type,
            citizen_registrations.c.id_number == id_number,
        )
        result = await self.db.execute(query)
        row = result.mappings().first()
        return dict(row) if row else None

    async def register_citizen(self, data: Any) -> ActionResult:
        """Store a vaccination registration. One per identity document."""
        try:
            request = CitizenRegistrationRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        id_number = request.id_number.strip()

        try:
            if await self.get_by_identity_document(request.id_type, id_number):
                return ActionResult.fail(DUPLICATE_ID_MESSAGE, status_code=409)

            query = (
                citizen_registrations.insert()
                .values(
                    full_name=request.full_name.strip(),
                    date_of_birth=request.date_of_birth,
                    id_type=request.id_type,
                    id_number=id_number,
                    contact=request.contact.strip(),
                )
                .returning(citizen_registrations.c.id)
            )
            try:
                result = await self.db.execute(query)
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                return ActionResult.fail(DUPLICATE_ID_MESSAGE, status_code=409)

            registration_id = result.scalar_one()
            logger.info("citizen_registered", registration_id=str(registration_id))
            return ActionResult.ok(status_code=201, registrationId=str(registration_id))
        except Exception:
            logger.exception("citizen_registration_failed")
            return ActionResult.fail("An unexpected error occurred during registration.")

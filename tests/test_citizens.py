"""Tests for citizen vaccination registration."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.models.citizen_registrations import citizen_registrations
from app.services.citizen_service import CitizenService

FORM = {
    "fullName": "Karim Ahmed",
    "day": "15",
    "month": "8",
    "year": "1990",
    "idType": "nid",
    "idNumber": "19901234567890123",
    "contact": "01711000000",
}


@pytest.mark.asyncio
class TestCitizenRegistration:
    """registerCitizen."""

    async def test_registration_is_stored(self, db_session):
        result = await CitizenService(db_session).register_citizen(FORM)

        assert result.success is True
        assert result.status_code == 201
        row = (await db_session.execute(select(citizen_registrations))).mappings().one()
        assert row["date_of_birth"] == date(1990, 8, 15)
        assert row["id_type"] == "nid"
        assert str(row["id"]) == result.registrationId

    async def test_same_document_twice(self, db_session):
        service = CitizenService(db_session)

        await service.register_citizen(FORM)
        result = await service.register_citizen({**FORM, "fullName": "Someone Else"})

        assert result.success is False
        assert result.error == "This ID is already registered."
        assert result.status_code == 409

    async def test_same_number_different_document_type(self, db_session):
        service = CitizenService(db_session)

        await service.register_citizen(FORM)
        result = await service.register_citizen({**FORM, "idType": "birth_certificate"})

        assert result.success is True

    @pytest.mark.parametrize(
        "changes",
        [
            {"day": "31", "month": "2"},
            {"day": "aa"},
            {"year": str(date.today().year + 1)},
            {"idType": "driving_license"},
            {"fullName": ""},
            {"contact": ""},
            {"idType": "nid", "idNumber": "12"},
            {"idType": "nid", "idNumber": "1990123456789012A"},
            {"idType": "passport", "idNumber": "ABC"},
            {"idType": "passport", "idNumber": "1234567890"},
        ],
    )
    async def test_invalid_form(self, db_session, changes):
        result = await CitizenService(db_session).register_citizen({**FORM, **changes})

        assert result.success is False
        assert result.error == "Invalid input data."

    async def test_passport_number(self, db_session):
        result = await CitizenService(db_session).register_citizen(
            {**FORM, "idType": "passport", "idNumber": "123456789"}
        )

        assert result.success is True

    async def test_birth_certificate_number_is_free_form(self, db_session):
        result = await CitizenService(db_session).register_citizen(
            {**FORM, "idType": "birth_certificate", "idNumber": "BC-2001/77"}
        )

        assert result.success is True

    async def test_born_today_is_accepted(self, db_session):
        today = date.today()
        result = await CitizenService(db_session).register_citizen(
            {
                **FORM,
                "idType": "birth_certificate",
                "day": str(today.day),
                "month": str(today.month),
                "year": str(today.year),
            }
        )

        assert result.success is True

    async def test_registration_endpoint(self, client: AsyncClient):
        response = await client.post("/api/v1/citizens/registrations", json=FORM)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert "registrationId" in body

    async def test_future_birth_date_endpoint(self, client: AsyncClient):
        tomorrow = date.today() + timedelta(days=1)
        response = await client.post(
            "/api/v1/citizens/registrations",
            json={**FORM, "day": str(tomorrow.day), "month": str(tomorrow.month), "year": str(tomorrow.year)},
        )

        assert response.status_code == 400

"""Citizen vaccination registration schemas."""

import re
from datetime import date
from typing import Literal

from pydantic import Field, model_validator

from app.schemas.admin import CamelModel

# Document number formats, by document type
ID_NUMBER_PATTERNS = {
    "nid": re.compile(r"\d{17}"),
    "passport": re.compile(r"\d{9}"),
}


class CitizenRegistrationRequest(CamelModel):
    """Vaccination registration form. Date of birth arrives as three fields."""

    full_name: str = Field(..., min_length=1, max_length=200)
    day: str = Field(..., min_length=1)
    month: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    id_type: Literal["nid", "passport", "birth_certificate"]
    id_number: str = Field(..., min_length=1, max_length=64)
    contact: str = Field(..., min_length=1, max_length=200)

    @model_validator(mode="after")
    def check_date_of_birth(self) -> "CitizenRegistrationRequest":
        if self.date_of_birth > date.today():
            raise ValueError("date of birth is in the future")
        return self

    @model_validator(mode="after")
    def check_id_number(self) -> "CitizenRegistrationRequest":
        pattern = ID_NUMBER_PATTERNS.get(self.id_type)
        if pattern and not pattern.fullmatch(self.id_number):
            raise ValueError(f"malformed {self.id_type} number")
        return self

    @property
    def date_of_birth(self) -> date:
        # Raises ValueError for non-numeric parts or impossible dates
        return date(int(self.year), int(self.month), int(self.day))

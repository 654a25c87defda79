"""Center registration schemas."""

from pydantic import EmailStr, Field, field_validator

from app.schemas.admin import CamelModel


class CenterRegistrationRequest(CamelModel):
    """A vaccination center asking to be listed."""

    center_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    district: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)
    # When given, a provider account is created for the center
    password: str | None = Field(default=None, min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Center emails are unique regardless of case."""
        return v.lower()

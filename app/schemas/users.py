"""User and signup schemas for request/response validation."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.admin import CamelModel, Role


class SignupRequest(CamelModel):
    """Citizen account sign-up form."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    # Strength is enforced by the identity provider
    password: str = Field(..., min_length=1)


class UserCreate(CamelModel):
    """Schema for creating a new user."""

    firebase_uid: str = Field(..., description="Firebase user ID")
    email: str
    first_name: str
    last_name: str
    email_verified: bool = False
    role: Role = "citizen"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserProfile(CamelModel):
    """User returned to the client after sign-up. No internal id."""

    firebase_uid: str
    email: str
    first_name: str
    last_name: str
    display_name: str
    role: Role
    email_verified: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ResendVerificationRequest(CamelModel):
    """Resend the verification email for the signed-in account."""

    email: EmailStr
    id_token: str = Field(..., min_length=1)


class VerificationSyncRequest(CamelModel):
    """Copy the provider's email-verified flag onto the local profile."""

    id_token: str = Field(..., min_length=1)

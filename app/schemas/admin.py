"""Admin-specific schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Role = Literal["citizen", "authority", "center"]


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, snake_case accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UpdateUserRoleRequest(CamelModel):
    """Payload for changing a user's role."""

    target_user_id: UUID = Field(..., description="Internal id of the user to change")
    new_role: Role
    admin_firebase_uid: str = Field(..., min_length=1)


class CenterActionRequest(CamelModel):
    """Payload for approving or rejecting a center."""

    center_id: UUID
    admin_firebase_uid: str = Field(..., min_length=1)


class AdminUserSummary(CamelModel):
    """User row as listed on the admin dashboard."""

    id: UUID
    firebase_uid: str
    first_name: str
    last_name: str
    email: str
    role: Role
    created_at: datetime | None = None


class CenterLocation(BaseModel):
    """Where a center is."""

    district: str
    address: str


class CenterSummary(BaseModel):
    """Center row as listed on the admin dashboard."""

    id: UUID
    center_name: str
    email: str
    location: CenterLocation
    verified: bool

    @classmethod
    def from_row(cls, row: dict) -> "CenterSummary":
        return cls(
            id=row["id"],
            center_name=row["center_name"],
            email=row["email"],
            location=CenterLocation(district=row["district"], address=row["address"]),
            verified=row["verified"],
        )

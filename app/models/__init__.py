"""Database models."""

from app.models.centers import centers
from app.models.citizen_registrations import citizen_registrations
from app.models.users import users

__all__ = [
    "centers",
    "citizen_registrations",
    "users",
]

"""Vaccination center model definition using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    MetaData,
    Table,
    Text,
    Uuid,
    func,
    text,
)

metadata = MetaData()

centers = Table(
    "centers",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4),
    # Firebase account of the center; empty until the center has signed up
    Column("uid", Text, nullable=True, unique=True, index=True),
    Column("center_name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True, index=True),
    # Location
    Column("district", Text, nullable=False, index=True),
    Column("address", Text, nullable=False),
    # Pending until an administrator approves it
    Column("verified", Boolean, nullable=False, default=False, server_default=text("false")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

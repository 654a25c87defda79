"""Citizen vaccination registration model definition using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

metadata = MetaData()

ID_TYPES = ("nid", "passport", "birth_certificate")

citizen_registrations = Table(
    "citizen_registrations",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4),
    Column("full_name", Text, nullable=False),
    Column("date_of_birth", Date, nullable=False),
    # One of ID_TYPES
    Column("id_type", String(32), nullable=False),
    Column("id_number", String(64), nullable=False),
    # Email address or mobile number
    Column("contact", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    UniqueConstraint("id_type", "id_number", name="uq_citizen_registrations_id"),
)

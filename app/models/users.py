"""User model definition using SQLAlchemy Core."""

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

USER_ROLES = ("citizen", "authority", "center")

users = Table(
    "users",
    metadata,
    # Internal ID (store assigned)
    Column("id", Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4),
    # Firebase identity, immutable after creation
    Column("firebase_uid", Text, nullable=False, unique=True, index=True),
    Column("email", Text, nullable=False, index=True),
    Column("email_verified", Boolean, nullable=False, default=False, server_default=text("false")),
    # Profile
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("display_name", Text, nullable=False),
    # One of USER_ROLES
    Column("role", Text, nullable=False, default="citizen", server_default=text("'citizen'")),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

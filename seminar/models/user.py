"""User ORM — identity, credentials and role labels of a registered user.

Invariants:
    - email is unique
    - roles holds role labels ("instructor", "participant"), assigned at signup
    - Owns at most one InstructorProfile and at most one ParticipantProfile
    - Never deleted by any operation in scope

Design Decisions:
    - JSON column for roles: a small label set, replaced wholesale, never mutated in place
    - Profiles as separate tables: each role carries its own fields and associations
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seminar.db.base import Base


class User(Base):
    """User aggregate root — owns its role profiles."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    roles: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    instructor_profile: Mapped["InstructorProfile"] = relationship(
        "InstructorProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
    participant_profile: Mapped["ParticipantProfile"] = relationship(
        "ParticipantProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )

"""ParticipantProfile ORM — the participant sub-identity of a User.

Invariants:
    - Belongs to exactly one User (user_id unique FK)
    - accepted gates enrollment: only accepted participants may enter seminars
    - memberships is unordered; one SeminarParticipant per seminar entered
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seminar.db.base import Base


class ParticipantProfile(Base):
    """Participant profile — enrolls in seminars once accepted."""
    __tablename__ = "participant_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    university: Mapped[str] = mapped_column(
        String(100), nullable=False, default="",
    )
    accepted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User", back_populates="participant_profile", lazy="selectin",
    )
    memberships: Mapped[list["SeminarParticipant"]] = relationship(
        "SeminarParticipant", back_populates="participant_profile",
        cascade="all, delete-orphan", lazy="selectin",
    )

"""SeminarParticipant ORM — join entity between a Seminar and a ParticipantProfile.

Invariants:
    - Unique per (seminar_id, participant_profile_id)
    - Created only by the enter-later operation; never updated
    - Destroyed only by cascade from either side
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seminar.db.base import Base


class SeminarParticipant(Base):
    """Membership of one participant in one seminar."""
    __tablename__ = "seminar_participants"
    __table_args__ = (
        UniqueConstraint(
            "seminar_id", "participant_profile_id",
            name="uq_seminar_participants_seminar_profile",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    seminar_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("seminars.id", ondelete="CASCADE"),
        nullable=False,
    )
    participant_profile_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("participant_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    seminar: Mapped["Seminar"] = relationship(
        "Seminar", back_populates="participants", lazy="selectin",
    )
    participant_profile: Mapped["ParticipantProfile"] = relationship(
        "ParticipantProfile", back_populates="memberships", lazy="selectin",
    )

"""Seminar ORM — a seminar with its charger, instructors and participants.

Invariants:
    - capacity and count are positive integers
    - time matches H:MM / HH:MM (validated by the rule layer, stored as text)
    - len(participants) never exceeds capacity
    - charger_id is the designated owner; only that user may update the seminar
    - version increments on every UPDATE (optimistic locking)

Design Decisions:
    - Explicit charger_id over "first instructor in the collection": ownership
      does not depend on collection ordering
    - version_id_col: a stale concurrent enrollment fails at flush with
      StaleDataError instead of overbooking the seminar
    - cascade delete for participant associations: seminar owns them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seminar.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Seminar(Base):
    """Seminar aggregate root — owns its participant associations."""
    __tablename__ = "seminars"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    online: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    charger_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    charger: Mapped["User"] = relationship(
        "User", lazy="selectin",
    )
    instructors: Mapped[list["InstructorProfile"]] = relationship(
        "InstructorProfile", back_populates="seminar", lazy="selectin",
    )
    participants: Mapped[list["SeminarParticipant"]] = relationship(
        "SeminarParticipant", back_populates="seminar",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SeminarParticipant.joined_at",
    )

    @property
    def participant_count(self) -> int:
        return len(self.participants)

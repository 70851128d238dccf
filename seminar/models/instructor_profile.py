"""InstructorProfile ORM — the instructor sub-identity of a User.

Invariants:
    - Belongs to exactly one User (user_id unique FK)
    - seminar_id is null until the instructor takes charge of a seminar
    - Charges at most one seminar at a time

Design Decisions:
    - seminar_id on the profile (many-to-one): a seminar's instructor set is the
      set of profiles pointing at it, so the collection cannot drift from the FK
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seminar.db.base import Base


class InstructorProfile(Base):
    """Instructor profile — may charge one seminar."""
    __tablename__ = "instructor_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    company: Mapped[str] = mapped_column(
        String(100), nullable=False, default="",
    )
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    seminar_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("seminars.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User", back_populates="instructor_profile", lazy="selectin",
    )
    seminar: Mapped["Seminar"] = relationship(
        "Seminar", back_populates="instructors", lazy="selectin",
    )

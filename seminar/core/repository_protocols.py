"""Boundary Protocols — the ORM attributes the rule layer reads.

Invariants:
    - Core NEVER imports from services/infrastructure; dependency arrows point inward only

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - *Like protocols describe the ORM attributes the pure checks read, so
      core/enforce_enrollment.py stays testable with transient objects
"""

from typing import Protocol, Sequence
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for User objects read by the enrollment checks."""
    id: UUID
    roles: list[str]

    @property
    def instructor_profile(self) -> "InstructorProfileLike | None": ...

    @property
    def participant_profile(self) -> "ParticipantProfileLike | None": ...


class InstructorProfileLike(Protocol):
    user_id: UUID
    seminar_id: UUID | None

    @property
    def seminar(self) -> object | None: ...


class ParticipantProfileLike(Protocol):
    user_id: UUID
    accepted: bool


class SeminarParticipantLike(Protocol):
    @property
    def participant_profile(self) -> ParticipantProfileLike: ...


class SeminarLike(Protocol):
    """Structural contract for Seminar objects read by the enrollment checks."""
    id: UUID
    capacity: int
    charger_id: UUID | None

    @property
    def instructors(self) -> Sequence[InstructorProfileLike]: ...

    @property
    def participants(self) -> Sequence[SeminarParticipantLike]: ...

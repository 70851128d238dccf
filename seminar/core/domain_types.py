"""Domain Types — enums shared across the rule layer.

Invariants:
    - Role labels and sort orders are encoded as Enums, never matched as raw strings

Design Decisions:
    - str Enums: compare equal to the raw strings stored in the DB and sent over HTTP
"""

from enum import Enum


class Role(str, Enum):
    """Role labels a user can hold."""
    INSTRUCTOR = "instructor"
    PARTICIPANT = "participant"

    @classmethod
    def values(cls) -> list[str]:
        return [r.value for r in cls]


class SeminarOrder(str, Enum):
    """Sort direction for seminar listings, by creation time."""
    EARLIEST = "earliest"
    LATEST = "latest"

    @classmethod
    def from_param(cls, value: str | None) -> "SeminarOrder":
        """Only 'earliest' sorts ascending; anything else means newest first."""
        if value == cls.EARLIEST.value:
            return cls.EARLIEST
        return cls.LATEST


class EnrollmentState(str, Enum):
    """Per (seminar, user) state. Both entered states are terminal."""
    NOT_ENTERED = "not_entered"
    ENTERED_AS_PARTICIPANT = "entered_as_participant"
    ENTERED_AS_INSTRUCTOR = "entered_as_instructor"

"""Seminar Schemas — Pydantic models for seminar requests and responses.

Invariants:
    - capacity and count are positive integers when present
    - time and online are passed through as strings; the rule layer validates them
      so failures carry INVALID_TIME_FORMAT / INVALID_ONLINE_VALUE codes
    - SeminarUpdate fields are all optional; None means "leave unchanged"

Design Decisions:
    - JSON booleans for online are accepted and turned into "true"/"false"
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from seminar.models.seminar import Seminar


def _online_to_str(v):
    if isinstance(v, bool):
        return "true" if v else "false"
    return v


class SeminarCreate(BaseModel):
    """Seminar registration request."""
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(gt=0)
    count: int = Field(gt=0)
    time: str
    online: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("online", mode="before")
    @classmethod
    def online_bool_to_str(cls, v):
        return _online_to_str(v)


class SeminarUpdate(BaseModel):
    """Partial seminar update — only provided fields are applied."""
    count: int | None = Field(None, gt=0)
    time: str | None = None
    online: str | None = None
    capacity: int | None = Field(None, gt=0)

    @field_validator("online", mode="before")
    @classmethod
    def online_bool_to_str(cls, v):
        return _online_to_str(v)


class EnterRequest(BaseModel):
    """Late entry into an existing seminar."""
    role: str


class InstructorSummary(BaseModel):
    id: UUID
    name: str
    email: str
    company: str


class ParticipantSummary(BaseModel):
    id: UUID
    name: str
    email: str
    university: str
    joined_at: datetime


class SeminarResponse(BaseModel):
    """Full seminar detail, including both association collections."""
    id: UUID
    name: str
    capacity: int
    count: int
    time: str
    online: bool
    charger_id: UUID | None
    created_at: datetime
    instructors: list[InstructorSummary]
    participants: list[ParticipantSummary]
    participant_count: int

    @classmethod
    def from_model(cls, seminar: Seminar) -> "SeminarResponse":
        return cls(
            id=seminar.id,
            name=seminar.name,
            capacity=seminar.capacity,
            count=seminar.count,
            time=seminar.time,
            online=seminar.online,
            charger_id=seminar.charger_id,
            created_at=seminar.created_at,
            instructors=[
                InstructorSummary(
                    id=i.user.id, name=i.user.name,
                    email=i.user.email, company=i.company,
                )
                for i in seminar.instructors
            ],
            participants=[
                ParticipantSummary(
                    id=p.participant_profile.user.id,
                    name=p.participant_profile.user.name,
                    email=p.participant_profile.user.email,
                    university=p.participant_profile.university,
                    joined_at=p.joined_at,
                )
                for p in seminar.participants
            ],
            participant_count=seminar.participant_count,
        )


class SeminarListItem(BaseModel):
    """Seminar row in listings — participants reduced to a count."""
    id: UUID
    name: str
    time: str
    online: bool
    created_at: datetime
    instructors: list[InstructorSummary]
    participant_count: int

    @classmethod
    def from_model(cls, seminar: Seminar) -> "SeminarListItem":
        return cls(
            id=seminar.id,
            name=seminar.name,
            time=seminar.time,
            online=seminar.online,
            created_at=seminar.created_at,
            instructors=[
                InstructorSummary(
                    id=i.user.id, name=i.user.name,
                    email=i.user.email, company=i.company,
                )
                for i in seminar.instructors
            ],
            participant_count=seminar.participant_count,
        )

"""User Schemas — Pydantic models for signup, signin and user responses.

Invariants:
    - SignupRequest.email is stripped and lower-cased
    - year, when given, is a positive integer
    - role is checked by the rule layer (INVALID_ROLE), not here

Design Decisions:
    - role kept as plain str: an unknown role is a domain error with its own code,
      not a generic VALIDATION_ERROR
    - from_model classmethods: one place maps ORM objects to the public shape
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from seminar.models.user import User

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SignupRequest(BaseModel):
    """Signup — creates the user and the profile matching its role."""
    email: str = Field(max_length=254, pattern=_EMAIL_PATTERN)
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=72)
    role: str

    # role == "participant"
    university: str = Field("", max_length=100)
    accepted: bool = True

    # role == "instructor"
    company: str = Field("", max_length=100)
    year: int | None = Field(None, gt=0)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SigninRequest(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class InstructorProfileResponse(BaseModel):
    id: UUID
    company: str
    year: int | None
    seminar_id: UUID | None


class ParticipantProfileResponse(BaseModel):
    id: UUID
    university: str
    accepted: bool
    seminar_ids: list[UUID]


class UserResponse(BaseModel):
    """User response — public-facing user data with both profiles."""
    id: UUID
    name: str
    email: str
    roles: list[str]
    created_at: datetime
    instructor_profile: InstructorProfileResponse | None = None
    participant_profile: ParticipantProfileResponse | None = None

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        instructor = user.instructor_profile
        participant = user.participant_profile
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            roles=list(user.roles),
            created_at=user.created_at,
            instructor_profile=(
                InstructorProfileResponse(
                    id=instructor.id,
                    company=instructor.company,
                    year=instructor.year,
                    seminar_id=(
                        instructor.seminar.id if instructor.seminar else None
                    ),
                )
                if instructor else None
            ),
            participant_profile=(
                ParticipantProfileResponse(
                    id=participant.id,
                    university=participant.university,
                    accepted=participant.accepted,
                    seminar_ids=[m.seminar.id for m in participant.memberships],
                )
                if participant else None
            ),
        )


class AuthResponse(BaseModel):
    """Signup/signin response — the user plus a bearer token."""
    user: UserResponse
    token: str

"""User Service — signup, signin, lookup and bearer-token authentication.

Invariants:
    - signup creates exactly the profile matching the requested role
    - Duplicate emails rejected with DuplicateEmailError before any insert
    - Every operation flushes through the caller's unit of work; the route commits

Design Decisions:
    - Unknown email and wrong password produce the same InvalidCredentialsError
      (no account enumeration)
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from seminar.config import get_settings
from seminar.core.domain_types import Role
from seminar.core.errors import (
    DuplicateEmailError,
    ErrorContext,
    InvalidCredentialsError,
    InvalidRoleError,
    UserNotFoundError,
)
from seminar.models.instructor_profile import InstructorProfile
from seminar.models.participant_profile import ParticipantProfile
from seminar.models.user import User
from seminar.schemas.user import SignupRequest
from seminar.services.authentication import (
    TokenStore, hash_password, verify_password,
)
from seminar.services.repositories import SqlUserRepository

logger = logging.getLogger(__name__)


class UserService:
    """User rule layer over one unit of work."""

    def __init__(self, db: AsyncSession):
        settings = get_settings()
        self.db = db
        self.users = SqlUserRepository(db)
        self.tokens = TokenStore(db, settings.token_bytes)
        self._hash_rounds = settings.password_hash_rounds

    async def signup(self, body: SignupRequest) -> tuple[User, str]:
        """Create a user with one role and its profile, then issue a token."""
        if body.role not in Role.values():
            raise InvalidRoleError(body.role)
        if await self.users.find_by_email(body.email) is not None:
            raise DuplicateEmailError(body.email)

        role = Role(body.role)
        user = User(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password, self._hash_rounds),
            roles=[role.value],
            instructor_profile=None,
            participant_profile=None,
        )
        if role is Role.INSTRUCTOR:
            user.instructor_profile = InstructorProfile(
                company=body.company, year=body.year, seminar=None,
            )
        else:
            user.participant_profile = ParticipantProfile(
                university=body.university, accepted=body.accepted,
                memberships=[],
            )
        await self.users.save(user)
        token = await self.tokens.issue(user)
        logger.info(
            f"User signed up as {role.value}",
            extra={"user_id": str(user.id), "role": role.value},
        )
        return user, token

    async def signin(self, email: str, password: str) -> tuple[User, str]:
        user = await self.users.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid email or password")
        token = await self.tokens.issue(user)
        logger.info("User signed in", extra={"user_id": str(user.id)})
        return user, token

    async def get_user(self, user_id: UUID) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id), ErrorContext(user_id=str(user_id)))
        return user

    async def authenticate(self, token: str | None) -> User:
        """Resolve the acting user from a bearer token."""
        return await self.tokens.resolve(token)

"""Authentication — bcrypt password hashing and opaque bearer tokens.

Invariants:
    - Passwords are stored only as bcrypt hashes
    - Tokens are random URL-safe strings persisted in auth_tokens; they carry no claims
    - A missing or unknown token raises InvalidCredentialsError

Design Decisions:
    - Opaque DB-backed tokens: revocable by deleting the row, no signing key to manage
    - bcrypt input truncated to 72 bytes explicitly (bcrypt's own limit)
"""

import logging
import secrets

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seminar.core.errors import InvalidCredentialsError
from seminar.models.auth_token import AuthToken
from seminar.models.user import User

logger = logging.getLogger(__name__)

_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


class TokenStore:
    """Issues and resolves bearer tokens within the caller's unit of work."""

    def __init__(self, db: AsyncSession, token_bytes: int = 32):
        self.db = db
        self.token_bytes = token_bytes

    async def issue(self, user: User) -> str:
        token = secrets.token_urlsafe(self.token_bytes)
        self.db.add(AuthToken(token=token, user=user))
        await self.db.flush()
        return token

    async def resolve(self, token: str | None) -> User:
        if not token:
            raise InvalidCredentialsError("Missing bearer token")
        result = await self.db.execute(
            select(AuthToken).where(AuthToken.token == token),
        )
        auth_token = result.scalar_one_or_none()
        if auth_token is None:
            logger.info("Rejected unknown bearer token")
            raise InvalidCredentialsError("Invalid or expired token")
        return auth_token.user

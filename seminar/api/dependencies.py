"""Request Dependencies — resolves the acting user for authenticated routes.

Invariants:
    - Shares the request's AsyncSession with the route (FastAPI caches get_db per request)
    - Missing, non-Bearer or unknown tokens raise InvalidCredentialsError → 401

Design Decisions:
    - HTTPBearer(auto_error=False): FastAPI parses the header, the domain error
      keeps the JSON envelope instead of FastAPI's own 403 body
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from seminar.infrastructure.database import get_db
from seminar.models.user import User
from seminar.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """FastAPI dependency: the user owning the bearer token."""
    token = credentials.credentials if credentials else None
    return await UserService(db).authenticate(token)

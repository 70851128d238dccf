"""User Routes — signup, signin and user lookup.

Invariants:
    - Signup and signin return a bearer token alongside the user
    - /me is declared before /{user_id} so it is not parsed as a UUID
    - Routes commit the unit of work; services only flush
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from seminar.api.dependencies import get_current_user
from seminar.infrastructure.database import commit_unit_of_work, get_db
from seminar.models.user import User
from seminar.schemas.user import (
    AuthResponse, SigninRequest, SignupRequest, UserResponse,
)
from seminar.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user as instructor or participant."""
    user, token = await UserService(db).signup(body)
    await commit_unit_of_work(db)
    return AuthResponse(user=UserResponse.from_model(user), token=token)


@router.post("/signin", response_model=AuthResponse)
async def signin(body: SigninRequest, db: AsyncSession = Depends(get_db)):
    """Exchange email and password for a fresh bearer token."""
    user, token = await UserService(db).signin(body.email, body.password)
    await commit_unit_of_work(db)
    return AuthResponse(user=UserResponse.from_model(user), token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    return UserResponse.from_model(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await UserService(db).get_user(user_id)
    return UserResponse.from_model(user)

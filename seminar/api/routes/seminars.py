"""Seminar Routes — register, update, look up, list and enter seminars.

Invariants:
    - Every route requires an authenticated user
    - Routes never contain business rules; SeminarService owns them
    - Mutating routes commit the unit of work after the service returns;
      any SeminarError rolls the whole request back
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from seminar.api.dependencies import get_current_user
from seminar.infrastructure.database import commit_unit_of_work, get_db
from seminar.models.user import User
from seminar.schemas.seminar import (
    EnterRequest,
    SeminarCreate,
    SeminarListItem,
    SeminarResponse,
    SeminarUpdate,
)
from seminar.services.seminar_service import SeminarService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/seminars", tags=["seminars"])


@router.post(
    "", response_model=SeminarResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_seminar(
    body: SeminarCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register a seminar charged by the calling instructor."""
    seminar = await SeminarService(db).register(body, user)
    await commit_unit_of_work(db)
    return SeminarResponse.from_model(seminar)


@router.put("/{seminar_id}", response_model=SeminarResponse)
async def update_seminar(
    seminar_id: UUID,
    body: SeminarUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partially update a seminar. Only its charger may do this."""
    seminar = await SeminarService(db).update(seminar_id, body, user)
    await commit_unit_of_work(db)
    return SeminarResponse.from_model(seminar)


@router.get("/{seminar_id}", response_model=SeminarResponse)
async def get_seminar(
    seminar_id: UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    seminar = await SeminarService(db).get_seminar(seminar_id)
    return SeminarResponse.from_model(seminar)


@router.get("", response_model=list[SeminarListItem])
async def list_seminars(
    name: str | None = Query(None),
    order: str | None = Query(None),
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List seminars, optionally filtered by name; order=earliest sorts oldest first."""
    params = {
        key: value
        for key, value in (("name", name), ("order", order))
        if value is not None
    }
    seminars = await SeminarService(db).list_seminars(params)
    return [SeminarListItem.from_model(s) for s in seminars]


@router.post(
    "/{seminar_id}/user", response_model=SeminarResponse,
    status_code=status.HTTP_201_CREATED,
)
async def enter_seminar(
    seminar_id: UUID,
    body: EnterRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Enter an existing seminar as participant or instructor."""
    seminar = await SeminarService(db).enter_seminar(seminar_id, body.role, user)
    await commit_unit_of_work(db)
    return SeminarResponse.from_model(seminar)

"""Seminar Service — register, update, query and late entry for seminars.

Invariants:
    - Every check runs before any mutation; the first failure aborts the operation
    - Mutations are flushed into the caller's unit of work, never committed here
    - Only the designated charger may update a seminar
    - Enrollment touches updated_at so the seminar's version always moves:
      two concurrent entries on one seminar cannot both commit

Design Decisions:
    - Pure checks live in core/enforce_enrollment.py; this module sequences them
      around store calls (functional core, imperative shell)
    - Query params resolved by key presence: 'name' filters, 'order=earliest' sorts ascending
"""

import logging
from datetime import datetime, timezone
from typing import Mapping, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from seminar.core.domain_types import Role, SeminarOrder
from seminar.core.enforce_enrollment import (
    check_capacity_update,
    check_charger,
    check_instructor_available,
    check_instructor_role,
    check_participant_eligible,
    validate_enter_prerequisites,
)
from seminar.core.errors import ErrorContext, SeminarNotFoundError, UserNotFoundError
from seminar.core.validate_fields import check_time_format, parse_online
from seminar.infrastructure.database import flush_unit_of_work
from seminar.models.seminar import Seminar
from seminar.models.seminar_participant import SeminarParticipant
from seminar.models.user import User
from seminar.schemas.seminar import SeminarCreate, SeminarUpdate
from seminar.services.repositories import SqlSeminarRepository, SqlUserRepository

logger = logging.getLogger(__name__)


class SeminarService:
    """Seminar rule layer over one unit of work."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = SqlUserRepository(db)
        self.seminars = SqlSeminarRepository(db)

    async def register(self, body: SeminarCreate, acting_user: User) -> Seminar:
        """Create a seminar charged by the acting instructor."""
        check_instructor_role(acting_user)
        time = check_time_format(body.time)
        online = parse_online(body.online, default=True)

        user = await self._reload_user(acting_user)
        profile = check_instructor_role(user)
        check_instructor_available(None, user)

        seminar = Seminar(
            name=body.name,
            capacity=body.capacity,
            count=body.count,
            time=time,
            online=online,
            charger=user,
            instructors=[],
            participants=[],
        )
        seminar.instructors.append(profile)
        await self.seminars.save(seminar)
        logger.info(
            f"Seminar '{seminar.name}' registered",
            extra={"seminar_id": str(seminar.id), "user_id": str(user.id)},
        )
        return seminar

    async def update(
        self, seminar_id: UUID, body: SeminarUpdate, acting_user: User,
    ) -> Seminar:
        """Apply the provided fields; absent fields stay unchanged."""
        seminar = await self._get_or_404(seminar_id, for_update=True)
        check_charger(seminar, acting_user)

        time = check_time_format(body.time) if body.time is not None else None
        online = parse_online(body.online)
        if body.capacity is not None:
            check_capacity_update(seminar, body.capacity, acting_user)

        if body.count is not None:
            seminar.count = body.count
        if time is not None:
            seminar.time = time
        if online is not None:
            seminar.online = online
        if body.capacity is not None:
            seminar.capacity = body.capacity

        await flush_unit_of_work(self.db)
        logger.info(
            "Seminar updated",
            extra={"seminar_id": str(seminar.id), "user_id": str(acting_user.id)},
        )
        return seminar

    async def get_seminar(self, seminar_id: UUID) -> Seminar:
        return await self._get_or_404(seminar_id)

    async def list_seminars(self, params: Mapping[str, str]) -> Sequence[Seminar]:
        """Filter by 'name' substring when present; sort per 'order'."""
        order = SeminarOrder.from_param(params.get("order"))
        if "name" in params:
            return await self.seminars.find_by_name_containing(params["name"], order)
        return await self.seminars.find_all(order)

    async def enter_seminar(
        self, seminar_id: UUID, role: str, acting_user: User,
    ) -> Seminar:
        """Join an existing seminar as a participant or as an extra instructor."""
        seminar = await self._get_or_404(seminar_id, for_update=True)
        user = await self._reload_user(acting_user)

        requested = validate_enter_prerequisites(seminar, user, role)
        if requested is Role.PARTICIPANT:
            profile = check_participant_eligible(seminar, user)
            membership = SeminarParticipant(seminar=seminar, participant_profile=profile)
            self.db.add(membership)
        else:
            profile = check_instructor_available(seminar, user)
            seminar.instructors.append(profile)

        seminar.updated_at = datetime.now(timezone.utc)
        await flush_unit_of_work(self.db)
        logger.info(
            f"User entered seminar as {requested.value}",
            extra={
                "seminar_id": str(seminar.id),
                "user_id": str(user.id),
                "role": requested.value,
            },
        )
        return seminar

    async def _get_or_404(self, seminar_id: UUID, for_update: bool = False) -> Seminar:
        seminar = await self.seminars.find_by_id(seminar_id, for_update=for_update)
        if seminar is None:
            raise SeminarNotFoundError(
                str(seminar_id), ErrorContext(seminar_id=str(seminar_id)),
            )
        return seminar

    async def _reload_user(self, acting_user: User) -> User:
        """Re-fetch the acting user; it may have vanished since authentication."""
        user = await self.users.find_by_id(acting_user.id)
        if user is None:
            raise UserNotFoundError(
                str(acting_user.id), ErrorContext(user_id=str(acting_user.id)),
            )
        return user

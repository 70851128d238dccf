"""SQL Repositories — AsyncSession-backed user and seminar stores.

Invariants:
    - save() adds to the unit of work and flushes; it never commits
    - find_* always query the database (a row deleted since authentication is not found)
    - Listings sort by created_at, ties broken by id for a stable order

Design Decisions:
    - Thin classes over a shared AsyncSession: the caller owns the transaction
    - for_update loads the seminar row with SELECT ... FOR UPDATE where the
      backend supports it (PostgreSQL); SQLite ignores it. The locked load
      always overwrites any copy already in the identity map
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from seminar.core.domain_types import SeminarOrder
from seminar.models.seminar import Seminar
from seminar.models.user import User


class SqlUserRepository:
    """User store backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def save(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        return user


class SqlSeminarRepository:
    """Seminar store backed by the seminars table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(
        self, seminar_id: UUID, for_update: bool = False,
    ) -> Seminar | None:
        query = select(Seminar).where(Seminar.id == seminar_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def save(self, seminar: Seminar) -> Seminar:
        self.db.add(seminar)
        await self.db.flush()
        return seminar

    async def find_by_name_containing(
        self, name: str, order: SeminarOrder,
    ) -> Sequence[Seminar]:
        query = select(Seminar).where(
            Seminar.name.contains(name, autoescape=True),
        )
        result = await self.db.execute(_ordered(query, order))
        return result.scalars().all()

    async def find_all(self, order: SeminarOrder) -> Sequence[Seminar]:
        result = await self.db.execute(_ordered(select(Seminar), order))
        return result.scalars().all()


def _ordered(query: Select, order: SeminarOrder) -> Select:
    if order is SeminarOrder.EARLIEST:
        return query.order_by(Seminar.created_at.asc(), Seminar.id.asc())
    return query.order_by(Seminar.created_at.desc(), Seminar.id.desc())

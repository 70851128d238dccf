"""Seminar Service — rule layer against a real (SQLite) unit of work.

Invariants:
    - register: role gate first, then time, then online; default online is True
    - update: partial, charger-only, capacity never below participant count
    - list_seminars: key presence decides filter/sort
    - enter_seminar: success then ALREADY_ENTERED; capacity and acceptance enforced
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from seminar.core.errors import (
    AlreadyChargingError,
    AlreadyEnteredError,
    AlreadyFullError,
    CapacityTooSmallError,
    InvalidOnlineValueError,
    InvalidRoleError,
    InvalidTimeFormatError,
    NotAcceptedError,
    NotChargerError,
    NotInstructorError,
    RoleNotSuitableError,
    SeminarNotFoundError,
)
from seminar.models.seminar_participant import SeminarParticipant
from seminar.schemas.seminar import SeminarCreate, SeminarUpdate
from seminar.services.seminar_service import SeminarService


def _create(**overrides) -> SeminarCreate:
    fields = {"name": "Spring", "capacity": 10, "count": 5, "time": "14:30"}
    fields.update(overrides)
    return SeminarCreate(**fields)


async def _participant_count(db) -> int:
    result = await db.execute(select(func.count()).select_from(SeminarParticipant))
    return result.scalar_one()


# ─── register ────────────────────────────────────────────────────

async def test_register_links_instructor_both_ways(test_db, make_user):
    instructor, _ = await make_user(role="instructor")
    seminar = await SeminarService(test_db).register(_create(), instructor)
    await test_db.commit()

    assert seminar.id is not None
    assert seminar.charger_id == instructor.id
    assert seminar.instructors == [instructor.instructor_profile]
    assert instructor.instructor_profile.seminar is seminar
    assert instructor.instructor_profile.seminar_id == seminar.id
    assert seminar.participants == []


async def test_register_online_defaults_to_true(test_db, make_user):
    instructor, _ = await make_user(role="instructor")
    seminar = await SeminarService(test_db).register(_create(online=None), instructor)
    assert seminar.online is True


async def test_register_online_parsed_case_insensitively(test_db, make_user):
    instructor, _ = await make_user(role="instructor")
    seminar = await SeminarService(test_db).register(_create(online="FALSE"), instructor)
    assert seminar.online is False


async def test_register_rejects_unknown_online_value(test_db, make_user):
    instructor, _ = await make_user(role="instructor")
    with pytest.raises(InvalidOnlineValueError):
        await SeminarService(test_db).register(_create(online="maybe"), instructor)


async def test_register_rejects_bad_time(test_db, make_user):
    instructor, _ = await make_user(role="instructor")
    with pytest.raises(InvalidTimeFormatError):
        await SeminarService(test_db).register(_create(time="24:00"), instructor)


async def test_register_requires_instructor_regardless_of_fields(test_db, make_user):
    participant, _ = await make_user(role="participant")
    with pytest.raises(NotInstructorError):
        await SeminarService(test_db).register(
            _create(time="99:99", online="maybe"), participant,
        )


async def test_register_twice_with_same_instructor_rejected(test_db, make_seminar, make_user):
    instructor, _ = await make_user(role="instructor")
    await make_seminar(instructor=instructor)
    with pytest.raises(AlreadyChargingError):
        await SeminarService(test_db).register(_create(name="Second"), instructor)


# ─── update ──────────────────────────────────────────────────────

async def test_update_only_count_leaves_other_fields(test_db, make_seminar):
    seminar = await make_seminar(capacity=10, count=5, time="14:30", online="false")
    charger = seminar.charger

    updated = await SeminarService(test_db).update(
        seminar.id, SeminarUpdate(count=8), charger,
    )

    assert updated.count == 8
    assert updated.time == "14:30"
    assert updated.online is False
    assert updated.capacity == 10


async def test_update_applies_all_fields(test_db, make_seminar):
    seminar = await make_seminar()
    updated = await SeminarService(test_db).update(
        seminar.id,
        SeminarUpdate(count=2, time="9:05", online="False", capacity=3),
        seminar.charger,
    )
    assert (updated.count, updated.time, updated.online, updated.capacity) == (2, "9:05", False, 3)


async def test_update_unknown_seminar(test_db, make_user):
    instructor, _ = await make_user(role="instructor")
    with pytest.raises(SeminarNotFoundError):
        await SeminarService(test_db).update(uuid4(), SeminarUpdate(count=1), instructor)


async def test_update_by_non_charger_rejected(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    co_instructor, _ = await make_user(role="instructor")
    await SeminarService(test_db).enter_seminar(seminar.id, "instructor", co_instructor)
    await test_db.commit()

    with pytest.raises(NotChargerError):
        await SeminarService(test_db).update(seminar.id, SeminarUpdate(count=1), co_instructor)


async def test_update_invalid_time_changes_nothing(test_db, make_seminar):
    seminar = await make_seminar(count=5, time="14:30")
    with pytest.raises(InvalidTimeFormatError):
        await SeminarService(test_db).update(
            seminar.id, SeminarUpdate(count=9, time="13:60"), seminar.charger,
        )
    assert seminar.count == 5
    assert seminar.time == "14:30"


@pytest.mark.parametrize("capacity", [1, 2])
async def test_update_capacity_below_participants(test_db, make_seminar, make_user, capacity):
    seminar = await make_seminar(capacity=5)
    service = SeminarService(test_db)
    for _ in range(3):
        participant, _ = await make_user(role="participant")
        await service.enter_seminar(seminar.id, "participant", participant)
    await test_db.commit()

    with pytest.raises(CapacityTooSmallError):
        await service.update(seminar.id, SeminarUpdate(capacity=capacity), seminar.charger)


async def test_update_capacity_to_participant_count_allowed(test_db, make_seminar, make_user):
    seminar = await make_seminar(capacity=5)
    service = SeminarService(test_db)
    participant, _ = await make_user(role="participant")
    await service.enter_seminar(seminar.id, "participant", participant)

    updated = await service.update(seminar.id, SeminarUpdate(capacity=1), seminar.charger)
    assert updated.capacity == 1


# ─── get / list ──────────────────────────────────────────────────

async def test_get_seminar_not_found(test_db):
    with pytest.raises(SeminarNotFoundError):
        await SeminarService(test_db).get_seminar(uuid4())


@pytest.fixture
async def three_seminars(make_seminar):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    old = await make_seminar(name="Django basics", created_at=base)
    mid = await make_seminar(name="Spring boot", created_at=base + timedelta(days=1))
    new = await make_seminar(name="Django advanced", created_at=base + timedelta(days=2))
    return old, mid, new


async def test_list_without_params_newest_first(test_db, three_seminars):
    old, mid, new = three_seminars
    result = await SeminarService(test_db).list_seminars({})
    assert [s.id for s in result] == [new.id, mid.id, old.id]


async def test_list_order_earliest(test_db, three_seminars):
    old, mid, new = three_seminars
    result = await SeminarService(test_db).list_seminars({"order": "earliest"})
    assert [s.id for s in result] == [old.id, mid.id, new.id]


async def test_list_unknown_order_is_newest_first(test_db, three_seminars):
    old, mid, new = three_seminars
    result = await SeminarService(test_db).list_seminars({"order": "whatever"})
    assert [s.id for s in result] == [new.id, mid.id, old.id]


async def test_list_name_filter_newest_first(test_db, three_seminars):
    old, _, new = three_seminars
    result = await SeminarService(test_db).list_seminars({"name": "Django"})
    assert [s.id for s in result] == [new.id, old.id]


async def test_list_name_filter_with_earliest(test_db, three_seminars):
    old, _, new = three_seminars
    result = await SeminarService(test_db).list_seminars(
        {"name": "Django", "order": "earliest"},
    )
    assert [s.id for s in result] == [old.id, new.id]


async def test_list_name_filter_escapes_wildcards(test_db, three_seminars):
    result = await SeminarService(test_db).list_seminars({"name": "%"})
    assert list(result) == []


async def test_list_ignores_other_keys(test_db, three_seminars):
    result = await SeminarService(test_db).list_seminars({"limit": "1"})
    assert len(result) == 3


# ─── enter_seminar ───────────────────────────────────────────────

async def test_enter_as_participant_then_already_entered(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    participant, _ = await make_user(role="participant")
    service = SeminarService(test_db)

    entered = await service.enter_seminar(seminar.id, "participant", participant)
    await test_db.commit()
    assert entered.participant_count == 1
    assert participant.participant_profile.memberships[0].seminar is seminar

    with pytest.raises(AlreadyEnteredError):
        await service.enter_seminar(seminar.id, "participant", participant)


async def test_enter_capacity_one_second_participant_full(test_db, make_seminar, make_user):
    seminar = await make_seminar(capacity=1)
    first, _ = await make_user(role="participant")
    second, _ = await make_user(role="participant")
    service = SeminarService(test_db)

    await service.enter_seminar(seminar.id, "participant", first)
    await test_db.commit()
    assert seminar.participant_count == 1

    with pytest.raises(AlreadyFullError):
        await service.enter_seminar(seminar.id, "participant", second)


async def test_enter_not_accepted_creates_no_association(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    participant, _ = await make_user(role="participant", accepted=False)

    with pytest.raises(NotAcceptedError):
        await SeminarService(test_db).enter_seminar(seminar.id, "participant", participant)

    assert await _participant_count(test_db) == 0
    assert seminar.participants == []


async def test_enter_invalid_role(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    participant, _ = await make_user(role="participant")
    with pytest.raises(InvalidRoleError):
        await SeminarService(test_db).enter_seminar(seminar.id, "auditor", participant)


async def test_enter_role_not_held(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    participant, _ = await make_user(role="participant")
    with pytest.raises(RoleNotSuitableError):
        await SeminarService(test_db).enter_seminar(seminar.id, "instructor", participant)


async def test_enter_unknown_seminar(test_db, make_user):
    participant, _ = await make_user(role="participant")
    with pytest.raises(SeminarNotFoundError):
        await SeminarService(test_db).enter_seminar(uuid4(), "participant", participant)


async def test_enter_as_instructor_links_both_ways(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    co_instructor, _ = await make_user(role="instructor")

    entered = await SeminarService(test_db).enter_seminar(seminar.id, "instructor", co_instructor)
    await test_db.commit()

    assert co_instructor.instructor_profile in entered.instructors
    assert co_instructor.instructor_profile.seminar_id == seminar.id
    assert entered.charger_id != co_instructor.id


async def test_charger_cannot_reenter(test_db, make_seminar):
    seminar = await make_seminar()
    with pytest.raises(AlreadyEnteredError):
        await SeminarService(test_db).enter_seminar(seminar.id, "instructor", seminar.charger)


async def test_instructor_charging_elsewhere_rejected(test_db, make_seminar):
    first = await make_seminar(name="First")
    second = await make_seminar(name="Second")
    with pytest.raises(AlreadyChargingError):
        await SeminarService(test_db).enter_seminar(second.id, "instructor", first.charger)


async def test_full_seminar_blocks_instructor_entry(test_db, make_seminar, make_user):
    seminar = await make_seminar(capacity=1)
    participant, _ = await make_user(role="participant")
    co_instructor, _ = await make_user(role="instructor")
    service = SeminarService(test_db)
    await service.enter_seminar(seminar.id, "participant", participant)
    await test_db.commit()

    with pytest.raises(AlreadyFullError):
        await service.enter_seminar(seminar.id, "instructor", co_instructor)


async def test_enter_bumps_version(test_db, make_seminar, make_user):
    seminar = await make_seminar()
    version_before = seminar.version
    participant, _ = await make_user(role="participant")

    await SeminarService(test_db).enter_seminar(seminar.id, "participant", participant)
    await test_db.commit()

    assert seminar.version == version_before + 1

"""Enrollment Enforcement — pure role, ownership and capacity checks for seminars.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Each check raises its typed SeminarError on violation and returns normally otherwise
    - validate_enter_prerequisites chains the shared checks; the first error wins,
      in the order role → held role → capacity → already entered

Design Decisions:
    - Checks read ORM objects through *Like protocols: testable with transient objects
    - The capacity gate applies to both roles; instructors are not exempt
"""

from seminar.core.domain_types import EnrollmentState, Role
from seminar.core.errors import (
    AlreadyChargingError,
    AlreadyEnteredError,
    AlreadyFullError,
    CapacityTooSmallError,
    ErrorContext,
    InvalidRoleError,
    NotAcceptedError,
    NotChargerError,
    NotInstructorError,
    RoleNotSuitableError,
)
from seminar.core.repository_protocols import (
    InstructorProfileLike,
    ParticipantProfileLike,
    SeminarLike,
    UserLike,
)


def _context(seminar: SeminarLike | None, user: UserLike) -> ErrorContext:
    return ErrorContext(
        user_id=str(user.id),
        seminar_id=str(seminar.id) if seminar is not None else None,
    )


def check_instructor_role(user: UserLike) -> InstructorProfileLike:
    """Register requires the instructor role and its profile."""
    if Role.INSTRUCTOR.value not in user.roles or user.instructor_profile is None:
        raise NotInstructorError(_context(None, user))
    return user.instructor_profile


def check_charger(seminar: SeminarLike, user: UserLike) -> None:
    """Only the designated charger may modify the seminar."""
    if seminar.charger_id is None or seminar.charger_id != user.id:
        raise NotChargerError(_context(seminar, user))


def check_capacity_update(seminar: SeminarLike, capacity: int, user: UserLike) -> None:
    count = len(seminar.participants)
    if capacity < count:
        raise CapacityTooSmallError(capacity, count, _context(seminar, user))


def check_requested_role(role: str, user: UserLike) -> Role:
    if role not in Role.values():
        raise InvalidRoleError(role, _context(None, user))
    return Role(role)


def check_holds_role(user: UserLike, role: Role) -> None:
    if role.value not in user.roles:
        raise RoleNotSuitableError(role.value, _context(None, user))


def check_capacity_available(seminar: SeminarLike, user: UserLike) -> None:
    if seminar.capacity <= len(seminar.participants):
        raise AlreadyFullError(seminar.capacity, _context(seminar, user))


def enrollment_state(seminar: SeminarLike, user: UserLike) -> EnrollmentState:
    """Where the user currently stands in the seminar."""
    if any(p.participant_profile.user_id == user.id for p in seminar.participants):
        return EnrollmentState.ENTERED_AS_PARTICIPANT
    if any(i.user_id == user.id for i in seminar.instructors):
        return EnrollmentState.ENTERED_AS_INSTRUCTOR
    return EnrollmentState.NOT_ENTERED


def check_not_entered(seminar: SeminarLike, user: UserLike) -> None:
    if enrollment_state(seminar, user) is not EnrollmentState.NOT_ENTERED:
        raise AlreadyEnteredError(_context(seminar, user))


def check_participant_eligible(
    seminar: SeminarLike, user: UserLike,
) -> ParticipantProfileLike:
    """Participant entry needs a profile whose accepted flag is set."""
    profile = user.participant_profile
    if profile is None:
        raise RoleNotSuitableError(Role.PARTICIPANT.value, _context(seminar, user))
    if not profile.accepted:
        raise NotAcceptedError(_context(seminar, user))
    return profile


def check_instructor_available(
    seminar: SeminarLike | None, user: UserLike,
) -> InstructorProfileLike:
    """Instructor entry needs a profile that charges no seminar yet."""
    profile = user.instructor_profile
    if profile is None:
        raise RoleNotSuitableError(Role.INSTRUCTOR.value, _context(seminar, user))
    if profile.seminar_id is not None or profile.seminar is not None:
        raise AlreadyChargingError(_context(seminar, user))
    return profile


def validate_enter_prerequisites(
    seminar: SeminarLike, user: UserLike, role: str,
) -> Role:
    """Chain the role-independent entry checks. Returns the parsed role."""
    requested = check_requested_role(role, user)
    check_holds_role(user, requested)
    check_capacity_available(seminar, user)
    check_not_entered(seminar, user)
    return requested

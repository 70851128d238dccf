"""ORM Models — SQLAlchemy declarative models for users, profiles and seminars.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns its profiles; Seminar owns its participant associations

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from seminar.models.user import User  # noqa: F401
from seminar.models.instructor_profile import InstructorProfile  # noqa: F401
from seminar.models.participant_profile import ParticipantProfile  # noqa: F401
from seminar.models.seminar import Seminar  # noqa: F401
from seminar.models.seminar_participant import SeminarParticipant  # noqa: F401
from seminar.models.auth_token import AuthToken  # noqa: F401

"""Seminar Schemas — request shape validation at the API boundary.

Invariants:
    - capacity/count must be positive; time/online pass through as strings
    - JSON booleans for online become "true"/"false"
    - SeminarUpdate accepts an empty body (nothing to change)
"""

import pytest
from pydantic import ValidationError

from seminar.schemas.seminar import EnterRequest, SeminarCreate, SeminarUpdate


def test_create_minimal():
    body = SeminarCreate(name="  Django  ", capacity=10, count=3, time="9:30")
    assert body.name == "Django"
    assert body.online is None


def test_create_rejects_non_positive_capacity():
    with pytest.raises(ValidationError):
        SeminarCreate(name="x", capacity=0, count=1, time="9:30")


def test_create_rejects_blank_name():
    with pytest.raises(ValidationError):
        SeminarCreate(name="   ", capacity=1, count=1, time="9:30")


def test_create_keeps_invalid_time_for_rule_layer():
    body = SeminarCreate(name="x", capacity=1, count=1, time="25:00")
    assert body.time == "25:00"


def test_overlong_time_left_for_rule_layer():
    assert SeminarCreate(name="x", capacity=1, count=1, time="09:30:00").time == "09:30:00"
    assert SeminarUpdate(time="123:45").time == "123:45"


def test_online_bool_coerced_to_string():
    assert SeminarCreate(name="x", capacity=1, count=1, time="9:30", online=False).online == "false"
    assert SeminarUpdate(online=True).online == "true"


def test_update_all_optional():
    body = SeminarUpdate()
    assert body.count is None
    assert body.time is None
    assert body.online is None
    assert body.capacity is None


def test_update_rejects_negative_count():
    with pytest.raises(ValidationError):
        SeminarUpdate(count=-1)


def test_enter_request_role_is_free_text():
    assert EnterRequest(role="admin").role == "admin"

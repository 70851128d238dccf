"""Field Validation — pure parsing of seminar time and online values.

Invariants:
    - Time is H:MM or HH:MM with hour 1-23 and minute 00-59; hour 0 is rejected
      in both the "0" and "00" spellings
    - online accepts 'true'/'false' case-insensitively, nothing else
    - All functions are PURE: no IO, no state

Design Decisions:
    - Regex compiled once at import: shared by register and update
    - Raise typed errors (not return dicts): the rule layer fails fast on first error
"""

import re

from seminar.core.errors import InvalidOnlineValueError, InvalidTimeFormatError

_TIME_PATTERN = re.compile(r"^([1-9]|0[1-9]|1[0-9]|2[0-3]):([0-5][0-9])$")


def is_time_format_valid(time: str) -> bool:
    """True iff time is H:MM or HH:MM with hour 1-23 and minute 00-59."""
    return _TIME_PATTERN.fullmatch(time) is not None


def check_time_format(time: str) -> str:
    if not is_time_format_valid(time):
        raise InvalidTimeFormatError(time)
    return time


def parse_online(value: str | None, default: bool | None = None) -> bool | None:
    """Parse the online flag.

    None maps to ``default`` (register passes True, update passes None so an
    absent value leaves the seminar unchanged).
    """
    if value is None:
        return default
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidOnlineValueError(value)

"""Settings and structured logging."""

import json
import logging

from seminar.config import Settings
from seminar.infrastructure.observability import JSONFormatter


def test_plain_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "seminar.test", logging.INFO, __file__, 1, "Seminar updated", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(_record(seminar_id="abc", error_code="NOT_CHARGER"))
    log = json.loads(line)
    assert log["message"] == "Seminar updated"
    assert log["level"] == "INFO"
    assert log["seminar_id"] == "abc"
    assert log["error_code"] == "NOT_CHARGER"
    assert "user_id" not in log


def test_json_formatter_ignores_unknown_extras():
    log = json.loads(JSONFormatter().format(_record(secret="x")))
    assert "secret" not in log

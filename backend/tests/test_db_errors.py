"""Tests for database error helpers."""

from sqlalchemy.exc import IntegrityError

from db.errors import is_unique_violation


class _PgError(Exception):
    sqlstate = "23505"


class _SqliteError(Exception):
    sqlite_errorname = "SQLITE_CONSTRAINT_PRIMARYKEY"


def _integrity_error(original: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO likes", {}, original)


def test_detects_postgres_unique_sqlstate():
    assert is_unique_violation(_integrity_error(_PgError("boom")))


def test_detects_sqlite_primary_key_error_name():
    assert is_unique_violation(_integrity_error(_SqliteError("boom")))


def test_detects_unique_message():
    error = _integrity_error(Exception("UNIQUE constraint failed: likes.post_id, likes.user_id"))

    assert is_unique_violation(error)


def test_ignores_other_integrity_errors():
    error = _integrity_error(Exception("FOREIGN KEY constraint failed"))

    assert not is_unique_violation(error)

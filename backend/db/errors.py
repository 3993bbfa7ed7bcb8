"""Database error helpers."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

UNIQUE_SQLSTATE = "23505"
SQLITE_UNIQUE_ERROR_NAMES = frozenset(
    {"SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"}
)


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True when the IntegrityError reports a primary-key or unique conflict."""
    original = getattr(error, "orig", None)
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == UNIQUE_SQLSTATE:
        return True
    if getattr(original, "sqlite_errorname", None) in SQLITE_UNIQUE_ERROR_NAMES:
        return True
    message = str(original or error).lower()
    return any(
        marker in message
        for marker in ("duplicate key", "unique constraint", "primary key constraint")
    )


__all__ = ["is_unique_violation"]

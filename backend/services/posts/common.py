"""Shared SQLAlchemy helpers for post services."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy.sql import ColumnElement


def eq(column: Any, value: Any) -> ColumnElement[bool]:
    """Typed equality expression helper."""
    return cast(ColumnElement[bool], column == value)


def asc(column: Any) -> Any:
    """Typed ascending ordering helper."""
    return cast(Any, column).asc()


def in_(column: Any, values: list[Any]) -> ColumnElement[bool]:
    """Typed membership expression helper."""
    return cast(ColumnElement[bool], cast(Any, column).in_(values))

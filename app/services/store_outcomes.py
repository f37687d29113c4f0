# app/services/store_outcomes.py
"""
Outcomes returned by the stores instead of raising database errors.

Callers branch on the outcome type; a store only raises for failures that
fit none of these (connection loss, unknown integrity errors, ...).
"""
from dataclasses import dataclass
from typing import Any, Optional, Union

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE codes
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"
PG_NOT_NULL_VIOLATION = "23502"


@dataclass(frozen=True)
class Success:
    value: Any = None


@dataclass(frozen=True)
class UniqueViolation:
    detail: str = ""


@dataclass(frozen=True)
class ForeignKeyViolation:
    detail: str = ""


@dataclass(frozen=True)
class NullViolation:
    detail: str = ""


@dataclass(frozen=True)
class NotFound:
    detail: str = ""


StoreOutcome = Union[Success, UniqueViolation, ForeignKeyViolation, NullViolation, NotFound]


def classify_integrity_error(exc: IntegrityError) -> Optional[StoreOutcome]:
    """Map a driver integrity error onto an outcome, or None if unrecognised."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    message = str(orig if orig is not None else exc)
    lowered = message.lower()

    if code == PG_UNIQUE_VIOLATION or "unique constraint" in lowered or "duplicate key" in lowered:
        return UniqueViolation(message)
    if code == PG_FOREIGN_KEY_VIOLATION or "foreign key constraint" in lowered:
        return ForeignKeyViolation(message)
    if code == PG_NOT_NULL_VIOLATION or "not null constraint" in lowered or "null value in column" in lowered:
        return NullViolation(message)
    return None

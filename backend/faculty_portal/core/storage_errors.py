"""
Translate SQLAlchemy driver errors into portal errors.

PostgreSQL (asyncpg) reports an SQLSTATE code on the wrapped driver
exception, SQLite only a message. Both are reduced to a violation
kind before choosing the portal error.
"""

from typing import Optional, Sequence, Tuple

from sqlalchemy.exc import DataError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.exceptions import (
    ConflictError,
    PortalError,
    StorageError,
    ValidationError,
)
from faculty_portal.core.logging_config import logger

UNIQUE = "unique"
FOREIGN_KEY = "foreign_key"
NOT_NULL = "not_null"
CHECK = "check"
MALFORMED = "malformed"

PG_SQLSTATES = {
    "23505": UNIQUE,
    "23503": FOREIGN_KEY,
    "23502": NOT_NULL,
    "23514": CHECK,
    "22P02": MALFORMED,
}

SQLITE_PREFIXES = (
    ("UNIQUE constraint failed", UNIQUE),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY),
    ("NOT NULL constraint failed", NOT_NULL),
    ("CHECK constraint failed", CHECK),
)

DEFAULT_MESSAGES = {
    UNIQUE: "Record already exists",
    FOREIGN_KEY: "Invalid faculty or class selected. Please check your selections.",
    NOT_NULL: "Missing required fields",
    CHECK: "Invalid data. Please check your inputs.",
    MALFORMED: "Invalid data format. Please check your inputs.",
}

# Constraint names (PostgreSQL) or column lists (SQLite) with a friendlier message
UNIQUE_MESSAGES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("uq_ratings_student_report", "ratings.student_id, ratings.report_id"),
     "You have already rated this report"),
    (("uq_ratings_student_lecturer", "ratings.student_id, ratings.lecturer_id"),
     "You have already rated this lecturer"),
    (("ix_users_email", "users_email_key", "users.email"),
     "User with this email already exists"),
)

CHECK_MESSAGES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("ck_ratings_rating_range",), "Rating must be between 1 and 5"),
    (("ck_ratings_single_target",), "Rate either a report or a lecturer, not both"),
    (("ck_complaints_not_self",), "You cannot file a complaint against yourself"),
    (("ck_reports_students_present",), "Students present cannot be negative"),
)


def _sqlstate(orig: object) -> Optional[str]:
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def classify(exc: SQLAlchemyError) -> Optional[str]:
    """Violation kind for an IntegrityError/DataError, None when unrecognised"""
    orig = getattr(exc, "orig", None)
    code = _sqlstate(orig)
    if code in PG_SQLSTATES:
        return PG_SQLSTATES[code]

    text = str(orig if orig is not None else exc)
    for prefix, kind in SQLITE_PREFIXES:
        if prefix in text:
            return kind
    return None


def _pick_message(text: str, table: Sequence[Tuple[Tuple[str, ...], str]], default: str) -> str:
    for markers, message in table:
        if any(marker in text for marker in markers):
            return message
    return default


def translate_storage_error(exc: SQLAlchemyError, context: Optional[str] = None) -> PortalError:
    """
    Map a database exception onto the portal hierarchy.

    unique -> ConflictError; foreign key, not null, check and malformed
    input -> ValidationError; everything else -> StorageError.
    """
    text = str(getattr(exc, "orig", None) or exc)

    if isinstance(exc, (IntegrityError, DataError)):
        kind = classify(exc)
        if kind == UNIQUE:
            return ConflictError(_pick_message(text, UNIQUE_MESSAGES, DEFAULT_MESSAGES[UNIQUE]))
        if kind == CHECK:
            return ValidationError(_pick_message(text, CHECK_MESSAGES, DEFAULT_MESSAGES[CHECK]))
        if kind is not None:
            return ValidationError(DEFAULT_MESSAGES[kind])

    if isinstance(exc, OperationalError):
        logger.error(f"Database unavailable during {context or 'operation'}: {text}")
        return StorageError("Database is unavailable. Please try again later.", detail=text)

    logger.error(f"Unhandled storage error during {context or 'operation'}: {text}")
    return StorageError(detail=text)


async def commit_or_raise(db: AsyncSession, context: str) -> None:
    """Commit, turning constraint violations into portal errors"""
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise translate_storage_error(exc, context) from exc

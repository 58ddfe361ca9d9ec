"""Storage failure capture and translation.

`StorageError` is what the persistence layer raises: a plain record of what the
database driver reported. `translate_storage_error` is the only place that reads
engine-specific codes and turns them into caller-facing `TripPlannerError` kinds.
"""
import re
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from app.core.errors import (
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    TripPlannerError,
)
from app.core.logger import logger
from app.schemas.itineraries.itinerary_item import ACTIVITY_TYPES

# PostgreSQL SQLSTATE codes
NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
DATA_EXCEPTION_CLASS = "22"

# Messages for named CHECK constraints, so callers see the rule rather than its identifier
CONSTRAINT_MESSAGES = {
    "ck_itinerary_items_day_number_positive": "dayNumber must be a positive integer",
    "ck_itinerary_items_activity_type": f"activityType must be one of: {', '.join(ACTIVITY_TYPES)}",
    "ck_itinerary_items_cost_non_negative": "cost must be a non-negative number",
    "ck_trips_budget_min_non_negative": "budgetMin must be a non-negative number",
    "ck_trips_budget_max_non_negative": "budgetMax must be a non-negative number",
}

_SQLITE_NOT_NULL = re.compile(r"NOT NULL constraint failed: (?:\w+\.)?(\w+)")
_SQLITE_CHECK = re.compile(r"CHECK constraint failed: (\w+)")


class StorageError(Exception):
    """Raw storage-layer failure. Carries what the driver reported, uninterpreted."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        constraint: Optional[str] = None,
        column: Optional[str] = None,
        category: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.constraint = constraint
        self.column = column
        self.category = category
        super().__init__(message)

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "StorageError":
        orig = getattr(exc, "orig", None) if isinstance(exc, DBAPIError) else None
        # asyncpg errors are re-raised by SQLAlchemy's adapter with the original as __cause__
        driver_error = getattr(orig, "__cause__", None) or orig
        diag = getattr(orig, "diag", None)

        code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        constraint = (
            getattr(driver_error, "constraint_name", None)
            or getattr(diag, "constraint_name", None)
        )
        column = (
            getattr(driver_error, "column_name", None)
            or getattr(diag, "column_name", None)
        )
        return cls(
            message=str(orig) if orig is not None else str(exc),
            code=code,
            constraint=constraint,
            column=column,
            category=type(exc).__name__,
        )


def _classify_without_code(error: StorageError) -> Optional[str]:
    """Drivers such as sqlite3 report no SQLSTATE; infer it from class and message."""
    if error.category == "IntegrityError":
        if "FOREIGN KEY constraint failed" in error.message:
            return FOREIGN_KEY_VIOLATION
        not_null = _SQLITE_NOT_NULL.search(error.message)
        if not_null:
            error.column = error.column or not_null.group(1)
            return NOT_NULL_VIOLATION
        check = _SQLITE_CHECK.search(error.message)
        if check:
            error.constraint = error.constraint or check.group(1)
            return CHECK_VIOLATION
    if error.category == "DataError":
        return DATA_EXCEPTION_CLASS
    return None


def translate_storage_error(
    error: Union[StorageError, TripPlannerError],
    action: str = "saving data",
    entity: str = "trip",
) -> TripPlannerError:
    """Map a storage failure onto the caller-facing error taxonomy."""
    if isinstance(error, TripPlannerError):
        return error

    code = error.code or _classify_without_code(error)

    if code == NOT_NULL_VIOLATION:
        if error.column:
            return InvalidArgumentError(f"{to_camel(error.column)} is required")
        return InvalidArgumentError("a required field is missing")

    if code == FOREIGN_KEY_VIOLATION:
        return NotFoundError(f"{entity} not found")

    if code == CHECK_VIOLATION:
        message = CONSTRAINT_MESSAGES.get(error.constraint or "", "value is outside the allowed range")
        return InvalidArgumentError(message)

    if code and code.startswith(DATA_EXCEPTION_CLASS):
        return InvalidArgumentError("malformed value for a typed field")

    logger.error(
        f"Unclassified storage failure while {action}: "
        f"code={error.code} category={error.category} detail={error.message}"
    )
    return InternalError(f"database error while {action}")


def register_storage_error_handler(app: FastAPI) -> None:
    """Last line of defense: no raw SQLAlchemy exception reaches a caller unclassified."""

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        error = translate_storage_error(
            StorageError.from_exception(exc),
            action=f"handling {request.method} {request.url.path}",
        )
        return JSONResponse(
            status_code=error.status_code,
            content={"code": error.kind.value, "detail": error.message},
        )

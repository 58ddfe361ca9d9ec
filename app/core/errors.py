import enum
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.logger import logger


class ErrorKind(str, enum.Enum):
    not_found = "not_found"
    invalid_argument = "invalid_argument"
    internal = "internal"


STATUS_BY_KIND = {
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.invalid_argument: status.HTTP_400_BAD_REQUEST,
    ErrorKind.internal: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class TripPlannerError(Exception):
    """Base class for every error the API is allowed to show to a caller."""
    kind: ErrorKind = ErrorKind.internal

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class NotFoundError(TripPlannerError):
    kind = ErrorKind.not_found


class InvalidArgumentError(TripPlannerError):
    kind = ErrorKind.invalid_argument


class InternalError(TripPlannerError):
    kind = ErrorKind.internal


class GenerationFailedError(InternalError):
    """The generative itinerary service failed or returned unusable output."""


def describe_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Turn the first pydantic error into a single readable message."""
    if not errors:
        return "invalid request"
    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(loc)

    if error.get("type") == "missing":
        return f"{field} is required" if field else "request body is required"
    if error.get("type") in ("model_type", "model_attributes_type", "dict_type") and not field:
        return "request body must be a JSON object"
    if error.get("type") == "invalid_argument" or not field:
        return error.get("msg", "invalid request")
    return f"{field}: {error.get('msg')}"


def invalid_argument_from(exc: ValidationError) -> InvalidArgumentError:
    return InvalidArgumentError(describe_validation_errors(exc.errors()))


def _error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"code": kind.value, "detail": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TripPlannerError)
    async def trip_planner_error_handler(request: Request, exc: TripPlannerError):
        if exc.kind is ErrorKind.internal:
            logger.error(f"Internal error on {request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(ErrorKind.invalid_argument, describe_validation_errors(exc.errors()))

"""API error responses.

Every failure reaching the client is a JSON body {"kind", "description"}
where kind is a stable ErrorKind. Service errors, database errors, request
decoding errors and unknown routes are all mapped here.
"""

from enum import StrEnum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from caisse_noire.core.errors import (
    BadReferenceError,
    CaisseNoireError,
    DuplicatedFieldError,
    NotFoundError,
    PriceMismatchError,
)
from caisse_noire.db.errors import (
    ForeignKeyViolationError,
    ServiceUnavailableError,
    UniqueViolationError,
    translate_db_error,
)
from caisse_noire.sanctions.parameters import ParameterError


class ErrorKind(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    BAD_REFERENCE = "BAD_REFERENCE"
    NOT_VALID = "NOT_VALID"
    BAD_PARAMETER = "BAD_PARAMETER"
    DUPLICATED_FIELD = "DUPLICATED_FIELD"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    UNKNOWN = "UNKNOWN"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_REFERENCE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_VALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.BAD_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATED_FIELD: status.HTTP_409_CONFLICT,
    ErrorKind.MALFORMED_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorResponse(BaseModel):
    """Error body returned to clients."""

    kind: ErrorKind
    description: str

    @classmethod
    def not_found(cls) -> "ErrorResponse":
        return cls(kind=ErrorKind.NOT_FOUND, description="Not found")

    @classmethod
    def from_error(cls, error: CaisseNoireError) -> "ErrorResponse":
        return cls(kind=error_kind_for(error), description=error.description)

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.kind.status_code, content=self.model_dump(mode="json"))


def error_kind_for(error: CaisseNoireError) -> ErrorKind:
    """Map a service error onto its ErrorKind."""
    if isinstance(error, NotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(error, BadReferenceError | ForeignKeyViolationError):
        return ErrorKind.BAD_REFERENCE
    if isinstance(error, PriceMismatchError):
        return ErrorKind.NOT_VALID
    if isinstance(error, ParameterError):
        return ErrorKind.BAD_PARAMETER
    if isinstance(error, DuplicatedFieldError | UniqueViolationError):
        return ErrorKind.DUPLICATED_FIELD
    if isinstance(error, ServiceUnavailableError):
        return ErrorKind.SERVICE_UNAVAILABLE
    return ErrorKind.UNKNOWN


def _describe_validation_error(error: RequestValidationError) -> str:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        details.append(f"{location}: {item.get('msg', 'invalid')}")
    return "; ".join(details) or "The request could not be decoded"


async def _handle_service_error(request: Request, exc: CaisseNoireError) -> JSONResponse:
    response = ErrorResponse.from_error(exc)
    logger.info(
        "Request failed",
        method=request.method,
        path=request.url.path,
        kind=response.kind.value,
        description=response.description,
    )
    return response.to_response()


async def _handle_db_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    return await _handle_service_error(request, translate_db_error(exc))


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    response = ErrorResponse(kind=ErrorKind.MALFORMED_INPUT, description=_describe_validation_error(exc))
    logger.info("Malformed request", method=request.method, path=request.url.path, description=response.description)
    return response.to_response()


async def _handle_http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes and unsupported methods are both reported as NOT_FOUND
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return ErrorResponse.not_found().to_response()
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": ErrorKind.UNKNOWN.value, "description": str(exc.detail)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the application."""
    app.add_exception_handler(CaisseNoireError, _handle_service_error)
    app.add_exception_handler(SQLAlchemyError, _handle_db_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)

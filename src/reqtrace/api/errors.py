"""Error codes, response envelopes and FastAPI exception handlers."""

from enum import Enum
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reqtrace.observability.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_JSON = "INVALID_JSON"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


ERROR_CODE_STATUS: dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_JSON: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.DATABASE_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 502,
}

_STATUS_CODE_FALLBACK: dict[int, ErrorCode] = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    502: ErrorCode.EXTERNAL_SERVICE_ERROR,
}


class AppError(Exception):
    """Application error carrying a client-facing code and message.

    ``cause`` is logged server-side only, never returned to the client.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.cause = cause

    @property
    def status_code(self) -> int:
        return ERROR_CODE_STATUS[self.code]


def error_response(
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build the error envelope for ``code``."""
    body: dict[str, Any] = {"success": False, "code": code.value, "error": message}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return JSONResponse(body, status_code=ERROR_CODE_STATUS[code])


def success_response(data: Any, status_code: int = 200) -> JSONResponse:
    """Build the success envelope around ``data``."""
    return JSONResponse(
        {"success": True, "data": jsonable_encoder(data)}, status_code=status_code
    )


def status_to_error_code(status_code: int) -> ErrorCode:
    if status_code in _STATUS_CODE_FALLBACK:
        return _STATUS_CODE_FALLBACK[status_code]
    if 400 <= status_code < 500:
        return ErrorCode.BAD_REQUEST
    return ErrorCode.INTERNAL_ERROR


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.cause is not None:
        logger.error(
            "request failed",
            exc_info=(type(exc.cause), exc.cause, exc.cause.__traceback__),
            extra={"extra_fields": {"code": exc.code.value, "path": request.url.path}},
        )
    return error_response(exc.code, exc.message, exc.details)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        ErrorCode.VALIDATION_ERROR,
        "Request validation failed",
        {"errors": exc.errors()},
    )


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = status_to_error_code(exc.status_code)
    body: dict[str, Any] = {"success": False, "code": code.value, "error": str(exc.detail)}
    return JSONResponse(body, status_code=exc.status_code, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Route application, validation and HTTP errors through the envelope."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]

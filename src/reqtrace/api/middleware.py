"""Correlation ID and request logging pipeline stages."""

import time
from typing import Any, Callable

from fastapi import Request, Response

from reqtrace.observability.correlation import (
    CORRELATION_ID_HEADER,
    CorrelationIdGenerationError,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from reqtrace.observability.logging import get_logger

from .errors import ErrorCode, error_response
from .pipeline import CallNext, Stage

logger = get_logger(__name__)


def make_correlation_id_stage(header_name: str = CORRELATION_ID_HEADER) -> Stage:
    """Build the stage that guarantees a correlation ID on every exchange.

    The resolved ID is exposed explicitly on ``request.state`` and in the
    logging context variable, then echoed on the response under
    ``header_name``.
    """

    async def correlation_id_middleware(request: Request, call_next: CallNext) -> Response:
        try:
            cid = resolve_correlation_id(request.headers, header_name)
        except CorrelationIdGenerationError:
            logger.exception(
                "correlation id generation failed",
                extra={"extra_fields": {"path": request.url.path}},
            )
            return error_response(ErrorCode.INTERNAL_ERROR, "Internal server error")

        request.state.correlation_id = cid.value
        request.state.correlation_id_source = cid.source
        token = set_correlation_id(cid.value)
        try:
            response = await call_next(request)
            response.headers[header_name] = cid.value
            return response
        finally:
            reset_correlation_id(token)

    return correlation_id_middleware


def _log_method_for(status_code: int) -> Callable[..., None]:
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    return logger.info


async def request_logging_middleware(request: Request, call_next: CallNext) -> Response:
    """Log one record per request; turn unhandled errors into a 500 envelope."""
    started = time.perf_counter()
    fields: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "content_type": request.headers.get("content-type"),
    }
    try:
        response = await call_next(request)
    except Exception:
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        fields["status_code"] = 500
        logger.exception("request failed", extra={"extra_fields": fields})
        return error_response(ErrorCode.INTERNAL_ERROR, "Internal server error")

    fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
    fields["status_code"] = response.status_code
    _log_method_for(response.status_code)("request completed", extra={"extra_fields": fields})
    return response


def get_request_correlation_id(request: Request) -> str:
    """FastAPI dependency returning the correlation ID resolved for ``request``.

    Empty string when the request bypassed the correlation stage.
    """
    return getattr(request.state, "correlation_id", "")

"""Public routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from reqtrace.api.errors import success_response
from reqtrace.api.middleware import get_request_correlation_id

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/api/health")
def api_health() -> dict:
    """Health check endpoint under the API prefix."""
    return {"status": "ok"}


@router.get("/api/request-context")
def request_context(
    request: Request,
    correlation_id: str = Depends(get_request_correlation_id),
) -> JSONResponse:
    """Echo the correlation context resolved for this request."""
    return success_response(
        {
            "correlationId": correlation_id,
            "source": getattr(request.state, "correlation_id_source", None),
        }
    )

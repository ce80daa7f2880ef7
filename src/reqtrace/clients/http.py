"""Outbound JSON API client that forwards the active correlation ID.

Talks to services that answer with the ``{"success": ..., "data": ...}``
envelope and unwraps it for the caller.
"""

from typing import Any

import requests

from reqtrace.observability.correlation import CORRELATION_ID_HEADER, get_correlation_id
from reqtrace.observability.logging import get_logger
from reqtrace.settings import Settings

logger = get_logger(__name__)


class ApiClientError(Exception):
    """Raised when an upstream call fails or returns an error envelope."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


def build_headers(
    headers: dict[str, str] | None = None,
    header_name: str = CORRELATION_ID_HEADER,
) -> dict[str, str]:
    """Merge caller headers with JSON defaults and the current correlation ID.

    A correlation header supplied by the caller wins over the context value.
    """
    merged = {"Content-Type": "application/json"}
    merged.update(headers or {})
    if not any(k.lower() == header_name.lower() for k in merged):
        cid = get_correlation_id()
        if cid:
            merged[header_name] = cid
    return merged


def fetch_api(
    url: str,
    method: str = "GET",
    json: Any = None,
    headers: dict[str, str] | None = None,
    timeout: int | None = None,
    session: requests.Session | None = None,
) -> Any:
    """Call a JSON API and return the ``data`` field of its envelope.

    Args:
        url: Absolute URL.
        method: HTTP method.
        json: Optional JSON body.
        headers: Extra request headers.
        timeout: Request timeout in seconds. If None, uses
            ``Settings.api_client_timeout``.
        session: Optional requests session (connection reuse, tests).

    Returns:
        The unwrapped ``data`` value.

    Raises:
        ApiClientError: On transport failure, non-JSON body or an error envelope.
    """
    if timeout is None:
        timeout = Settings.from_env().api_client_timeout
    sender = session or requests
    try:
        response = sender.request(
            method,
            url,
            json=json,
            headers=build_headers(headers),
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error(
            "API request failed",
            extra={"extra_fields": {"method": method, "url": url, "error": str(e)}},
        )
        raise ApiClientError(f"request to {url} failed: {e}") from e

    try:
        body = response.json()
    except ValueError as e:
        raise ApiClientError(
            "response body is not valid JSON", status_code=response.status_code
        ) from e

    if not isinstance(body, dict) or not body.get("success"):
        error = body.get("error") if isinstance(body, dict) else None
        code = body.get("code") if isinstance(body, dict) else None
        logger.warning(
            "API returned error envelope",
            extra={
                "extra_fields": {
                    "url": url,
                    "status_code": response.status_code,
                    "code": code,
                }
            },
        )
        raise ApiClientError(
            error or "request failed", code=code, status_code=response.status_code
        )

    return body.get("data")

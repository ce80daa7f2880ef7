"""Correlation ID management for request tracing."""

import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Literal, Mapping, Sequence

CorrelationSource = Literal["inbound-header", "generated"]

# Context variable for correlation ID - read by the JSON log formatter
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "x-correlation-id"

# Read after the designated header, never written back
FALLBACK_HEADERS: tuple[str, ...] = ("x-request-id", "request-id")


class CorrelationIdGenerationError(RuntimeError):
    """Raised when a fresh correlation ID cannot be produced."""


@dataclass(frozen=True)
class CorrelationId:
    """Correlation ID resolved for a single request."""

    value: str
    source: CorrelationSource

    def __str__(self) -> str:
        return self.value


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID v4).

    Raises:
        CorrelationIdGenerationError: If the OS entropy source is unavailable.
    """
    try:
        return str(uuid.uuid4())
    except (NotImplementedError, OSError) as e:
        raise CorrelationIdGenerationError("entropy source unavailable") from e


def resolve_correlation_id(
    headers: Mapping[str, str],
    header_name: str = CORRELATION_ID_HEADER,
    fallback_headers: Sequence[str] = FALLBACK_HEADERS,
) -> CorrelationId:
    """Reuse an inbound correlation ID or generate a new one.

    Inbound values are opaque: any non-blank value is passed through as-is.

    Args:
        headers: Request headers. Lookups use the mapping as given, so pass a
            case-insensitive mapping (e.g. Starlette ``Headers``).
        header_name: Designated correlation header.
        fallback_headers: Headers consulted, in order, when the designated
            header is missing or blank.

    Returns:
        The resolved CorrelationId.

    Raises:
        CorrelationIdGenerationError: If generation is needed and fails.
    """
    for name in (header_name, *fallback_headers):
        value = headers.get(name)
        if value and value.strip():
            return CorrelationId(value=value, source="inbound-header")
    return CorrelationId(value=generate_correlation_id(), source="generated")


def get_correlation_id() -> str:
    """Get current correlation ID from context."""
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> Token[str]:
    """Set correlation ID in context."""
    return correlation_id_var.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    """Reset correlation ID to previous value."""
    correlation_id_var.reset(token)

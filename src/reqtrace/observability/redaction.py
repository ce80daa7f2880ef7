"""Redaction helpers for safe logging. All log fields pass through these."""

import re
from typing import Any, Mapping

# Patterns that should never appear in logs
_PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-()]{8,}\d")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_REDACTED = "[REDACTED]"

SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "authorization",
        "cookie",
        "access_token",
        "refresh_token",
        "api_key",
        "secret",
        "private_key",
        "credit_card",
        "ssn",
        "phone",
    }
)


def redact_string(value: str) -> str:
    """Scrub phone numbers and email addresses from free text."""
    result = _PHONE_PATTERN.sub(_REDACTED, value)
    return _EMAIL_PATTERN.sub(_REDACTED, result)


def _is_sensitive(key: Any) -> bool:
    normalized = str(key).lower().replace("-", "_")
    return normalized in SENSITIVE_KEYS or normalized.removeprefix("x_") in SENSITIVE_KEYS


def redact_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Prepare structured log fields for output.

    Values under sensitive keys are replaced outright. Key matching is
    case-insensitive and treats ``-`` like ``_`` so header names such as
    ``X-Api-Key`` are caught as well. Remaining string values are scrubbed
    with :func:`redact_string`; nested mappings are walked.
    """
    result: dict[str, Any] = {}
    for key, value in fields.items():
        if _is_sensitive(key):
            result[key] = _REDACTED
        elif isinstance(value, Mapping):
            result[key] = redact_fields(value)
        elif isinstance(value, str):
            result[key] = redact_string(value)
        else:
            result[key] = value
    return result

"""Path filter deciding which requests a pipeline stage intercepts."""

import re
from typing import Iterable, Sequence

from reqtrace.settings import DEFAULT_EXCLUDED_PREFIXES

API_PATTERN = r"/api(?:/.*)?"


class PathMatcher:
    """Match request paths against a set of full-match regexes."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        self._compiled = [re.compile(p) for p in self.patterns]

    def matches(self, path: str) -> bool:
        return any(rx.fullmatch(path) for rx in self._compiled)

    @classmethod
    def from_excluded_prefixes(
        cls, prefixes: Sequence[str] = DEFAULT_EXCLUDED_PREFIXES
    ) -> "PathMatcher":
        """API paths always match; any other path matches unless excluded.

        Args:
            prefixes: Path prefixes (leading slash included) that bypass the
                stage, e.g. ``/static/`` or ``/favicon.ico``.
        """
        stripped = [p.lstrip("/") for p in prefixes if p.lstrip("/")]
        if not stripped:
            return cls([API_PATTERN, r"/.*"])
        alternatives = "|".join(re.escape(p) for p in stripped)
        return cls([API_PATTERN, rf"/(?!(?:{alternatives})).*"])

    def __repr__(self) -> str:
        return f"PathMatcher({list(self.patterns)!r})"

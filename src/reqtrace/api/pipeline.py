"""Ordered request-handler pipeline installed as Starlette middleware."""

from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .matcher import PathMatcher

CallNext = Callable[[Request], Awaitable[Response]]
Stage = Callable[[Request, CallNext], Awaitable[Response]]


@dataclass(frozen=True)
class PipelineStage:
    name: str
    handler: Stage
    matcher: PathMatcher | None = None

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        # Unmatched requests bypass this stage entirely
        if self.matcher is not None and not self.matcher.matches(request.url.path):
            return await call_next(request)
        return await self.handler(request, call_next)


class RequestPipeline:
    """Stages run in declaration order: the first stage sees the request first
    and the response last.
    """

    def __init__(self) -> None:
        self._stages: list[PipelineStage] = []

    def add(
        self,
        stage: Stage,
        matcher: PathMatcher | None = None,
        name: str | None = None,
    ) -> "RequestPipeline":
        self._stages.append(
            PipelineStage(name=name or stage.__name__, handler=stage, matcher=matcher)
        )
        return self

    @property
    def stages(self) -> tuple[PipelineStage, ...]:
        return tuple(self._stages)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self._stages]

    def install(self, app: FastAPI) -> None:
        """Register every stage on ``app``.

        Starlette wraps the most recently added middleware around the others,
        so stages are added last-to-first.
        """
        for stage in reversed(self._stages):
            app.add_middleware(BaseHTTPMiddleware, dispatch=stage)

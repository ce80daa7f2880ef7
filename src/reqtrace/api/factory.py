"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from reqtrace.observability.logging import get_logger
from reqtrace.settings import Settings

from .errors import register_exception_handlers
from .matcher import PathMatcher
from .middleware import make_correlation_id_stage, request_logging_middleware
from .pipeline import RequestPipeline
from .routers import public

logger = get_logger(__name__)


def build_pipeline(settings: Settings) -> RequestPipeline:
    """Declare the request pipeline: correlation first, then request logging."""
    pipeline = RequestPipeline()
    pipeline.add(
        make_correlation_id_stage(settings.correlation_header),
        matcher=PathMatcher.from_excluded_prefixes(settings.excluded_prefixes),
    )
    pipeline.add(request_logging_middleware)
    return pipeline


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        settings: Explicit settings. If None, reads from the environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(
        title="reqtrace",
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings

    pipeline = build_pipeline(settings)
    pipeline.install(app)
    app.state.pipeline = pipeline

    register_exception_handlers(app)

    if settings.static_dir:
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    app.include_router(public.router)

    logger.debug(
        "app created",
        extra={"extra_fields": {"app_env": settings.app_env, "stages": pipeline.names}},
    )
    return app

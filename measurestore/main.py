from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .core.config import Settings, settings
from .core.errors import StartupError
from .core.log import configure_logging
from .domain.interfaces import DocumentRepository
from .services.documents import MeasurementService
from .services.rendering import TableRenderer, load_template
from .storage.mongo_repo import MongoRepository

from .api.routes import router as api_router
import measurestore.api.routes as routes_module


logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Process-wide collaborators, built once at startup and never mutated."""

    repo: DocumentRepository
    renderer: TableRenderer
    service: MeasurementService = field(init=False)

    def __post_init__(self) -> None:
        self.service = MeasurementService(repo=self.repo, renderer=self.renderer)


def build_context(cfg: Settings) -> AppContext:
    """Load the template and connect to MongoDB; raises ``StartupError``."""
    source = load_template(cfg.template_path)
    renderer = TableRenderer(source)

    repo = MongoRepository(
        uri=cfg.mongo_uri,
        database=cfg.mongo_database,
        collection=cfg.mongo_collection,
        timeout_ms=cfg.mongo_timeout_ms,
    )
    repo.connect()
    return AppContext(repo=repo, renderer=renderer)


def create_app(context: AppContext, static_dir: Optional[Path] = None, title: str = settings.app_name) -> FastAPI:
    service = context.service

    def get_service() -> MeasurementService:
        return service

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s", title)
        try:
            yield
        finally:
            context.repo.close()
            logger.info("Shutdown complete")

    app = FastAPI(title=title, lifespan=lifespan)

    @app.middleware("http")
    async def allow_any_origin(request: Request, call_next):
        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    # Unhandled errors are answered by the outermost error middleware, which
    # bypasses allow_any_origin
    async def internal_error(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=500,
            headers={"Access-Control-Allow-Origin": "*"},
        )

    app.add_exception_handler(Exception, internal_error)

    # Make the dependency function in routes resolve to the real one
    app.dependency_overrides[routes_module.get_service] = get_service

    app.include_router(api_router)

    # Everything else is served from the static root; must be mounted last
    if static_dir is not None:
        if Path(static_dir).is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            logger.warning(
                "Static directory %s does not exist; static files will not be served.",
                static_dir,
            )
    return app


def run() -> None:
    configure_logging(settings.log_level, settings.log_file)

    if settings.port is None:
        logger.critical("$PORT not set")
        sys.exit(1)

    try:
        context = build_context(settings)
    except StartupError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    app = create_app(context, static_dir=settings.static_dir)
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

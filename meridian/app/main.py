"""FastAPI application bootstrap for Meridian."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .domain.schemas import HealthResponse
from .infra.db import init_db
from .infra.logs import configure_logging
from .routers import indicators, projects
from .services.records import StorageFailure
from .settings import get_settings

logger = logging.getLogger("meridian.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("meridian %s ready", __version__)
    yield


async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal Server Error - Could not {exc.action} data"},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Meridian API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type", "x-requested-with"],
    )
    app.add_exception_handler(StorageFailure, storage_failure_handler)

    app.include_router(projects.router, prefix="/projects", tags=["projects"])
    app.include_router(indicators.router, prefix="/indicators", tags=["indicators"])

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse()

    @app.get("/")
    def root():
        return {"ok": True, "service": app.title, "version": __version__}

    return app


app = create_app()

"""FastAPI app entry: config, logging, health, and routers."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from speechprep.config.chunking.static import load_chunking_profiles
from speechprep.config.logging import configure_logging, get_logger
from speechprep.config.settings import get_settings
from speechprep.controllers.routes.chunk import router as chunk_router
from speechprep.controllers.routes.config import router as config_router
from speechprep.controllers.routes.headings import router as headings_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and chunking profiles. A broken static.json fails startup."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    profiles = load_chunking_profiles()
    logger.info("Chunking profiles loaded", extra={"profiles": sorted(profiles)})
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Speech Prep",
    description="Normalize long-form text and split it into chunks for text-to-speech",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(chunk_router)
app.include_router(headings_router)
app.include_router(config_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up."""
    return {"status": "ok"}


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: log the failure, return a body that leaks no internals."""
    logger.exception("Unhandled error", extra={"error": type(exc).__name__})
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )

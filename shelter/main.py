"""Shelter Guests FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shelter.api.v1.bans import router as bans_router
from shelter.api.v1.devmode import router as devmode_router
from shelter.api.v1.facilities import router as facilities_router
from shelter.api.v1.guests import router as guests_router
from shelter.api.v1.registrations import router as registrations_router
from shelter.api.v1.templates import router as templates_router
from shelter.config import settings
from shelter.exceptions import ShelterError

# Configure root logger so all shelter.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    from shelter import models  # noqa: F401  (register tables on Base.metadata)
    from shelter.database import Base, engine

    # Startup: create any missing tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    # Shutdown: dispose engine connections
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Nightly mat registrations, guests and bans for overnight shelters.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ShelterError)
async def shelter_error_handler(request: Request, exc: ShelterError) -> JSONResponse:
    """Render service-layer errors the same way as ``HTTPException``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Routers
app.include_router(facilities_router)
app.include_router(guests_router)
app.include_router(bans_router)
app.include_router(registrations_router)
app.include_router(templates_router)
app.include_router(devmode_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }

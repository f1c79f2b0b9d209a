"""Book Sphere API: FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from booksphere import models  # noqa: F401  # registers tables on Base.metadata
from booksphere.config import configure_logging, get_settings
from booksphere.database import Base, dispose_engine, get_engine, get_session_factory
from booksphere.domain.common.exceptions import DomainError
from booksphere.exceptions import BookSphereError
from booksphere.infrastructure.common.rate_limit import limiter
from booksphere.infrastructure.common.routers import health
from booksphere.infrastructure.mood.routers import presets
from booksphere.infrastructure.realtime import router as realtime
from booksphere.infrastructure.sync.routers import sync

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown events."""
    configure_logging(settings.ENVIRONMENT)
    get_session_factory(settings)
    Base.metadata.create_all(bind=get_engine())
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Mood-adaptive reading: mood triggers, reading rooms and delta sync",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookSphereError)
async def booksphere_error_handler(request: Request, exc: BookSphereError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Domain rule violations that reach a route are client errors."""
    return JSONResponse(status_code=400, content={"detail": exc.message})


# Mount routers
app.include_router(health.router)
app.include_router(presets.router, prefix=settings.API_V1_PREFIX)
app.include_router(sync.router, prefix=settings.API_V1_PREFIX)
app.include_router(realtime.router)


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "message": f"{settings.PROJECT_NAME} is running",
        "version": settings.VERSION,
        "docs": "/docs",
        "websocket": "/ws",
    }

import asyncio
from contextlib import asynccontextmanager, suppress
from datetime import datetime, timedelta, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from island_properties.core.config import settings
from island_properties.core.database import create_session_factory
from island_properties.core.errors import IslandPropertiesError, UnauthorizedError
from island_properties.core.logging import setup_logging
from island_properties.repositories.base import Repository
from island_properties.repositories.memory import MemoryRepository
from island_properties.repositories.seed import ensure_bootstrap_admin, seed_sample_data
from island_properties.repositories.sql import SqlRepository
from island_properties.routers import (
    admin_auth, admin_blog, admin_dashboard, admin_properties, admin_testimonials, content, properties,
)
from island_properties.services.audit import AuditLogger
from island_properties.services.auth import AuthService
from island_properties.services.sessions import SessionStore


def build_repository() -> Repository:
    """SQL backend when DATABASE_URL is set, otherwise process memory."""
    if settings.DATABASE_URL:
        return SqlRepository(create_session_factory(settings.DATABASE_URL))
    return MemoryRepository()


async def sweep_expired_sessions(sessions: SessionStore, interval_seconds: int) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        sessions.purge_expired()


def create_app(repository: Optional[Repository] = None) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()

        repo = repository or build_repository()
        sessions = SessionStore()
        audit = AuditLogger(repo)
        app.state.repository = repo
        app.state.sessions = sessions
        app.state.audit = audit
        app.state.auth = AuthService(
            repo,
            sessions,
            audit,
            session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
            remember_me_ttl=timedelta(hours=settings.REMEMBER_ME_TTL_HOURS),
        )

        if settings.SEED_SAMPLE_DATA:
            await seed_sample_data(repo)
        await ensure_bootstrap_admin(repo, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

        sweeper = None
        if settings.SESSION_SWEEP_INTERVAL_SECONDS > 0:
            sweeper = asyncio.create_task(
                sweep_expired_sessions(sessions, settings.SESSION_SWEEP_INTERVAL_SECONDS)
            )

        logger.info("Application started", backend=type(repo).__name__)
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.cancel()
                with suppress(asyncio.CancelledError):
                    await sweeper
            await repo.close()
            logger.info("Application stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Property listings, blog and testimonials for Bohol real estate",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Error mapping ────────────────────────────────────────────────────────

    @app.exception_handler(IslandPropertiesError)
    async def island_properties_error_handler(request: Request, exc: IslandPropertiesError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled error", method=request.method, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Include routers
    app.include_router(properties.router, prefix="/api")
    app.include_router(content.router, prefix="/api")
    app.include_router(admin_auth.router, prefix="/api/admin")
    app.include_router(admin_dashboard.router, prefix="/api/admin")
    app.include_router(admin_properties.router, prefix="/api/admin")
    app.include_router(admin_blog.router, prefix="/api/admin")
    app.include_router(admin_testimonials.router, prefix="/api/admin")

    @app.get("/")
    def root():
        return {
            "message": "Island Properties API",
            "version": "1.0.0",
            "status": "active",
            "documentation": "/docs",
        }

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "timestamp": datetime.now(timezone.utc),
        }

    return app


app = create_app()


def run() -> None:
    """Serve `app` with uvicorn (the `island-properties` console script)."""
    uvicorn.run(
        "island_properties.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()

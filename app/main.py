"""Vendors Service — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.auth import Authenticator, IdentityServiceAuthenticator
from app.core.config import Settings, settings as default_settings
from app.core.exceptions import register_exception_handlers
from app.db.base import build_engine, build_session_factory
from app.db.bootstrap import init_models
from app.middleware.request_log import RequestLogMiddleware
from app.middleware.timeout import TimeoutMiddleware
from app.schemas.common import HealthResponse
from app.services.obligations import NoOpenObligations, ObligationsChecker

from app.routers.rpc import RPC_PREFIX, render_rpc_error
from app.routers.rpc import router as rpc_router
from app.routers.v1.payment_terms import router as payment_terms_v1_router
from app.routers.v1.vendors import router as vendors_v1_router

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    """Set up structured logging for the application."""
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    authenticator: Authenticator | None = None,
    obligations: ObligationsChecker | None = None,
) -> FastAPI:
    """Build the application.

    Collaborators default to the production ones built from ``settings``; tests
    pass their own session factory, authenticator and obligations checker.
    """
    settings = settings or default_settings
    _configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if app.state.session_factory is None:
            engine = build_engine(settings)
            if settings.db_auto_create:
                await init_models(engine)
            app.state.session_factory = build_session_factory(engine)
            logger.info("Database connection established")
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
                logger.info("Database connection closed")

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- Collaborators (handed to services per request, never globals) ---
    app.state.session_factory = session_factory
    app.state.authenticator = authenticator or IdentityServiceAuthenticator(
        settings.identity_service_url, settings.identity_timeout_seconds
    )
    app.state.obligations = obligations or NoOpenObligations()
    app.state.error_renderers = {RPC_PREFIX: render_rpc_error}

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=settings.frontend_url != "*",
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Deadline + request logging ---
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(vendors_v1_router, prefix="/api/v1")
    app.include_router(payment_terms_v1_router, prefix="/api/v1")

    # --- RPC contract (/rpc/VendorsService/*) ---
    app.include_router(rpc_router)

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()

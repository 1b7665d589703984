"""
Gear CRUD — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn gear_crud.main:app) and by `python -m gear_crud`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │   Req ID     │→│ Logging  │→│  CORS           │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /armor       │ │ /weapon  │ │ /ping  /health  │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ GearCrudError → check_error(kind) │ else 500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the GearStore (MongoDB: connect + ping, fatal on failure)
    3. Log startup complete

    Shutdown:
    1. Close the MongoDB client
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gear_crud import __version__
from gear_crud.config import settings
from gear_crud.database import close_gear_store, connect_gear_store
from gear_crud.exceptions import GearCrudError
from gear_crud.middleware.logging import RequestLoggingMiddleware
from gear_crud.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from gear_crud.responses import check_error, respond_with_error
from gear_crud.routes import armor, health, weapon
from gear_crud.services.memory_store import InMemoryGearStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    Called once during startup, before the store is built.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.logging_level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Driver and server internals log every heartbeat and access at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the GearStore on startup and release it on shutdown.

    A MongoDB connection or ping failure propagates out of startup, so the
    server refuses to start rather than serve requests it cannot fulfil.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("INITIALIZING GEAR CRUD %s", settings.api_version)

    if settings.store_backend == "memory":
        logger.warning("Using the in-memory store; records are lost on shutdown")
        app.state.gear_store = InMemoryGearStore(default_page_size=settings.default_page_size)
    else:
        try:
            app.state.gear_store = await connect_gear_store(settings)
        except GearCrudError as e:
            logger.critical("ERROR connecting to MongoDB: %s", e.message)
            raise

    logger.info("Server listening on port %d", settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Gear CRUD shutting down...")
    await close_gear_store(app.state.gear_store)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Render raised errors as {"error": message} with the classified status.

    Handler hierarchy:
        GearCrudError  → check_error(exc) (400 / 404 / 424 / 500)
        Exception      → 500 (unexpected; stack trace logged, not returned)
    """

    @app.exception_handler(GearCrudError)
    async def handle_gear_error(request: Request, exc: GearCrudError) -> JSONResponse:
        status_code = check_error(exc)
        if status_code >= 500:
            logger.error("%s error: %s | Context: %s", exc.kind.value, exc.message, exc.context)
        else:
            logger.warning("%s error: %s", exc.kind.value, exc.message)
        return respond_with_error(status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return respond_with_error(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance. The GearStore is attached
    by the lifespan, so creating an app never opens a connection.
    """
    app = FastAPI(
        title="Gear CRUD API",
        description="Reference catalog of armor and weapons for a tabletop game.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(armor.router)
    app.include_router(weapon.router)

    return app


# uvicorn expects `gear_crud.main:app` to be importable
app = create_app()

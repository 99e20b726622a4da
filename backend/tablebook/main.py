"""
TableBook Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn tablebook.main:app) or the `tablebook` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│  Logging    │→│  CORS            │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌───────────────┐ ┌──────────────┐  │
    │  │ /users     │ │ /reservation  │ │ / and /health│  │
    │  │ /signup    │ │               │ │              │  │
    │  └────────────┘ └───────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ TableBookError→status │ bad body→400 │ *→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Construct the Database pool handle and attach it to app.state
    3. Run the best-effort database version diagnostic

    Shutdown:
    1. Dispose the pool (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tablebook import __version__
from tablebook.config import settings
from tablebook.database import Database
from tablebook.exceptions import INTERNAL_ERROR_MESSAGE, DatabaseError, TableBookError
from tablebook.middleware.logging import RequestLoggingMiddleware
from tablebook.middleware.request_id import RequestIDMiddleware, request_id_var
from tablebook.routes import health, landing, reservations, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, pool construction, version diagnostic.
    Shutdown: pool disposal.

    The diagnostic never blocks startup; an unreachable database is logged and
    requests fail individually with 500 until it comes back.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("TableBook Backend starting up...")

    database = Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=settings.db_pool_pre_ping,
        require_ssl=settings.db_require_ssl,
        echo=settings.log_level == "DEBUG",
    )
    app.state.database = database

    await database.log_server_version()

    logger.info("App is listening on port %d", settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("TableBook Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        TableBookError          → exc.status_code, {"message": exc.message}
        RequestValidationError  → 400, {"message": "Invalid request data", "details": [...]}
        Exception (fallback)    → 500, {"message": "Internal server error"}

    Security: responses never contain stack traces, SQL text or driver
    messages. Those are logged server-side with the request id.
    """

    @app.exception_handler(TableBookError)
    async def handle_tablebook_error(request: Request, exc: TableBookError):
        rid = request_id_var.get("")
        if isinstance(exc, DatabaseError):
            logger.error(
                "[%s] Database error (%s) on %s %s | Context: %s",
                rid,
                exc.kind.value,
                request.method,
                request.url.path,
                exc.context,
                exc_info=exc.__cause__ or exc,
            )
        else:
            logger.debug("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed body or path parameter (wrong type, unparseable date, bad JSON)."""
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request on %s: %s", rid, request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "message": "Invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"],
                    }
                    for error in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged server-side ONLY."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": INTERNAL_ERROR_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    The Database is not created here: the lifespan attaches it to app.state,
    and tests attach their own.
    """
    app = FastAPI(
        title="TableBook API",
        description="Restaurant table booking API: user registration and reservation CRUD.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(reservations.router)
    app.include_router(health.router)
    app.include_router(landing.router)

    return app


# uvicorn expects `tablebook.main:app` to be importable
app = create_app()


def main() -> None:
    """Console entry point: serve the app on HOST:PORT."""
    uvicorn.run(
        "tablebook.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

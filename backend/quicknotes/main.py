"""
QuickNotes Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own settings and storage gateway on `app.state`.
Who:   uvicorn imports `quicknotes.main:app`; the `quicknotes` console
       script calls run(); tests call create_app() with their own Settings.

Application Layout:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌────────────┐ ┌───────────────┐  │
    │  │  Request ID  │→│ Body Limit │→│  Logging      │  │
    │  └──────────────┘ └────────────┘ └───────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  POST /note   GET /note/{id}   GET /notes           │
    │  PATCH /note/{id}   DELETE /note/{id}               │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │  Decode→400 │ NotFound→404 │ Database→500           │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the database and create the `notes` table (fatal on failure)
    3. Log startup complete

    Shutdown:
    1. Dispose the database engine (close all connections)
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response

from quicknotes import __version__
from quicknotes.config import Settings, settings
from quicknotes.database import StorageGateway
from quicknotes.exceptions import (
    QuickNotesError,
    NotFoundError,
    DatabaseError,
    SerializationError,
)
from quicknotes.middleware.body_limit import BodySizeLimitMiddleware
from quicknotes.middleware.logging import RequestLoggingMiddleware
from quicknotes.middleware.request_id import RequestIDMiddleware, request_id_var
from quicknotes.routes import notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by the container runtime / terminal)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's access log duplicates quicknotes.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open storage on startup and release it on shutdown.

    A StorageInitError raised by initialize() is not caught: the lifespan
    fails, uvicorn reports "Application startup failed" and the process
    exits without ever accepting a request.
    """
    app_settings: Settings = app.state.settings
    storage: StorageGateway = app.state.storage

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("QuickNotes Backend %s starting up...", __version__)

    await storage.initialize()

    logger.info(
        "Server ready at http://%s:%d",
        app_settings.backend_host,
        app_settings.backend_port,
    )

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("QuickNotes Backend shutting down...")
    await storage.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _format_validation_errors(exc: RequestValidationError) -> str:
    """Render FastAPI validation errors as one line per problem."""
    lines = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        msg = error.get("msg", "invalid value")
        ctx_error = (error.get("ctx") or {}).get("error")
        if ctx_error:
            msg = f"{msg}: {ctx_error}"
        lines.append(f"{loc}: {msg}" if loc else msg)
    return "\n".join(lines) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler table:
        RequestValidationError  → 400 (body not JSON or wrong shape)
        SerializationError      → 400 (stored row is not a valid Note)
        NotFoundError           → 404, empty body
        DatabaseError           → 500, driver error text
        QuickNotesError (base)  → 500
        Exception (fallback)    → 500

    Every error body is plain text.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.warning("[%s] Error decoding request: %s", request_id_var.get(""), message)
        return PlainTextResponse(message, status_code=400)

    @app.exception_handler(SerializationError)
    async def handle_serialization_error(request: Request, exc: SerializationError):
        logger.error("[%s] Error serializing response: %s", request_id_var.get(""), exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return Response(status_code=404)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(QuickNotesError)
    async def handle_app_error(request: Request, exc: QuickNotesError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            exc,
            exc_info=True,
        )
        return PlainTextResponse("Internal Server Error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; the module-level `settings` when None.

    Returns:
        FastAPI instance with its own StorageGateway on `app.state.storage`.
        The database is not touched until the lifespan starts.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="QuickNotes API",
        description="Create, read, update and delete notes stored in SQLite.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.storage = StorageGateway(
        app_settings.database_url,
        busy_timeout=app_settings.db_busy_timeout,
        echo=app_settings.log_level == "DEBUG",
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executed in reverse order of addition: RequestID → BodyLimit → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=app_settings.max_body_size)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)

    return app


# uvicorn expects `quicknotes.main:app` to be importable
app = create_app()


def run() -> None:
    """
    Serve `app` on the configured host and port.

    uvicorn exits the process with a non-zero status when the port cannot
    be bound or when startup (storage initialization) fails.
    """
    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

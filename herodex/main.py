"""
HeroDex Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn herodex.main:app), or
       through the `herodex` console script (run()).

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌────────────┐ ┌────────┐ ┌─────────┐ ┌──────┐ ┌──────┐│
    │  │ Body Limit │→│ Req ID │→│ Logging │→│ GZip │→│ CORS ││
    │  └────────────┘ └────────┘ └─────────┘ └──────┘ └──────┘│
    │                                                         │
    │  Routes:                                                │
    │  /heroes  /heroes/{id}  /heroes/{id}/comments           │
    │  /search  /search/heroes/by-name  …/by-min-stats        │
    │  /  /health                                             │
    │                                                         │
    │  Exception Handlers:                                    │
    │  ValidationError→400 │ NotFoundError→404                │
    │  unmatched route→404 {"err": "not found!"}              │
    │  anything else→fallback_handler (500 "Something broke!")│
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the listen address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from herodex import __version__
from herodex.config import settings
from herodex.database import dispose_engine
from herodex.exceptions import HeroDexError, NotFoundError, ValidationError
from herodex.middleware.body_limit import BodySizeLimitMiddleware
from herodex.middleware.logging import RequestLoggingMiddleware
from herodex.middleware.request_id import RequestIDMiddleware, request_id_var
from herodex.routes import comments, health, heroes, search

logger = logging.getLogger(__name__)

FallbackHandler = Callable[[Request, Exception], Awaitable[JSONResponse]]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during app startup, before anything else logs.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("HeroDex Backend %s starting up...", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("HeroDex Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Default process-wide fallback: log the stack trace, answer a generic 500.

    Nothing about the failure (SQL, driver messages, paths) reaches the client.
    """
    # Runs above the middleware stack, so read the ID from the shared scope state
    rid = getattr(request.state, "request_id", None) or request_id_var.get("")
    logger.error(
        "[%s] Unexpected error on %s %s: %s",
        rid,
        request.method,
        request.url.path,
        str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"err": "Something broke!"})


def register_exception_handlers(app: FastAPI, fallback_handler: FallbackHandler) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError       → 400 Bad Request
        NotFoundError         → 404 Not Found
        HeroDexError (base)   → 500 with the error's own message
        HTTP 404 (no route)   → 404 {"err": "not found!"}
        Exception (fallback)  → fallback_handler
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(HeroDexError)
    async def handle_app_error(request: Request, exc: HeroDexError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"err": "not found!"})
        return await http_exception_handler(request, exc)

    app.add_exception_handler(Exception, fallback_handler)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    fallback_handler: FallbackHandler = handle_unexpected_error,
    max_body_size: Optional[int] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        fallback_handler: Responder for any exception no other handler
                          claims. Defaults to handle_unexpected_error.
        max_body_size:    Override of settings.max_body_size in bytes.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="HeroDex API",
        description=(
            "Hero catalog with name, gender and powerstat search, plus "
            "per-hero comments. All listings are sorted and paginated."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first).

    # Permissive CORS: the catalog is public, read-mostly data
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Hero pages with embedded heroes compress well
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=max_body_size)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, fallback_handler)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(heroes.router)
    app.include_router(search.router)
    app.include_router(comments.router)

    return app


# uvicorn expects `herodex.main:app` to be importable
app = create_app()


def run() -> None:
    """Console-script entry point: serve the app on the configured host/port."""
    import uvicorn

    uvicorn.run(
        "herodex.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )

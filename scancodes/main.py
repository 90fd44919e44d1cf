"""
Scancodes — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn scancodes.main:app) or the scancodes-web script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  GET /code/{id} │ GET /templates │ POST /scan │     │
    │  GET /health                                        │
    │                                                     │
    │  Exception Handlers:                                │
    │  BlueprintError→500 │ RenderError→500 │ other→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Load the blueprint text (fatal on failure)
    3. Build the pipeline from it (fatal on failure)
    4. Create the template service
    Shutdown:
    1. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from scancodes import __version__
from scancodes.config import settings
from scancodes.exceptions import (
    BlueprintError,
    PipelineBuildError,
    RenderError,
    ScanCodesError,
)
from scancodes.middleware.logging import RequestLoggingMiddleware
from scancodes.middleware.request_id import RequestIDMiddleware, request_id_var
from scancodes.pipeline import build_pipeline
from scancodes.routes import codes, health, scan, templates
from scancodes.services.blueprint_loader import load_blueprint
from scancodes.services.template_service import TemplateService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the process-wide state before the first request is served.

    The blueprint string, pipeline and template service are stored on
    app.state and never replaced. A blueprint or pipeline failure is logged
    and re-raised, so the server refuses to start.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Scancodes %s starting up...", __version__)

    try:
        blueprint = await load_blueprint()
        pipeline = build_pipeline(blueprint)
    except (BlueprintError, PipelineBuildError) as e:
        logger.critical("Startup failed: %s | Context: %s", e.message, e.context)
        raise

    app.state.blueprint = blueprint
    app.state.pipeline = pipeline
    app.state.template_service = TemplateService(blueprint)

    logger.info("Templates: %s", ", ".join(pipeline.template_ids))
    logger.info("Scan endpoint: %s", "enabled" if settings.scan_enabled else "disabled")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Scancodes shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        BlueprintError          → 500 (template catalog unusable)
        RenderError             → 500 (unknown template, unrenderable id)
        ScanCodesError (base)   → 500 (catch-all for custom)
        Exception (fallback)    → 500 (unexpected errors)

    Context dicts are logged server-side and never returned.
    """

    @app.exception_handler(BlueprintError)
    async def handle_blueprint_error(request: Request, exc: BlueprintError):
        rid = request_id_var.get("")
        logger.error("[%s] Blueprint error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "blueprint_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(RenderError)
    async def handle_render_error(request: Request, exc: RenderError):
        rid = request_id_var.get("")
        logger.error("[%s] Render error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "render_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(ScanCodesError)
    async def handle_app_error(request: Request, exc: ScanCodesError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Generic 500 with a request ID; the stack trace stays in the logs."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    POST /scan is mounted only when settings.scan_enabled is true.
    """
    app = FastAPI(
        title="Scancodes API",
        description=(
            "Render numeric identifiers as scannable codes (SVG), list the "
            "available templates, and read codes back out of uploaded images."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Scan-Status"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(codes.router)
    app.include_router(templates.router)
    if settings.scan_enabled:
        app.include_router(scan.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "scancodes.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `scancodes.main:app` to be importable
app = create_app()

"""
Jeb's API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance with the Settings bound to `app.state.settings`.
Who:   uvicorn (`uvicorn jebs_api.main:app`), the `jebs-api` console script,
       and the test suite (which builds apps with its own Settings).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────────────┐ ┌──────────┐ ┌─────────────────┐   │
    │  │ CORS / pre-flight│→│ Req ID   │→│  Logging        │   │
    │  └──────────────────┘ └──────────┘ └─────────────────┘   │
    │                                                          │
    │  Routes:                                                 │
    │  ┌────────────────┐ ┌────────────────┐ ┌──────────────┐  │
    │  │ POST checkout  │ │ POST applic.   │ │ GET health   │  │
    │  └────────────────┘ └────────────────┘ └──────────────┘  │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ 404/405→404 │ Config/Provider→500 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Every response body is JSON; every error body is {"error": "<message>"}.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jebs_api import __version__
from jebs_api.config import DEFAULT_CORS_ORIGIN, Settings
from jebs_api.exceptions import (
    ConfigurationError,
    JebsApiError,
    ProviderError,
    ValidationError,
)
from jebs_api.middleware.cors import CORSHeadersMiddleware
from jebs_api.middleware.logging import RequestLoggingMiddleware
from jebs_api.middleware.request_id import RequestIDMiddleware, request_id_var
from jebs_api.responses import error_response
from jebs_api.routes import applications, checkout, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2026-10-18T12:00:00 [INFO] jebs_api.services.checkout_service: ...
    Handler: stdout (captured by the container / platform log drain)
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise from servers and SDKs
    for noisy in ("uvicorn.access", "httpcore", "httpx", "stripe"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Report missing credentials (the server still starts)
        3. Log the effective configuration summary
    Shutdown:
        Nothing to release: no pools, no persistent clients.
    """
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.service_name, __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Health checks keep answering; affected routes report per request
        logger.warning("%s", e)

    logger.info("CORS origin: %s", settings.cors_origin)
    logger.info("Applications go to: %s", settings.jeb_application_email)
    logger.info("=" * 60)

    yield

    logger.info("%s shutting down.", settings.service_name)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _allowed_origin(request: Request) -> str:
    settings: Optional[Settings] = getattr(request.app.state, "settings", None)
    return settings.cors_origin if settings else DEFAULT_CORS_ORIGIN


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and {"error": message} bodies.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        HTTPException 404 / 405  → 404 {"error": "Not found"}
        ConfigurationError       → 500 (fixed message, e.g. "Stripe not configured")
        ProviderError            → 500 (Stripe / Resend message)
        JebsApiError (base)      → 500 (CheckoutError, ApplicationSubmissionError)
        Exception (fallback)     → 500 "Internal server error"

    Every failure is logged here, before the response is returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        """Client sent a cart we cannot use; the message names the field."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return error_response(exc.message, _allowed_origin(request), status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Unknown path or wrong method: both are 'Not found' to the website."""
        rid = request_id_var.get("")
        if exc.status_code in (404, 405):
            logger.warning("[%s] No route for %s %s", rid, request.method, request.url.path)
            return error_response("Not found", _allowed_origin(request), status_code=404)
        logger.warning("[%s] HTTP %d: %s", rid, exc.status_code, exc.detail)
        return error_response(str(exc.detail), _allowed_origin(request), status_code=exc.status_code)

    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        rid = request_id_var.get("")
        logger.error("[%s] Configuration error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc.message, _allowed_origin(request), status_code=500)

    @app.exception_handler(ProviderError)
    async def handle_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
        """Stripe or Resend failed; their message is passed through."""
        rid = request_id_var.get("")
        logger.error("[%s] %s error: %s | Context: %s", rid, exc.provider, exc.message, exc.context)
        return error_response(exc.message, _allowed_origin(request), status_code=500)

    @app.exception_handler(JebsApiError)
    async def handle_app_error(request: Request, exc: JebsApiError) -> JSONResponse:
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return error_response(exc.message, _allowed_origin(request), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        """
        Catch-all for truly unexpected errors.

        Runs outside the middleware chain, so the cross-origin headers are
        attached here directly. Stack trace is logged, never returned.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return error_response("Internal server error", _allowed_origin(request), status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration. Defaults to Settings() read from the
                  environment / .env file.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Jeb's API",
        description=(
            "Website backend: Stripe checkout sessions for the online menu and "
            "employment applications relayed by email."
        ),
        version=__version__,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
        redirect_slashes=False,  # "/api/health/" is a different, unknown path
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added Logging → RequestID → CORS, executed CORS → RequestID → Logging.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(CORSHeadersMiddleware, allow_origin=settings.cors_origin)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(checkout.router)
    app.include_router(applications.router)

    return app


def run() -> None:
    """Console entry point: `jebs-api` serves the app with uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "jebs_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `jebs_api.main:app` to be importable
app = create_app()

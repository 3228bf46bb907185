"""FastAPI application for the YouTube content and AdSense management API.

This is the composition root. ``create_app`` wires, in order:
    - database engine and per-request session factory
    - JWT helper and credential encryption service
    - routers (authentication and role checks are route dependencies)
    - exception handlers mapping domain errors to ``{"detail", "code"}``
    - CORS (outermost middleware)
    - Swagger UI at ``/`` with the OpenAPI document at
      ``/swagger/v1/swagger.json``
    - the bundled frontend from ``static.directory``, only when it exists

The lifespan optionally creates the schema, runs seeding inside its own
failure boundary (a failure is logged and startup continues), and owns the
shared ``httpx.AsyncClient``. Any other startup failure is logged at
CRITICAL before uvicorn aborts.

Run with ``python -m content_api.main``; the server binds 0.0.0.0 on
``PORT`` (default 5000).
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from content_api import __version__
from content_api.config import Settings, get_port, get_settings
from content_api.database import create_engine, create_schema, create_session_factory
from content_api.exceptions import AuthenticationError, ContentApiError
from content_api.routes import ROUTERS
from content_api.seed import seed_database
from content_api.static import mount_frontend
from content_api.utils.encryption import EncryptionService
from content_api.utils.jwt import JwtHelper
from content_api.utils.logging import configure_logging, flush_logging

log = structlog.get_logger(__name__)

API_TITLE = "API de Contenido de YouTube & Administración de AdSense"
API_DESCRIPTION = "API for managing YouTube content, AdSense campaigns, employees, and tasks"
DOCS_URL = "/"
OPENAPI_URL = "/swagger/v1/swagger.json"
HOST = "0.0.0.0"  # noqa: S104
HTTP_CLIENT_TIMEOUT = 30.0


async def run_seeding(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> bool:
    """Seed the database in a dedicated session.

    Never raises: any failure is logged at WARNING and startup continues.

    Returns:
        True if seeding completed.
    """
    log.info("database_seeding_started")
    try:
        async with session_factory() as session:
            await seed_database(session, settings)
    except Exception:
        log.warning("database_seeding_failed", exc_info=True)
        return False
    log.info("database_seeding_completed")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup/shutdown of shared resources.

    Startup:
    - Create tables when ``database.auto_create_schema`` is enabled
    - Seed baseline data (non-fatal)
    - Open the shared HTTP client

    Shutdown:
    - Close the HTTP client
    - Dispose the engine's connection pool
    """
    settings: Settings = app.state.settings

    try:
        if settings.database.auto_create_schema:
            await create_schema(app.state.engine)
            log.info("database_schema_ensured")
    except Exception:
        log.critical("application_startup_failed", exc_info=True)
        await app.state.engine.dispose()
        raise

    await run_seeding(app.state.session_factory, settings)

    app.state.http_client = httpx.AsyncClient(timeout=HTTP_CLIENT_TIMEOUT)
    log.info("application_started", environment=settings.environment)

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        await app.state.engine.dispose()
        log.info("application_stopped")


async def handle_content_api_error(request: Request, exc: ContentApiError) -> JSONResponse:
    """Map domain exceptions to their status code and ``{"detail", "code"}`` body."""
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
        log.debug("request_unauthenticated", path=request.url.path, reason=exc.message)
    elif exc.status_code >= 500:
        log.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    else:
        log.info(
            "request_rejected",
            path=request.url.path,
            status=exc.status_code,
            code=exc.code,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )


class UnhandledErrorMiddleware:
    """ASGI middleware turning uncaught exceptions into the generic 500 body.

    Installed inside ``CORSMiddleware`` so error responses still carry the
    CORS headers. Exceptions raised after the response has started are
    re-raised.
    """

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking_start(message: dict[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking_start)
        except Exception as exc:
            if response_started:
                raise
            response = await handle_unexpected_error(Request(scope), exc)
            await response(scope, receive, send)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Loaded settings (defaults to ``get_settings()``).

    Raises:
        ConfigurationError: If a required setting is invalid (for example a
            malformed FERNET_KEY). Callers treat this as fatal.
    """
    settings = settings or get_settings()

    engine = create_engine(settings.database)

    encryption_service = None
    if settings.encryption.fernet_key:
        encryption_service = EncryptionService(settings.encryption.fernet_key)
    else:
        log.warning("credential_encryption_disabled", reason="FERNET_KEY not set")

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url=DOCS_URL,
        redoc_url=None,
        openapi_url=OPENAPI_URL,
        swagger_ui_parameters={"persistAuthorization": True},
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.jwt_helper = JwtHelper(settings.jwt)
    app.state.encryption_service = encryption_service

    for router in ROUTERS:
        app.include_router(router)

    app.add_exception_handler(ContentApiError, handle_content_api_error)

    # Added first so CORS wraps it
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registered last so API and docs routes take precedence
    if mount_frontend(app, settings.static.directory):
        log.info("frontend_mounted", directory=settings.static.directory)

    return app


def main() -> None:
    """Process entry point.

    Any exception during startup is logged at CRITICAL and ``main`` returns
    without setting an exit code of its own. A non-zero ``SystemExit`` from
    uvicorn (lifespan startup failure) is logged at CRITICAL and propagated
    unchanged. Logs are flushed in every case.
    """
    configure_logging()
    try:
        settings = get_settings()
        configure_logging(settings.logging.level, settings.logging.json_output)
        port = get_port()
        log.info("application_starting", environment=settings.environment, port=port)

        app = create_app(settings)
        log.info("application_binding", host=HOST, port=port)
        uvicorn.run(app, host=HOST, port=port, log_config=None)
    except SystemExit as e:
        if e.code not in (None, 0):
            log.critical("application_terminated_unexpectedly", exit_code=e.code)
        raise
    except Exception:
        log.critical("application_terminated_unexpectedly", exc_info=True)
    finally:
        flush_logging()


if __name__ == "__main__":
    main()

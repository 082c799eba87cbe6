"""organiza - personal task manager backend."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from organiza.core.config import Settings, constants, settings
from organiza.core.db_client import Database
from organiza.core.errors import ErrorResponse, InvalidInputError
from organiza.core.logging import configure_logfire, instrument_fastapi
from organiza.core.schema import init_db
from organiza.interface.auth_router import router as auth_router
from organiza.interface.stats_router import router as stats_router
from organiza.interface.task_router import router as task_router
from organiza.services.session_service import SessionIssuer


logger = logging.getLogger(__name__)


def validate_startup_configuration(app_settings: Settings) -> None:
    """Validate credentials before serving requests.

    Raises:
        ValueError: If running in production with a missing or built-in session secret
    """
    logger.info("startup_validation_begin")

    app_settings.require_credential("jwt_secret", "Session signing secret")

    if app_settings.uses_default_secret:
        if app_settings.is_production:
            raise ValueError("JWT_SECRET is still the built-in default. Set a private secret for production.")
        logger.warning("startup_validation", extra={"stage": "credentials", "status": "default_secret"})
    else:
        logger.info("startup_validation", extra={"stage": "credentials", "status": "ok"})

    logger.info("startup_validation_complete", extra={"status": "ok"})


def _error_body(message: str) -> dict[str, str]:
    return ErrorResponse(error=message).model_dump()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return InvalidInputError.default_message

    first = errors[0]
    message = str(first.get("msg", InvalidInputError.default_message)).removeprefix("Value error, ")
    field = first.get("loc", ())[-1] if first.get("loc") else None
    return f"{field}: {message}" if field not in (None, "body") else message


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": message}``."""
    return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail)), headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed or missing input as a 400 ``{"error": message}``."""
    message = _validation_message(exc)
    logger.info("request_validation_failed", extra={"path": request.url.path, "error": message})
    return JSONResponse(status_code=InvalidInputError.status_code, content=_error_body(message))


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application around its own settings and database."""
    active = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan context manager."""
        # Configure logging first so validation logs are captured
        configure_logfire(active)

        try:
            validate_startup_configuration(active)
        except ValueError as e:
            logger.error("startup_validation_failed", extra={"error": str(e)})
            print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
            sys.exit(1)

        database = Database(active.sqlite_db_path)
        await database.connect()
        await init_db(database)
        logger.info("Database initialized")

        app.state.settings = active
        app.state.database = database
        app.state.session_issuer = SessionIssuer(active.jwt_secret, max_age_seconds=active.session_max_age_seconds)
        try:
            yield
        finally:
            await database.close()

    app = FastAPI(
        title="organiza",
        description="Personal task manager API",
        version=constants.SERVICE_VERSION,
        lifespan=lifespan,
    )

    # Instrument FastAPI with Logfire
    instrument_fastapi(app)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register routers
    app.include_router(auth_router, prefix=constants.API_PREFIX)
    app.include_router(task_router, prefix=constants.API_PREFIX)
    app.include_router(stats_router, prefix=constants.API_PREFIX)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"}, status_code=200)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    uvicorn.run("organiza.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

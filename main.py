"""Users API - CRUD over a single users table."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from users_api import __version__
from users_api.config import get_settings
from users_api.database import engine
from users_api.errors import AppError
from users_api.routers import users_router

settings = get_settings()

# Logging
logger = logging.getLogger("users_api")
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Validation error types that mean "the field was not given"
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


# --- Access logging middleware ---
class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # the 500 itself is rendered by the outermost error handler
            self._log(request, 500, start)
            raise
        self._log(request, response.status_code, start)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %d (%.0fms)", request.method, request.url.path, status_code, duration_ms)


# --- Error translation ---
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Turn an AppError into its status code and message."""
    return JSONResponse(status_code=exc.http_status, content={"message": exc.message})


def _is_missing(error: dict) -> bool:
    if error["type"] in MISSING_ERROR_TYPES:
        return True
    value = error.get("input")
    return value is None or (isinstance(value, str) and not value.strip())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed input with 400. Input values are never echoed back."""
    errors = exc.errors()
    # a malformed JSON body reports its decode offset as the last loc entry
    fields = sorted({err["loc"][-1] for err in errors if len(err["loc"]) > 1 and isinstance(err["loc"][-1], str)})
    if errors and all(_is_missing(err) for err in errors):
        message = "Missing required fields"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message, "fields": fields})


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log storage and unexpected failures; callers only see a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: report config warnings. Shutdown: close pooled connections."""
    for warning in settings.validate():
        logger.warning("Config: %s", warning)
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build the application with its routes, middleware and error handlers."""
    application = FastAPI(title="Users API", version=__version__, lifespan=lifespan)

    if settings.ACCESS_LOG:
        application.add_middleware(AccessLogMiddleware)

    application.add_exception_handler(AppError, app_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(SQLAlchemyError, storage_error_handler)
    application.add_exception_handler(Exception, storage_error_handler)

    application.include_router(users_router)

    @application.get("/", response_class=PlainTextResponse)
    def root() -> str:
        """Liveness placeholder."""
        return "Hello World"

    @application.get("/health")
    def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "ok", "app": "users-api", "version": __version__}

    return application


app = create_app()


def run(application: FastAPI = app) -> None:
    """Serve the given application on HOST:PORT."""
    logger.info("Server is running on port %d", settings.PORT)
    uvicorn.run(application, host=settings.HOST, port=settings.PORT, access_log=False)


if __name__ == "__main__":
    run()

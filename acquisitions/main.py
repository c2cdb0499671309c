"""FastAPI application entrypoint. No business logic; only wiring, middleware and error envelopes."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from acquisitions.api import health_router
from acquisitions.api import router as api_router
from acquisitions.core.config import Settings, settings
from acquisitions.core.errors import ErrorKind, ServiceError, ValidationFailed
from acquisitions.core.logs import configure_logging, log_requests
from acquisitions.core.rate_limit import RateLimitExceeded, RoleRateLimiter
from acquisitions.services.validation import field_errors, format_validation_errors

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal Server Error", "message": "Something went wrong"}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError by its kind; internal failures get the generic body."""
    if isinstance(exc, ValidationFailed):
        return JSONResponse(
            status_code=exc.status_code,
            content={"errors": exc.message, "details": exc.details},
        )
    if exc.kind is ErrorKind.INTERNAL:
        logger.error("Internal service error on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)
    headers = None
    if isinstance(exc, RateLimitExceeded):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies FastAPI rejects itself get the same 400 envelope as schema errors."""
    return JSONResponse(
        status_code=400,
        content={
            "errors": "Validation failed",
            "details": format_validation_errors(field_errors(exc.errors())),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Route Not Found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback server-side; the client only sees a generic 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build the application. app_settings (default: the process settings) is held on
    app.state and drives CORS, the API prefix, the rate limiter, session cookies
    and token signing. The database engine and bcrypt cost are process-wide.
    """
    app_settings = app_settings or settings

    application = FastAPI(
        title="Acquisitions API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.settings = app_settings
    application.state.rate_limiter = (
        RoleRateLimiter.from_settings(app_settings) if app_settings.RATE_LIMIT_ENABLED else None
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.middleware("http")(log_requests)

    application.add_exception_handler(ServiceError, service_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    application.include_router(health_router, tags=["health"])
    application.include_router(api_router, prefix=app_settings.API_PREFIX)

    @application.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Hello from Acquisitions API!"}

    return application


app = create_app()

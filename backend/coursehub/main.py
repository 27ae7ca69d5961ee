import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from coursehub.core.config import settings
from coursehub.core.database import engine, Base
from coursehub.core.errors import APIError, format_validation_errors
from coursehub.core.logging_config import configure_logging
from coursehub.api.routes import courses, users
import coursehub.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create tables that don't exist yet
    Shutdown: nothing to release beyond the engine's pool
    """
    # Startup
    # create_all only adds missing tables; existing data is left untouched
    Base.metadata.create_all(bind=engine)
    logger.info("CourseHub API started")
    yield
    # Shutdown
    logger.info("CourseHub API stopped")


async def api_error_handler(request: Request, exc: APIError):
    # Each APIError knows its own status and body shape ({"message"} or {"errors"})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Framework-level errors (unknown route, wrong method) use the same body shape
    # as the API's own errors, so the client only parses {"message": ...}
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route Not Found"
    else:
        message = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),  # e.g. Allow on 405
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies (bad JSON, wrong types) become a 400 error list"""
    # FastAPI would answer 422 {"detail": [...]}; the client expects 400 {"errors": [...]}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": format_validation_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    # Anything not handled inline ends here instead of crashing the worker
    # Full traceback goes to the log, the caller only sees a generic message
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An unexpected error occurred"},
    )


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routes"""
    # Logging first so startup messages use the configured format
    configure_logging()

    app = FastAPI(
        title="CourseHub API",
        description="REST API for users and the courses they author",
        version="1.0.0",
        lifespan=lifespan
    )

    # CORS middleware - allows the React client to make requests to the API
    # Without this, browser would block requests due to same-origin policy
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),  # List of allowed frontend URLs
        allow_credentials=True,  # Allow the Basic Auth Authorization header
        allow_methods=["*"],  # Allow all HTTP methods
        allow_headers=["*"],  # Allow all headers
        expose_headers=["Location"],  # Client reads the new course URL after POST
    )

    # Request logging - one line per request with status and timing
    if settings.LOG_REQUESTS:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
            )
            return response

    # Exception handlers - most specific first; Exception is the 500 fallback
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register API route modules
    # All resource routes are prefixed with /api
    app.include_router(users.router, prefix="/api")
    app.include_router(courses.router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint - API information"""
        return {"message": "Welcome to the CourseHub REST API!"}

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Port 5000 is where the React client expects the API
    uvicorn.run("coursehub.main:app", host="0.0.0.0", port=5000)

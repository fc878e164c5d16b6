"""
FastAPI main application for the Books API.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import APIConfig, config
from api.exceptions import BookNotFoundError, BookValidationError
from api.models import ErrorResponse
from api.openapi import build_openapi_schema
from api.routes import health_router, router as books_router
from api.store import BookRepository, InMemoryBookRepository
from utilities.logger import get_logger

# Setup logging
logger = get_logger(__name__)


def error_response(status_code: int, error: str, detail: Optional[str] = None, headers=None) -> JSONResponse:
    """Build the ``{"error": ...}`` body every failure is answered with."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True),
        headers=headers
    )


def format_validation_errors(errors) -> str:
    """Flatten pydantic request errors into one readable message."""
    messages = []
    for err in errors:
        # First element is the source ("body", "query", ...)
        field = ".".join(str(part) for part in err.get("loc", ())[1:])
        message = err.get("msg", "Invalid value")
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages) or "Invalid request"


def book_exists(request: Request) -> bool:
    """Whether the ``book_id`` path parameter names a stored book."""
    try:
        book_id = int(request.path_params["book_id"])
        request.app.state.book_repository.get_book(book_id)
    except (ValueError, BookNotFoundError):
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: APIConfig = app.state.config
    logger.info("Starting Books API", version=settings.api_version)
    logger.info(f"Server running on {settings.public_url}")
    logger.info(f"Swagger UI: {settings.docs_url}")

    yield

    logger.info("Shutting down Books API", books_count=app.state.book_repository.count())


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain and framework errors into JSON error responses."""

    @app.exception_handler(BookValidationError)
    async def book_validation_exception_handler(request: Request, exc: BookValidationError):
        logger.info("Rejected book payload", path=request.url.path, error=exc.message)
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(BookNotFoundError)
    async def book_not_found_exception_handler(request: Request, exc: BookNotFoundError):
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        # A path id that is not an integer cannot name an existing book
        if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in errors):
            return error_response(status.HTTP_404_NOT_FOUND, BookNotFoundError().message)
        # An unknown book is reported before anything is wrong with its body
        if "book_id" in request.path_params and not book_exists(request):
            return error_response(status.HTTP_404_NOT_FOUND, BookNotFoundError().message)
        return error_response(status.HTTP_400_BAD_REQUEST, format_validation_errors(errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
        settings: APIConfig = request.app.state.config
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            detail=str(exc) if settings.debug else None
        )


def create_app(
    settings: Optional[APIConfig] = None,
    repository: Optional[BookRepository] = None
) -> FastAPI:
    """
    Build the Books API application.

    Args:
        settings: Configuration to use (defaults to the environment-loaded config)
        repository: Book storage to serve (defaults to a fresh in-memory repository)

    Returns:
        Configured FastAPI application
    """
    settings = settings or config

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        docs_url=settings.docs_path,
        openapi_url=settings.openapi_path,
        redoc_url=None,
        lifespan=lifespan
    )
    app.state.config = settings
    app.state.book_repository = repository if repository is not None else InMemoryBookRepository()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with its outcome and duration."""
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2)
        )
        return response

    register_exception_handlers(app)

    app.include_router(books_router)
    app.include_router(health_router)

    app.openapi = lambda: build_openapi_schema(app, settings)

    return app


# Create FastAPI application
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )

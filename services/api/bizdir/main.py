"""FastAPI application entry point.

Business Directory API - search, ranking and browse for directory listings.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bizdir.routes import api_router
from bizdir.schemas.common import INTERNAL_ERROR, INVALID_REQUEST, STORE_FAILURE, ErrorResponse
from bizdir.services.errors import InvalidRequest, StoreFailure
from bizdir.settings import get_settings
from bizdir.stores.postgres import init_db, close_db, ping_db
from bizdir.stores.redis import init_redis, close_redis

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Initialize database (skip in tests if no DB available)
    try:
        await init_db()
        await ping_db()
        logger.info("Postgres connected")
    except Exception:
        logger.exception("Postgres init failed")

    # Redis is optional: without it, nearby-city lookups are not cached
    try:
        await init_redis()
    except Exception:
        logger.exception("Redis init failed")

    yield

    # Shutdown
    await close_redis()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Business directory search and browse API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidRequest)
    async def invalid_request_handler(request: Request, exc: InvalidRequest) -> JSONResponse:
        """Bad search parameters -> 400 naming the field."""
        body = ErrorResponse.build(INVALID_REQUEST, str(exc), {"field": exc.field})
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Unparseable params -> 400 naming the first offending field."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        loc = first.get("loc") or ()
        field = str(loc[-1]) if loc else "request"
        body = ErrorResponse.build(
            INVALID_REQUEST,
            f"Invalid value for {field}: {first.get('msg', 'invalid request')}",
            {"field": field},
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Route-raised HTTP errors keep the structured envelope."""
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            content = exc.detail
        else:
            content = ErrorResponse.build(f"HTTP_{exc.status_code}", str(exc.detail)).model_dump()
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
        """Store unavailable/timeout -> 503 so clients can retry."""
        body = ErrorResponse.build(
            STORE_FAILURE,
            str(exc) if settings.debug else "Directory data is temporarily unavailable",
            {"reason": exc.reason},
        )
        return JSONResponse(status_code=503, content=body.model_dump(), headers={"Retry-After": "5"})

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.url.path}")
        body = ErrorResponse.build(
            INTERNAL_ERROR,
            str(exc) if settings.debug else "Internal server error",
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bizdir.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

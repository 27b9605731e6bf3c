"""
Recipe Catalog Backend Service - Main API Server
Recipe, category and tag management with admin authentication
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import structlog
from typing import AsyncGenerator, Optional

from core.config import Settings, get_settings
from core.database import Database
from core.exceptions import AppError, ServerError
from api.routes import api_router
from api.endpoints import health
from middleware.logging import LoggingMiddleware
from middleware.timeout import TimeoutMiddleware
from services.auth_service import AuthService

logger = structlog.get_logger()

HTTP_ERROR_NAMES = {
    400: "ValidationError",
    401: "AuthenticationError",
    403: "AuthorizationError",
    404: "NotFoundError",
    405: "MethodNotAllowed",
}


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json"
        else structlog.dev.ConsoleRenderer()
    )
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    settings: Settings = app.state.settings
    database: Database = app.state.db

    # Startup
    logger.info("Starting Recipe Catalog Backend Service", environment=settings.ENVIRONMENT)

    try:
        await database.connect()
    except Exception as e:
        logger.critical("Cannot start without a database", error=str(e))
        raise RuntimeError(f"Database connection failed: {e}") from e

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        async with database.session() as session:
            await app.state.auth_service.ensure_admin(
                session, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD
            )

    logger.info("Backend service startup complete")

    yield

    # Shutdown
    logger.info("Shutting down Recipe Catalog Backend Service")
    await database.disconnect()
    logger.info("Backend service shutdown complete")


def register_exception_handlers(app: FastAPI) -> None:
    """Convert every error into the ``{error, message}`` response shape"""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))

        return JSONResponse(
            status_code=400,
            content={
                "error": "ValidationError",
                "message": "; ".join(problems) or "Invalid request",
                "details": jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": HTTP_ERROR_NAMES.get(exc.status_code, "ServerError"),
                "message": str(exc.detail)
            },
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            exception=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method
        )
        error = ServerError("An unexpected error occurred")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    settings:
        Optional settings instance. When ``None`` the process settings loaded
        from the environment are used.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=f"{settings.APP_NAME} Backend Service",
        description="Recipe catalog with categories, tags, ratings and admin authentication",
        version=settings.VERSION,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db = Database(settings)
    app.state.auth_service = AuthService(settings)

    app.add_middleware(TimeoutMiddleware, timeout=settings.REQUEST_TIMEOUT)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time", "X-Request-ID"]
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "Welcome to the Recipe App!",
            "service": settings.APP_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT
        }

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_config=None  # Use structlog instead
    )

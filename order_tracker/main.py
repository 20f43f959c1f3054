"""
FastAPI Application Entry Point - Order Tracker
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import SQLAlchemyError

from order_tracker import __version__
from order_tracker.config import Settings, settings as default_settings
from order_tracker.database import Database
from order_tracker.api import orders, health

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Setup root logging for the service"""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    # Keep SQLAlchemy quiet unless DB_ECHO is set
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _format_validation_error(error: dict) -> str:
    field = ".".join(str(part) for part in error["loc"][1:]) or "body"
    return f"{field}: {error['msg']}"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 instead of 422"""
    errors = exc.errors()
    if any(error["loc"] and error["loc"][0] == "path" for error in errors):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid id"}
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": [_format_validation_error(error) for error in errors]}
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application

    The database handle is created on startup and disposed on shutdown;
    handlers reach it through ``app.state.database``.
    """
    app_settings = app_settings or default_settings
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title="Order Tracker",
        description="Service for recording, listing and updating orders",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = app_settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(orders.router)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Prometheus metrics
    Instrumentator().instrument(app).expose(app)

    @app.on_event("startup")
    def startup_event():
        """Open the database handle and make sure the schema exists"""
        logger.info("Starting %s...", app_settings.SERVICE_NAME)
        database = Database(
            app_settings.DATABASE_URL,
            pool_size=app_settings.DB_POOL_SIZE,
            max_overflow=app_settings.DB_MAX_OVERFLOW,
            pool_timeout=app_settings.DB_POOL_TIMEOUT,
            connect_timeout=app_settings.DB_CONNECT_TIMEOUT,
            echo=app_settings.DB_ECHO
        )
        app.state.database = database

        try:
            database.create_all()
            probe = database.check_connection()
        except SQLAlchemyError:
            # Requests will report a database error until it comes back
            logger.exception("✗ Database connection failed: %r", database)
        else:
            logger.info("✓ Connected to %s (server time %s)", probe["backend"], probe["current_time"])

        logger.info("✓ %s is running on port %s", app_settings.SERVICE_NAME, app_settings.SERVICE_PORT)

    @app.on_event("shutdown")
    def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down %s...", app_settings.SERVICE_NAME)
        app.state.database.dispose()

    return app


app = create_app()

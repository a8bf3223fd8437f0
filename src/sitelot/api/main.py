"""
FastAPI Main Application

Site Lot project tracking REST API.
"""
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import requests
from fastapi import FastAPI, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import Settings, settings as default_settings
from src.sitelot.api.dependencies import get_db
from src.sitelot.api.schemas import HealthCheck
from src.sitelot.api.routers import lookup, lots, projects
from src.sitelot.db.session import Database, log_database_url
from src.sitelot.utils.logger import get_logger, setup_logging

API_VERSION = "0.1.0"

logger = get_logger(__name__)


def create_app(app_settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        app_settings: Settings to use (defaults to the environment)
        database: Pre-built Database; when omitted one is created at startup
            and disposed at shutdown

    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings)
        log_database_url(app_settings.database_url)

        owns_database = getattr(app.state, "database", None) is None
        if owns_database:
            app.state.database = Database.from_settings(app_settings)
        app.state.http_session = requests.Session()
        logger.info("application_started", environment=app_settings.environment)

        yield

        app.state.http_session.close()
        if owns_database:
            app.state.database.dispose()
            app.state.database = None
        logger.info("application_stopped")

    app = FastAPI(
        title="Site Lot API",
        description="Construction project tracking with zoning and planning control lookup",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, app_settings)

    app.include_router(projects.router)
    app.include_router(lookup.router)
    app.include_router(lots.router)

    @app.get("/health", response_model=HealthCheck, tags=["health"])
    def health_check(db: Session = Depends(get_db)):
        """
        Health check endpoint.

        Returns:
            Health status with database connectivity check
        """
        try:
            db.execute(text("SELECT 1"))
            database_status = "connected"
        except Exception as e:
            database_status = f"error: {str(e)}"

        return HealthCheck(
            status="healthy" if database_status == "connected" else "degraded",
            version=API_VERSION,
            database=database_status,
            timestamp=datetime.now(timezone.utc),
        )

    @app.get("/api/dbtest", tags=["health"])
    def db_test(db: Session = Depends(get_db)):
        """Round-trip a trivial query and return the database clock."""
        try:
            now = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
            return {"ok": True, "now": jsonable_encoder(now)}
        except Exception as e:
            logger.error("dbtest_failed", error=str(e), error_type=type(e).__name__)
            return JSONResponse({"ok": False, "error": str(e)}, status_code=500)

    @app.get("/", tags=["root"])
    def root():
        """
        Root endpoint.

        Returns:
            API information
        """
        return {
            "name": "Site Lot API",
            "version": API_VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    """Render every error as a JSON body with an "error" message."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__
        )
        stack = None
        if app_settings.environment != "production":
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(
            {"error": str(exc) or "Internal server error", "stack": stack},
            status_code=500,
        )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.sitelot.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

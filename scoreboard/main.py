"""
Scoreboard Service - FastAPI Application
User authentication and points leaderboard backed by Supabase
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from contextlib import asynccontextmanager

from scoreboard.routes import auth, leaderboard, setup, health
from scoreboard.utils.config import get_app_config, validate_configuration
from scoreboard.utils.logger import setup_logging
from scoreboard.utils.notifications import NotificationException
from scoreboard.utils.supabase_client import get_supabase_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    app_config = get_app_config()
    setup_logging(app_config.log_config_path, app_config.log_level, app_config.log_format)

    logger.info("Scoreboard Service starting up...")
    validate_configuration()

    supabase = get_supabase_client()
    if not supabase.is_available():
        logger.warning("Supabase unavailable - auth and leaderboard endpoints will return 503")

    logger.info("Scoreboard Service startup complete")

    yield

    logger.info("Scoreboard Service shutting down...")


def create_app() -> FastAPI:
    """Build the application and register its routes"""
    app_config = get_app_config()

    app = FastAPI(
        title="Scoreboard Service",
        description="User authentication and points leaderboard backed by Supabase",
        version=app_config.service_version,
        lifespan=lifespan,
        debug=app_config.debug,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        """Error body, with a notification when the error carries one"""
        content = {
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code
        }
        if isinstance(exc, NotificationException):
            content["notification"] = exc.notification.model_dump(mode="json")
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None)
        )

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": "Scoreboard Service",
            "version": app_config.service_version,
            "description": "User authentication and points leaderboard",
            "docs": "/docs"
        }

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(leaderboard.router, prefix="/leaderboard", tags=["Leaderboard"])
    app.include_router(setup.router, prefix="/setup", tags=["Setup"])

    return app


app = create_app()

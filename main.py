"""
RecipeBox API Server
Recipe sharing backend: accounts, recipes, AI-ranked search and bookmarks
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog
import time
from typing import AsyncGenerator, Optional

from core.config import Settings, get_settings
from core.database import Database
from core.exceptions import register_exception_handlers
from core.logging import configure_logging
from api.routes import api_router
from middleware.logging import LoggingMiddleware
from services.ai_service import AIRankingClient
from services.auth_service import AuthService
from services.storage_service import StorageClient

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting RecipeBox API", version=settings.VERSION, environment=settings.ENVIRONMENT)

    app.state.db = Database(settings)
    await app.state.db.connect()
    logger.info("Database connection established")

    app.state.auth_service = AuthService(settings)
    app.state.storage = StorageClient(settings)
    app.state.ranker = AIRankingClient(settings)

    logger.info("RecipeBox API startup complete")

    yield

    # Shutdown
    logger.info("Shutting down RecipeBox API")
    await app.state.ranker.close()
    await app.state.storage.close()
    await app.state.db.disconnect()
    logger.info("RecipeBox API shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application for the given settings"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Recipe sharing API",
        version=settings.VERSION,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan
    )
    app.state.settings = settings

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time", "X-Request-ID"]
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        database_ok = await app.state.db.check_connection()
        return {
            "status": "healthy" if database_ok else "degraded",
            "service": settings.APP_NAME,
            "version": settings.VERSION,
            "timestamp": time.time(),
            "checks": {"database": {"status": "healthy" if database_ok else "unhealthy"}},
        }

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

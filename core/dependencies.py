"""
RecipeBox Core Dependencies
FastAPI dependencies for sessions, authentication and shared clients
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated, AsyncGenerator
import structlog

from core.config import Settings
from core.exceptions import UnauthorizedError
from services.ai_service import AIRankingClient
from services.auth_service import AuthService
from services.storage_service import StorageClient

logger = structlog.get_logger()


def get_settings_dependency(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to get database session
    """
    async with request.app.state.db.session() as session:
        yield session


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_storage(request: Request) -> StorageClient:
    return request.app.state.storage


def get_ranker(request: Request) -> AIRankingClient:
    return request.app.state.ranker


async def get_current_user_id(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    """
    Resolve the authenticated user id from the session cookie

    Raises:
        UnauthorizedError: If the cookie is missing, or the token is invalid or expired
    """
    token = request.cookies.get(auth_service.settings.COOKIE_NAME)
    if not token:
        raise UnauthorizedError("Unauthorized")

    user_id = auth_service.verify_token(token)

    request.state.user_id = user_id
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


# Type aliases for common dependencies
DBSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings_dependency)]
Auth = Annotated[AuthService, Depends(get_auth_service)]
Storage = Annotated[StorageClient, Depends(get_storage)]
Ranker = Annotated[AIRankingClient, Depends(get_ranker)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]

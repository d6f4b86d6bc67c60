from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from ..config import Settings
from ..core.security import decode_access_token, parse_bearer_header
from ..exceptions import AuthenticationError
from ..models.user import UserRecord
from ..news.services.news_service import NewsService
from ..repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def get_news_service(settings: Settings = Depends(get_app_settings)) -> NewsService:
    return NewsService(settings)


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
    users: UserRepository = Depends(get_user_repository),
) -> UserRecord:
    """
    Bearer token gate for protected routes.
    Every failure raises the same AuthenticationError so callers cannot tell
    a bad header from an expired token or a vanished user.
    """
    token = parse_bearer_header(authorization)
    email = decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)

    user = users.get(email)
    if user is None:
        logger.info("token_user_not_found", email=email)
        raise AuthenticationError()
    return user

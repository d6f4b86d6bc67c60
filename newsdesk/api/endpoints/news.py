import structlog
from fastapi import APIRouter, Depends

from ..dependencies import get_current_user, get_news_service
from ...models.user import UserRecord
from ...news.schemas.responses import NewsListResponse
from ...news.services.news_service import NewsService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=NewsListResponse)
async def get_news(
    current_user: UserRecord = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service),
):
    """Headlines matching the user's first preferences; never fails on provider errors"""
    news = await news_service.get_news(current_user.preferences or [])
    return NewsListResponse(news=news)

"""News API response schemas"""

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict


class NewsArticleItem(BaseModel):
    """Headline mapped from the provider, or the unconfigured-provider sample"""
    model_config = ConfigDict(extra="forbid")

    id: str
    title: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None


class FallbackNewsItem(BaseModel):
    """Placeholder returned when the provider call fails"""
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    category: str


class NewsListResponse(BaseModel):
    news: List[Union[NewsArticleItem, FallbackNewsItem]]

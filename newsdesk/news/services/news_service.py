"""
Personalized news lookup

Queries the news provider with the user's preferences. The endpoint never
surfaces provider problems: an unconfigured provider yields a sample
headline, a failing provider yields a fallback headline.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import httpx
import structlog

from ...config import Settings
from ...exceptions import NewsProviderError
from ..schemas.responses import FallbackNewsItem, NewsArticleItem

logger = structlog.get_logger(__name__)

NewsItem = Union[NewsArticleItem, FallbackNewsItem]

SAMPLE_NEWS = [
    NewsArticleItem(
        id="1",
        title="Sample headline",
        source="Sample source",
        url="https://example.com/sample-news",
    )
]

FALLBACK_NEWS = [FallbackNewsItem(id="1", title="Sample headline", category="general")]


class NewsService:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def build_query(self, preferences: Sequence[Any]) -> str:
        terms = [_query_term(term) for term in preferences[: self.settings.news_max_query_terms]]
        if not terms:
            return self.settings.news_default_query
        return " OR ".join(terms)

    def build_params(self, query: str) -> Dict[str, Any]:
        return {
            "q": query,
            "language": "en",
            "sortBy": "publishedAt",
            "pageSize": self.settings.news_page_size,
        }

    async def get_news(self, preferences: Sequence[Any]) -> List[NewsItem]:
        if not self.settings.news_provider_configured:
            logger.debug("news_provider_not_configured")
            return list(SAMPLE_NEWS)

        query = self.build_query(preferences)
        try:
            payload = await self.fetch_articles(query)
            return self.map_articles(payload)
        except NewsProviderError as e:
            logger.warning("news_provider_failed", query=query, error=str(e))
            return list(FALLBACK_NEWS)

    async def fetch_articles(self, query: str) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.news_api_timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.get(
                    self.settings.news_api_url,
                    params=self.build_params(query),
                    headers={"X-Api-Key": self.settings.news_api_key},
                )
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise NewsProviderError("Request timed out") from e
        except httpx.HTTPStatusError as e:
            raise NewsProviderError(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise NewsProviderError(f"Transport error: {e}") from e
        except ValueError as e:
            raise NewsProviderError("Response body is not valid JSON") from e

    def map_articles(self, payload: Any) -> List[NewsArticleItem]:
        articles = payload.get("articles") if isinstance(payload, dict) else None
        if not isinstance(articles, list):
            raise NewsProviderError("Response has no articles list")

        news = []
        for index, article in enumerate(articles):
            if not isinstance(article, dict):
                raise NewsProviderError(f"Malformed article at position {index}")
            source = article.get("source")
            news.append(NewsArticleItem(
                id=str(index + 1),
                title=_optional_str(article.get("title")),
                source=_optional_str(source.get("name")) if isinstance(source, dict) else None,
                url=_optional_str(article.get("url")),
            ))

        logger.info("news_fetched", article_count=len(news))
        return news


def _query_term(term: Any) -> str:
    return "" if term is None else str(term)


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "dev_secret_change_me"


class Settings(BaseSettings):

    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=3000, description="API port")
    debug: bool = Field(default=False, description="Debug mode")

    # Authentication Configuration
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET, description="Shared secret used to sign session tokens")
    jwt_algorithm: str = Field(default="HS256", description="Token signing algorithm")
    token_ttl_seconds: int = Field(default=3600, description="Session token lifetime in seconds")
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor for password hashing")

    # Storage Configuration
    database_url: Optional[str] = Field(
        default=None,
        description="Database URL for the user store; in-memory store when unset",
        examples=["sqlite:///./newsdesk.db"]
    )

    # News Provider Configuration
    news_api_key: Optional[str] = Field(default=None, description="NewsAPI key; static sample news when unset")
    news_api_url: str = Field(default="https://newsapi.org/v2/everything", description="NewsAPI search endpoint")
    news_api_timeout_seconds: float = Field(default=10.0, description="Timeout for news provider calls")
    news_page_size: int = Field(default=10, description="Maximum articles requested from the provider")
    news_default_query: str = Field(default="technology", description="Query used when a user has no preferences")
    news_max_query_terms: int = Field(default=3, description="Number of preferences combined into the query")

    allowed_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
        validation_alias=AliasChoices("CORS_ALLOWED_ORIGINS", "ALLOWED_ORIGINS"),
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value):
        if value is None:
            return value
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def news_provider_configured(self) -> bool:
        return bool(self.news_api_key)

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    class Config:
        env_file = [".env", ".env.local"]  # .env.local takes precedence over .env
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()

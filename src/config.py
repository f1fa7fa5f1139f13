from functools import lru_cache
from typing import Any, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.pages.routing import is_valid_title


class Settings(BaseSettings):
    # Application Configuration
    TINYWIKI_VERSION: str = "v0.1.x"
    API_NAME: str = "TinyWiki"
    API_SUMMARY: str = "A minimal wiki with bracket links between pages"

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8080

    FRONT_PAGE_TITLE: str = "FrontPage"
    PAGE_BODY_MAX_BYTES: int | None = None

    # Storage Configuration
    PAGE_STORE_BACKEND: Literal["filesystem", "sql", "redis"] = "filesystem"
    PAGE_STORE_NAMESPACE: str = "pages"
    PAGE_STORE_DATA_DIR: str = "data"

    DATABASE_URL: str = "sqlite:///tinywiki.db"
    REDIS_URL: str = "redis://localhost:6379"

    # OpenTelemetry Settings
    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "tinywiki"
    OTEL_TRACES_EXPORTER: Literal["otlp", "console"] = "otlp"

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("FRONT_PAGE_TITLE")
    def validate_front_page_title(cls, v: str):
        if not is_valid_title(v):
            raise ValueError("FRONT_PAGE_TITLE must be alphanumeric")
        return v

    @field_validator("PAGE_BODY_MAX_BYTES")
    def validate_body_limit(cls, v: int | None):
        if v is not None and v <= 0:
            raise ValueError("PAGE_BODY_MAX_BYTES must be positive")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()

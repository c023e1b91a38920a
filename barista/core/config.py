"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = Field(default="Coffee Assistant", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")

    frontend_origin: AnyHttpUrl | None = Field(
        default=None,
        description="Allowed storefront origin (CORS). If omitted, defaults to the local dev server.",
    )
    additional_origins: List[AnyHttpUrl] = Field(
        default_factory=list,
        description="Additional allowed CORS origins.",
    )

    strapi_url: AnyHttpUrl | None = Field(
        default=None,
        description="Base URL of the Strapi catalog. When unset the local JSON catalog is used.",
    )
    strapi_api_token: str | None = Field(default=None, description="Bearer token for the Strapi REST API.")
    strapi_page_size_cap: int = Field(
        default=100,
        ge=1,
        description="Page size used when a search has no explicit limit.",
    )
    catalog_path: Path = Field(
        default=Path("data/catalog.json"),
        description="Local product catalog used when no Strapi URL is configured.",
    )

    gemini_api_key: str | None = Field(default=None, description="Google Gemini API key.")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model identifier.")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API root.",
    )
    gemini_max_retries: int = Field(default=2, ge=0, description="Retries for retryable Gemini failures.")
    gemini_base_delay_ms: int = Field(default=800, ge=0, description="Base exponential backoff delay.")

    http_timeout_seconds: float = Field(default=15.0, gt=0, description="Timeout for outbound calls.")

    recommendation_limit: int = Field(default=5, ge=1, description="Products per recommendation search.")
    budget_headroom: int = Field(default=100, ge=0, description="Added to a stated budget to form max price.")
    relaxation_price_increment: int = Field(
        default=200,
        ge=0,
        description="Added to max price when an empty search is relaxed.",
    )
    reply_language: str = Field(
        default="Traditional Chinese (Taiwan)",
        description="Language the assistant replies in.",
    )
    expose_debug: bool = Field(default=True, description="Include the engine debug payload in chat responses.")

    @property
    def cors_origins(self) -> list[str]:
        """Return the full list of allowed CORS origins."""

        origins: list[str] = []
        if self.frontend_origin:
            origins.append(str(self.frontend_origin).rstrip("/"))
        else:
            origins.extend(["http://localhost:5173", "http://127.0.0.1:5173"])

        for origin in self.additional_origins:
            origins.append(str(origin).rstrip("/"))

        return list(dict.fromkeys(origins))

    @property
    def strapi_enabled(self) -> bool:
        return self.strapi_url is not None

    @property
    def gemini_enabled(self) -> bool:
        return bool(self.gemini_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()

"""
API Configuration
Settings and configuration for FastAPI application.
"""

import json
from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """
    API configuration settings.

    Load from environment variables with API_ prefix.
    """

    # API Info
    app_name: str = "Storefront Content API"
    version: str = "0.1.0"
    description: str = "Merchant store asset storage and serving"

    # Server settings
    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8080, alias="API_PORT")
    reload: bool = Field(default=False, alias="API_RELOAD")

    # CORS settings
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        alias="API_CORS_ORIGINS"
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # XSS filtering of query strings
    enable_xss_filter: bool = Field(default=True, alias="API_ENABLE_XSS_FILTER")

    # Database settings
    database_url: str = Field(
        default="sqlite:///./storefront.db",
        alias="DATABASE_URL"
    )
    db_pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW")

    # Logging
    log_level: str = Field(default="INFO", alias="API_LOG_LEVEL")

    # Security
    api_key_header: str = "X-API-Key"
    require_api_key: bool = Field(default=False, alias="API_REQUIRE_KEY")
    api_keys: List[str] = Field(default=[], alias="API_KEYS")

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    @field_validator("cors_origins", "api_keys", mode="before")
    @classmethod
    def parse_list(cls, v: Any) -> List[str]:
        """Parse lists from JSON string or comma-separated values."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_default=True,
        populate_by_name=True
    )


_settings: Optional[APISettings] = None


def get_settings() -> APISettings:
    """Get global API settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = APISettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None

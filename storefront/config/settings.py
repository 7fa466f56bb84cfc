"""
Content storage settings
Loads from environment variables and .env file.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CMS_METHODS = ("local", "aws", "gcp", "redis")


class CMSSettings(BaseSettings):
    """
    Static content storage configuration.

    CMS_METHOD selects the backend used for merchant assets.
    """

    method: str = Field(default="local", alias="CMS_METHOD")

    # Local filesystem
    local_root: str = Field(default="files/store", alias="CMS_LOCAL_ROOT")

    # Amazon S3
    aws_bucket: Optional[str] = Field(default=None, alias="CMS_AWS_BUCKET")
    aws_region: Optional[str] = Field(default=None, alias="CMS_AWS_REGION")
    aws_endpoint_url: Optional[str] = Field(default=None, alias="CMS_AWS_ENDPOINT_URL")

    # Google Cloud Storage
    gcp_bucket: Optional[str] = Field(default=None, alias="CMS_GCP_BUCKET")
    gcp_project: Optional[str] = Field(default=None, alias="CMS_GCP_PROJECT")

    # Redis
    redis_host: str = Field(default="localhost", alias="CMS_REDIS_HOST")
    redis_port: int = Field(default=6379, alias="CMS_REDIS_PORT")
    redis_db: int = Field(default=2, alias="CMS_REDIS_DB")
    redis_namespace: str = Field(default="cms", alias="CMS_REDIS_NAMESPACE")

    # Limits and serving
    max_file_size: int = Field(default=10 * 1024 * 1024, alias="CMS_MAX_FILE_SIZE")  # 10 MB
    static_base_url: str = Field(default="/static/files", alias="CMS_STATIC_BASE_URL")
    cache_max_age: int = Field(default=86400, alias="CMS_CACHE_MAX_AGE")  # 1 day

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v):
        """Accept any casing for the backend name."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


_settings: Optional[CMSSettings] = None


def get_cms_settings() -> CMSSettings:
    """Get global content storage settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = CMSSettings()
    return _settings


def reset_cms_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None

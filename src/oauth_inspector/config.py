"""
Inspector Configuration

Environment-based configuration management for the OAuth token proxy.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class InspectorSettings(BaseSettings):
    """Inspector configuration loaded from environment variables."""

    # Application
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8080, description="Server port")
    APP_NAME: str = Field(default="OAuth User Inspector", description="Service name")
    APP_VERSION: str = Field(default="1.0.0", description="Service version")

    # CORS Configuration
    ALLOWED_ORIGINS: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["text", "json"] = Field(
        default="text",
        description="Log output format (text for consoles, json for log aggregation)"
    )

    # Monitoring
    ENABLE_METRICS: bool = Field(default=True, description="Enable Prometheus metrics")

    # Secret resolution for hosted OAuth apps
    SECRET_BACKEND: Literal["env", "gcp"] = Field(
        default="env",
        description="Backend used to resolve hosted OAuth credentials (env or gcp)"
    )
    GCP_PROJECT_ID: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "INSPECTOR_GCP_PROJECT_ID",
            "GOOGLE_CLOUD_PROJECT",
            "GCP_PROJECT",
        ),
        description="Google Cloud project holding the hosted OAuth secrets"
    )

    # Outbound provider calls
    PROVIDER_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for every outbound call to an OAuth provider"
    )
    EXPLORE_USER_AGENT: str = Field(
        default="OAuth-User-Inspector/1.0",
        description="User-Agent sent by the API explore proxy"
    )

    model_config = {
        "env_file": ".env",
        "env_prefix": "INSPECTOR_",
        "case_sensitive": True,
        "extra": "ignore",
        "populate_by_name": True,
    }


# Global settings instance
settings = InspectorSettings()

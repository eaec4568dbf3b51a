"""
Configuration and settings for the storefront service.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")

    # Firebase / Google Cloud
    firebase_project_id: str = Field(min_length=1)
    firebase_credentials_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "FIREBASE_CREDENTIALS_PATH", "GOOGLE_APPLICATION_CREDENTIALS"
        ),
    )

    # Password sign-in goes through the Identity Toolkit REST API
    firebase_web_api_key: Optional[str] = Field(default=None)
    identity_toolkit_url: str = Field(
        default="https://identitytoolkit.googleapis.com/v1"
    )
    request_timeout: float = Field(default=10.0)

    log_level: str = Field(default="INFO")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False,
        validation_alias="STOREFRONT_USE_IN_MEMORY_BACKENDS",
    )


def get_settings() -> Settings:
    """Read settings from the environment.

    Raises ``pydantic.ValidationError`` when ``FIREBASE_PROJECT_ID`` is not set,
    so the process refuses to start without it.
    """
    return Settings()

"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    api_base_url: str = "http://localhost:8000/api"
    storage_dir: str = ".petshop"
    request_timeout_seconds: float = 10.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="PETSHOP_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def csrf_cookie_url(self) -> str:
        """Return the Sanctum CSRF cookie endpoint on the backend root."""
        return f"{backend_root_url(self.api_base_url)}/sanctum/csrf-cookie"


def backend_root_url(api_base_url: str) -> str:
    """Strip a trailing ``/api`` segment from the API base URL."""
    cleaned = api_base_url.rstrip("/")
    if cleaned.endswith("/api"):
        return cleaned[: -len("/api")]
    return cleaned

from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.errors import ConfigurationError

DEFAULT_SHIPSTATION_BASE_URL = "https://api.shipstation.com"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    # --- Upstream ---
    shipstation_api_key: Optional[str] = Field(default=None, validation_alias="SHIPSTATION_API_KEY")
    shipstation_base_url: AnyHttpUrl = Field(default=DEFAULT_SHIPSTATION_BASE_URL, validation_alias="SHIPSTATION_BASE_URL")
    request_timeout: float = Field(default=30.0, validation_alias="REQUEST_TIMEOUT")

    # --- HTTP server ---
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    cors_allowed_origins: str = Field(default="*", validation_alias="CORS_ALLOWED_ORIGINS")

    # --- Logging ---
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Optional[str] = Field(default=None, validation_alias="LOG_DIR")

    @property
    def base_url(self) -> str:
        return str(self.shipstation_base_url).rstrip("/")

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


def require_api_key(settings: Settings) -> str:
    """Return the configured API key or fail before any front end starts."""
    key = (settings.shipstation_api_key or "").strip()
    if not key:
        raise ConfigurationError("SHIPSTATION_API_KEY environment variable is required")
    return key


@lru_cache
def get_settings() -> Settings:
    return Settings()

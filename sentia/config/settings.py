"""Application settings using Pydantic BaseSettings."""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SENTIA Analysis Service"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_limits_positive(self) -> "Settings":
        for field_name in (
            "request_timeout_ms",
            "retry_delay_ms",
            "free_daily_scans",
            "max_image_size_mb",
            "nearby_max_suggestions",
            "max_scan_history",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        return self

    # Remote vision service
    api_base_url: str = "https://api.sentia.app/v1"
    request_timeout_ms: int = 30000
    max_retries: int = 2
    retry_delay_ms: int = 1000

    # Images
    max_image_size_mb: int = 10

    # Tiers
    free_daily_scans: int = 3
    premium_features: list[str] = ["audio_guide", "nearby_discovery", "unlimited_scans"]

    # Discovery
    nearby_max_suggestions: int = 3

    # Persistence (empty path keeps state in memory)
    storage_path: str = ""
    max_scan_history: int = 100

    # CORS
    allowed_origins: list[str] = ["*"]

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Client configuration using Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables (``XERO_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="XERO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="none",
    )

    # API
    base_url: str = "https://api.xero.com/api.xro/2.0/"
    user_agent: str = "xeroclient (python)"
    tenant_id: str = ""
    request_timeout: float = 30.0  # seconds

    # Rate limiting: 60 requests per rolling minute per tenant
    rate_limit: int = 60
    rate_window_seconds: float = 60.0

    # 429 handling - None (XERO_MAX_THROTTLE_RETRIES=none) retries for as long as the server asks
    max_throttle_retries: Optional[int] = 5

    # Logging
    debug: bool = False
    log_level: str = "INFO"


# Create settings instance
settings = Settings()

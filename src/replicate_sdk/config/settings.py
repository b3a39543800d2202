from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized config.

    Key idea:
    - read from env first (REPLICATE_API_TOKEN, REPLICATE_WEBHOOK_URL, ...),
    - otherwise fall back to the public API defaults.
    """

    model_config = SettingsConfigDict(env_prefix="REPLICATE_", extra="ignore")

    api_token: str | None = None
    webhook_url: str | None = None

    api_endpoint_url: str = "https://api.replicate.com/v1"
    dreambooth_endpoint_url: str = "https://dreambooth-api-experimental.replicate.com/v1"

    # hosts the per-upload PUT target may live on (exact host or subdomain)
    upload_allowed_domains: list[str] = ["replicate.com", "replicate.delivery"]
    # zip uploads must resolve inside this directory (cwd when unset)
    upload_root: str | None = None

    log_level: str = "WARNING"


settings = Settings()

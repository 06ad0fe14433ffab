"""Application settings read from the environment (prefix ``STOREFRONT_``).

Persistence, brokers and event processing are configured per environment in
``domain.toml``; these settings cover what the domain configuration does not.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")

    session_ttl_hours: int = 24
    starting_balance: float = 0.0
    webhook_timeout_seconds: float = 5.0
    webhook_sender: str = "http"  # "http" | "fake"
    cors_origins: list[str] = ["*"]
    default_page_size: int = 10
    max_page_size: int = 100


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "quick_auth"] = "quick_auth"
    quick_auth_origin: str = "https://auth.farcaster.xyz"
    auth_domain: str | None = None
    default_host: str = "localhost:3000"
    primary_address_url: str = "https://api.farcaster.xyz/fc/primary-address"
    neynar_api_key: str | None = None
    neynar_base_url: str = "https://api.neynar.com/v2"
    app_url: str = "http://localhost:3000"
    internal_secret: str | None = None
    http_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

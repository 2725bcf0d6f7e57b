"""Centralized configuration using Pydantic Settings

All environment variables are managed here (prefix BEATGRID_).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from beatgrid_core.constants import DEFAULT_BANK, DEFAULT_CATALOG_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="BEATGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OSC pattern player
    osc_host: str = "127.0.0.1"
    osc_port: int = 57130

    # API Configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Bank catalog (empty string = built-in list only)
    catalog_url: str = DEFAULT_CATALOG_URL
    catalog_timeout: float = 10.0

    # Initial transport
    default_bpm: float = 60.0
    default_bank: str = DEFAULT_BANK

    # Use the in-memory engine instead of OSC
    dry_run: bool = False

    log_level: str = "INFO"


# Global settings instance
settings = Settings()

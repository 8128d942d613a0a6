"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "bizledger"
    log_level: str = "INFO"

    # Forecasting
    forecast_default_months: int = 3
    forecast_max_months: int = 24
    forecast_lookback_months: int = 12  # History window fed to the engine

    # Result cache
    cache_ttl_seconds: float = 300.0
    cache_max_entries: int = 1024


settings = Settings()

"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    bank_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "wellness-gateway"
    log_level: str = "INFO"
    default_region: str = "AU"  # AU | US, drives currency display

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Finance context payload size
    context_transaction_limit: int = 80
    context_merchant_limit: int = 10


settings = Settings()

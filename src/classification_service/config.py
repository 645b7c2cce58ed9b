"""
Configuration settings for the classification service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Zero-Shot Classification Service"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON

    # === HTTP Server ===
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    API_PREFIX: str = "/api"
    STATIC_DIR: str = "static"  # Served at "/" when the directory exists
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # === Zero-Shot Model ===
    MODEL_NAME: str = "facebook/bart-large-mnli"
    MODEL_DEVICE: int = -1  # -1 = CPU, otherwise CUDA device index
    HYPOTHESIS_TEMPLATE: str = "This example is {}."
    PRELOAD_MODEL: bool = True  # Start loading in the background at startup

    # === Chunking ===
    MAX_CHUNK_TOKENS: int = 512

    # === Backend Timeouts ===
    MODEL_LOAD_TIMEOUT: Optional[float] = None  # seconds, None waits forever
    BACKEND_ACQUIRE_TIMEOUT: Optional[float] = None  # seconds, None waits forever

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()

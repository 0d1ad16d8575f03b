"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment Variables:
        EDIFACT_MAX_MESSAGE_BYTES: Inbound EDIFACT size limit (default 1 MiB)
        GATEWAY_MAX_PAYLOAD_BYTES: HTTP body ceiling for raw messages (default 10 MiB)
        EDIFACT_ASSOCIATION_CODE: Code appended to the UNH message identifier
        DEBUG: Enable debug mode (default False)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        CORS_ORIGINS: Comma separated list of allowed origins
    """

    # EDIFACT
    EDIFACT_MAX_MESSAGE_BYTES: int = 1_048_576  # 1 MiB
    EDIFACT_ASSOCIATION_CODE: str = "EAN010"

    # Gateway
    GATEWAY_MAX_PAYLOAD_BYTES: int = 10_485_760  # 10 MiB
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()

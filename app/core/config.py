"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Catalog
    seed_catalog: bool = True
    list_delay_seconds: float = 0.3  # Simulated latency for full listings
    lookup_delay_seconds: float = 0.2  # Simulated latency for lookups and searches

    # OpenTelemetry
    otel_enabled: bool = False
    otel_service_name: str = "book-catalog"
    otel_exporter_otlp_endpoint: str = "http://localhost:4318/v1/traces"
    otel_exporter_otlp_protocol: Literal["http", "grpc"] = "http"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        """Whether the app runs in development mode."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

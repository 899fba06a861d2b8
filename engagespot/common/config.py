from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://api.engagespot.co/v3"
DEFAULT_SERVICE_NAME = "engagespot-python"


class EngagespotSettings(BaseSettings):
    """Settings for building an Engagespot client from the environment."""

    api_key: str | None = Field(default=None)
    api_secret: str | None = Field(default=None)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    service_name: str = Field(default=DEFAULT_SERVICE_NAME)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    enable_metrics: bool = Field(default=True)
    enable_tracing: bool = Field(default=False)
    tracing_endpoint: str | None = Field(default=None)
    tracing_protocol: Literal["http/protobuf", "grpc"] = Field(default="http/protobuf")
    tracing_insecure: bool = Field(default=True)
    tracing_sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"), env_prefix="ENGAGESPOT_", extra="ignore"
    )


@lru_cache
def get_settings() -> EngagespotSettings:
    """Return cached client settings."""

    return EngagespotSettings()

"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- GOOGLE_MAPS_API_KEY=...            (process-wide routing credential)
- DRIVINGTIME_GMAPS_TIMEOUT_SECONDS=30
- DRIVINGTIME_BATCH_DELAY_SECONDS=0.2
- DRIVINGTIME_LOG_LEVEL=DEBUG
- etc.

The credential lifecycle is deliberately simple: it is set once, either
in the environment or through set_api_key(), and read many times via
get_config(). Concurrent mutation is not supported. An api_key passed
explicitly to a batch always takes precedence.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError

API_KEY_ENV_VAR = "GOOGLE_MAPS_API_KEY"


class GoogleMapsConfig(BaseSettings):
    """Google Maps Distance Matrix configuration.

    Environment variables prefixed with DRIVINGTIME_GMAPS_, except the
    API key which is read from GOOGLE_MAPS_API_KEY.
    """

    model_config = SettingsConfigDict(env_prefix="DRIVINGTIME_GMAPS_")

    api_key: Optional[str] = Field(default=None, validation_alias=API_KEY_ENV_VAR)
    base_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    timeout_seconds: float = 10.0
    units: str = "metric"


class BatchConfig(BaseSettings):
    """Batch processing defaults.

    Environment variables prefixed with DRIVINGTIME_BATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="DRIVINGTIME_BATCH_")

    delay_seconds: float = 0.1
    progress_every: int = 10


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with DRIVINGTIME_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="DRIVINGTIME_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.google_maps.base_url)
        print(config.batch.delay_seconds)

    Environment variables prefixed with DRIVINGTIME_.
    """

    model_config = SettingsConfigDict(env_prefix="DRIVINGTIME_")

    google_maps: GoogleMapsConfig = Field(default_factory=GoogleMapsConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()


def set_api_key(api_key: str) -> None:
    """Set the Google Maps API key for the current process.

    The key is stored in the GOOGLE_MAPS_API_KEY environment variable
    and the cached configuration is reset so the next batch picks it up.

    Raises:
        ConfigurationError: If the key is empty.
    """
    if not api_key or not api_key.strip():
        raise ConfigurationError(
            "API key must be a non-empty string",
            setting_name=API_KEY_ENV_VAR,
        )

    os.environ[API_KEY_ENV_VAR] = api_key.strip()
    reset_config()

    logger = logging.getLogger(__name__)
    logger.info("API key set successfully for this process")
    logger.info(
        "To make it permanent, export %s in your shell profile", API_KEY_ENV_VAR
    )


def resolve_api_key(api_key: Optional[str], config: Optional[AppConfig] = None) -> str:
    """Return the explicit key, else the configured one.

    Raises:
        ConfigurationError: If neither is available, or the explicit
            key is blank.
    """
    if api_key is not None:
        if not api_key.strip():
            raise ConfigurationError(
                "API key must be a non-empty string",
                setting_name=API_KEY_ENV_VAR,
            )
        return api_key

    configured = (config or get_config()).google_maps.api_key
    if configured:
        return configured

    raise ConfigurationError(
        "API key not provided. Set it with set_api_key() or provide via api_key parameter.",
        setting_name=API_KEY_ENV_VAR,
    )


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability settings to the root logger."""
    config = config or get_config().observability
    logging.basicConfig(level=config.level.upper(), format=config.format)

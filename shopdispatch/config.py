"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for tunable behaviour of the
simulator: run caching, the matching policy and its output labels,
input decoding and logging.

Configuration can be overridden via environment variables:
- SDS_DISPATCH_POLICY=taxis
- SDS_DISPATCH_MAX_WORKERS=4
- SDS_ENGINE_CACHE_ENABLED=false
- SDS_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """Shortest-path engine configuration.

    Environment variables prefixed with SDS_ENGINE_.
    """

    model_config = SettingsConfigDict(env_prefix="SDS_ENGINE_")

    cache_enabled: bool = True
    cache_max_size: Optional[int] = 1024


class DispatchConfig(BaseSettings):
    """Matching policy configuration.

    Environment variables prefixed with SDS_DISPATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="SDS_DISPATCH_")

    policy: Literal["shops", "taxis"] = "shops"
    pickup_label: str = "taxi"
    dropoff_label: str = "shop"
    max_workers: int = 1

    @field_validator("max_workers")
    @classmethod
    def _at_least_one_worker(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"max_workers must be at least 1, got {value}")
        return value


class InputConfig(BaseSettings):
    """Input decoding configuration.

    Environment variables prefixed with SDS_INPUT_.
    """

    model_config = SettingsConfigDict(env_prefix="SDS_INPUT_")

    encoding: str = "utf-8"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with SDS_LOG_.
    Logs go to stderr, which also carries "cannot be helped" lines, so
    the default level stays quiet.
    """

    model_config = SettingsConfigDict(env_prefix="SDS_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.dispatch.policy)
        print(config.engine.cache_enabled)

    Environment variables prefixed with SDS_.
    """

    model_config = SettingsConfigDict(env_prefix="SDS_")

    engine: EngineConfig = Field(default_factory=EngineConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()

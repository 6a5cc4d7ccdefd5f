"""Configuration management for rsspress."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import (
    ConfigModel,
    DefaultFeedConfig,
    IngestionConfig,
    LimiterConfig,
    LLMConfig,
    PostgresConfig,
    RetentionConfig,
    ScoringConfig,
    StorageConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "DEFAULT_CONFIG_PATH",
    "DefaultFeedConfig",
    "IngestionConfig",
    "LimiterConfig",
    "LLMConfig",
    "PostgresConfig",
    "RetentionConfig",
    "ScoringConfig",
    "StorageConfig",
    "load_config",
    "save_config",
]

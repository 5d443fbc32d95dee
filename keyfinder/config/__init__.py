"""Configuration management."""

from .config import (
    Config,
    DataSourceConfig,
    KeyFinderConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "Config",
    "DataSourceConfig",
    "KeyFinderConfig",
    "LoggingConfig",
    "load_config",
]

"""Application configuration helpers."""

from __future__ import annotations

from .classifier import ClassifierConfig, get_classifier_config
from .env import env_flag, env_float, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationValueError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ingest import IngestConfig, get_ingest_config
from .logging import configure_logging
from .settings import LifeboardConfig, get_lifeboard_config, get_timezone
from .storage import DatabaseConfig, data_dir, get_database_config

__all__ = [
    "CacheConfig",
    "ClassifierConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IngestConfig",
    "InvalidConfigurationValueError",
    "LifeboardConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "data_dir",
    "env_flag",
    "env_float",
    "get_classifier_config",
    "get_database_config",
    "get_ingest_config",
    "get_lifeboard_config",
    "get_timezone",
    "optional_env_var",
]

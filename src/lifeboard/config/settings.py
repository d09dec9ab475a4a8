"""Aggregate configuration built once from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .classifier import ClassifierConfig, get_classifier_config
from .env import optional_env_var
from .errors import InvalidConfigurationValueError
from .ingest import IngestConfig, get_ingest_config
from .storage import DatabaseConfig, get_database_config


@dataclass(frozen=True, slots=True)
class LifeboardConfig:
    """Everything the application layer needs, passed explicitly into components."""

    database: DatabaseConfig
    ingest: IngestConfig = field(default_factory=IngestConfig)
    classifier: ClassifierConfig | None = None
    # ``None`` means the local timezone of the host.
    timezone: ZoneInfo | None = None


def get_timezone() -> ZoneInfo | None:
    name = optional_env_var("LIFEBOARD_TIMEZONE")
    if name is None:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidConfigurationValueError(
            "LIFEBOARD_TIMEZONE", name, expected="IANA timezone"
        ) from exc


def get_lifeboard_config() -> LifeboardConfig:
    return LifeboardConfig(
        database=get_database_config(),
        ingest=get_ingest_config(),
        classifier=get_classifier_config(),
        timezone=get_timezone(),
    )

"""Ingestion and dashboard tunables."""

from __future__ import annotations

from dataclasses import dataclass

from lifeboard.domain.dashboard.alerts import DEFAULT_ALERT_LIMIT
from lifeboard.domain.reconciliation.external import DEFAULT_CONFIDENCE_THRESHOLD
from lifeboard.domain.reconciliation.relevance import DEFAULT_MIN_TITLE_LENGTH
from lifeboard.domain.reconciliation.resolve import DEFAULT_RELATED_LIMIT, DEFAULT_TITLE_MATCH_LIMIT

from .env import env_flag, env_float
from .errors import InvalidConfigurationValueError


@dataclass(frozen=True, slots=True)
class IngestConfig:
    min_title_length: int = DEFAULT_MIN_TITLE_LENGTH
    title_match_limit: int = DEFAULT_TITLE_MATCH_LIMIT
    resolver_candidate_limit: int = DEFAULT_RELATED_LIMIT
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    alert_limit: int = DEFAULT_ALERT_LIMIT
    batch_grouping: bool = True


def get_ingest_config() -> IngestConfig:
    threshold = env_float(
        "LIFEBOARD_CONFIDENCE_THRESHOLD", default=DEFAULT_CONFIDENCE_THRESHOLD
    )
    if not 0.0 <= threshold <= 1.0:
        raise InvalidConfigurationValueError(
            "LIFEBOARD_CONFIDENCE_THRESHOLD", str(threshold), expected="confidence in [0, 1]"
        )
    return IngestConfig(
        confidence_threshold=threshold,
        batch_grouping=env_flag("LIFEBOARD_BATCH_GROUPING", default=True),
    )

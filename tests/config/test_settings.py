from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from lifeboard.config import (
    InvalidConfigurationValueError,
    get_classifier_config,
    get_ingest_config,
    get_lifeboard_config,
    get_timezone,
)
from lifeboard.config.classifier import (
    DEFAULT_RESOLVER_MODEL,
    OPENROUTER_BASE_URL,
    OPENROUTER_DEADLINE_SECONDS,
)
from lifeboard.domain.dashboard import DEFAULT_ALERT_LIMIT
from lifeboard.domain.reconciliation.external import DEFAULT_CONFIDENCE_THRESHOLD
from lifeboard.domain.reconciliation.relevance import DEFAULT_MIN_TITLE_LENGTH
from lifeboard.domain.reconciliation.resolve import DEFAULT_RELATED_LIMIT, DEFAULT_TITLE_MATCH_LIMIT

_CLASSIFIER_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "LIFEBOARD_CLASSIFIER_TIMEOUT",
    "LIFEBOARD_RESOLVER_MODEL",
    "LIFEBOARD_DASHBOARD_MODEL",
    "LIFEBOARD_GROUPING_MODEL",
    "LIFEBOARD_HTTP_CACHE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        *_CLASSIFIER_VARS,
        "LIFEBOARD_TIMEZONE",
        "LIFEBOARD_CONFIDENCE_THRESHOLD",
        "LIFEBOARD_BATCH_GROUPING",
    ):
        monkeypatch.delenv(name, raising=False)


def test_classifier_is_disabled_without_api_key() -> None:
    assert get_classifier_config() is None


def test_classifier_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    monkeypatch.setenv("OPENROUTER_BASE_URL", "https://proxy.example/v1")
    monkeypatch.setenv("LIFEBOARD_DASHBOARD_MODEL", "test/dashboard")
    monkeypatch.setenv("LIFEBOARD_CLASSIFIER_TIMEOUT", "5")

    config = get_classifier_config()

    assert config is not None
    assert config.api_key == "sk-test"
    assert config.resolver_model == DEFAULT_RESOLVER_MODEL
    assert config.dashboard_model == "test/dashboard"
    assert config.resilience.base_url == "https://proxy.example/v1/"
    assert config.resilience.timeout_seconds == 5.0
    assert config.resilience.deadline_seconds == OPENROUTER_DEADLINE_SECONDS
    assert config.resilience.cache is None


def test_classifier_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")

    config = get_classifier_config()

    assert config is not None
    assert config.resilience.base_url == OPENROUTER_BASE_URL
    assert config.resilience.ratelimit is not None


@pytest.mark.parametrize("backend", ["memory", "SQLite"])
def test_http_cache_can_be_enabled(monkeypatch: pytest.MonkeyPatch, backend: str) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    monkeypatch.setenv("LIFEBOARD_HTTP_CACHE", backend)

    config = get_classifier_config()

    assert config is not None
    cache = config.resilience.cache
    assert cache is not None
    assert cache.backend == backend.lower()
    assert cache.should_cache is not None
    assert cache.should_cache({"choices": []})
    assert not cache.should_cache({"error": "rate limited"})


def test_http_cache_rejects_unknown_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    monkeypatch.setenv("LIFEBOARD_HTTP_CACHE", "redis")

    with pytest.raises(InvalidConfigurationValueError, match="LIFEBOARD_HTTP_CACHE"):
        get_classifier_config()


def test_ingest_config_defaults_follow_the_domain() -> None:
    config = get_ingest_config()

    assert config.confidence_threshold == DEFAULT_CONFIDENCE_THRESHOLD
    assert config.min_title_length == DEFAULT_MIN_TITLE_LENGTH
    assert config.title_match_limit == DEFAULT_TITLE_MATCH_LIMIT
    assert config.resolver_candidate_limit == DEFAULT_RELATED_LIMIT
    assert config.alert_limit == DEFAULT_ALERT_LIMIT
    assert config.batch_grouping is True


def test_ingest_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIFEBOARD_CONFIDENCE_THRESHOLD", "0.9")
    monkeypatch.setenv("LIFEBOARD_BATCH_GROUPING", "off")

    config = get_ingest_config()

    assert config.confidence_threshold == 0.9
    assert config.batch_grouping is False


@pytest.mark.parametrize("raw", ["1.5", "-0.1"])
def test_confidence_threshold_must_be_a_probability(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("LIFEBOARD_CONFIDENCE_THRESHOLD", raw)

    with pytest.raises(InvalidConfigurationValueError):
        get_ingest_config()


def test_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_timezone() is None

    monkeypatch.setenv("LIFEBOARD_TIMEZONE", "America/New_York")
    assert get_timezone() == ZoneInfo("America/New_York")

    monkeypatch.setenv("LIFEBOARD_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(InvalidConfigurationValueError):
        get_timezone()


def test_lifeboard_config_aggregates_sections(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///aggregate.db")
    monkeypatch.setenv("LIFEBOARD_TIMEZONE", "UTC")

    config = get_lifeboard_config()

    assert config.database.uri == "sqlite:///aggregate.db"
    assert config.timezone == ZoneInfo("UTC")
    assert config.classifier is None

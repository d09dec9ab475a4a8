"""Configuration for the external classification service (OpenRouter)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_float, optional_env_var
from .errors import InvalidConfigurationValueError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1/"
OPENROUTER_TIMEOUT_SECONDS = 20.0
OPENROUTER_DEADLINE_SECONDS = 45.0

DEFAULT_RESOLVER_MODEL = "anthropic/claude-opus-4.6"
DEFAULT_DASHBOARD_MODEL = "google/gemini-3-flash-preview"
DEFAULT_GROUPING_MODEL = "google/gemini-3-flash-preview"


def default_resilience(
    *,
    base_url: str = OPENROUTER_BASE_URL,
    timeout_seconds: float = OPENROUTER_TIMEOUT_SECONDS,
    cache: CacheConfig | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="openrouter",
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        deadline_seconds=max(timeout_seconds, OPENROUTER_DEADLINE_SECONDS),
        retry=RetryPolicy(total=2),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        cache=cache,
    )


@dataclass(frozen=True, slots=True)
class ClassifierConfig:
    """Holds OpenRouter credentials, model choices and transport settings."""

    api_key: str
    resolver_model: str = DEFAULT_RESOLVER_MODEL
    dashboard_model: str = DEFAULT_DASHBOARD_MODEL
    grouping_model: str = DEFAULT_GROUPING_MODEL
    resilience: ResilienceConfig = field(default_factory=default_resilience)


def get_classifier_config(*, resilience: ResilienceConfig | None = None) -> ClassifierConfig | None:
    """Return the classifier configuration, or ``None`` when no API key is set.

    Without ``OPENROUTER_API_KEY`` every collaborator runs deterministically.
    """

    api_key = optional_env_var("OPENROUTER_API_KEY")
    if api_key is None:
        return None

    base_url = optional_env_var("OPENROUTER_BASE_URL") or OPENROUTER_BASE_URL
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    timeout = env_float("LIFEBOARD_CLASSIFIER_TIMEOUT", default=OPENROUTER_TIMEOUT_SECONDS)

    return ClassifierConfig(
        api_key=api_key,
        resolver_model=optional_env_var("LIFEBOARD_RESOLVER_MODEL") or DEFAULT_RESOLVER_MODEL,
        dashboard_model=optional_env_var("LIFEBOARD_DASHBOARD_MODEL") or DEFAULT_DASHBOARD_MODEL,
        grouping_model=optional_env_var("LIFEBOARD_GROUPING_MODEL") or DEFAULT_GROUPING_MODEL,
        resilience=resilience
        or default_resilience(base_url=base_url, timeout_seconds=timeout, cache=_cache_config()),
    )


def _has_choices(payload: object) -> bool:
    return isinstance(payload, dict) and "choices" in payload


def _cache_config() -> CacheConfig | None:
    """Response cache for classification calls, off unless ``LIFEBOARD_HTTP_CACHE`` is set."""

    backend = (optional_env_var("LIFEBOARD_HTTP_CACHE") or "off").lower()
    if backend == "off":
        return None
    if backend not in {"memory", "sqlite"}:
        raise InvalidConfigurationValueError(
            "LIFEBOARD_HTTP_CACHE", backend, expected="cache backend (off, memory, sqlite)"
        )
    return CacheConfig(
        backend="sqlite" if backend == "sqlite" else "memory",
        default_ttl_seconds=24 * 3600,
        should_cache=_has_choices,
    )

"""Dashboard classification, alerts and summary."""

from __future__ import annotations

from .alerts import (
    DEFAULT_ALERT_LIMIT,
    EMPTY_STATE_SUMMARY,
    alert_text,
    compose_summary,
    synthesize_alerts,
)
from .builder import DashboardBuilder
from .sections import (
    DeterministicOnlySectionAssigner,
    classify,
    deterministic_section,
    is_past_event,
    map_section_title,
    normalize_proposal,
)

__all__ = [
    "DEFAULT_ALERT_LIMIT",
    "EMPTY_STATE_SUMMARY",
    "DashboardBuilder",
    "DeterministicOnlySectionAssigner",
    "alert_text",
    "classify",
    "compose_summary",
    "deterministic_section",
    "is_past_event",
    "map_section_title",
    "normalize_proposal",
    "synthesize_alerts",
]

"""Alerts and summary text derived strictly from the final sections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lifeboard.domain.model import Alert, AlertUrgency, SectionName, Urgency

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from lifeboard.domain.model import Record, Section

DEFAULT_ALERT_LIMIT = 6
EMPTY_STATE_SUMMARY = "No items yet. Screenshot important life updates and pull to refresh."


def alert_text(record: Record) -> str:
    timing = " ".join(part.strip() for part in (record.date, record.time) if part and part.strip())
    return f"{record.title} ({timing})" if timing else record.title


def synthesize_alerts(
    sections: Sequence[Section],
    *,
    limit: int = DEFAULT_ALERT_LIMIT,
) -> tuple[Alert, ...]:
    """Alerts for Today, Tomorrow and high-urgency To-dos, in that order."""

    by_name = {section.name: section.records for section in sections}
    candidates = (
        *by_name.get(SectionName.TODAY, ()),
        *by_name.get(SectionName.TOMORROW, ()),
        *(
            record
            for record in by_name.get(SectionName.TODOS, ())
            if record.urgency is Urgency.HIGH
        ),
    )
    seen: set[UUID] = set()
    alerts: list[Alert] = []
    for record in candidates:
        if len(alerts) >= limit:
            break
        if record.id in seen:
            continue
        seen.add(record.id)
        urgency = AlertUrgency.HIGH if record.urgency is Urgency.HIGH else AlertUrgency.MEDIUM
        alerts.append(Alert(text=alert_text(record), urgency=urgency))
    return tuple(alerts)


def compose_summary(sections: Sequence[Section]) -> str:
    """Per-bucket counts, e.g. ``"2 today, 0 tomorrow, 1 coming up, 1 to-do"``."""

    counts = {section.name: len(section.records) for section in sections}
    if not any(counts.values()):
        return EMPTY_STATE_SUMMARY
    todos = counts.get(SectionName.TODOS, 0)
    parts = [
        f"{counts.get(SectionName.TODAY, 0)} today",
        f"{counts.get(SectionName.TOMORROW, 0)} tomorrow",
        f"{counts.get(SectionName.COMING_UP, 0)} coming up",
        f"{todos} to-do" if todos == 1 else f"{todos} to-dos",
    ]
    other = counts.get(SectionName.OTHER, 0)
    if other:
        parts.append(f"{other} other")
    return ", ".join(parts)


__all__ = [
    "DEFAULT_ALERT_LIMIT",
    "EMPTY_STATE_SUMMARY",
    "alert_text",
    "compose_summary",
    "synthesize_alerts",
]

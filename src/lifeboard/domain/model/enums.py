"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ItemType(StrEnum):
    EVENT = "event"
    DEADLINE = "deadline"
    ACTION = "action"
    INFO = "info"


class Urgency(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Severity rank, higher is more urgent."""
        return _URGENCY_RANK[self]

    @classmethod
    def max(cls, first: Urgency, second: Urgency) -> Urgency:
        return first if first.rank >= second.rank else second


_URGENCY_RANK: dict[Urgency, int] = {Urgency.LOW: 0, Urgency.MEDIUM: 1, Urgency.HIGH: 2}


class Category(StrEnum):
    SPORTS = "sports"
    SCHOOL = "school"
    WORK = "work"
    SOCIAL = "social"
    HEALTH = "health"
    FINANCE = "finance"
    FAMILY = "family"
    OTHER = "other"


class SectionName(StrEnum):
    """Fixed dashboard bucket vocabulary, declared in display order."""

    TODAY = "Today"
    TOMORROW = "Tomorrow"
    COMING_UP = "Coming Up"
    TODOS = "To-dos"
    OTHER = "Other"


class AlertUrgency(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"

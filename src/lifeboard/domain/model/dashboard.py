"""Rendered dashboard value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from lifeboard.domain.model.enums import AlertUrgency, SectionName
    from lifeboard.domain.model.items import Record


@dataclass(frozen=True, slots=True)
class Section:
    name: SectionName
    records: tuple[Record, ...]

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class Alert:
    text: str
    urgency: AlertUrgency


@dataclass(frozen=True, kw_only=True, slots=True)
class Dashboard:
    summary: str
    updated_at: datetime
    alerts: tuple[Alert, ...] = ()
    sections: tuple[Section, ...] = ()
    item_count: int = 0


@dataclass(frozen=True, slots=True)
class SectionClaim:
    """One bucket of an externally proposed section assignment."""

    title: str
    item_ids: tuple[str, ...] = field(default_factory=tuple)

"""Temporal bucketing of active records into the fixed section vocabulary.

Deterministic rules, first match wins:
1. event dated before today: excluded from every section
2. dated today: Today
3. dated tomorrow: Tomorrow
4. event or deadline dated after tomorrow: Coming Up
5. action, or deadline dated before today: To-dos
6. anything else: Other
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import TYPE_CHECKING

from lifeboard.domain.model import ItemType, Section, SectionClaim, SectionName
from lifeboard.domain.ports import SectionProposal
from lifeboard.domain.time_windows import DayWindow

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from lifeboard.domain.model import Record

log = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_TITLE_KEYWORDS: tuple[tuple[SectionName, tuple[str, ...]], ...] = (
    (SectionName.TODAY, ("today",)),
    (SectionName.TOMORROW, ("tomorrow",)),
    (SectionName.COMING_UP, ("coming up", "upcoming", "this week")),
    (SectionName.TODOS, ("to-do", "todo", "task", "action")),
    (SectionName.OTHER, ("other", "reference", "info")),
)


def record_date(record: Record) -> date | None:
    """Calendar date of ``record``, or ``None`` when undated or unparseable."""

    value = record.normalized_date
    if not value or not _ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_past_event(record: Record, window: DayWindow) -> bool:
    when = record_date(record)
    return record.type is ItemType.EVENT and when is not None and window.is_past(when)


def deterministic_section(record: Record, window: DayWindow) -> SectionName | None:
    """Bucket for ``record``; ``None`` for past events."""

    if is_past_event(record, window):
        return None
    when = record_date(record)
    if when is not None:
        if window.is_today(when):
            return SectionName.TODAY
        if window.is_tomorrow(when):
            return SectionName.TOMORROW
        if record.type in (ItemType.EVENT, ItemType.DEADLINE) and window.is_after_tomorrow(when):
            return SectionName.COMING_UP
    if record.type is ItemType.ACTION:
        return SectionName.TODOS
    if record.type is ItemType.DEADLINE and when is not None and window.is_past(when):
        return SectionName.TODOS
    return SectionName.OTHER


def classify(records: Iterable[Record], window: DayWindow) -> list[Section]:
    """Deterministic sections, keeping the order of ``records`` within each."""

    buckets: dict[SectionName, list[Record]] = {name: [] for name in SectionName}
    for record in records:
        if record.retired:
            continue
        name = deterministic_section(record, window)
        if name is not None:
            buckets[name].append(record)
    return _sections(buckets)


def map_section_title(title: str) -> SectionName:
    """Map a free-form section title onto the vocabulary; unmapped titles become Other."""

    lowered = " ".join(title.lower().split())
    for name, keywords in _TITLE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return name
    return SectionName.OTHER


def claim_is_consistent(claimed: SectionName, record: Record, window: DayWindow) -> bool:
    """Whether placing ``record`` under ``claimed`` agrees with its date."""

    when = record_date(record)
    if when is not None and window.is_today(when):
        return claimed is SectionName.TODAY
    if when is not None and window.is_tomorrow(when):
        return claimed is SectionName.TOMORROW
    if claimed in (SectionName.TODAY, SectionName.TOMORROW):
        return False
    if claimed is SectionName.COMING_UP:
        return when is None or window.is_after_tomorrow(when)
    return True


def normalize_proposal(
    claims: Iterable[SectionClaim],
    records: Sequence[Record],
    window: DayWindow,
) -> list[Section]:
    """Reconcile an external section proposal with date-derived truth.

    Every active, non-past record ends up in exactly one section: unknown ids
    are ignored, the first claim on a record wins, inconsistent claims fall back
    to the deterministic bucket and omitted records are appended to theirs.
    """

    by_id = {str(record.id): record for record in records if record.active}
    buckets: dict[SectionName, list[Record]] = {name: [] for name in SectionName}
    placed: set[str] = set()
    corrected = 0

    for claim in claims:
        claimed = map_section_title(claim.title)
        for raw_id in claim.item_ids:
            item_id = raw_id.strip().lower()
            record = by_id.get(item_id)
            if record is None or item_id in placed:
                continue
            placed.add(item_id)
            fallback = deterministic_section(record, window)
            if fallback is None:
                continue
            if claim_is_consistent(claimed, record, window):
                buckets[claimed].append(record)
            else:
                corrected += 1
                buckets[fallback].append(record)

    injected = 0
    for item_id, record in by_id.items():
        if item_id in placed:
            continue
        name = deterministic_section(record, window)
        if name is not None:
            injected += 1
            buckets[name].append(record)

    if corrected or injected:
        log.info(
            "Section proposal corrected: %d claim(s) moved, %d record(s) injected",
            corrected,
            injected,
        )
    return _sections(buckets)


def _sections(buckets: dict[SectionName, list[Record]]) -> list[Section]:
    return [Section(name=name, records=tuple(items)) for name, items in buckets.items() if items]


class DeterministicOnlySectionAssigner:
    """Section assigner used without the external service."""

    def propose_sections(self, records: Sequence[Record], *, today: date) -> SectionProposal:
        window = DayWindow(today=today)
        return SectionProposal(
            claims=tuple(
                SectionClaim(
                    title=section.name.value,
                    item_ids=tuple(str(record.id) for record in section.records),
                )
                for section in classify(records, window)
            )
        )


__all__ = [
    "DeterministicOnlySectionAssigner",
    "claim_is_consistent",
    "classify",
    "deterministic_section",
    "is_past_event",
    "map_section_title",
    "normalize_proposal",
    "record_date",
]

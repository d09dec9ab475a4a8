"""Merge rules shared by record updates and batch grouping."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from lifeboard.domain.model import Category, Record, Urgency

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from uuid import UUID

    from lifeboard.domain.model import CandidateItem

    from .keys import ItemKeys


def pick_description(existing: str | None, incoming: str | None) -> str | None:
    """Longer text wins, ties favor ``incoming``; a missing incoming text never wins."""

    if not incoming:
        return existing
    if not existing or len(incoming) >= len(existing):
        return incoming
    return existing


def union_ordered(existing: Iterable[str], incoming: Iterable[str]) -> list[str]:
    merged: dict[str, None] = {}
    for value in (*existing, *incoming):
        if value and value not in merged:
            merged[value] = None
    return list(merged)


def _fill[T](existing: T | None, incoming: T | None) -> T | None:
    return incoming if incoming else existing


def new_record(
    candidate: CandidateItem,
    *,
    owner_id: UUID,
    keys: ItemKeys,
    now: datetime,
) -> Record:
    """Build the record for a candidate that matched nothing."""

    sources = set(candidate.source_ids)
    return Record(
        owner_id=owner_id,
        type=candidate.type,
        title=candidate.title.strip(),
        normalized_title=keys.normalized_title,
        canonical_key=keys.canonical_key,
        normalized_date=keys.normalized_date or None,
        normalized_time=keys.normalized_time or None,
        date=candidate.date,
        time=candidate.time,
        end_time=candidate.end_time,
        location=candidate.location,
        description=candidate.description,
        urgency=candidate.urgency,
        category=candidate.category or Category.OTHER,
        people=union_ordered((), candidate.people),
        source_hashes=sources,
        occurrence_count=max(1, len(sources)),
        raw_text=candidate.raw_text,
        last_seen_at=now,
        created_at=now,
    )


def merge_into_record(
    record: Record,
    candidate: CandidateItem,
    *,
    keys: ItemKeys,
    now: datetime,
) -> Record:
    """Fold ``candidate`` into ``record`` in place.

    Title and canonical key never change. The normalized date and time follow the
    gap-filled values so date-based queries and classification stay accurate.
    """

    record.description = pick_description(record.description, candidate.description)
    record.urgency = Urgency.max(record.urgency, candidate.urgency)
    record.people = union_ordered(record.people, candidate.people)
    if candidate.date:
        record.date = candidate.date
        record.normalized_date = keys.normalized_date or None
    if candidate.time:
        record.time = candidate.time
        record.normalized_time = keys.normalized_time or None
    record.end_time = _fill(record.end_time, candidate.end_time)
    record.location = _fill(record.location, candidate.location)
    record.category = candidate.category or record.category
    record.raw_text = _fill(record.raw_text, candidate.raw_text)
    record.replace_sources(union_ordered(record.source_hashes, candidate.source_ids), seen_at=now)
    return record


def merge_candidates(base: CandidateItem, incoming: CandidateItem) -> CandidateItem:
    """Fold ``incoming`` into ``base`` with the record merge rules."""

    sources = tuple(union_ordered(base.source_ids, incoming.source_ids))
    return replace(
        base,
        description=pick_description(base.description, incoming.description),
        urgency=Urgency.max(base.urgency, incoming.urgency),
        people=tuple(union_ordered(base.people, incoming.people)),
        date=_fill(base.date, incoming.date),
        time=_fill(base.time, incoming.time),
        end_time=_fill(base.end_time, incoming.end_time),
        location=_fill(base.location, incoming.location),
        category=incoming.category or base.category,
        raw_text=_fill(base.raw_text, incoming.raw_text),
        source_ids=sources,
        occurrence_count=max(1, len(sources)),
    )


__all__ = [
    "merge_candidates",
    "merge_into_record",
    "new_record",
    "pick_description",
    "union_ordered",
]

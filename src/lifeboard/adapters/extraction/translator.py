"""Translate extraction payloads into domain candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lifeboard.domain.model import CandidateItem
from lifeboard.domain.ports import CandidateBatch

if TYPE_CHECKING:
    from .schema import ExtractedItemPayload, ExtractionBatchPayload


def translate_item(
    payload: ExtractedItemPayload,
    *,
    default_source_id: str | None = None,
) -> CandidateItem:
    source_id = payload.source_id or default_source_id
    return CandidateItem(
        type=payload.type,
        title=payload.title,
        date=payload.date,
        time=payload.time,
        end_time=payload.end_time,
        location=payload.location,
        description=payload.description,
        urgency=payload.urgency,
        category=payload.category,
        people=tuple(payload.people),
        source_ids=(source_id,) if source_id else (),
        raw_text=payload.raw_text,
    )


def translate_batch(
    payload: ExtractionBatchPayload, *, origin: str | None = None
) -> CandidateBatch:
    return CandidateBatch(
        items=[
            translate_item(item, default_source_id=payload.source_id) for item in payload.items
        ],
        origin=origin,
    )


__all__ = ["translate_batch", "translate_item"]

"""Translate OpenRouter answers into classification port values."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from uuid import UUID

from lifeboard.domain.model import SectionClaim
from lifeboard.domain.ports import DuplicateVerdict, GroupingPlan, ItemGroup, SectionProposal

if TYPE_CHECKING:
    from .schema import DashboardPayload, DuplicateVerdictPayload, GroupingPayload

log = getLogger(__name__)


def _parse_uuid(value: str | None) -> UUID | None:
    if value is None or value.lower() in {"null", "none"}:
        return None
    try:
        return UUID(value)
    except ValueError:
        log.warning("Ignoring malformed record id in resolver answer: %r", value)
        return None


def translate_verdict(payload: DuplicateVerdictPayload) -> DuplicateVerdict:
    confidence = min(max(payload.confidence, 0.0), 1.0)
    return DuplicateVerdict(
        merge_with_id=_parse_uuid(payload.merge_with_id),
        confidence=confidence,
        reason=payload.reason,
    )


def translate_grouping(payload: GroupingPayload) -> GroupingPlan:
    return GroupingPlan(
        groups=tuple(
            ItemGroup(indices=tuple(group.indices), reason=group.reason)
            for group in payload.groups
        ),
        drop_indices=frozenset(payload.drop_indices),
    )


def translate_sections(payload: DashboardPayload) -> SectionProposal:
    return SectionProposal(
        claims=tuple(
            SectionClaim(title=section.title, item_ids=tuple(section.item_ids))
            for section in payload.sections
        ),
        summary=payload.summary,
        alerts=tuple(alert.text for alert in payload.alerts),
    )


__all__ = ["translate_grouping", "translate_sections", "translate_verdict"]

"""Intra-batch deduplication.

Two mechanisms collapse repeats inside one ingestion batch:
- an optional grouping plan from the grouping collaborator, validated here and
  applied by folding each group into its richest member
- a deterministic pass that skips a candidate whose loose temporal key was
  already seen from the same source
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lifeboard.domain.ports import GroupingPlan

from .merge import merge_candidates

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from lifeboard.domain.model import CandidateItem
    from lifeboard.domain.ports import BatchGroupingService

    from .keys import ItemKeys

log = logging.getLogger(__name__)

_DESCRIPTION_RICHNESS_CAP = 160


class DeterministicOnlyGrouper:
    """Grouper used without the external service: proposes nothing."""

    def plan_groups(self, items: Sequence[CandidateItem]) -> GroupingPlan:  # noqa: ARG002
        return GroupingPlan()


@dataclass(slots=True)
class ValidatedPlan:
    groups: list[list[int]] = field(default_factory=list)
    drops: set[int] = field(default_factory=set)


@dataclass(slots=True)
class GroupingResult:
    items: list[CandidateItem]
    groups_applied: int = 0
    dropped: int = 0


def richness(item: CandidateItem) -> int:
    """Score how much evidence a candidate carries."""

    return (
        min(len(item.description or ""), _DESCRIPTION_RICHNESS_CAP)
        + (40 if item.location else 0)
        + (30 if item.time else 0)
        + (15 if item.end_time else 0)
        + (10 if item.raw_text else 0)
        + 5 * item.occurrence_count
    )


def validate_plan(plan: GroupingPlan, size: int) -> ValidatedPlan:
    """Turn a raw plan into disjoint, in-range groups of at least two indices."""

    drops = {index for index in plan.drop_indices if 0 <= index < size}
    assigned: set[int] = set()
    groups: list[list[int]] = []
    for group in plan.groups:
        members: list[int] = []
        for index in group.indices:
            if not 0 <= index < size or index in drops or index in assigned:
                continue
            if index not in members:
                members.append(index)
        if len(members) < 2:
            continue
        assigned.update(members)
        groups.append(sorted(members))
    return ValidatedPlan(groups=groups, drops=drops)


def collapse_group(items: Sequence[CandidateItem], members: Sequence[int]) -> CandidateItem:
    """Fold every member into the richest one; ties go to the earlier index."""

    ordered = sorted(members)
    representative = max(ordered, key=lambda index: (richness(items[index]), -index))
    merged = items[representative]
    for index in ordered:
        if index != representative:
            merged = merge_candidates(merged, items[index])
    return merged


def apply_plan(items: Sequence[CandidateItem], plan: ValidatedPlan) -> list[CandidateItem]:
    """Replace each group by its synthesized candidate at the group's earliest position."""

    replacement: dict[int, CandidateItem] = {}
    absorbed: set[int] = set(plan.drops)
    for members in plan.groups:
        first, *rest = members
        replacement[first] = collapse_group(items, members)
        absorbed.update(rest)
    return [
        replacement.get(index, item)
        for index, item in enumerate(items)
        if index not in absorbed
    ]


@dataclass(slots=True, kw_only=True)
class BatchGrouper:
    service: BatchGroupingService
    enabled: bool = True

    def group(self, items: Sequence[CandidateItem]) -> GroupingResult:
        if not self.enabled or len(items) < 2:
            return GroupingResult(items=list(items))
        plan = validate_plan(self.service.plan_groups(items), len(items))
        if not plan.groups and not plan.drops:
            return GroupingResult(items=list(items))
        grouped = apply_plan(items, plan)
        log.info(
            "Grouping collapsed %d group(s) and dropped %d item(s)",
            len(plan.groups),
            len(plan.drops),
        )
        return GroupingResult(
            items=grouped, groups_applied=len(plan.groups), dropped=len(plan.drops)
        )


def drop_repeats(
    items: Sequence[CandidateItem],
    keys_for: Callable[[CandidateItem], ItemKeys],
) -> list[tuple[CandidateItem, ItemKeys]]:
    """Keep the first candidate per (source, loose temporal key) pair."""

    seen: set[tuple[tuple[str, ...], str]] = set()
    kept: list[tuple[CandidateItem, ItemKeys]] = []
    for item in items:
        keys = keys_for(item)
        marker = (tuple(sorted(item.source_ids)), keys.loose_key)
        if marker in seen:
            log.debug("Skipping repeated candidate %r within batch", item.title)
            continue
        seen.add(marker)
        kept.append((item, keys))
    return kept


__all__ = [
    "BatchGrouper",
    "DeterministicOnlyGrouper",
    "GroupingResult",
    "ValidatedPlan",
    "apply_plan",
    "collapse_group",
    "drop_repeats",
    "richness",
    "validate_plan",
]

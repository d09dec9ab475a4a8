"""Orchestrator for one ingestion call.

Candidates are processed sequentially in batch order. Later candidates may
match records created or merged by earlier ones, so the repository must read
its own pending writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING
from uuid import uuid4

from .contracts import ResolvedResolution, UndecidedResolution
from .deduplicate import drop_repeats
from .keys import build_keys
from .merge import merge_into_record, new_record
from .relevance import DEFAULT_MIN_TITLE_LENGTH, filter_relevant
from .sources import SourceReconciliation, reconcile_sources

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from lifeboard.domain.model import CandidateItem, Record
    from lifeboard.domain.ports import RecordRepository
    from lifeboard.domain.time_windows import Clock

    from .deduplicate import BatchGrouper
    from .external import ExternalResolver
    from .keys import ItemKeys
    from .resolve import DeterministicMatcher

log = logging.getLogger(__name__)

SYNTHETIC_SOURCE_PREFIX = "batch-"


@dataclass(slots=True)
class IngestOutcome:
    """What one ingestion call did."""

    processed: int
    sources: SourceReconciliation
    created: list[Record] = field(default_factory=list)
    merged: list[Record] = field(default_factory=list)
    dropped_irrelevant: int = 0
    skipped_repeats: int = 0
    grouped: int = 0
    touched: dict[UUID, Record] = field(default_factory=dict, repr=False)

    @property
    def records(self) -> list[Record]:
        """Touched records in processing order, each once."""
        return list(self.touched.values())


@dataclass(slots=True, kw_only=True)
class ReconciliationEngine:
    """Run relevance, source withdrawal, grouping, matching and merging for a batch."""

    repository: RecordRepository
    grouper: BatchGrouper
    matcher: DeterministicMatcher
    external: ExternalResolver
    clock: Clock
    min_title_length: int = DEFAULT_MIN_TITLE_LENGTH

    def reconcile(self, owner_id: UUID, items: Sequence[CandidateItem]) -> IngestOutcome:
        now = self.clock()
        attributed = attribute_sources(items)
        batch_sources = [
            source_id
            for source_id in _distinct_sources(attributed)
            if not source_id.startswith(SYNTHETIC_SOURCE_PREFIX)
        ]

        relevance = filter_relevant(attributed, min_title_length=self.min_title_length)
        sources = reconcile_sources(self.repository, owner_id, batch_sources, now=now)
        grouping = self.grouper.group(relevance.kept)
        default_year = now.year
        candidates = drop_repeats(
            grouping.items, lambda item: build_keys(item, default_year=default_year)
        )

        outcome = IngestOutcome(
            processed=len(items),
            sources=sources,
            dropped_irrelevant=len(relevance.dropped),
            skipped_repeats=len(grouping.items) - len(candidates),
            grouped=grouping.groups_applied,
        )
        for candidate, keys in candidates:
            record = self._apply(owner_id, candidate, keys, now=now, outcome=outcome)
            outcome.touched.setdefault(record.id, record)

        log.info(
            "Ingested %d candidate(s) for %s: %d created, %d merged, %d irrelevant, "
            "%d source(s) reconciled, %d record(s) retired",
            outcome.processed,
            owner_id,
            len(outcome.created),
            len(outcome.merged),
            outcome.dropped_irrelevant,
            sources.sources_reconciled,
            sources.records_retired,
        )
        return outcome

    def _apply(
        self,
        owner_id: UUID,
        candidate: CandidateItem,
        keys: ItemKeys,
        *,
        now: datetime,
        outcome: IngestOutcome,
    ) -> Record:
        resolution = self.matcher.match(owner_id, keys)
        if isinstance(resolution, UndecidedResolution):
            resolution = self.external.resolve(owner_id, candidate, keys, resolution)

        if isinstance(resolution, ResolvedResolution):
            record = merge_into_record(resolution.target, candidate, keys=keys, now=now)
            outcome.merged.append(record)
            log.debug(
                "Merged %r into %s (%s)", candidate.title, record.id, resolution.match_kind
            )
            return record

        record = new_record(candidate, owner_id=owner_id, keys=keys, now=now)
        self.repository.add(record)
        outcome.created.append(record)
        return record


def attribute_sources(items: Sequence[CandidateItem]) -> list[CandidateItem]:
    """Give sourceless candidates one synthetic source id shared by the batch."""

    if all(item.source_ids for item in items):
        return list(items)
    synthetic = f"{SYNTHETIC_SOURCE_PREFIX}{uuid4().hex}"
    return [item if item.source_ids else replace(item, source_ids=(synthetic,)) for item in items]


def _distinct_sources(items: Sequence[CandidateItem]) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        for source_id in item.source_ids:
            seen.setdefault(source_id, None)
    return list(seen)


__all__ = ["SYNTHETIC_SOURCE_PREFIX", "IngestOutcome", "ReconciliationEngine", "attribute_sources"]

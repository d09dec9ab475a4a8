"""Confidence-gated matching through the external classification collaborator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lifeboard.domain.ports import NO_MERGE

from .contracts import MatchKind, NewResolution, ResolvedResolution

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from lifeboard.domain.model import CandidateItem, Record
    from lifeboard.domain.ports import DuplicateResolver, DuplicateVerdict, RecordRepository

    from .contracts import Resolution, UndecidedResolution
    from .keys import ItemKeys, ResolutionKey

log = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.72


class DeterministicOnlyResolver:
    """Resolver used without the external service: never merges."""

    def resolve_duplicate(
        self,
        candidate: CandidateItem,  # noqa: ARG002
        candidates: Sequence[Record],  # noqa: ARG002
    ) -> DuplicateVerdict:
        return NO_MERGE


@dataclass(slots=True, kw_only=True)
class ExternalResolver:
    """Resolve undecided candidates for one batch.

    Verdicts are cached by resolution key for the lifetime of the instance,
    "no merge" included, so build one resolver per ingestion call.
    """

    resolver: DuplicateResolver
    repository: RecordRepository
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    _cache: dict[ResolutionKey, DuplicateVerdict] = field(default_factory=dict)

    def resolve(
        self,
        owner_id: UUID,
        candidate: CandidateItem,
        keys: ItemKeys,
        undecided: UndecidedResolution,
    ) -> Resolution:
        offered = {record.id for record in undecided.related}
        verdict = self._cache.get(keys.resolution_key)
        if verdict is None:
            verdict = self.resolver.resolve_duplicate(candidate, undecided.related)
            self._cache[keys.resolution_key] = verdict

        target_id = verdict.merge_with_id
        if target_id is None:
            return NewResolution(reason=verdict.reason or "external_no_merge")
        if not verdict.confidence >= self.confidence_threshold:
            log.info(
                "Ignoring external match for %r: confidence %.2f below %.2f",
                candidate.title,
                verdict.confidence,
                self.confidence_threshold,
            )
            return NewResolution(reason="external_low_confidence")
        if target_id not in offered:
            log.warning("External resolver answered unknown record id %s", target_id)
            return NewResolution(reason="external_unknown_id")

        target = self.repository.get(owner_id, target_id)
        if target is None or target.retired:
            return NewResolution(reason="external_target_inactive")
        return ResolvedResolution(
            target=target,
            match_kind=MatchKind.EXTERNAL,
            confidence=verdict.confidence,
            reason=verdict.reason,
        )


__all__ = ["DEFAULT_CONFIDENCE_THRESHOLD", "DeterministicOnlyResolver", "ExternalResolver"]

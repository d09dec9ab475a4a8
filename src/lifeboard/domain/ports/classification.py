"""Ports for the external classification collaborator.

Each port has a deterministic implementation in the domain and a remote one in
``lifeboard.adapters.openrouter``. Remote implementations never raise for
transport or parse failures; they answer with the deterministic result instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date
    from uuid import UUID

    from lifeboard.domain.model import CandidateItem, Record, SectionClaim


@dataclass(frozen=True, slots=True)
class DuplicateVerdict:
    """Answer to "is this candidate one of these records?"."""

    merge_with_id: UUID | None
    confidence: float = 0.0
    reason: str | None = None


NO_MERGE = DuplicateVerdict(merge_with_id=None, confidence=0.0)


@dataclass(frozen=True, slots=True)
class ItemGroup:
    indices: tuple[int, ...]
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class GroupingPlan:
    """Raw grouping proposal over batch indices, validated by the domain."""

    groups: tuple[ItemGroup, ...] = ()
    drop_indices: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class SectionProposal:
    """Proposed section assignment. Summary and alert text are informational only."""

    claims: tuple[SectionClaim, ...]
    summary: str | None = None
    alerts: tuple[str, ...] = ()


@runtime_checkable
class DuplicateResolver(Protocol):
    def resolve_duplicate(
        self,
        candidate: CandidateItem,
        candidates: Sequence[Record],
    ) -> DuplicateVerdict: ...


@runtime_checkable
class BatchGroupingService(Protocol):
    def plan_groups(self, items: Sequence[CandidateItem]) -> GroupingPlan: ...


@runtime_checkable
class SectionAssigner(Protocol):
    def propose_sections(self, records: Sequence[Record], *, today: date) -> SectionProposal: ...


@dataclass(frozen=True, slots=True)
class Classifiers:
    """The three collaborators, selected together by configuration."""

    resolver: DuplicateResolver
    grouper: BatchGroupingService
    sections: SectionAssigner

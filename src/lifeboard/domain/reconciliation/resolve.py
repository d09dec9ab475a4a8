"""Deterministic matching of candidates against stored records.

Lookup order, first success wins:
- active record with the identical canonical key
- among recent same-type records sharing the normalized title, the first whose
  loose temporal key matches

Without a match the candidate is undecided when related records exist, and new
otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .contracts import MatchKind, NewResolution, ResolvedResolution, UndecidedResolution
from .keys import record_keys

if TYPE_CHECKING:
    from uuid import UUID

    from lifeboard.domain.model import Record
    from lifeboard.domain.ports import RecordRepository

    from .contracts import Resolution
    from .keys import ItemKeys

DEFAULT_TITLE_MATCH_LIMIT = 20
DEFAULT_RELATED_LIMIT = 30


@dataclass(slots=True, kw_only=True)
class DeterministicMatcher:
    repository: RecordRepository
    title_match_limit: int = DEFAULT_TITLE_MATCH_LIMIT
    related_limit: int = DEFAULT_RELATED_LIMIT

    def match(self, owner_id: UUID, keys: ItemKeys) -> Resolution:
        exact = self.repository.find_active_by_key(owner_id, keys.canonical_key)
        if exact is not None:
            return ResolvedResolution(
                target=exact, match_kind=MatchKind.EXACT, reason="canonical_key"
            )

        same_title = self.repository.find_active_by_title(
            owner_id, keys.type, keys.normalized_title, limit=self.title_match_limit
        )
        loose_key = keys.loose_key
        for record in same_title:
            if record_keys(record).loose_key == loose_key:
                return ResolvedResolution(
                    target=record, match_kind=MatchKind.LOOSE, reason="loose_temporal_key"
                )

        related = self.repository.find_related(
            owner_id,
            keys.type,
            normalized_title=keys.normalized_title or None,
            normalized_date=keys.normalized_date or None,
            normalized_time=keys.normalized_time or None,
            limit=self.related_limit,
        )
        ranked = _rank_related(same_title, related, limit=self.related_limit)
        if not ranked:
            return NewResolution(reason="no_related_records")
        return UndecidedResolution(related=ranked, reason="related_records")


def _rank_related(
    seeds: list[Record],
    related: list[Record],
    *,
    limit: int,
) -> tuple[Record, ...]:
    ranked: dict[UUID, Record] = {}
    for record in (*seeds, *related):
        if len(ranked) >= limit:
            break
        ranked.setdefault(record.id, record)
    return tuple(ranked.values())


__all__ = ["DEFAULT_RELATED_LIMIT", "DEFAULT_TITLE_MATCH_LIMIT", "DeterministicMatcher"]

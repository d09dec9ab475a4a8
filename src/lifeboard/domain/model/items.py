"""Candidate items and persisted records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from lifeboard.domain.model.enums import Category, ItemType, Urgency

if TYPE_CHECKING:
    from collections.abc import Iterable


def new_id() -> UUID:
    return uuid4()


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True, slots=True)
class CandidateItem:
    """One extracted life-admin entry, before reconciliation.

    ``source_ids`` holds the extraction source (one screenshot) that asserted the
    item. Batch grouping may fold several sources into one candidate, in which
    case ``occurrence_count`` is the number of distinct sources.
    """

    type: ItemType
    title: str
    date: str | None = None
    time: str | None = None
    end_time: str | None = None
    location: str | None = None
    description: str | None = None
    urgency: Urgency = Urgency.MEDIUM
    category: Category | None = None
    people: tuple[str, ...] = ()
    source_ids: tuple[str, ...] = ()
    raw_text: str | None = None
    occurrence_count: int = 1

    @property
    def source_id(self) -> str | None:
        return self.source_ids[0] if self.source_ids else None


@dataclass(eq=False, kw_only=True)
class Record:
    """A persisted obligation owned by one owner.

    Collection attributes are replaced wholesale on change so the JSON-backed
    columns observe the assignment.
    """

    id: UUID = field(default_factory=new_id)
    owner_id: UUID
    type: ItemType
    title: str
    normalized_title: str
    canonical_key: str
    normalized_date: str | None = None
    normalized_time: str | None = None
    date: str | None = None
    time: str | None = None
    end_time: str | None = None
    location: str | None = None
    description: str | None = None
    urgency: Urgency = Urgency.MEDIUM
    category: Category = Category.OTHER
    people: list[str] = field(default_factory=list)
    source_hashes: set[str] = field(default_factory=set)
    occurrence_count: int = 1
    raw_text: str | None = None
    retired: bool = False
    last_seen_at: datetime = field(default_factory=utcnow)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def active(self) -> bool:
        return not self.retired

    def replace_sources(self, sources: Iterable[str], *, seen_at: datetime) -> None:
        """Set the asserting sources, keeping the occurrence count in step."""

        self.source_hashes = set(sources)
        self.occurrence_count = max(1, len(self.source_hashes))
        self.last_seen_at = seen_at

    def retire(self, *, clear_sources: bool = False) -> None:
        self.retired = True
        if clear_sources or not self.source_hashes:
            self.source_hashes = set()
            self.occurrence_count = 0

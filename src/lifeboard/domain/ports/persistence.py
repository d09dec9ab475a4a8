"""Ports for persisting records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from lifeboard.domain.model import ItemType, Record


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class RecordRepository(Repository["Record"], Protocol):
    """Persistence contract for an owner's records.

    Records returned by the finders are live: attribute changes are persisted
    when the surrounding unit of work commits. Only active records are returned
    unless stated otherwise.
    """

    def get(self, owner_id: UUID, record_id: UUID) -> Record | None:
        """Return the record regardless of retirement, or ``None`` if absent or foreign."""
        ...

    def find_active_by_key(self, owner_id: UUID, canonical_key: str) -> Record | None: ...

    def find_active_by_title(
        self,
        owner_id: UUID,
        item_type: ItemType,
        normalized_title: str,
        *,
        limit: int,
    ) -> list[Record]:
        """Most recently seen first."""
        ...

    def find_related(
        self,
        owner_id: UUID,
        item_type: ItemType,
        *,
        normalized_title: str | None,
        normalized_date: str | None,
        normalized_time: str | None,
        limit: int,
    ) -> list[Record]:
        """Same-type records sharing any provided non-empty value.

        Ordered by occurrence count, then recency.
        """
        ...

    def find_active_by_source(self, owner_id: UUID, source_id: str) -> list[Record]: ...

    def list_active(self, owner_id: UUID) -> list[Record]:
        """Ordered by urgency, then normalized date (undated last), then recency."""
        ...

    def retire(self, owner_id: UUID, record_id: UUID) -> Record | None:
        """Retire one record, keeping its sources; ``None`` if absent or foreign."""
        ...

    def retire_all(self, owner_id: UUID, *, now: datetime) -> int:
        """Retire every active record of the owner and clear its evidence."""
        ...

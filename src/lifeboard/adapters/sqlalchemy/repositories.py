"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from sqlalchemy import String, case, false, or_, select, type_coerce

from lifeboard.adapters.sqlalchemy.mappings import record_table
from lifeboard.domain.model import Record, Urgency

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Session

    from lifeboard.domain.model import ItemType


_columns = record_table.c

_URGENCY_ORDER = case(
    {Urgency.HIGH: 0, Urgency.MEDIUM: 1},
    value=_columns.urgency,
    else_=2,
)
_UNDATED_LAST = case((_columns.normalized_date.is_(None), 1), else_=0)


class SqlAlchemyRecordRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Record) -> None:
        self.session.add(entity)

    def get(self, owner_id: UUID, record_id: UUID) -> Record | None:
        record = self.session.get(Record, record_id)
        if record is None or record.owner_id != owner_id:
            return None
        return record

    def find_active_by_key(self, owner_id: UUID, canonical_key: str) -> Record | None:
        stmt = self._active(owner_id).where(_columns.canonical_key == canonical_key).limit(1)
        return self.session.execute(stmt).scalars().first()

    def find_active_by_title(
        self,
        owner_id: UUID,
        item_type: ItemType,
        normalized_title: str,
        *,
        limit: int,
    ) -> list[Record]:
        stmt = (
            self._active(owner_id)
            .where(_columns.type == item_type)
            .where(_columns.normalized_title == normalized_title)
            .order_by(_columns.last_seen_at.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

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
        shared: list[ColumnElement[bool]] = []
        if normalized_title:
            shared.append(_columns.normalized_title == normalized_title)
        if normalized_date:
            shared.append(_columns.normalized_date == normalized_date)
        if normalized_time:
            shared.append(_columns.normalized_time == normalized_time)
        if not shared:
            return []
        stmt = (
            self._active(owner_id)
            .where(_columns.type == item_type)
            .where(or_(*shared))
            .order_by(_columns.occurrence_count.desc(), _columns.last_seen_at.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

    def find_active_by_source(self, owner_id: UUID, source_id: str) -> list[Record]:
        # LIKE narrows on the JSON text; membership is confirmed on the decoded set.
        needle = json.dumps(source_id)
        stmt = self._active(owner_id).where(
            type_coerce(_columns.source_hashes, String).contains(needle, autoescape=True)
        )
        return [
            record
            for record in self.session.execute(stmt).scalars()
            if source_id in record.source_hashes
        ]

    def list_active(self, owner_id: UUID) -> list[Record]:
        stmt = self._active(owner_id).order_by(
            _URGENCY_ORDER,
            _UNDATED_LAST,
            _columns.normalized_date.asc(),
            _columns.last_seen_at.desc(),
            _columns.created_at.desc(),
        )
        return list(self.session.execute(stmt).scalars())

    def retire(self, owner_id: UUID, record_id: UUID) -> Record | None:
        record = self.get(owner_id, record_id)
        if record is not None:
            record.retire()
        return record

    def retire_all(self, owner_id: UUID, *, now: datetime) -> int:
        records = list(self.session.execute(self._active(owner_id)).scalars())
        for record in records:
            record.last_seen_at = now
            record.retire(clear_sources=True)
        return len(records)

    @staticmethod
    def _active(owner_id: UUID) -> Select[tuple[Record]]:
        return (
            select(Record)
            .where(_columns.owner_id == owner_id)
            .where(_columns.retired == false())
        )


if TYPE_CHECKING:
    from sqlalchemy.orm import Session as _Session

    from lifeboard.domain.ports import RecordRepository

    _repository_check: RecordRepository = SqlAlchemyRecordRepository(_Session())

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import inspect, select

from lifeboard.adapters.sqlalchemy import record_table, start_mappers
from lifeboard.adapters.sqlalchemy.mappings import ACTIVE_KEY_INDEX
from lifeboard.domain.model import Category, Record, Urgency
from tests.helpers.records import make_record

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture; calling again should be harmless.
    start_mappers()
    start_mappers()


def test_migrations_create_record_table(sqlite_engine: Engine) -> None:
    inspector = inspect(sqlite_engine)
    assert "record" in set(inspector.get_table_names())
    indexes = {index["name"]: index for index in inspector.get_indexes("record")}
    assert ACTIVE_KEY_INDEX in indexes
    assert indexes[ACTIVE_KEY_INDEX]["unique"]


def test_enums_are_stored_by_value(sqlite_session: Session) -> None:
    record = make_record(uuid4(), urgency=Urgency.HIGH, category=Category.SCHOOL)
    sqlite_session.add(record)
    sqlite_session.commit()

    row = sqlite_session.execute(
        select(record_table.c.urgency, record_table.c.category, record_table.c.type)
    ).one()
    assert tuple(row) == ("high", "school", "event")


def test_collections_are_stored_as_json(sqlite_session: Session) -> None:
    record = make_record(uuid4(), people=["Sam", "Alex"])
    record.replace_sources({"shot-2", "shot-1"}, seen_at=record.last_seen_at)
    sqlite_session.add(record)
    sqlite_session.commit()

    row = sqlite_session.execute(
        select(record_table.c.people, record_table.c.source_hashes)
    ).one()
    assert row.people == ["Sam", "Alex"]
    assert row.source_hashes == {"shot-1", "shot-2"}

    sqlite_session.expire_all()
    stored = sqlite_session.get(Record, record.id)
    assert stored is not None
    assert stored.source_hashes == {"shot-1", "shot-2"}
    assert stored.occurrence_count == 2


def test_datetimes_are_normalised_to_utc(sqlite_session: Session) -> None:
    local = datetime(2026, 3, 10, 17, 0, tzinfo=timezone(timedelta(hours=2)))
    record = make_record(uuid4(), now=local)
    sqlite_session.add(record)
    sqlite_session.commit()
    sqlite_session.expire_all()

    stored = sqlite_session.get(Record, record.id)
    assert stored is not None
    assert stored.last_seen_at == local
    assert stored.last_seen_at.utcoffset() == timedelta(0)

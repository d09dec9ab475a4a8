"""SQLAlchemy mapping metadata for the lifeboard domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
    text,
)
from sqlalchemy.orm import configure_mappers

from lifeboard.domain.model import Category, ItemType, Record, Urgency

if TYPE_CHECKING:
    from enum import StrEnum

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

ACTIVE_KEY_INDEX = "uq_record_owner_id_canonical_key_active"
ACTIVE_ONLY_SQLITE = "retired = 0"
ACTIVE_ONLY_POSTGRESQL = "retired = false"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _load_strings(value: str | None) -> list[str]:
    if value is None:
        return []
    loaded = json.loads(value)
    if not isinstance(loaded, list):
        return []
    items = cast(list[Any], loaded)
    return [item for item in items if isinstance(item, str)]


class StringSetType(TypeDecorator[set[str]]):
    """Set of strings stored as a sorted JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: set[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(sorted(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> set[str]:
        _ = dialect
        return set(_load_strings(value))


class StringListType(TypeDecorator[list[str]]):
    """Ordered list of strings stored as a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        return _load_strings(value)


def _value_enum(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        native_enum=False,
        length=16,
        values_callable=lambda members: [member.value for member in members],
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

record_table = Table(
    "record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("owner_id", UUIDColumnType, nullable=False),
    Column("type", _value_enum(ItemType), nullable=False),
    Column("title", String, nullable=False),
    Column("normalized_title", String, nullable=False),
    Column("canonical_key", String, nullable=False),
    Column("normalized_date", String, nullable=True),
    Column("normalized_time", String, nullable=True),
    Column("date", String, nullable=True),
    Column("time", String, nullable=True),
    Column("end_time", String, nullable=True),
    Column("location", String, nullable=True),
    Column("description", Text, nullable=True),
    Column("urgency", _value_enum(Urgency), nullable=False),
    Column("category", _value_enum(Category), nullable=False),
    Column("people", StringListType, nullable=False),
    Column("source_hashes", StringSetType, nullable=False),
    Column("occurrence_count", Integer, nullable=False, default=1),
    Column("raw_text", Text, nullable=True),
    Column("retired", Boolean, nullable=False, default=False),
    Column("last_seen_at", UTCDateTime, nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
    Index(None, "owner_id", "retired", "type", "normalized_title"),
    Index(
        ACTIVE_KEY_INDEX,
        "owner_id",
        "canonical_key",
        unique=True,
        sqlite_where=text(ACTIVE_ONLY_SQLITE),
        postgresql_where=text(ACTIVE_ONLY_POSTGRESQL),
    ),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(Record, record_table)
    configure_mappers()
    return mapper_registry

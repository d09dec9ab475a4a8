"""SQLAlchemy adapter package for lifeboard."""

from __future__ import annotations

from .mappings import mapper_registry, record_table, start_mappers
from .repositories import SqlAlchemyRecordRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyRecordRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "is_started",
    "mapper_registry",
    "record_table",
    "shutdown",
    "start_mappers",
    "startup",
]

"""Application orchestration entry points."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from lifeboard.adapters.openrouter import build_classifiers
from lifeboard.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from lifeboard.config.settings import get_lifeboard_config
from lifeboard.domain.dashboard import DashboardBuilder
from lifeboard.domain.errors import BatchValidationError, RecordNotFoundError
from lifeboard.domain.ports.unit_of_work import RecordUnitOfWork
from lifeboard.domain.reconciliation import (
    BatchGrouper,
    DeterministicMatcher,
    ExternalResolver,
    ReconciliationEngine,
)
from lifeboard.domain.time_windows import utc_clock

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from lifeboard.config.settings import LifeboardConfig
    from lifeboard.domain.model import CandidateItem, Dashboard, Record
    from lifeboard.domain.ports import CandidateSource, Classifiers, RecordRepository
    from lifeboard.domain.time_windows import Clock

UnitOfWorkFactory = Callable[[], RecordUnitOfWork]


log = getLogger(__name__)

# Writes for one owner are serialized; owners hashing to the same stripe share a lock.
_OWNER_LOCK_STRIPES: tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(64))


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Outcome of one ingestion call.

    ``inserted`` counts the distinct records created or merged into; ``items``
    holds those records in processing order.
    """

    inserted: int
    processed: int
    sources_reconciled: int
    created: int = 0
    merged: int = 0
    dropped_irrelevant: int = 0
    records_retired: int = 0
    items: list[Record] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _Context:
    config: LifeboardConfig
    classifiers: Classifiers
    unit_of_work_factory: UnitOfWorkFactory


def _owner_lock(owner_id: UUID) -> threading.Lock:
    return _OWNER_LOCK_STRIPES[owner_id.int % len(_OWNER_LOCK_STRIPES)]


def _context(
    config: LifeboardConfig | None,
    classifiers: Classifiers | None,
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> _Context:
    effective_config = config or get_lifeboard_config()
    if unit_of_work_factory is None:
        if not is_started():
            startup(database_uri=effective_config.database.uri)
        unit_of_work_factory = SqlAlchemyUnitOfWork
    return _Context(
        config=effective_config,
        classifiers=classifiers or build_classifiers(effective_config.classifier),
        unit_of_work_factory=unit_of_work_factory,
    )


def _engine(
    repository: RecordRepository,
    context: _Context,
    clock: Clock,
) -> ReconciliationEngine:
    tunables = context.config.ingest
    return ReconciliationEngine(
        repository=repository,
        grouper=BatchGrouper(
            service=context.classifiers.grouper, enabled=tunables.batch_grouping
        ),
        matcher=DeterministicMatcher(
            repository=repository,
            title_match_limit=tunables.title_match_limit,
            related_limit=tunables.resolver_candidate_limit,
        ),
        external=ExternalResolver(
            resolver=context.classifiers.resolver,
            repository=repository,
            confidence_threshold=tunables.confidence_threshold,
        ),
        clock=clock,
        min_title_length=tunables.min_title_length,
    )


def list_items(
    owner_id: UUID,
    *,
    config: LifeboardConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[Record]:
    """Active records of ``owner_id``: urgency first, then date (undated last), then recency."""

    context = _context(config, None, unit_of_work_factory)
    with context.unit_of_work_factory() as uow:
        return uow.repositories.records.list_active(owner_id)


def ingest_items(
    owner_id: UUID,
    items: Sequence[CandidateItem],
    *,
    config: LifeboardConfig | None = None,
    classifiers: Classifiers | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utc_clock,
) -> IngestResult:
    """Reconcile one extraction batch into the owner's record set."""

    if not items:
        raise BatchValidationError("Batch contains no items")
    context = _context(config, classifiers, unit_of_work_factory)

    with _owner_lock(owner_id), context.unit_of_work_factory() as uow:
        engine = _engine(uow.repositories.records, context, clock)
        outcome = engine.reconcile(owner_id, items)
        uow.commit()

    records = outcome.records
    return IngestResult(
        inserted=len(records),
        processed=outcome.processed,
        sources_reconciled=outcome.sources.sources_reconciled,
        created=len(outcome.created),
        merged=len(outcome.merged),
        dropped_irrelevant=outcome.dropped_irrelevant,
        records_retired=outcome.sources.records_retired,
        items=records,
    )


def ingest_source(
    owner_id: UUID,
    source: CandidateSource,
    *,
    config: LifeboardConfig | None = None,
    classifiers: Classifiers | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utc_clock,
) -> IngestResult:
    """Pull one batch from ``source`` and ingest it."""

    batch = source()
    log.info("Ingesting %d candidate(s) from %s", len(batch.items), batch.origin or "source")
    return ingest_items(
        owner_id,
        batch.items,
        config=config,
        classifiers=classifiers,
        unit_of_work_factory=unit_of_work_factory,
        clock=clock,
    )


def reset_items(
    owner_id: UUID,
    *,
    config: LifeboardConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utc_clock,
) -> int:
    """Retire every active record of ``owner_id`` and clear its evidence."""

    context = _context(config, None, unit_of_work_factory)
    with _owner_lock(owner_id), context.unit_of_work_factory() as uow:
        retired = uow.repositories.records.retire_all(owner_id, now=clock())
        uow.commit()
    log.info("Reset %d record(s) for %s", retired, owner_id)
    return retired


def dismiss_item(
    owner_id: UUID,
    record_id: UUID,
    *,
    config: LifeboardConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Record:
    """Retire one record; raises ``RecordNotFoundError`` for unknown or foreign ids."""

    context = _context(config, None, unit_of_work_factory)
    with _owner_lock(owner_id), context.unit_of_work_factory() as uow:
        record = uow.repositories.records.retire(owner_id, record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        uow.commit()
    return record


def build_dashboard(
    owner_id: UUID,
    *,
    config: LifeboardConfig | None = None,
    classifiers: Classifiers | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utc_clock,
) -> Dashboard:
    """Render the owner's active records into sections, alerts and a summary."""

    context = _context(config, classifiers, unit_of_work_factory)
    with context.unit_of_work_factory() as uow:
        records = uow.repositories.records.list_active(owner_id)
    builder = DashboardBuilder(
        assigner=context.classifiers.sections,
        clock=clock,
        timezone=context.config.timezone,
        alert_limit=context.config.ingest.alert_limit,
    )
    return builder.build(records)


__all__ = [
    "IngestResult",
    "UnitOfWorkFactory",
    "build_dashboard",
    "dismiss_item",
    "ingest_items",
    "ingest_source",
    "list_items",
    "reset_items",
]

from __future__ import annotations

from uuid import uuid4

from lifeboard.domain.reconciliation.sources import reconcile_sources
from tests.helpers.records import DEFAULT_NOW, InMemoryRecordRepository, make_record


def test_withdrawn_sole_source_retires_record() -> None:
    owner_id = uuid4()
    record = make_record(owner_id, source="shot-1")
    repository = InMemoryRecordRepository([record])

    result = reconcile_sources(repository, owner_id, ["shot-1"], now=DEFAULT_NOW)

    assert record.retired
    assert record.source_hashes == set()
    assert record.occurrence_count == 0
    assert result.records_retired == 1


def test_withdrawn_source_shrinks_shared_record() -> None:
    owner_id = uuid4()
    record = make_record(owner_id, source="shot-1")
    record.replace_sources({"shot-1", "shot-2"}, seen_at=DEFAULT_NOW)
    repository = InMemoryRecordRepository([record])

    result = reconcile_sources(repository, owner_id, ["shot-1"], now=DEFAULT_NOW)

    assert not record.retired
    assert record.source_hashes == {"shot-2"}
    assert record.occurrence_count == 1
    assert result.records_detached == 1
    assert result.records_retired == 0


def test_every_distinct_source_counts_as_reconciled() -> None:
    owner_id = uuid4()
    repository = InMemoryRecordRepository()

    result = reconcile_sources(repository, owner_id, ["a", "b", "a"], now=DEFAULT_NOW)

    assert result.sources_reconciled == 2
    assert result.records_detached == 0


def test_other_owners_are_untouched() -> None:
    record = make_record(uuid4(), source="shot-1")
    repository = InMemoryRecordRepository([record])

    reconcile_sources(repository, uuid4(), ["shot-1"], now=DEFAULT_NOW)

    assert not record.retired

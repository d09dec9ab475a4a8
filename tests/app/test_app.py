from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import pytest

from lifeboard.adapters.extraction import JsonFileCandidateSource
from lifeboard.adapters.openrouter import build_classifiers, deterministic_classifiers
from lifeboard.app import (
    _OWNER_LOCK_STRIPES,
    IngestResult,
    _owner_lock,
    build_dashboard,
    dismiss_item,
    ingest_items,
    ingest_source,
    list_items,
    reset_items,
)
from lifeboard.config import DatabaseConfig, LifeboardConfig
from lifeboard.domain.dashboard import EMPTY_STATE_SUMMARY
from lifeboard.domain.errors import BatchValidationError, RecordNotFoundError
from lifeboard.domain.model import ItemType, SectionName, Urgency
from tests.helpers.openrouter import ScriptedOpenRouter, make_classifier_config
from tests.helpers.records import FakeUnitOfWork, make_candidate

if TYPE_CHECKING:
    from collections.abc import Callable

    from lifeboard.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from lifeboard.domain.model import CandidateItem, Dashboard, Record
    from lifeboard.domain.ports import Classifiers
    from lifeboard.domain.time_windows import Clock

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


class Lifeboard:
    """Binds the application functions to one test database, classifier set and clock."""

    def __init__(
        self,
        config: LifeboardConfig,
        classifiers: Classifiers,
        unit_of_work_factory: Callable[[], SqlAlchemyUnitOfWork],
        clock: Clock,
    ) -> None:
        self.config = config
        self.classifiers = classifiers
        self.unit_of_work_factory = unit_of_work_factory
        self.clock = clock

    def ingest(self, owner_id: UUID, *items: CandidateItem) -> IngestResult:
        return ingest_items(
            owner_id,
            list(items),
            config=self.config,
            classifiers=self.classifiers,
            unit_of_work_factory=self.unit_of_work_factory,
            clock=self.clock,
        )

    def items(self, owner_id: UUID) -> list[Record]:
        return list_items(
            owner_id, config=self.config, unit_of_work_factory=self.unit_of_work_factory
        )

    def dashboard(self, owner_id: UUID) -> Dashboard:
        return build_dashboard(
            owner_id,
            config=self.config,
            classifiers=self.classifiers,
            unit_of_work_factory=self.unit_of_work_factory,
            clock=self.clock,
        )

    def dismiss(self, owner_id: UUID, record_id: UUID) -> Record:
        return dismiss_item(
            owner_id,
            record_id,
            config=self.config,
            unit_of_work_factory=self.unit_of_work_factory,
        )

    def reset(self, owner_id: UUID) -> int:
        return reset_items(
            owner_id,
            config=self.config,
            unit_of_work_factory=self.unit_of_work_factory,
            clock=self.clock,
        )


def _snapshot(records: list[Record]) -> set[tuple[str, str, frozenset[str], int]]:
    return {
        (r.title, r.canonical_key, frozenset(r.source_hashes), r.occurrence_count)
        for r in records
    }


def _placement(dashboard: Dashboard) -> dict[str, SectionName]:
    return {
        record.title: section.name for section in dashboard.sections for record in section.records
    }


@pytest.fixture
def config() -> LifeboardConfig:
    return LifeboardConfig(database=DatabaseConfig(uri="sqlite://"), timezone=ZoneInfo("UTC"))


@pytest.fixture
def lifeboard(
    config: LifeboardConfig,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    clock: Clock,
) -> Lifeboard:
    return Lifeboard(config, deterministic_classifiers(), sqlite_unit_of_work, clock)


def test_soccer_practice_from_two_screenshots_is_one_record(
    lifeboard: Lifeboard, owner_id: UUID
) -> None:
    first = lifeboard.ingest(
        owner_id,
        make_candidate("Soccer practice", date="2026-03-14", time="9:00 AM", source="s1"),
    )
    second = lifeboard.ingest(
        owner_id,
        make_candidate(
            "Soccer Practice!",
            date="Saturday, March 14",
            time="9am",
            location="Field 3",
            source="s2",
        ),
    )

    assert first.created == 1
    assert second.merged == 1
    assert second.inserted == 1
    active = lifeboard.items(owner_id)
    assert len(active) == 1
    assert active[0].id == first.items[0].id
    assert active[0].source_hashes == {"s1", "s2"}
    assert active[0].occurrence_count == 2
    assert active[0].location == "Field 3"


def test_reingesting_a_batch_is_idempotent(lifeboard: Lifeboard, owner_id: UUID) -> None:
    batch = (
        make_candidate("Soccer practice", source="s1"),
        make_candidate(
            "Pay water bill",
            item_type=ItemType.DEADLINE,
            date="2026-03-20",
            time=None,
            source="s1",
        ),
    )

    lifeboard.ingest(owner_id, *batch)
    lifeboard.ingest(owner_id, make_candidate("Soccer Practice!", source="s2"))
    before = _snapshot(lifeboard.items(owner_id))
    placed_before = _placement(lifeboard.dashboard(owner_id))
    result = lifeboard.ingest(owner_id, *batch)
    after = _snapshot(lifeboard.items(owner_id))
    placed_after = _placement(lifeboard.dashboard(owner_id))

    assert before == after
    assert len(after) == 2
    assert ("Soccer practice", 2) in {(title, count) for title, _, _, count in after}
    assert placed_before == placed_after
    assert placed_after == {
        "Soccer practice": SectionName.COMING_UP,
        "Pay water bill": SectionName.COMING_UP,
    }
    assert result.processed == 2
    assert result.sources_reconciled == 1


def test_withdrawn_items_are_retired(lifeboard: Lifeboard, owner_id: UUID) -> None:
    lifeboard.ingest(
        owner_id,
        make_candidate("Soccer practice", source="s1"),
        make_candidate("Piano recital", date="2026-03-15", time="6pm", source="s1"),
    )

    lifeboard.ingest(owner_id, make_candidate("Soccer practice", source="s1"))

    assert [r.title for r in lifeboard.items(owner_id)] == ["Soccer practice"]
    assert _placement(lifeboard.dashboard(owner_id)) == {"Soccer practice": SectionName.COMING_UP}


def test_owner_locks_are_stable_and_bounded() -> None:
    owner = uuid4()
    locks = {_owner_lock(uuid4()) for _ in range(1000)}

    assert _owner_lock(owner) is _owner_lock(owner)
    assert len(locks) <= len(_OWNER_LOCK_STRIPES)


def test_irrelevant_items_are_counted_not_stored(lifeboard: Lifeboard, owner_id: UUID) -> None:
    result = lifeboard.ingest(
        owner_id,
        make_candidate("ok", date=None, time=None, source="s1"),
        make_candidate("Dentist", date="2026-03-12", time="3:30 PM", source="s1"),
    )

    assert result.dropped_irrelevant == 1
    assert result.processed == 2
    assert [r.title for r in result.items] == ["Dentist"]


def test_empty_batch_is_rejected_before_any_write(config: LifeboardConfig, owner_id: UUID) -> None:
    uow = FakeUnitOfWork()

    with pytest.raises(BatchValidationError):
        ingest_items(
            owner_id,
            [],
            config=config,
            classifiers=deterministic_classifiers(),
            unit_of_work_factory=lambda: uow,
        )

    assert uow.commits == 0


def test_ingest_commits_once_per_batch(
    config: LifeboardConfig, owner_id: UUID, clock: Clock
) -> None:
    uow = FakeUnitOfWork()

    result = ingest_items(
        owner_id,
        [make_candidate(source="s1"), make_candidate("Dentist", source="s1")],
        config=config,
        classifiers=deterministic_classifiers(),
        unit_of_work_factory=lambda: uow,
        clock=clock,
    )

    assert uow.commits == 1
    assert result.created == 2
    assert len(uow.repository.records) == 2


def test_owners_do_not_see_each_other(
    lifeboard: Lifeboard, owner_id: UUID, other_owner_id: UUID
) -> None:
    result = lifeboard.ingest(owner_id, make_candidate(source="s1"))
    lifeboard.ingest(other_owner_id, make_candidate(source="s1"))

    assert len(lifeboard.items(owner_id)) == 1
    assert len(lifeboard.items(other_owner_id)) == 1
    with pytest.raises(RecordNotFoundError):
        lifeboard.dismiss(other_owner_id, result.items[0].id)


def test_dismiss_retires_one_record(lifeboard: Lifeboard, owner_id: UUID) -> None:
    result = lifeboard.ingest(
        owner_id,
        make_candidate("Soccer practice", source="s1"),
        make_candidate("Dentist", date="2026-03-12", time="3:30 PM", source="s1"),
    )
    target = result.items[0]

    dismissed = lifeboard.dismiss(owner_id, target.id)

    assert dismissed.retired
    assert dismissed.source_hashes == {"s1"}
    assert [r.title for r in lifeboard.items(owner_id)] == ["Dentist"]
    with pytest.raises(RecordNotFoundError):
        lifeboard.dismiss(owner_id, uuid4())


def test_reset_retires_everything(lifeboard: Lifeboard, owner_id: UUID) -> None:
    lifeboard.ingest(
        owner_id,
        make_candidate("Soccer practice", source="s1"),
        make_candidate("Dentist", date="2026-03-12", time="3:30 PM", source="s2"),
    )

    assert lifeboard.reset(owner_id) == 2
    assert lifeboard.items(owner_id) == []
    assert lifeboard.reset(owner_id) == 0


def test_overdue_deadline_lands_in_todos_with_an_alert(
    lifeboard: Lifeboard, owner_id: UUID
) -> None:
    lifeboard.ingest(
        owner_id,
        make_candidate(
            "Library fine",
            item_type=ItemType.DEADLINE,
            date="2026-03-09",
            time=None,
            urgency=Urgency.HIGH,
            source="s1",
        ),
        make_candidate("Old game", date="2026-03-01", time="5pm", source="s1"),
    )

    dashboard = lifeboard.dashboard(owner_id)

    assert [section.name for section in dashboard.sections] == [SectionName.TODOS]
    assert [r.title for r in dashboard.sections[0].records] == ["Library fine"]
    assert [alert.text for alert in dashboard.alerts] == ["Library fine (2026-03-09)"]
    assert dashboard.summary == "0 today, 0 tomorrow, 0 coming up, 1 to-do"
    assert dashboard.item_count == 1


def test_empty_dashboard(lifeboard: Lifeboard, owner_id: UUID) -> None:
    dashboard = lifeboard.dashboard(owner_id)

    assert dashboard.summary == EMPTY_STATE_SUMMARY
    assert dashboard.sections == ()
    assert dashboard.alerts == ()


def test_ingest_source_reads_extraction_file(
    lifeboard: Lifeboard, owner_id: UUID, tmp_path: Path
) -> None:
    path = tmp_path / "batch.json"
    shutil.copy(DATA_DIR / "extraction_batch.json", path)

    result = ingest_source(
        owner_id,
        JsonFileCandidateSource(path),
        config=lifeboard.config,
        classifiers=lifeboard.classifiers,
        unit_of_work_factory=lifeboard.unit_of_work_factory,
        clock=lifeboard.clock,
    )

    assert result.processed == 3
    assert result.created == 3
    assert result.sources_reconciled == 2
    titles = [r.title for r in lifeboard.items(owner_id)]
    assert titles[0] == "Return permission slip"
    assert set(titles) == {"Return permission slip", "Soccer practice", "Pay water bill"}


def test_remote_resolver_merges_a_renamed_item(
    config: LifeboardConfig,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    clock: Clock,
    owner_id: UUID,
) -> None:
    openrouter = ScriptedOpenRouter()
    remote = Lifeboard(
        config,
        build_classifiers(make_classifier_config(), client_factory=openrouter.client_factory()),
        sqlite_unit_of_work,
        clock,
    )
    first = remote.ingest(owner_id, make_candidate("Soccer practice", source="s1"))
    stored_id = first.items[0].id
    openrouter.answer_json(
        {"mergeWithId": str(stored_id), "confidence": 0.9, "reason": "same practice"}
    )

    second = remote.ingest(owner_id, make_candidate("Team training", source="s2"))

    assert second.merged == 1
    active = remote.items(owner_id)
    assert [r.id for r in active] == [stored_id]
    assert active[0].source_hashes == {"s1", "s2"}
    assert len(openrouter.requests) == 1


def test_remote_failure_falls_back_to_a_new_record(
    config: LifeboardConfig,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    clock: Clock,
    owner_id: UUID,
) -> None:
    openrouter = ScriptedOpenRouter()
    remote = Lifeboard(
        config,
        build_classifiers(make_classifier_config(), client_factory=openrouter.client_factory()),
        sqlite_unit_of_work,
        clock,
    )
    remote.ingest(owner_id, make_candidate("Soccer practice", source="s1"))
    openrouter.answer_status(500)

    second = remote.ingest(owner_id, make_candidate("Team training", source="s2"))

    assert second.created == 1
    assert len(remote.items(owner_id)) == 2

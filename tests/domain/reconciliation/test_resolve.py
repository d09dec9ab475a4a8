from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

from lifeboard.domain.model import ItemType
from lifeboard.domain.reconciliation import (
    DeterministicMatcher,
    MatchKind,
    NewResolution,
    ResolvedResolution,
    UndecidedResolution,
)
from lifeboard.domain.reconciliation.keys import build_keys
from tests.helpers.records import DEFAULT_NOW, InMemoryRecordRepository, make_candidate, make_record


def test_exact_canonical_key_match() -> None:
    owner_id = uuid4()
    record = make_record(owner_id, "Soccer practice", location="Field 3")
    matcher = DeterministicMatcher(repository=InMemoryRecordRepository([record]))
    keys = build_keys(make_candidate("the soccer practice", location="field 3"), default_year=2026)

    resolution = matcher.match(owner_id, keys)

    assert isinstance(resolution, ResolvedResolution)
    assert resolution.target is record
    assert resolution.match_kind is MatchKind.EXACT


def test_loose_match_ignores_location() -> None:
    owner_id = uuid4()
    record = make_record(owner_id, "Soccer practice", location=None)
    matcher = DeterministicMatcher(repository=InMemoryRecordRepository([record]))
    keys = build_keys(make_candidate("Soccer practice", location="Field 3"), default_year=2026)

    resolution = matcher.match(owner_id, keys)

    assert isinstance(resolution, ResolvedResolution)
    assert resolution.match_kind is MatchKind.LOOSE


def test_same_title_other_date_is_undecided_not_matched() -> None:
    owner_id = uuid4()
    saturday = make_record(owner_id, "Soccer practice", date="2026-03-14")
    matcher = DeterministicMatcher(repository=InMemoryRecordRepository([saturday]))
    keys = build_keys(make_candidate("Soccer practice", date="2026-03-21"), default_year=2026)

    resolution = matcher.match(owner_id, keys)

    assert isinstance(resolution, UndecidedResolution)
    assert resolution.related == (saturday,)


def test_unrelated_candidate_is_new() -> None:
    owner_id = uuid4()
    record = make_record(owner_id, "Soccer practice")
    matcher = DeterministicMatcher(repository=InMemoryRecordRepository([record]))
    keys = build_keys(
        make_candidate("Dentist", item_type=ItemType.ACTION, date=None, time=None),
        default_year=2026,
    )

    assert isinstance(matcher.match(owner_id, keys), NewResolution)


def test_other_owners_records_are_invisible() -> None:
    record = make_record(uuid4(), "Soccer practice")
    matcher = DeterministicMatcher(repository=InMemoryRecordRepository([record]))
    keys = build_keys(make_candidate("Soccer practice"), default_year=2026)

    assert isinstance(matcher.match(uuid4(), keys), NewResolution)


def test_retired_records_never_match() -> None:
    owner_id = uuid4()
    record = make_record(owner_id, "Soccer practice")
    record.retire(clear_sources=True)
    matcher = DeterministicMatcher(repository=InMemoryRecordRepository([record]))
    keys = build_keys(make_candidate("Soccer practice"), default_year=2026)

    assert isinstance(matcher.match(owner_id, keys), NewResolution)


def test_related_records_rank_same_title_first_and_respect_limit() -> None:
    owner_id = uuid4()
    same_day = make_record(owner_id, "Swim lesson", date="2026-03-14", time="9am")
    same_day.replace_sources({"a", "b", "c"}, seen_at=DEFAULT_NOW + timedelta(minutes=5))
    same_title = make_record(owner_id, "Soccer practice", date="2026-03-07", time="9am")
    matcher = DeterministicMatcher(
        repository=InMemoryRecordRepository([same_day, same_title]), related_limit=1
    )
    keys = build_keys(make_candidate("Soccer practice", date="2026-03-14"), default_year=2026)

    resolution = matcher.match(owner_id, keys)

    assert isinstance(resolution, UndecidedResolution)
    assert resolution.related == (same_title,)

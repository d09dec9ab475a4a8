from __future__ import annotations

from uuid import uuid4

from lifeboard.domain.model import ItemType
from lifeboard.domain.reconciliation.keys import build_keys, record_keys
from tests.helpers.records import make_candidate, make_record


def test_canonical_key_ignores_formatting_noise() -> None:
    first = build_keys(
        make_candidate("The Soccer Practice", date="3/14", time="9am", location="Field 3"),
        default_year=2026,
    )
    second = build_keys(
        make_candidate("soccer practice!", date="2026-03-14", time="09:00", location="field  3"),
        default_year=2026,
    )

    assert first.canonical_key == second.canonical_key
    assert first.canonical_key == "event|soccer practice|2026-03-14|09:00|field3"


def test_loose_key_tolerates_location_differences() -> None:
    with_location = build_keys(make_candidate(location="Field 3"), default_year=2026)
    without_location = build_keys(make_candidate(location=None), default_year=2026)

    assert with_location.canonical_key != without_location.canonical_key
    assert with_location.loose_key == without_location.loose_key


def test_type_is_part_of_identity() -> None:
    event = build_keys(make_candidate(item_type=ItemType.EVENT), default_year=2026)
    deadline = build_keys(make_candidate(item_type=ItemType.DEADLINE), default_year=2026)

    assert event.loose_key != deadline.loose_key
    assert event.resolution_key != deadline.resolution_key


def test_record_keys_reuse_stored_normalized_columns() -> None:
    record = make_record(uuid4(), "Dentist appointment", date="3/20", time="4:15 pm")
    keys = record_keys(record)

    assert keys.normalized_date == "2026-03-20"
    assert keys.normalized_time == "16:15"
    assert keys.canonical_key == record.canonical_key


def test_missing_date_and_time_normalize_to_empty_segments() -> None:
    keys = build_keys(make_candidate("Library books", date=None, time=None), default_year=2026)

    assert keys.loose_key == "event|library books||"
    assert keys.resolution_key == ("event", "library books", "", "")

"""System prompts and request payloads for the classification calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from lifeboard.domain.model import CandidateItem, Record

RESOLVER_TEMPERATURE = 0.0
RESOLVER_MAX_TOKENS = 500
GROUPING_TEMPERATURE = 0.0
GROUPING_MAX_TOKENS = 1500
SECTIONS_TEMPERATURE = 0.2
SECTIONS_MAX_TOKENS = 2000

RESOLVER_SYSTEM_PROMPT = """\
You decide whether a newly extracted life-admin item describes the same real-world \
obligation as one of a few stored candidates.

Rules:
- Only answer with the id of a candidate when you are sure both describe the same \
event, deadline or task.
- Items on different dates are different, even when their titles match.
- Recurring items (weekly practice, monthly bills) on different dates are different.
- When unsure, answer null.

Answer with JSON only:
{"mergeWithId": "<candidate id or null>", "confidence": <0.0-1.0>, "reason": "<short reason>"}"""

GROUPING_SYSTEM_PROMPT = """\
You receive items extracted from several screenshots taken by one person at the same \
time. Some items describe the same obligation seen in more than one screenshot, and \
some are noise (ads, boilerplate, things nobody has to act on).

Rules:
- Group indices only when the items are the same obligation on the same date.
- A group needs at least two indices, and an index belongs to at most one group.
- Put an index in dropIndices only when the item is clearly not an obligation.
- When unsure, leave items alone.

Answer with JSON only:
{"groups": [{"indices": [0, 2], "reason": "<short reason>"}], "dropIndices": [5]}"""

SECTIONS_SYSTEM_PROMPT = """\
You arrange a person's stored life-admin items into a dashboard.

Sections, in this order: "Today", "Tomorrow", "Coming Up", "To-dos", "Other".
- Today and Tomorrow hold items dated on those days.
- Coming Up holds events and deadlines dated after tomorrow.
- To-dos holds actions and overdue deadlines.
- Other holds everything else.
Every item id appears in exactly one section. Use the ids exactly as given.

Answer with JSON only:
{"summary": "<one sentence>", "alerts": [{"text": "...", "urgency": "high"}], \
"sections": [{"title": "Today", "itemIds": ["<id>"]}]}"""


def _drop_empty(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if value not in (None, "", [], ())}


def candidate_payload(item: CandidateItem) -> dict[str, object]:
    return _drop_empty(
        {
            "type": item.type.value,
            "title": item.title,
            "date": item.date,
            "time": item.time,
            "endTime": item.end_time,
            "location": item.location,
            "description": item.description,
            "urgency": item.urgency.value,
            "category": item.category.value if item.category else None,
            "people": list(item.people),
        }
    )


def record_payload(record: Record) -> dict[str, object]:
    return _drop_empty(
        {
            "id": str(record.id),
            "type": record.type.value,
            "title": record.title,
            "date": record.normalized_date or record.date,
            "time": record.normalized_time or record.time,
            "endTime": record.end_time,
            "location": record.location,
            "description": record.description,
            "urgency": record.urgency.value,
            "category": record.category.value,
            "occurrences": record.occurrence_count,
        }
    )


def resolver_request(candidate: CandidateItem, records: Sequence[Record]) -> dict[str, object]:
    return {
        "newItem": candidate_payload(candidate),
        "candidates": [record_payload(record) for record in records],
    }


def grouping_request(items: Sequence[CandidateItem]) -> dict[str, object]:
    return {
        "items": [
            {"index": index, "source": item.source_id, **candidate_payload(item)}
            for index, item in enumerate(items)
        ]
    }


def sections_request(records: Sequence[Record], *, today: date) -> dict[str, object]:
    return {
        "today": today.isoformat(),
        "items": [record_payload(record) for record in records],
    }

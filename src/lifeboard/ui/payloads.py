"""JSON-ready views of records, ingestion results and dashboards (camelCase keys)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from lifeboard.app import IngestResult
    from lifeboard.domain.model import Dashboard, Record


def _timestamp(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def record_payload(record: Record) -> dict[str, object]:
    return {
        "id": str(record.id),
        "type": record.type.value,
        "title": record.title,
        "date": record.date,
        "time": record.time,
        "endTime": record.end_time,
        "location": record.location,
        "description": record.description,
        "urgency": record.urgency.value,
        "category": record.category.value,
        "people": list(record.people),
        "sourceHashes": sorted(record.source_hashes),
        "occurrenceCount": record.occurrence_count,
        "rawText": record.raw_text,
        "retired": record.retired,
        "lastSeenAt": _timestamp(record.last_seen_at),
        "createdAt": _timestamp(record.created_at),
    }


def ingest_result_payload(result: IngestResult) -> dict[str, object]:
    return {
        "inserted": result.inserted,
        "created": result.created,
        "merged": result.merged,
        "processed": result.processed,
        "droppedIrrelevant": result.dropped_irrelevant,
        "sourcesReconciled": result.sources_reconciled,
        "recordsRetired": result.records_retired,
        "items": [record_payload(record) for record in result.items],
    }


def dashboard_payload(dashboard: Dashboard) -> dict[str, object]:
    return {
        "summary": dashboard.summary,
        "alerts": [
            {"text": alert.text, "urgency": alert.urgency.value} for alert in dashboard.alerts
        ],
        "sections": [
            {
                "title": section.name.value,
                "items": [record_payload(record) for record in section.records],
            }
            for section in dashboard.sections
        ],
        "itemCount": dashboard.item_count,
        "updatedAt": _timestamp(dashboard.updated_at),
    }


__all__ = ["dashboard_payload", "ingest_result_payload", "record_payload"]

"""Re-extraction authority: a source replaces its own earlier assertions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from uuid import UUID

    from lifeboard.domain.ports import RecordRepository

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SourceReconciliation:
    sources_reconciled: int = 0
    records_detached: int = 0
    records_retired: int = 0


def reconcile_sources(
    repository: RecordRepository,
    owner_id: UUID,
    source_ids: Iterable[str],
    *,
    now: datetime,
) -> SourceReconciliation:
    """Withdraw every given source from the owner's active records.

    Every distinct source id counts as reconciled, referenced or not. Records
    left without any asserting source are retired with an occurrence count of
    zero; the rest keep the shrunk source set.
    """

    result = SourceReconciliation()
    for source_id in dict.fromkeys(source_ids):
        result.sources_reconciled += 1
        records = repository.find_active_by_source(owner_id, source_id)
        for record in records:
            remaining = record.source_hashes - {source_id}
            result.records_detached += 1
            if remaining:
                record.replace_sources(remaining, seen_at=now)
                continue
            record.last_seen_at = now
            record.retire(clear_sources=True)
            result.records_retired += 1
            log.debug("Retired record %s after withdrawing source %s", record.id, source_id)
    return result


__all__ = ["SourceReconciliation", "reconcile_sources"]

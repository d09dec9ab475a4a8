"""Compose the classifier, alerts and summary into a dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lifeboard.domain.model import Dashboard
from lifeboard.domain.time_windows import DayWindow, utc_clock

from .alerts import (
    DEFAULT_ALERT_LIMIT,
    EMPTY_STATE_SUMMARY,
    compose_summary,
    synthesize_alerts,
)
from .sections import deterministic_section, normalize_proposal

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import tzinfo

    from lifeboard.domain.model import Record
    from lifeboard.domain.ports import SectionAssigner
    from lifeboard.domain.time_windows import Clock

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class DashboardBuilder:
    """Render active records into a dashboard.

    The assigner's proposal is always passed through ``normalize_proposal``, so
    the sections never contradict record dates whatever the assigner answers.
    """

    assigner: SectionAssigner
    clock: Clock = utc_clock
    timezone: tzinfo | None = None
    alert_limit: int = DEFAULT_ALERT_LIMIT

    def build(self, records: Sequence[Record]) -> Dashboard:
        now = self.clock()
        window = DayWindow.current(clock=lambda: now, timezone=self.timezone)
        eligible = [
            record
            for record in records
            if record.active and deterministic_section(record, window) is not None
        ]
        if not eligible:
            return Dashboard(summary=EMPTY_STATE_SUMMARY, updated_at=now)

        proposal = self.assigner.propose_sections(eligible, today=window.today)
        sections = normalize_proposal(proposal.claims, eligible, window)
        log.debug(
            "Built dashboard with %d section(s) for %d record(s)", len(sections), len(eligible)
        )
        return Dashboard(
            summary=compose_summary(sections),
            alerts=synthesize_alerts(sections, limit=self.alert_limit),
            sections=tuple(sections),
            item_count=len(eligible),
            updated_at=now,
        )


__all__ = ["DashboardBuilder"]

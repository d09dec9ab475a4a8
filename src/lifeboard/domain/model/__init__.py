"""Public domain model surface."""

from __future__ import annotations

from lifeboard.domain.model.dashboard import Alert, Dashboard, Section, SectionClaim
from lifeboard.domain.model.enums import AlertUrgency, Category, ItemType, SectionName, Urgency
from lifeboard.domain.model.items import CandidateItem, Record, new_id, utcnow

__all__ = [
    "Alert",
    "AlertUrgency",
    "CandidateItem",
    "Category",
    "Dashboard",
    "ItemType",
    "Record",
    "Section",
    "SectionClaim",
    "SectionName",
    "Urgency",
    "new_id",
    "utcnow",
]

"""Relevance gate applied before any matching."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lifeboard.domain.model import ItemType

from .normalize import normalize_text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lifeboard.domain.model import CandidateItem

log = logging.getLogger(__name__)

DEFAULT_MIN_TITLE_LENGTH = 3

# Substring match on normalized text; "follow-up" normalizes to "follow up".
_OBLIGATION_KEYWORDS = re.compile(
    r"(due|deadline|register|registration|payment|pay|submit|bring|rsvp|pick up|drop off|"
    r"meeting|practice|game|flight|trip|appointment|call|follow up)"
)


@dataclass(slots=True)
class RelevanceResult:
    kept: list[CandidateItem] = field(default_factory=list)
    dropped: list[CandidateItem] = field(default_factory=list)


def has_temporal_signal(item: CandidateItem) -> bool:
    return any(_present(value) for value in (item.date, item.time, item.end_time, item.location))


def mentions_obligation(text: str) -> bool:
    return _OBLIGATION_KEYWORDS.search(normalize_text(text)) is not None


def is_relevant(item: CandidateItem, *, min_title_length: int = DEFAULT_MIN_TITLE_LENGTH) -> bool:
    """Return whether ``item`` is worth persisting.

    Info items carry the highest bar: they need both a temporal signal and an
    obligation keyword.
    """

    if len(item.title.strip()) < min_title_length:
        return False
    temporal = has_temporal_signal(item)
    description = item.description or ""
    if item.type in (ItemType.EVENT, ItemType.DEADLINE):
        return temporal or mentions_obligation(description)
    title_and_description = f"{item.title} {description}"
    if item.type is ItemType.ACTION:
        return mentions_obligation(title_and_description) or temporal
    return temporal and mentions_obligation(title_and_description)


def filter_relevant(
    items: Iterable[CandidateItem],
    *,
    min_title_length: int = DEFAULT_MIN_TITLE_LENGTH,
) -> RelevanceResult:
    result = RelevanceResult()
    for item in items:
        if is_relevant(item, min_title_length=min_title_length):
            result.kept.append(item)
        else:
            result.dropped.append(item)
    if result.dropped:
        log.debug("Dropped %d irrelevant candidate(s)", len(result.dropped))
    return result


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


__all__ = [
    "DEFAULT_MIN_TITLE_LENGTH",
    "RelevanceResult",
    "filter_relevant",
    "has_temporal_signal",
    "is_relevant",
    "mentions_obligation",
]

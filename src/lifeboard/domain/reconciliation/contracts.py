"""Shared reconciliation contract components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from lifeboard.domain.model import Record


class ResolutionStatus(StrEnum):
    """Outcome of matching one candidate against stored records."""

    NEW = "new"
    RESOLVED = "resolved"
    UNDECIDED = "undecided"


class MatchKind(StrEnum):
    """How a candidate was matched to an existing record."""

    EXACT = "exact"
    LOOSE = "loose"
    EXTERNAL = "external"


@dataclass(slots=True, kw_only=True)
class NewResolution:
    """Candidate denotes an obligation not on file."""

    status: Literal[ResolutionStatus.NEW] = ResolutionStatus.NEW
    reason: str | None = None


@dataclass(slots=True, kw_only=True)
class ResolvedResolution:
    """Candidate denotes ``target``."""

    target: Record
    match_kind: MatchKind
    confidence: float = 1.0
    reason: str | None = None
    status: Literal[ResolutionStatus.RESOLVED] = ResolutionStatus.RESOLVED


@dataclass(slots=True, kw_only=True)
class UndecidedResolution:
    """No deterministic match, but related records exist.

    ``related`` is ranked: records sharing the normalized title come first,
    then the remaining same-type records sharing title, date or time.
    """

    related: tuple[Record, ...]
    reason: str | None = None
    status: Literal[ResolutionStatus.UNDECIDED] = ResolutionStatus.UNDECIDED

    def __post_init__(self) -> None:
        if not self.related:
            raise ValueError("Undecided resolution must include at least one related record")


type Resolution = NewResolution | ResolvedResolution | UndecidedResolution

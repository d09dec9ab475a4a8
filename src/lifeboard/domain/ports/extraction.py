"""Ports for obtaining extracted candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lifeboard.domain.model import CandidateItem


@dataclass(slots=True)
class CandidateBatch:
    """Candidates produced by one extraction call."""

    items: list[CandidateItem] = field(default_factory=list)
    origin: str | None = None


@runtime_checkable
class CandidateSource(Protocol):
    """Callable port yielding the next batch of extracted candidates."""

    def __call__(self) -> CandidateBatch: ...


__all__ = ["CandidateBatch", "CandidateSource"]

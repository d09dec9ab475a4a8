"""Entity reconciliation for extracted candidates."""

from __future__ import annotations

from .contracts import (
    MatchKind,
    NewResolution,
    Resolution,
    ResolutionStatus,
    ResolvedResolution,
    UndecidedResolution,
)
from .deduplicate import BatchGrouper, DeterministicOnlyGrouper, GroupingResult
from .engine import IngestOutcome, ReconciliationEngine
from .external import DeterministicOnlyResolver, ExternalResolver
from .keys import ItemKeys, build_keys, record_keys
from .resolve import DeterministicMatcher
from .sources import SourceReconciliation, reconcile_sources

__all__ = [
    "BatchGrouper",
    "DeterministicMatcher",
    "DeterministicOnlyGrouper",
    "DeterministicOnlyResolver",
    "ExternalResolver",
    "GroupingResult",
    "IngestOutcome",
    "ItemKeys",
    "MatchKind",
    "NewResolution",
    "ReconciliationEngine",
    "Resolution",
    "ResolutionStatus",
    "ResolvedResolution",
    "SourceReconciliation",
    "UndecidedResolution",
    "build_keys",
    "reconcile_sources",
    "record_keys",
]

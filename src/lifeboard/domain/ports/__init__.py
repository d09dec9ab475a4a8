"""Domain port definitions for adapters."""

from __future__ import annotations

from .classification import (
    NO_MERGE,
    BatchGroupingService,
    Classifiers,
    DuplicateResolver,
    DuplicateVerdict,
    GroupingPlan,
    ItemGroup,
    SectionAssigner,
    SectionProposal,
)
from .extraction import CandidateBatch, CandidateSource
from .persistence import RecordRepository, Repository
from .unit_of_work import (
    RecordRepositories,
    RecordUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "NO_MERGE",
    "BatchGroupingService",
    "CandidateBatch",
    "CandidateSource",
    "Classifiers",
    "DuplicateResolver",
    "DuplicateVerdict",
    "GroupingPlan",
    "ItemGroup",
    "RecordRepositories",
    "RecordRepository",
    "RecordUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "SectionAssigner",
    "SectionProposal",
    "UnitOfWork",
]

"""OpenRouter adapter for the classification collaborator."""

from __future__ import annotations

from .client import ExternalServiceError, OpenRouterClient
from .services import (
    RemoteBatchGrouper,
    RemoteDuplicateResolver,
    RemoteSectionAssigner,
    build_classifiers,
    deterministic_classifiers,
)

__all__ = [
    "ExternalServiceError",
    "OpenRouterClient",
    "RemoteBatchGrouper",
    "RemoteDuplicateResolver",
    "RemoteSectionAssigner",
    "build_classifiers",
    "deterministic_classifiers",
]

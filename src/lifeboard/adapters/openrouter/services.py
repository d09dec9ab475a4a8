"""Classification collaborators backed by OpenRouter.

Each service answers with its deterministic counterpart when the remote call
fails in transport, times out or returns something unparseable.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from lifeboard.domain.dashboard import DeterministicOnlySectionAssigner
from lifeboard.domain.ports import NO_MERGE, Classifiers, GroupingPlan
from lifeboard.domain.reconciliation import DeterministicOnlyGrouper, DeterministicOnlyResolver

from .client import ExternalServiceError, OpenRouterClient
from .prompts import (
    GROUPING_MAX_TOKENS,
    GROUPING_SYSTEM_PROMPT,
    GROUPING_TEMPERATURE,
    RESOLVER_MAX_TOKENS,
    RESOLVER_SYSTEM_PROMPT,
    RESOLVER_TEMPERATURE,
    SECTIONS_MAX_TOKENS,
    SECTIONS_SYSTEM_PROMPT,
    SECTIONS_TEMPERATURE,
    grouping_request,
    resolver_request,
    sections_request,
)
from .schema import DashboardPayload, DuplicateVerdictPayload, GroupingPayload
from .translator import translate_grouping, translate_sections, translate_verdict

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date

    from lifeboard.adapters.http_resilience import ResilientClient
    from lifeboard.config.classifier import ClassifierConfig
    from lifeboard.config.http_resilience import ResilienceConfig
    from lifeboard.domain.model import CandidateItem, Record
    from lifeboard.domain.ports import DuplicateVerdict, SectionProposal

log = getLogger(__name__)

# Response JSON that fails to decode surfaces as ValueError from httpx.
REMOTE_FAILURES: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    ValidationError,
    ExternalServiceError,
    TimeoutError,
    ValueError,
)


class RemoteDuplicateResolver:
    def __init__(self, client: OpenRouterClient, *, model: str) -> None:
        self._client = client
        self._model = model

    def resolve_duplicate(
        self,
        candidate: CandidateItem,
        candidates: Sequence[Record],
    ) -> DuplicateVerdict:
        if not candidates:
            return NO_MERGE
        try:
            answer = self._client.complete_json(
                model=self._model,
                system_prompt=RESOLVER_SYSTEM_PROMPT,
                payload=resolver_request(candidate, candidates),
                temperature=RESOLVER_TEMPERATURE,
                max_tokens=RESOLVER_MAX_TOKENS,
            )
            return translate_verdict(DuplicateVerdictPayload.model_validate(answer))
        except REMOTE_FAILURES as exc:
            log.warning("Duplicate resolution failed for %r, not merging: %s", candidate.title, exc)
            return DeterministicOnlyResolver().resolve_duplicate(candidate, candidates)


class RemoteBatchGrouper:
    def __init__(self, client: OpenRouterClient, *, model: str) -> None:
        self._client = client
        self._model = model

    def plan_groups(self, items: Sequence[CandidateItem]) -> GroupingPlan:
        if len(items) < 2:
            return GroupingPlan()
        try:
            answer = self._client.complete_json(
                model=self._model,
                system_prompt=GROUPING_SYSTEM_PROMPT,
                payload=grouping_request(items),
                temperature=GROUPING_TEMPERATURE,
                max_tokens=GROUPING_MAX_TOKENS,
            )
            return translate_grouping(GroupingPayload.model_validate(answer))
        except REMOTE_FAILURES as exc:
            log.warning("Batch grouping failed, keeping %d item(s) apart: %s", len(items), exc)
            return DeterministicOnlyGrouper().plan_groups(items)


class RemoteSectionAssigner:
    def __init__(self, client: OpenRouterClient, *, model: str) -> None:
        self._client = client
        self._model = model

    def propose_sections(self, records: Sequence[Record], *, today: date) -> SectionProposal:
        try:
            answer = self._client.complete_json(
                model=self._model,
                system_prompt=SECTIONS_SYSTEM_PROMPT,
                payload=sections_request(records, today=today),
                temperature=SECTIONS_TEMPERATURE,
                max_tokens=SECTIONS_MAX_TOKENS,
            )
            return translate_sections(DashboardPayload.model_validate(answer))
        except REMOTE_FAILURES as exc:
            log.warning("Section assignment failed, using date rules: %s", exc)
            return DeterministicOnlySectionAssigner().propose_sections(records, today=today)


def deterministic_classifiers() -> Classifiers:
    return Classifiers(
        resolver=DeterministicOnlyResolver(),
        grouper=DeterministicOnlyGrouper(),
        sections=DeterministicOnlySectionAssigner(),
    )


def build_classifiers(
    config: ClassifierConfig | None,
    *,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> Classifiers:
    """Remote collaborators when configured, deterministic ones otherwise."""

    if config is None:
        log.debug("No classifier configured; running deterministically")
        return deterministic_classifiers()
    client = OpenRouterClient(config=config, client_factory=client_factory)
    return Classifiers(
        resolver=RemoteDuplicateResolver(client, model=config.resolver_model),
        grouper=RemoteBatchGrouper(client, model=config.grouping_model),
        sections=RemoteSectionAssigner(client, model=config.dashboard_model),
    )


if TYPE_CHECKING:
    from lifeboard.domain.ports import BatchGroupingService, DuplicateResolver, SectionAssigner

    def _protocol_check(
        client: OpenRouterClient,
    ) -> tuple[DuplicateResolver, BatchGroupingService, SectionAssigner]:
        return (
            RemoteDuplicateResolver(client, model=""),
            RemoteBatchGrouper(client, model=""),
            RemoteSectionAssigner(client, model=""),
        )

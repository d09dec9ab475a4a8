"""Pydantic models for OpenRouter chat completions and the JSON answers inside them."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _none_to_empty(value: object) -> object:
    return [] if value is None else value


class OpenRouterBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ChatMessage(OpenRouterBaseModel):
    role: str = "assistant"
    content: str | None = None


class ChatChoice(OpenRouterBaseModel):
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(OpenRouterBaseModel):
    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list)

    @property
    def content(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content


class DuplicateVerdictPayload(OpenRouterBaseModel):
    merge_with_id: str | None = Field(default=None, alias="mergeWithId")
    confidence: float = Field(default=0.0, allow_inf_nan=False)
    reason: str | None = None

    _normalize_id = field_validator("merge_with_id", mode="before")(_blank_to_none)

    @field_validator("confidence", mode="before")
    @classmethod
    def _default_confidence(cls, value: object) -> object:
        return 0.0 if value is None else value


class GroupPayload(OpenRouterBaseModel):
    indices: list[int] = Field(default_factory=list)
    reason: str | None = None

    _normalize_indices = field_validator("indices", mode="before")(_none_to_empty)


class GroupingPayload(OpenRouterBaseModel):
    groups: list[GroupPayload] = Field(default_factory=list)
    drop_indices: list[int] = Field(default_factory=list, alias="dropIndices")

    _normalize_lists = field_validator("groups", "drop_indices", mode="before")(_none_to_empty)


class AlertPayload(OpenRouterBaseModel):
    text: str
    urgency: str | None = None


class SectionPayload(OpenRouterBaseModel):
    title: str
    item_ids: list[str] = Field(default_factory=list, alias="itemIds")

    @field_validator("item_ids", mode="before")
    @classmethod
    def _stringify_ids(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, Sequence) and not isinstance(value, str):
            return [str(item) for item in cast(Sequence[object], value)]
        return value


class DashboardPayload(OpenRouterBaseModel):
    summary: str | None = None
    alerts: list[AlertPayload] = Field(default_factory=list)
    sections: list[SectionPayload] = Field(default_factory=list)

    _normalize_lists = field_validator("alerts", "sections", mode="before")(_none_to_empty)


__all__ = [
    "AlertPayload",
    "ChatChoice",
    "ChatCompletionResponse",
    "ChatMessage",
    "DashboardPayload",
    "DuplicateVerdictPayload",
    "GroupPayload",
    "GroupingPayload",
    "SectionPayload",
]

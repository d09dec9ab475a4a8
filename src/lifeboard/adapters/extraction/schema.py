"""Pydantic models for extraction output (one JSON document per screenshot batch)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from lifeboard.domain.model import Category, ItemType, Urgency

_CATEGORY_VALUES = frozenset(category.value for category in Category)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _lowercase(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class ExtractionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExtractedItemPayload(ExtractionBaseModel):
    type: ItemType
    title: str = Field(min_length=1)
    date: str | None = None
    time: str | None = None
    end_time: str | None = Field(default=None, validation_alias=AliasChoices("endTime", "end_time"))
    location: str | None = None
    description: str | None = None
    urgency: Urgency = Urgency.MEDIUM
    category: Category | None = None
    people: list[str] = Field(default_factory=list)
    raw_text: str | None = Field(default=None, validation_alias=AliasChoices("rawText", "raw_text"))
    source_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sourceId", "source_id", "sourceHash", "source_hash"),
    )

    _normalize_optional = field_validator(
        "date",
        "time",
        "end_time",
        "location",
        "description",
        "raw_text",
        "source_id",
        mode="before",
    )(_blank_to_none)
    _normalize_type = field_validator("type", mode="before")(_lowercase)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("urgency", mode="before")
    @classmethod
    def _default_urgency(cls, value: object) -> object:
        value = _lowercase(value)
        return Urgency.MEDIUM if value in (None, "") else value

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value: object) -> object:
        value = _lowercase(value)
        if value in (None, ""):
            return None
        if isinstance(value, str) and value not in _CATEGORY_VALUES:
            return Category.OTHER
        return value

    @field_validator("people", mode="before")
    @classmethod
    def _people_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, Sequence):
            names = (str(name).strip() for name in cast(Sequence[object], value))
            return [name for name in names if name]
        return value


class ExtractionBatchPayload(ExtractionBaseModel):
    source_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sourceId", "source_id", "sourceHash", "source_hash"),
    )
    items: list[ExtractedItemPayload] = Field(default_factory=list)

    _normalize_source = field_validator("source_id", mode="before")(_blank_to_none)


__all__ = ["ExtractedItemPayload", "ExtractionBatchPayload"]

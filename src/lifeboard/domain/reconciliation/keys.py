"""Identity keys shared by every reconciliation stage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .normalize import compact, normalize_date, normalize_time, normalize_title

if TYPE_CHECKING:
    from lifeboard.domain.model import ItemType, Record

type ResolutionKey = tuple[str, str, str, str]


class IdentityFields(Protocol):
    """Fields that identify an obligation, shared by candidates and records."""

    @property
    def type(self) -> ItemType: ...

    @property
    def title(self) -> str: ...

    @property
    def date(self) -> str | None: ...

    @property
    def time(self) -> str | None: ...

    @property
    def location(self) -> str | None: ...


@dataclass(frozen=True, slots=True)
class ItemKeys:
    """Normalization output for one candidate or record."""

    type: ItemType
    normalized_title: str
    normalized_date: str
    normalized_time: str
    normalized_location: str

    @property
    def canonical_key(self) -> str:
        """Exact identity: type, title, date, time and location."""
        return "|".join(
            (
                self.type.value,
                self.normalized_title,
                self.normalized_date,
                self.normalized_time,
                self.normalized_location,
            )
        )

    @property
    def loose_key(self) -> str:
        """Identity without location, tolerating missing or garbled location text."""
        return "|".join(
            (self.type.value, self.normalized_title, self.normalized_date, self.normalized_time)
        )

    @property
    def resolution_key(self) -> ResolutionKey:
        return (
            self.type.value,
            self.normalized_title,
            self.normalized_date,
            self.normalized_time,
        )


def build_keys(item: IdentityFields, *, default_year: int | None = None) -> ItemKeys:
    return ItemKeys(
        type=item.type,
        normalized_title=normalize_title(item.title),
        normalized_date=normalize_date(item.date, default_year=default_year),
        normalized_time=normalize_time(item.time),
        normalized_location=compact(item.location),
    )


def record_keys(record: Record) -> ItemKeys:
    """Keys from the normalized columns stored on ``record``."""

    return ItemKeys(
        type=record.type,
        normalized_title=record.normalized_title,
        normalized_date=record.normalized_date or "",
        normalized_time=record.normalized_time or "",
        normalized_location=compact(record.location),
    )


__all__ = ["IdentityFields", "ItemKeys", "ResolutionKey", "build_keys", "record_keys"]

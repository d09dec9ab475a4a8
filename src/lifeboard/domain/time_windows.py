"""Calendar-day windows relative to an injected clock."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import tzinfo


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utc_clock() -> datetime:
    return datetime.now(UTC)


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always answers ``moment``; it must be timezone aware."""

    if moment.tzinfo is None:
        raise ValueError("Clock values must include timezone information")

    def clock() -> datetime:
        return moment

    return clock


@dataclass(frozen=True, slots=True)
class DayWindow:
    """"Today" and "tomorrow" as calendar days in one timezone."""

    today: date

    @property
    def tomorrow(self) -> date:
        return self.today + timedelta(days=1)

    def is_today(self, value: date) -> bool:
        return value == self.today

    def is_tomorrow(self, value: date) -> bool:
        return value == self.tomorrow

    def is_past(self, value: date) -> bool:
        return value < self.today

    def is_after_tomorrow(self, value: date) -> bool:
        return value > self.tomorrow

    @classmethod
    def current(cls, *, clock: Clock = utc_clock, timezone: tzinfo | None = None) -> DayWindow:
        """Window for the clock's current day; ``timezone=None`` uses host local time."""

        now = clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return cls(today=now.astimezone(timezone).date())


__all__ = ["Clock", "DayWindow", "fixed_clock", "utc_clock"]

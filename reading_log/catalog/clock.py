"""Clock abstraction for date-derived fields."""

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current date and instant."""

    def now(self) -> tuple[date, datetime]:
        ...


class SystemClock:
    """The server's local wall clock."""

    def now(self) -> tuple[date, datetime]:
        instant = datetime.now().astimezone()
        return instant.date(), instant


class FixedClock:
    """A clock pinned to one instant, for tests and reproducible runs."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    @classmethod
    def on(cls, day: date) -> "FixedClock":
        """Pin the clock to midnight of the given day."""
        return cls(datetime(day.year, day.month, day.day))

    def now(self) -> tuple[date, datetime]:
        return self.instant.date(), self.instant


def today(clock: Clock) -> date:
    """Current date according to the given clock."""
    return clock.now()[0]

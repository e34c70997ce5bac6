from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

END_OF_DAY = time(23, 59, 59, 999_000)
EXPIRED_LABEL = "Expired"

_MINUTE = timedelta(minutes=1)
_MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class Expired:
    def __str__(self) -> str:
        return EXPIRED_LABEL


EXPIRED = Expired()


@dataclass(frozen=True)
class Remaining:
    days: int
    hours: int
    minutes: int

    def __str__(self) -> str:
        return f"{self.days}d {self.hours}h {self.minutes}m"


def deadline_for(due_date: date | str) -> datetime:
    if isinstance(due_date, str):
        due_date = date.fromisoformat(due_date)
    return datetime.combine(due_date, END_OF_DAY)


def compute_remaining(due_date: date | str, now: datetime) -> Expired | Remaining:
    """Time left until the end of the due day, floored to whole minutes."""
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)

    left = deadline_for(due_date) - now
    if left <= timedelta(0):
        return EXPIRED

    total_minutes = left // _MINUTE
    return Remaining(
        days=total_minutes // _MINUTES_PER_DAY,
        hours=(total_minutes % _MINUTES_PER_DAY) // 60,
        minutes=total_minutes % 60,
    )


def format_countdown(result: Expired | Remaining) -> str:
    return str(result)

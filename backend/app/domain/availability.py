"""
Booked-date and pricing arithmetic shared by the API and the client panel.

Reservations may come straight from the ORM, from pydantic schemas or as the
JSON dicts the API returns, so dates are accepted as ``date``, ``datetime`` or
ISO-8601 strings.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Union

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class DateRange:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    key: str = "selection"

    @classmethod
    def today(cls) -> "DateRange":
        now = date.today()
        return cls(start_date=now, end_date=now)

    @property
    def is_complete(self) -> bool:
        return self.start_date is not None and self.end_date is not None


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value).date()


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj[name]
    return getattr(obj, name)


def days_between(start: DateLike, end: DateLike) -> List[date]:
    """Every calendar day from start to end, both inclusive."""
    first, last = as_date(start), as_date(end)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def disabled_dates(reservations: Iterable[Any]) -> List[date]:
    """
    Days that can no longer be picked because some reservation covers them.
    Sorted, without duplicates.
    """
    days = set()
    for reservation in reservations:
        days.update(
            days_between(_field(reservation, "start_date"), _field(reservation, "end_date"))
        )
    return sorted(days)


def overlapping_days(requested: DateRange, reservations: Iterable[Any]) -> List[date]:
    if not requested.is_complete:
        return []
    taken = set(disabled_dates(reservations))
    return [d for d in days_between(requested.start_date, requested.end_date) if d in taken]


def night_count(start: Optional[DateLike], end: Optional[DateLike]) -> int:
    if start is None or end is None:
        return 0
    return (as_date(end) - as_date(start)).days


def total_price(date_range: DateRange, nightly_price: int) -> int:
    # at least one night is always charged
    nights = night_count(date_range.start_date, date_range.end_date)
    if nights > 0:
        return nights * nightly_price
    return nightly_price

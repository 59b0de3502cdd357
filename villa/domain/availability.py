"""
Availability reconciliation.

Pure functions: callers pass the active bookings (anything with `check_in` /
`check_out` dates) and the blackout set; nothing here touches the store.
"""
import datetime
from dataclasses import dataclass
from typing import Iterable, Protocol

from villa.core.errors import ValidationError
from villa.domain.calendar import covers, get_month_dates, iter_nights, ranges_overlap


class Stay(Protocol):
    check_in: datetime.date
    check_out: datetime.date


@dataclass(frozen=True)
class AvailabilityVerdict:
    available: bool
    conflicting_count: int
    has_blackout: bool


@dataclass(frozen=True)
class DayState:
    available: bool
    booked: bool
    unavailable: bool


def find_conflicts(
    check_in: datetime.date, check_out: datetime.date, bookings: Iterable[Stay]
) -> list[Stay]:
    return [
        b for b in bookings
        if ranges_overlap(check_in, check_out, b.check_in, b.check_out)
    ]


def check_availability(
    check_in: datetime.date,
    check_out: datetime.date,
    bookings: Iterable[Stay],
    blackout_dates: Iterable[datetime.date],
) -> AvailabilityVerdict:
    if check_in >= check_out:
        raise ValidationError("Check-out must be after check-in")

    conflicts = find_conflicts(check_in, check_out, bookings)
    blackout = set(blackout_dates)
    has_blackout = any(day in blackout for day in iter_nights(check_in, check_out))

    return AvailabilityVerdict(
        available=not conflicts and not has_blackout,
        conflicting_count=len(conflicts),
        has_blackout=has_blackout,
    )


def month_bounds(year: int, month: int) -> tuple[datetime.date, datetime.date]:
    """First day of the month and first day of the next one."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not datetime.MINYEAR <= year < datetime.MAXYEAR:
        raise ValidationError("Year is out of range")
    first = datetime.date(year, month, 1)
    if month == 12:
        return first, datetime.date(year + 1, 1, 1)
    return first, datetime.date(year, month + 1, 1)


def build_calendar(
    year: int,
    month: int,
    bookings: Iterable[Stay],
    blackout_dates: Iterable[datetime.date],
) -> dict[str, DayState]:
    month_bounds(year, month)
    stays = list(bookings)
    blackout = set(blackout_dates)

    result: dict[str, DayState] = {}
    for day in get_month_dates(year, month):
        booked = any(covers(b.check_in, b.check_out, day) for b in stays)
        unavailable = day in blackout
        result[day.isoformat()] = DayState(
            available=not booked and not unavailable,
            booked=booked,
            unavailable=unavailable,
        )
    return result

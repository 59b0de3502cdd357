import calendar
import datetime
from typing import Iterator


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [
        datetime.date(year, month, day)
        for day in range(1, days_in_month + 1)
    ]


def iter_nights(check_in: datetime.date, check_out: datetime.date) -> Iterator[datetime.date]:
    """Yield every day in [check_in, check_out): the nights of a stay."""
    day = check_in
    while day < check_out:
        yield day
        day += datetime.timedelta(days=1)


def ranges_overlap(
    start1: datetime.date,
    end1: datetime.date,
    start2: datetime.date,
    end2: datetime.date,
) -> bool:
    """Half-open overlap: a stay ending on day X does not touch one starting on X."""
    return start1 < end2 and start2 < end1


def covers(check_in: datetime.date, check_out: datetime.date, day: datetime.date) -> bool:
    return check_in <= day < check_out

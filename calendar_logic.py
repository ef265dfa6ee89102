"""Pure calendar calculations for the date picker, free of UI dependencies."""

import calendar
import logging
from datetime import date, timedelta
from typing import NamedTuple

logger = logging.getLogger(__name__)

WEEKDAY_INITIALS = ["M", "T", "W", "T", "F", "S", "S"]

CALENDAR_WEEK_COUNT = 6
CALENDAR_DAY_COUNT = CALENDAR_WEEK_COUNT * 7

# First full year of the Gregorian calendar in Britain and its colonies
MIN_YEAR = 1753

_SHIFTS = (1, -1, 12, -12)


class Month(NamedTuple):
    """A (year, month) pair; tuple order is chronological order."""

    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year:04d}{self.month:02d}"

    @classmethod
    def parse(cls, text: str) -> "Month":
        """Read the compact YYYYMM form produced by ``str(month)``."""
        if len(text) != 6 or not (text.isascii() and text.isdecimal()):
            raise ValueError(f"Expected YYYYMM, got {text!r}")
        year, month = int(text[:4]), int(text[4:])
        if not 1 <= month <= 12:
            raise ValueError(f"Month out of range in {text!r}")
        return cls(year, month)


class MonthDay(NamedTuple):
    """One cell of the month grid as the picker displays it."""

    date: date
    day: int
    is_today: bool
    is_other_month: bool
    is_selectable: bool


def compose_month(year: int, month: int) -> Month:
    """Build a Month from a year and a 1-based month number (not validated)."""
    return Month(year, month)


def decompose_month(month: Month) -> tuple[int, int]:
    """Return (year, month) with January=1."""
    return month.year, month.month


MIN_MONTH = compose_month(MIN_YEAR, 1)


def truncate_date(value: date) -> date:
    """Drop the time portion of a datetime; plain dates pass through."""
    return date(value.year, value.month, value.day)


def month_from_date(value: date) -> Month:
    """Return the Month that *value* falls in."""
    return compose_month(value.year, value.month)


def month_days(month: Month) -> list[date]:
    """Return the CALENDAR_DAY_COUNT consecutive dates shown for *month*.

    Weeks start on Monday. The target month is preceded by days of the
    previous month and followed by days of the next one. A month whose
    first day is a Monday still gets a full leading week.
    """
    year, m = decompose_month(month)
    if year > date.max.year:
        raise OverflowError(f"{month} is past the supported date range")
    first_weekday, _days_in_month = calendar.monthrange(year, m)
    # monthrange counts Monday as 0; Monday maps to a whole week
    leading = first_weekday or 7
    start = date(year, m, 1) - timedelta(days=leading)
    return [start + timedelta(days=i) for i in range(CALENDAR_DAY_COUNT)]


def month_day_entries(month: Month, today: date | None = None) -> list[MonthDay]:
    """Return month_days(month) annotated for display."""
    if today is None:
        today = date.today()
    entries: list[MonthDay] = []
    for d in month_days(month):
        entries.append(MonthDay(
            date=d,
            day=d.day,
            is_today=is_same_date(d, today),
            is_other_month=month_from_date(d) != month,
            is_selectable=is_date_valid_to_select(d),
        ))
    return entries


def shift_month(month: Month, shift: int) -> Month:
    """Shift *month* by 1, -1, 12 or -12 months.

    A result earlier than MIN_MONTH is dropped and *month* is returned
    unchanged.
    """
    if shift not in _SHIFTS:
        raise ValueError(f"Unsupported month shift: {shift}")
    year, m = decompose_month(month)
    if abs(shift) == 1:
        m += shift
        if m == 0:
            year, m = year - 1, 12
        elif m == 13:
            year, m = year + 1, 1
    else:
        year += 1 if shift > 0 else -1

    result = compose_month(year, m)
    if result < MIN_MONTH:
        logger.debug("Shift %+d from %s is before %s, ignoring", shift, month, MIN_MONTH)
        return month
    return result


def can_go_back(month: Month) -> bool:
    """Return True if a one-month step back stays in range."""
    return month > MIN_MONTH


def is_date_valid_to_select(value: date) -> bool:
    """Return True if the date lies within the supported Gregorian range."""
    return month_from_date(value) >= MIN_MONTH


def month_name(month: Month) -> str:
    """Return the header text, e.g. "January, 2024"."""
    year, m = decompose_month(month)
    return f"{calendar.month_name[m]}, {year}"


def is_same_date(first: date, second: date) -> bool:
    """Compare year, month and day only."""
    return truncate_date(first) == truncate_date(second)


def is_today(value: date, today: date | None = None) -> bool:
    """Compare against *today*, or the system date when it is omitted."""
    if today is None:
        today = date.today()
    return is_same_date(value, today)

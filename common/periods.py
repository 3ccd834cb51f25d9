"""Calendar period helpers.

Month and year boundaries, ISO formatting and "last N months" windows.
All dates are plain ``datetime.date`` values, inclusive on both ends.
"""
import calendar
import re
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import List, Optional, Union

from .errors import InvalidArgument, InvalidPeriod

ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

ITALIAN_MONTHS = (
    'gennaio', 'febbraio', 'marzo', 'aprile', 'maggio', 'giugno',
    'luglio', 'agosto', 'settembre', 'ottobre', 'novembre', 'dicembre',
)


@dataclass(frozen=True)
class Period:
    """Inclusive date range."""
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            'start_date': format_iso(self.start_date),
            'end_date': format_iso(self.end_date),
        }


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int

    @property
    def label(self) -> str:
        return month_label(self.year, self.month)


def _check_year(year: int) -> None:
    if not isinstance(year, int) or isinstance(year, bool) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidPeriod(f'Year must be between {MINYEAR} and {MAXYEAR}, got {year!r}', 'year')


def _check_month(month: int) -> None:
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise InvalidPeriod(f'Month must be between 1 and 12, got {month!r}', 'month')


def month_bounds(year: int, month: int) -> Period:
    """First and last day of a month (leap years included)."""
    _check_year(year)
    _check_month(month)
    last_day = calendar.monthrange(year, month)[1]
    return Period(date(year, month, 1), date(year, month, last_day))


def year_bounds(year: int) -> Period:
    _check_year(year)
    return Period(date(year, 1, 1), date(year, 12, 31))


def months_back(count: int, anchor: date) -> List[YearMonth]:
    """``count`` consecutive months ending at ``anchor``'s month, oldest first."""
    if count < 1:
        raise InvalidPeriod(f'Month count must be at least 1, got {count}', 'months')
    # Months since year 0 makes the wrap-around a plain divmod
    end_index = anchor.year * 12 + (anchor.month - 1)
    window = []
    for index in range(end_index - count + 1, end_index + 1):
        year, month0 = divmod(index, 12)
        window.append(YearMonth(year, month0 + 1))
    return window


def format_iso(day: date) -> str:
    return day.strftime('%Y-%m-%d')


def month_label(year: int, month: int) -> str:
    return f'{year:04d}-{month:02d}'


def italian_month_label(year: int, month: int) -> str:
    """Human period label used on reports, e.g. ``marzo 2024``."""
    _check_month(month)
    return f'{ITALIAN_MONTHS[month - 1]} {year}'


def parse_iso_date(value: Union[str, date, datetime], field: str = 'date') -> date:
    """Parse a ``YYYY-MM-DD`` string. Dates pass through, datetimes are truncated."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        raise InvalidArgument(f'Invalid date format for {field}. Use YYYY-MM-DD', field)
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise InvalidArgument(f'Invalid date for {field}: {value}', field)


def parse_optional_date(value, field: str = 'date') -> Optional[date]:
    if value is None or value == '':
        return None
    return parse_iso_date(value, field)


def in_range(day: date, start: Optional[date] = None, end: Optional[date] = None) -> bool:
    """Inclusive range check; open ends are unbounded."""
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True

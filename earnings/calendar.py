"""
Trading-day helpers.

Weekday-only stepping used to keep computed entry/exit dates off weekends.
Exchange holidays are not modelled.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from config import DATE_FORMATS
from reliability.exceptions import DateParseError

SATURDAY = 5
SUNDAY = 6


def parse_date(value: str, field: str, line_number: Optional[int] = None,
               formats: Iterable[str] = DATE_FORMATS) -> date:
    """Parse a calendar date in any of the accepted formats."""
    text = (value or "").strip()
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise DateParseError(value, field, line_number=line_number)


def is_trading_day(d: date) -> bool:
    return d.weekday() < SATURDAY


def closest_trading_day(d: date) -> date:
    """Closest trading day, always going backwards on a weekend."""
    if d.weekday() == SATURDAY:
        return d - timedelta(days=1)
    if d.weekday() == SUNDAY:
        return d - timedelta(days=2)
    return d


def next_trading_day(d: date) -> date:
    """First trading day strictly after ``d``."""
    weekday = d.weekday()
    if weekday == 4:  # Friday
        return d + timedelta(days=3)
    if weekday == SATURDAY:
        return d + timedelta(days=2)
    return d + timedelta(days=1)


def prev_trading_day(d: date) -> date:
    """Last trading day strictly before ``d``."""
    weekday = d.weekday()
    if weekday == 0:  # Monday
        return d - timedelta(days=3)
    if weekday == SUNDAY:
        return d - timedelta(days=2)
    return d - timedelta(days=1)


def roll_to_trading_day(d: date, forward: bool) -> date:
    """Leave trading days untouched; step weekend dates to Monday or Friday."""
    if is_trading_day(d):
        return d
    if forward:
        return next_trading_day(d)
    return closest_trading_day(d)

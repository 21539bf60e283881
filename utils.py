"""
Utility functions for DuoSplit: dates, months and the data directory
"""
from __future__ import annotations
import calendar
import os
import re
from datetime import date, datetime

from errors import ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def today_str() -> str:
    """Get today's date as ISO string"""
    return date.today().isoformat()


def current_month() -> str:
    """Get the current month as YYYY-MM"""
    return today_str()[:7]


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string"""
    s = s.strip()
    if not _DATE_RE.match(s):
        raise ValueError(f"date {s!r} is not YYYY-MM-DD")
    return datetime.strptime(s, "%Y-%m-%d").date()


def is_valid_date(s) -> bool:
    if not isinstance(s, str):
        return False
    try:
        parse_date(s)
    except ValueError:
        return False
    return True


def normalize_date(s) -> str:
    """Return s unchanged when it is a valid date, otherwise today"""
    return s.strip() if is_valid_date(s) else today_str()


def parse_month(s: str) -> str:
    """Validate a YYYY-MM month filter"""
    if not isinstance(s, str) or not _MONTH_RE.match(s.strip()):
        raise ValidationError(f"Month {s!r} must be YYYY-MM.")
    return s.strip()


def month_of(date_str: str) -> str:
    return date_str[:7]


def in_month(date_str: str, month: str) -> bool:
    return month_of(date_str) == month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(start: date, months: int) -> date:
    """
    Step `months` months forward from start, clamping the start day
    to the length of the target month (Jan 31 + 1 -> Feb 28/29).
    """
    idx = start.month - 1 + months
    year, month = start.year + idx // 12, idx % 12 + 1
    return date(year, month, min(start.day, days_in_month(year, month)))


def app_dir() -> str:
    """
    Get application data directory: $DUOSPLIT_HOME or ~/.duosplit
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("DUOSPLIT_HOME") or os.path.expanduser("~/.duosplit")
    os.makedirs(path, exist_ok=True)
    return path

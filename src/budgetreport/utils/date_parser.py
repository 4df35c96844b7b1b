"""Date and budget period parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_GERMAN_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")
_YEAR = re.compile(r"^(\d{4})$")
_MONTH = re.compile(r"^(\d{4})-(\d{1,2})$")
_QUARTER = re.compile(r"^(\d{4})-?q([1-4])$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15"
    - German dates: "15.01.2024"
    - Anything else dateutil understands: "January 15, 2024"
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _GERMAN_DATE.match(date_str)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError as e:
            raise ValueError(f"Could not parse date '{date_str}': {e}")

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _month_range(year: int, month: int) -> tuple[date, date]:
    start = date(year, month, 1)
    return start, start + relativedelta(months=1) - timedelta(days=1)


def _quarter_range(year: int, quarter: int) -> tuple[date, date]:
    start = date(year, 3 * (quarter - 1) + 1, 1)
    return start, start + relativedelta(months=3) - timedelta(days=1)


def get_period(period: str) -> tuple[date, date]:
    """Get the full start and end dates of a budget period.

    Args:
        period: One of this-/last-/next-month, -quarter, -year, or an explicit
            period such as "2024", "2024-03" or "2024-Q2"

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    current_quarter = (today.month - 1) // 3 + 1

    if period in ("this-month", "last-month", "next-month"):
        offset = {"this": 0, "last": -1, "next": 1}[period.split("-")[0]]
        anchor = today + relativedelta(months=offset)
        return _month_range(anchor.year, anchor.month)

    if period in ("this-quarter", "last-quarter", "next-quarter"):
        offset = {"this": 0, "last": -3, "next": 3}[period.split("-")[0]]
        anchor = date(today.year, 3 * (current_quarter - 1) + 1, 1) + relativedelta(months=offset)
        return _quarter_range(anchor.year, (anchor.month - 1) // 3 + 1)

    if period in ("this-year", "last-year", "next-year"):
        offset = {"this": 0, "last": -1, "next": 1}[period.split("-")[0]]
        year = today.year + offset
        return date(year, 1, 1), date(year, 12, 31)

    match = _YEAR.match(period)
    if match:
        year = int(match.group(1))
        return date(year, 1, 1), date(year, 12, 31)

    match = _MONTH.match(period)
    if match and 1 <= int(match.group(2)) <= 12:
        return _month_range(int(match.group(1)), int(match.group(2)))

    match = _QUARTER.match(period)
    if match:
        return _quarter_range(int(match.group(1)), int(match.group(2)))

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, last-month, next-month, "
        "this-quarter, last-quarter, next-quarter, this-year, last-year, next-year, "
        "YYYY, YYYY-MM, YYYY-Qn"
    )

"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Any, Optional


def to_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO-8601 string to a date (None if invalid)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def days_between(start: date, end: date) -> int:
    """Whole days from start to end, never negative"""
    return max((end - start).days, 0)


def format_month_year(d: date) -> str:
    """'January 2024'"""
    return f"{d.strftime('%B')} {d.year}"


def format_quarter(d: date) -> str:
    """'Q1 2024' - Jan-Mar is Q1, Apr-Jun Q2, Jul-Sep Q3, Oct-Dec Q4"""
    quarter = (d.month - 1) // 3 + 1
    return f"Q{quarter} {d.year}"

"""Calendar helpers (month names, report date stamps, year options)."""
from __future__ import annotations
from datetime import date, datetime, timezone

from app.config import YEAR_OPTIONS

MONTHS: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def today() -> date:
    """Local calendar date; saved report names carry the date the user sees."""
    return date.today()

def month_abbreviation(month: str) -> str:
    return month[:3]

def format_report_date(day: date) -> str:
    """DD-MON-YYYY, e.g. 07-MAR-2025."""
    return f"{day.day:02d}-{MONTHS[day.month - 1][:3].upper()}-{day.year}"

def year_options(current_year: int | None = None) -> list[int]:
    current_year = current_year or today().year
    first = current_year - int(YEAR_OPTIONS["years_back"])
    return list(range(first, first + int(YEAR_OPTIONS["count"])))

__all__ = ["MONTHS", "utc_now", "today", "month_abbreviation", "format_report_date", "year_options"]

"""Reporting-period labels and the derived name of a saved report.

Two period formats exist on purpose:

* display label (dashboard header): ``"January - March 2025"``
* compact label (inside saved report names): ``"January-Mar 2025"``

Both collapse to ``"January 2025"`` when there is no end month or it equals
the start month.
"""
from __future__ import annotations
from datetime import date

from app.utils.time import format_report_date, month_abbreviation


def _single_month(start_month: str, end_month: str | None) -> bool:
    return not end_month or start_month == end_month


def reporting_period_label(start_month: str, end_month: str | None, year: int) -> str:
    if _single_month(start_month, end_month):
        return f"{start_month} {year}"
    return f"{start_month} - {end_month} {year}"


def compact_reporting_period(start_month: str, end_month: str | None, year: int) -> str:
    if _single_month(start_month, end_month):
        return f"{start_month} {year}"
    return f"{start_month}-{month_abbreviation(end_month or '')} {year}"


def build_report_name(brand_name: str, start_month: str, end_month: str | None, year: int, on: date) -> str:
    """``[{brand}] - [{compact period}] - [{DD-MON-YYYY}]`` for the save date ``on``."""
    period = compact_reporting_period(start_month, end_month, year)
    return f"[{brand_name}] - [{period}] - [{format_report_date(on)}]"

__all__ = ["reporting_period_label", "compact_reporting_period", "build_report_name"]

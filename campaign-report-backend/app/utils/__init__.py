"""
Utilities package initialization.
"""
from .logger import get_logger, log_business_event, log_performance, setup_logging
from .time import MONTHS, format_report_date, today, utc_now, year_options

__all__ = [
    "get_logger",
    "log_business_event",
    "log_performance",
    "setup_logging",
    "MONTHS",
    "format_report_date",
    "today",
    "utc_now",
    "year_options",
]

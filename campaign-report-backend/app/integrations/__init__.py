"""
Integrations package initialization.
Exports the report store capability, its failure kinds and the SQL-backed store.
"""
from .base import (
    ReportStore,
    ReportStoreError,
    StoreUnavailableError,
    StoreAccessDeniedError,
    ReportNotFoundError,
    CorruptReportError,
)
from .document_store import SQLReportStore, create_report_store

__all__ = [
    "ReportStore",
    "ReportStoreError",
    "StoreUnavailableError",
    "StoreAccessDeniedError",
    "ReportNotFoundError",
    "CorruptReportError",
    "SQLReportStore",
    "create_report_store",
]

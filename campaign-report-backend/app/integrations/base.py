"""Report store capability and its failure kinds.

The service layer only ever talks to a ``ReportStore``. A deployment without a
configured store holds ``None`` instead of an instance, so "not configured" is
never an exception.
"""
from abc import ABC, abstractmethod
from typing import List

from app.models.schemas.reports import ReportPayload, ReportSummary


class ReportStoreError(Exception):
    """Base class for failures reported by a report store."""

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class StoreUnavailableError(ReportStoreError):
    """The store could not be reached (network, driver, or service down)."""


class StoreAccessDeniedError(ReportStoreError):
    """The store's access rules rejected the operation."""


class ReportNotFoundError(ReportStoreError):
    """No document exists for the requested id."""

    def __init__(self, report_id: str, *, operation: str | None = None):
        super().__init__(f"Report '{report_id}' not found", operation=operation)
        self.report_id = report_id


class CorruptReportError(ReportStoreError):
    """A stored document exists but does not match the report schema."""

    def __init__(self, report_id: str, detail: str, *, operation: str | None = None):
        super().__init__(f"Report '{report_id}' is unreadable: {detail}", operation=operation)
        self.report_id = report_id


class ReportStore(ABC):
    @abstractmethod
    def create(self, payload: ReportPayload) -> str:
        """Store a new report document and return its id."""

    @abstractmethod
    def update(self, report_id: str, payload: ReportPayload) -> None:
        """Overwrite the document ``report_id``."""

    @abstractmethod
    def list(self) -> List[ReportSummary]:
        """Saved reports as (id, display name) pairs."""

    @abstractmethod
    def get(self, report_id: str) -> ReportPayload:
        """Fetch one full payload; raises ReportNotFoundError when missing."""

    def check_health(self) -> None:
        """Raise a ReportStoreError when the store cannot be reached."""

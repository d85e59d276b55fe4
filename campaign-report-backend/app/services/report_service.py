"""User actions on reports: save, update, list, load, and dashboard generation.

Every store failure is caught here, logged and turned into a notification on
the returned ActionResult; nothing store-related propagates to the caller and
the caller's form is never modified by a failed action. There is no retry:
the user re-triggers the action.

Rules:
1. No store configured -> NOT_CONFIGURED, store is not touched.
2. Save/update with a blank brand name or no start month -> VALIDATION_FAILED,
   store is not touched.
3. StoreUnavailableError -> UNAVAILABLE, StoreAccessDeniedError -> DENIED,
   ReportNotFoundError -> NOT_FOUND, CorruptReportError -> CORRUPT.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from app.integrations.base import (
    CorruptReportError,
    ReportStore,
    ReportStoreError,
    StoreAccessDeniedError,
    ReportNotFoundError,
)
from app.models.db.enums import ActionStatus, NotificationType
from app.models.schemas.reports import (
    Notification,
    OverallResults,
    ReportFormState,
    ReportSummary,
)
from app.services.dashboard_generator import (
    DashboardData,
    first_active_month_index,
    generate_dashboard_html,
)
from app.services.report_form import ReportForm, ReportValidationError
from app.services.report_naming import reporting_period_label
from app.utils import get_logger, log_business_event, log_performance, today

logger = get_logger(__name__)

CONNECTION_ERROR_MESSAGE = "Connection Error: Check internet and report store setup."


@dataclass
class ActionResult:
    status: ActionStatus
    notification: Optional[Notification] = None
    report_id: Optional[str] = None
    report_name: Optional[str] = None
    reports: List[ReportSummary] = field(default_factory=list)
    form: Optional[ReportFormState] = None

    @property
    def ok(self) -> bool:
        return self.status == ActionStatus.OK


@dataclass(frozen=True)
class DashboardResult:
    html: str
    overall_results: OverallResults
    reporting_period: str
    first_active_month_index: int


def _notify(message: str, kind: NotificationType) -> Notification:
    return Notification(message=message, type=kind)


class ReportService:
    """Report actions for one session, given an optional report store."""

    def __init__(self, store: Optional[ReportStore], clock: Callable[[], date] = today):
        self.store = store
        self._clock = clock

    @property
    def configured(self) -> bool:
        return self.store is not None

    # ------------------------------- helpers -------------------------------- #

    def _not_configured(self, verb: str) -> ActionResult:
        logger.info("Report store not configured; action skipped", action=verb)
        return ActionResult(
            status=ActionStatus.NOT_CONFIGURED,
            notification=_notify(f"Report store is not configured. Cannot {verb}.", NotificationType.ERROR),
        )

    def _failure(self, verb: str, error: ReportStoreError, request_id: Optional[str]) -> ActionResult:
        if isinstance(error, ReportNotFoundError):
            status, message = ActionStatus.NOT_FOUND, "Report not found."
        elif isinstance(error, CorruptReportError):
            status = ActionStatus.CORRUPT
            message = f"Failed to {verb} report. Stored data is invalid."
        elif isinstance(error, StoreAccessDeniedError):
            status = ActionStatus.DENIED
            message = f"Failed to {verb} report. Check report store access rules."
        else:
            status, message = ActionStatus.UNAVAILABLE, CONNECTION_ERROR_MESSAGE
        logger.error(
            f"Error during report {verb}",
            action=verb,
            status=status.value,
            error=str(error),
            error_type=type(error).__name__,
            request_id=request_id,
        )
        return ActionResult(status=status, notification=_notify(message, NotificationType.ERROR))

    def _validated_form(self, form_state: ReportFormState) -> tuple[ReportForm, Optional[ActionResult]]:
        form = ReportForm(form_state)
        try:
            form.validate_for_save()
        except ReportValidationError as e:
            logger.warning("Report validation failed", missing_fields=e.missing)
            return form, ActionResult(
                status=ActionStatus.VALIDATION_FAILED,
                notification=_notify(str(e), NotificationType.ERROR),
            )
        return form, None

    def _refreshed_list(self, request_id: Optional[str]) -> List[ReportSummary]:
        # The save already succeeded; a failed refresh only leaves the list stale.
        if self.store is None:
            return []
        try:
            return self.store.list()
        except ReportStoreError as e:
            logger.warning("Report list refresh failed", error=str(e), request_id=request_id)
            return []

    # ------------------------------- actions -------------------------------- #

    def list_reports(self, request_id: Optional[str] = None) -> ActionResult:
        if self.store is None:
            logger.info("Report store not configured; list skipped")
            return ActionResult(
                status=ActionStatus.NOT_CONFIGURED,
                notification=_notify(
                    "Report store is not configured. Save & load is disabled.", NotificationType.INFO
                ),
            )
        try:
            reports = self.store.list()
        except ReportStoreError as e:
            return self._failure("fetch", e, request_id)

        if reports:
            notification = _notify(f"Successfully fetched {len(reports)} report(s).", NotificationType.SUCCESS)
        else:
            notification = _notify(
                "Connected to the report store, but no saved reports were found.", NotificationType.INFO
            )
        return ActionResult(status=ActionStatus.OK, notification=notification, reports=reports)

    def save_as_new(self, form_state: ReportFormState, request_id: Optional[str] = None) -> ActionResult:
        if self.store is None:
            return self._not_configured("save")
        form, invalid = self._validated_form(form_state)
        if invalid is not None:
            return invalid

        payload = form.payload(self._clock())
        try:
            report_id = self.store.create(payload)
        except ReportStoreError as e:
            return self._failure("save", e, request_id)

        log_business_event(
            "report_created",
            report_id=report_id,
            report_name=payload.report_name,
            request_id=request_id,
        )
        return ActionResult(
            status=ActionStatus.OK,
            notification=_notify(f'Report "{payload.report_name}" saved successfully!', NotificationType.SUCCESS),
            report_id=report_id,
            report_name=payload.report_name,
            reports=self._refreshed_list(request_id),
        )

    def update(self, report_id: str, form_state: ReportFormState, request_id: Optional[str] = None) -> ActionResult:
        if self.store is None:
            return self._not_configured("update")
        if not report_id:
            return ActionResult(
                status=ActionStatus.NOT_FOUND,
                notification=_notify("No report is loaded. Cannot update.", NotificationType.INFO),
            )
        form, invalid = self._validated_form(form_state)
        if invalid is not None:
            return invalid

        payload = form.payload(self._clock())
        try:
            self.store.update(report_id, payload)
        except ReportStoreError as e:
            return self._failure("update", e, request_id)

        log_business_event(
            "report_updated",
            report_id=report_id,
            report_name=payload.report_name,
            request_id=request_id,
        )
        return ActionResult(
            status=ActionStatus.OK,
            notification=_notify(f'Report "{payload.report_name}" updated successfully!', NotificationType.SUCCESS),
            report_id=report_id,
            report_name=payload.report_name,
            reports=self._refreshed_list(request_id),
        )

    def load(self, report_id: str, request_id: Optional[str] = None) -> ActionResult:
        if self.store is None:
            return self._not_configured("load")
        try:
            payload = self.store.get(report_id)
        except ReportStoreError as e:
            return self._failure("load", e, request_id)

        form = ReportForm.from_payload(payload)
        name = payload.report_name or "Untitled"
        log_business_event(
            "report_loaded",
            report_id=report_id,
            report_name=payload.report_name,
            request_id=request_id,
        )
        return ActionResult(
            status=ActionStatus.OK,
            notification=_notify(f'Report "{name}" loaded successfully!', NotificationType.SUCCESS),
            report_id=report_id,
            report_name=payload.report_name,
            form=form.state,
        )

    def generate_dashboard(self, form_state: ReportFormState) -> DashboardResult:
        """Render the dashboard for the current form; never touches the store."""
        start = time.time()
        s = form_state
        results = ReportForm(form_state).overall_results()
        period = reporting_period_label(s.start_month, s.end_month, s.year)
        start_index = first_active_month_index(s.channels)

        html = generate_dashboard_html(DashboardData(
            brand_name=s.brand_name,
            primary_color=s.primary_color,
            secondary_color=s.secondary_color,
            reporting_period=period,
            overall_results=results,
            platforms=s.platforms,
            channels=s.channels,
            first_active_month_index=start_index,
        ))

        log_performance(
            operation="generate_dashboard",
            duration_ms=(time.time() - start) * 1000,
            additional_data={
                "platforms": len(s.platforms),
                "channels": len(s.channels),
                "html_bytes": len(html),
            },
        )
        return DashboardResult(
            html=html,
            overall_results=results,
            reporting_period=period,
            first_active_month_index=start_index,
        )

"""
Saved report endpoints: list, save as new, update and load.

A failed action answers with the app-wide error shape and carries the user
notification the service produced; the posted form is never changed by it.
"""
import time
from fastapi import APIRouter, Depends, HTTPException, status
from app.api.deps import get_report_service, get_request_id
from app.models.db.enums import ActionStatus, NotificationType
from app.models.schemas.reports import (
    Notification,
    ReportFormState,
    ReportListResponse,
    ReportLoadedResponse,
    ReportSavedResponse,
    StoreStatusResponse,
)
from app.services.report_service import ActionResult, ReportService
from app.utils import get_logger, log_performance

router = APIRouter()
logger = get_logger(__name__)

ACTION_STATUS_CODES = {
    ActionStatus.VALIDATION_FAILED: 422,
    ActionStatus.NOT_CONFIGURED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ActionStatus.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ActionStatus.DENIED: status.HTTP_403_FORBIDDEN,
    ActionStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ActionStatus.CORRUPT: status.HTTP_502_BAD_GATEWAY,
}


class ReportActionError(HTTPException):
    """HTTP error that keeps the notification of a failed report action."""

    def __init__(self, status_code: int, notification: Notification, action_status: ActionStatus):
        super().__init__(status_code=status_code, detail=notification.message)
        self.notification = notification
        self.action_status = action_status


def _raise_for_result(result: ActionResult) -> None:
    if result.ok:
        return
    notification = result.notification or Notification(message="Report action failed.", type=NotificationType.ERROR)
    raise ReportActionError(
        status_code=ACTION_STATUS_CODES[result.status],
        notification=notification,
        action_status=result.status,
    )


@router.get(
    "/status",
    response_model=StoreStatusResponse,
    summary="Whether save & load is available"
)
async def store_status(service: ReportService = Depends(get_report_service)) -> StoreStatusResponse:
    configured = service.configured
    return StoreStatusResponse(
        configured=configured,
        message=None if configured else "Report store is not configured. Save & load is disabled.",
    )


@router.get(
    "/",
    response_model=ReportListResponse,
    summary="List saved reports"
)
async def list_reports(
    service: ReportService = Depends(get_report_service),
    request_id: str = Depends(get_request_id),
) -> ReportListResponse:
    """
    List saved reports as (id, name) pairs.

    An unconfigured store is not an error here: the list is empty and the
    response says so, which is how the UI knows to hide save & load.
    """
    start_time = time.time()
    result = service.list_reports(request_id)
    if result.status == ActionStatus.NOT_CONFIGURED:
        return ReportListResponse(configured=False, reports=[], notification=result.notification)
    _raise_for_result(result)

    log_performance(
        operation="list_reports",
        duration_ms=(time.time() - start_time) * 1000,
        additional_data={"reports_returned": len(result.reports)}
    )
    return ReportListResponse(configured=True, reports=result.reports, notification=result.notification)


@router.post(
    "/",
    response_model=ReportSavedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save the form as a new report"
)
async def save_report(
    form: ReportFormState,
    service: ReportService = Depends(get_report_service),
    request_id: str = Depends(get_request_id),
) -> ReportSavedResponse:
    logger.info("Report save requested", brand_name=form.brand_name, request_id=request_id)
    result = service.save_as_new(form, request_id)
    _raise_for_result(result)
    return ReportSavedResponse(
        message="Report saved",
        id=result.report_id,
        report_name=result.report_name,
        reports=result.reports,
        notification=result.notification,
    )


@router.put(
    "/{report_id}",
    response_model=ReportSavedResponse,
    summary="Overwrite a saved report with the form"
)
async def update_report(
    report_id: str,
    form: ReportFormState,
    service: ReportService = Depends(get_report_service),
    request_id: str = Depends(get_request_id),
) -> ReportSavedResponse:
    logger.info("Report update requested", report_id=report_id, request_id=request_id)
    result = service.update(report_id, form, request_id)
    _raise_for_result(result)
    return ReportSavedResponse(
        message="Report updated",
        id=report_id,
        report_name=result.report_name,
        reports=result.reports,
        notification=result.notification,
    )


@router.get(
    "/{report_id}",
    response_model=ReportLoadedResponse,
    summary="Load a saved report into a fresh form"
)
async def load_report(
    report_id: str,
    service: ReportService = Depends(get_report_service),
    request_id: str = Depends(get_request_id),
) -> ReportLoadedResponse:
    result = service.load(report_id, request_id)
    _raise_for_result(result)
    return ReportLoadedResponse(
        message="Report loaded",
        id=report_id,
        form=result.form,
        notification=result.notification,
    )

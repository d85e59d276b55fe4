"""
Dashboard generation endpoints.

Both endpoints work from the posted form state alone; the report store is
never consulted, so dashboards render even when persistence is disabled.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from app.api.deps import get_report_service, get_request_id
from app.models.schemas.reports import DashboardSummaryResponse, ReportFormState
from app.services.dashboard_generator import visible_months
from app.services.report_service import ReportService
from app.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/",
    response_class=HTMLResponse,
    summary="Render the HTML dashboard for a report form"
)
async def generate_dashboard(
    form: ReportFormState,
    service: ReportService = Depends(get_report_service),
    request_id: str = Depends(get_request_id),
) -> HTMLResponse:
    result = service.generate_dashboard(form)
    logger.info(
        "Dashboard generated",
        brand_name=form.brand_name,
        platforms=len(form.platforms),
        channels=len(form.channels),
        request_id=request_id
    )
    return HTMLResponse(content=result.html)


@router.post(
    "/summary",
    response_model=DashboardSummaryResponse,
    summary="Overall results and timeline window for a report form"
)
async def dashboard_summary(
    form: ReportFormState,
    service: ReportService = Depends(get_report_service),
) -> DashboardSummaryResponse:
    result = service.generate_dashboard(form)
    return DashboardSummaryResponse(
        overall_results=result.overall_results,
        reporting_period=result.reporting_period,
        first_active_month_index=result.first_active_month_index,
        visible_months=visible_months(result.first_active_month_index),
    )

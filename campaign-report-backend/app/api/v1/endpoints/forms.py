"""
Form template endpoint.
"""
from fastapi import APIRouter, Depends
from app.api.deps import get_request_id
from app.models.schemas.reports import FormTemplateResponse
from app.services.report_form import ReportForm
from app.utils import get_logger, year_options
from app.utils.time import MONTHS

router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "/new",
    response_model=FormTemplateResponse,
    summary="Blank report form with month and year options"
)
async def new_form(request_id: str = Depends(get_request_id)) -> FormTemplateResponse:
    """A fresh form: default colors, current year, one empty platform and channel row."""
    logger.debug("Blank form requested", request_id=request_id)
    return FormTemplateResponse(
        form=ReportForm.blank_state(),
        months=list(MONTHS),
        years=year_options(),
    )

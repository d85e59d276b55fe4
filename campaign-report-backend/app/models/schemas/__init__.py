from .base import ResponseBase
from .reports import (
    PlatformEntry,
    PlatformRow,
    ChannelEntry,
    ChannelRow,
    OverallResults,
    ReportPayload,
    ReportFormState,
    ReportSummary,
    Notification,
    StoreStatusResponse,
    ReportListResponse,
    ReportSavedResponse,
    ReportLoadedResponse,
    FormTemplateResponse,
    DashboardSummaryResponse,
    new_row_id,
)

__all__ = [
    # Base
    "ResponseBase",

    # Report payload / form
    "PlatformEntry",
    "PlatformRow",
    "ChannelEntry",
    "ChannelRow",
    "OverallResults",
    "ReportPayload",
    "ReportFormState",
    "ReportSummary",
    "Notification",
    "new_row_id",

    # Responses
    "StoreStatusResponse",
    "ReportListResponse",
    "ReportSavedResponse",
    "ReportLoadedResponse",
    "FormTemplateResponse",
    "DashboardSummaryResponse",
]

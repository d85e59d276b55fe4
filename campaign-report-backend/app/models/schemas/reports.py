"""
Pydantic schemas for report payloads, form state and report actions.

Stored documents use ``ReportPayload``; the browser form round-trips
``ReportFormState`` whose rows carry a local ``id`` that never reaches the store.
"""
from __future__ import annotations

import math
import uuid
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from app.config import DASHBOARD_DEFAULTS
from app.models.db.enums import NotificationType
from app.utils.time import MONTHS, today
from .base import ResponseBase

MONTHS_PER_YEAR = 12
COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


def new_row_id() -> str:
    """Random local row id; only used to tell form rows apart."""
    return uuid.uuid4().hex[:12]


def _coerce_int(value: Any) -> Optional[int]:
    """Blank or non-numeric metric input means "not entered"; fractions round to the nearest whole count."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return round(value) if math.isfinite(value) else None
    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return round(number) if math.isfinite(number) else None


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    text = str(value).strip().replace(",", "").rstrip("%")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _check_month(value: str) -> str:
    value = (value or "").strip()
    if value and value not in MONTHS:
        raise ValueError(f"Unknown month '{value}'")
    return value


class PlatformEntry(BaseModel):
    """One advertising platform's metrics for the reporting period."""
    name: str = ""
    impressions: Optional[int] = None
    reach: Optional[int] = None
    clicks: Optional[int] = None
    ctr: Optional[float] = Field(None, description="Platform-reported CTR, in percent")

    @field_validator("impressions", "reach", "clicks", mode="before")
    @classmethod
    def _metric_or_none(cls, value: Any) -> Optional[int]:
        return _coerce_int(value)

    @field_validator("ctr", mode="before")
    @classmethod
    def _ctr_or_none(cls, value: Any) -> Optional[float]:
        return _coerce_float(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_blank(cls, value: Any) -> str:
        return "" if value is None else str(value)


class ChannelEntry(BaseModel):
    """A media channel and the calendar months (Jan=0) it is active in."""
    name: str = ""
    active_months: List[bool] = Field(default_factory=lambda: [False] * MONTHS_PER_YEAR)

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_blank(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("active_months")
    @classmethod
    def _twelve_months(cls, value: List[bool]) -> List[bool]:
        if len(value) != MONTHS_PER_YEAR:
            raise ValueError(f"active_months must have exactly {MONTHS_PER_YEAR} entries, got {len(value)}")
        return value


class PlatformRow(PlatformEntry):
    id: str = Field(default_factory=new_row_id)

    def to_entry(self) -> PlatformEntry:
        return PlatformEntry.model_validate(self.model_dump(exclude={"id"}))


class ChannelRow(ChannelEntry):
    id: str = Field(default_factory=new_row_id)

    def to_entry(self) -> ChannelEntry:
        return ChannelEntry.model_validate(self.model_dump(exclude={"id"}))


class OverallResults(BaseModel):
    total_impressions: int = 0
    total_reach: int = 0
    total_clicks: int = 0
    weighted_avg_ctr: float = 0.0


class _ReportFields(BaseModel):
    """Scalar report fields shared by the stored payload and the form.

    Missing, null or blank values fall back to the form defaults, which is how
    older or partially written documents load.
    """
    brand_name: str = ""
    primary_color: str = Field(DASHBOARD_DEFAULTS["primary_color"], pattern=COLOR_PATTERN)
    secondary_color: str = Field(DASHBOARD_DEFAULTS["secondary_color"], pattern=COLOR_PATTERN)
    start_month: str = ""
    end_month: str = ""
    year: int = Field(default_factory=lambda: today().year)

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {k: v for k, v in data.items() if v is not None}
        for key in ("primary_color", "secondary_color", "year"):
            if key in cleaned and not cleaned[key]:
                cleaned.pop(key)
        return cleaned

    @field_validator("start_month", "end_month")
    @classmethod
    def _known_month(cls, value: str) -> str:
        return _check_month(value)


class ReportPayload(_ReportFields):
    """The persisted unit: one document per saved report."""
    report_name: str = ""
    platforms: List[PlatformEntry] = Field(default_factory=list)
    channels: List[ChannelEntry] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "report_name": "[Acme] - [January-Mar 2025] - [07-APR-2025]",
            "brand_name": "Acme",
            "primary_color": "#667eea",
            "secondary_color": "#764ba2",
            "start_month": "January",
            "end_month": "March",
            "year": 2025,
            "platforms": [
                {"name": "Meta", "impressions": 100000, "reach": 60000, "clicks": 500, "ctr": 0.5}
            ],
            "channels": [
                {"name": "Social", "active_months": [True, True, True] + [False] * 9}
            ],
        }
    })


class ReportFormState(_ReportFields):
    """Editable form state as sent by the browser."""
    platforms: List[PlatformRow] = Field(default_factory=list)
    channels: List[ChannelRow] = Field(default_factory=list)


class ReportSummary(BaseModel):
    id: str
    name: str


class Notification(BaseModel):
    """Short-lived message shown to the user after an action."""
    message: str
    type: NotificationType


# ------------------------------ API responses ------------------------------ #

class StoreStatusResponse(ResponseBase):
    configured: bool


class ReportListResponse(ResponseBase):
    configured: bool
    reports: List[ReportSummary] = Field(default_factory=list)
    notification: Optional[Notification] = None


class ReportSavedResponse(ResponseBase):
    id: str
    report_name: str
    reports: List[ReportSummary] = Field(default_factory=list)
    notification: Notification


class ReportLoadedResponse(ResponseBase):
    id: str
    form: ReportFormState
    notification: Notification


class FormTemplateResponse(ResponseBase):
    form: ReportFormState
    months: List[str]
    years: List[int]


class DashboardSummaryResponse(ResponseBase):
    overall_results: OverallResults
    reporting_period: str
    first_active_month_index: int
    visible_months: List[str]

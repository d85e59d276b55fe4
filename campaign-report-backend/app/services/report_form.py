"""In-memory editable report form.

Every mutation swaps in a new list for the rows it touches; rows it does not
touch are carried over as the same objects, in the same order. Callers that
keep a reference to an older state therefore never see it change.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from app.models.schemas.reports import (
    ChannelRow,
    OverallResults,
    PlatformRow,
    ReportFormState,
    ReportPayload,
    MONTHS_PER_YEAR,
)
from app.services.metrics_aggregator import aggregate_platform_metrics
from app.services.report_naming import build_report_name
from app.utils.time import today

PLATFORM_FIELDS = frozenset({"name", "impressions", "reach", "clicks", "ctr"})
BRAND_FIELDS = frozenset({"brand_name", "primary_color", "secondary_color", "start_month", "end_month", "year"})


class ReportValidationError(ValueError):
    """Required fields are missing at save time."""

    def __init__(self, missing: list[str]):
        super().__init__("Brand Name and Start Month are required.")
        self.missing = missing


class RowNotFoundError(KeyError):
    pass


class ReportForm:
    """Form State Controller for one editing session."""

    def __init__(self, state: Optional[ReportFormState] = None):
        self.state = state if state is not None else self.blank_state()

    @staticmethod
    def blank_state() -> ReportFormState:
        """A new form: defaults plus one empty platform row and one empty channel row."""
        return ReportFormState(platforms=[PlatformRow()], channels=[ChannelRow()])

    @classmethod
    def from_payload(cls, payload: ReportPayload) -> "ReportForm":
        """Rebuild a form from a stored payload; rows get fresh local ids."""
        state = ReportFormState(
            brand_name=payload.brand_name,
            primary_color=payload.primary_color,
            secondary_color=payload.secondary_color,
            start_month=payload.start_month,
            end_month=payload.end_month,
            year=payload.year,
            platforms=[PlatformRow(**entry.model_dump()) for entry in payload.platforms],
            channels=[ChannelRow(**entry.model_dump()) for entry in payload.channels],
        )
        return cls(state)

    def _replace(self, **changes: Any) -> None:
        self.state = self.state.model_copy(update=changes)

    # ------------------------------ brand fields ------------------------------ #

    def set_brand(self, **fields: Any) -> None:
        unknown = set(fields) - BRAND_FIELDS
        if unknown:
            raise ValueError(f"Unknown form fields: {sorted(unknown)}")
        # Re-validate so month names, colors and defaults follow the schema rules.
        data = self.state.model_dump(exclude={"platforms", "channels"})
        data.update(fields)
        validated = ReportFormState.model_validate(data)
        self._replace(**{name: getattr(validated, name) for name in BRAND_FIELDS})

    # ------------------------------ platform rows ----------------------------- #

    def add_platform(self) -> str:
        row = PlatformRow()
        self._replace(platforms=[*self.state.platforms, row])
        return row.id

    def remove_platform(self, row_id: str) -> None:
        self._replace(platforms=[p for p in self.state.platforms if p.id != row_id])

    def update_platform(self, row_id: str, field: str, value: Any) -> None:
        if field not in PLATFORM_FIELDS:
            raise ValueError(f"Unknown platform field '{field}'")
        if not any(p.id == row_id for p in self.state.platforms):
            raise RowNotFoundError(row_id)
        self._replace(platforms=[
            PlatformRow.model_validate({**p.model_dump(), field: value}) if p.id == row_id else p
            for p in self.state.platforms
        ])

    # ------------------------------ channel rows ------------------------------ #

    def add_channel(self) -> str:
        row = ChannelRow()
        self._replace(channels=[*self.state.channels, row])
        return row.id

    def remove_channel(self, row_id: str) -> None:
        self._replace(channels=[c for c in self.state.channels if c.id != row_id])

    def rename_channel(self, row_id: str, name: str) -> None:
        if not any(c.id == row_id for c in self.state.channels):
            raise RowNotFoundError(row_id)
        self._replace(channels=[
            c.model_copy(update={"name": name}) if c.id == row_id else c
            for c in self.state.channels
        ])

    def toggle_month(self, row_id: str, month_index: int) -> None:
        if not 0 <= month_index < MONTHS_PER_YEAR:
            raise IndexError(f"month_index must be in 0..{MONTHS_PER_YEAR - 1}, got {month_index}")
        if not any(c.id == row_id for c in self.state.channels):
            raise RowNotFoundError(row_id)

        def _toggled(channel: ChannelRow) -> ChannelRow:
            months = list(channel.active_months)
            months[month_index] = not months[month_index]
            return channel.model_copy(update={"active_months": months})

        self._replace(channels=[
            _toggled(c) if c.id == row_id else c for c in self.state.channels
        ])

    # --------------------------------- reads ---------------------------------- #

    def missing_required_fields(self) -> list[str]:
        missing = []
        if not self.state.brand_name.strip():
            missing.append("brand_name")
        if not self.state.start_month:
            missing.append("start_month")
        return missing

    def validate_for_save(self) -> None:
        missing = self.missing_required_fields()
        if missing:
            raise ReportValidationError(missing)

    def report_name(self, on: Optional[date] = None) -> str:
        s = self.state
        return build_report_name(s.brand_name, s.start_month, s.end_month, s.year, on or today())

    def payload(self, on: Optional[date] = None) -> ReportPayload:
        """Snapshot for persistence: local row ids dropped, report name derived for ``on``."""
        s = self.state
        return ReportPayload(
            report_name=self.report_name(on),
            brand_name=s.brand_name,
            primary_color=s.primary_color,
            secondary_color=s.secondary_color,
            start_month=s.start_month,
            end_month=s.end_month,
            year=s.year,
            platforms=[p.to_entry() for p in s.platforms],
            channels=[c.to_entry() for c in s.channels],
        )

    def overall_results(self) -> OverallResults:
        return aggregate_platform_metrics(self.state.platforms)

    def snapshot(self, on: Optional[date] = None) -> tuple[ReportPayload, OverallResults]:
        return self.payload(on), self.overall_results()

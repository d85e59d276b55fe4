"""Overall results for a report: summed platform metrics and the blended CTR.

The blended CTR is clicks over impressions across all platforms, so platforms
with more impressions dominate it. It is not the mean of per-platform CTRs.

Pure functions, no error conditions: null or non-numeric metrics count as 0.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from app.models.schemas.reports import OverallResults


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    try:
        number = float(str(value).strip().replace(",", ""))
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def _metric(entry: Any, name: str) -> float:
    if isinstance(entry, Mapping):
        return _as_number(entry.get(name))
    return _as_number(getattr(entry, name, None))


def weighted_ctr(total_clicks: float, total_impressions: float) -> float:
    if total_impressions <= 0:
        return 0.0
    return total_clicks / total_impressions * 100


def aggregate_platform_metrics(platforms: Iterable[Any]) -> OverallResults:
    """Reduce platform entries (schemas or plain dicts) into OverallResults."""
    total_impressions = 0
    total_reach = 0
    total_clicks = 0
    for entry in platforms:
        total_impressions += _metric(entry, "impressions")
        total_reach += _metric(entry, "reach")
        total_clicks += _metric(entry, "clicks")

    return OverallResults(
        total_impressions=int(total_impressions),
        total_reach=int(total_reach),
        total_clicks=int(total_clicks),
        weighted_avg_ctr=weighted_ctr(total_clicks, total_impressions),
    )

__all__ = ["aggregate_platform_metrics", "weighted_ctr"]

"""Self-contained HTML dashboard for a campaign report.

``generate_dashboard_html`` is a pure function of its ``DashboardData``: no
clock, no I/O, no external assets. The same input always yields the same
bytes, so callers may cache or diff the output.

Number formatting rules:
  - platform table metrics: grouped thousands, zero/null shown as ``-``
  - CTR values: two decimals plus ``%``
  - overall totals: each total picks its own unit (M >= 1,000,000,
    K >= 10,000, else a plain grouped integer)
"""
from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from app.models.schemas.reports import OverallResults
from app.utils.time import MONTHS

_e = html.escape

MILLION = 1_000_000
UNIT_K_THRESHOLD = 10_000


@dataclass(frozen=True)
class DashboardData:
    brand_name: str
    primary_color: str
    secondary_color: str
    reporting_period: str
    overall_results: OverallResults
    platforms: Sequence[Any] = field(default_factory=tuple)
    channels: Sequence[Any] = field(default_factory=tuple)
    first_active_month_index: int = 0


# ----------------------------- formatting helpers ----------------------------- #

def _value(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def format_number(num: float | None) -> str:
    if not num:
        return "-"
    return f"{int(num):,}"


def get_display_unit(value: float) -> str:
    if value >= MILLION:
        return "M"
    if value >= UNIT_K_THRESHOLD:
        return "K"
    return ""


def format_value(value: float, unit: str) -> str:
    if unit == "M":
        return f"{value / MILLION:.2f}M"
    if unit == "K":
        return f"{value / 1_000:.1f}K"
    return format_number(value)


def format_total(value: float) -> str:
    return format_value(value, get_display_unit(value))


def format_percent(value: float | None) -> str:
    return f"{(value or 0):.2f}%"


def first_active_month_index(channels: Sequence[Any]) -> int:
    """Lowest month index any channel is active in; 0 when none are."""
    for month_index in range(len(MONTHS)):
        for channel in channels:
            months = _value(channel, "active_months") or ()
            if month_index < len(months) and months[month_index]:
                return month_index
    return 0


def visible_months(start_index: int) -> list[str]:
    return list(MONTHS[start_index:])


# --------------------------------- rendering ---------------------------------- #

def _render_styles(primary: str, secondary: str, month_count: int) -> str:
    gradient = f"linear-gradient(135deg, {primary} 0%, {secondary} 100%)"
    return f"""
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{ font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; background: linear-gradient(135deg, #f5f7fa 0%, #c3cfe2 100%); min-height: 100vh; padding: 20px; }}
        .dashboard {{ max-width: 1400px; margin: 0 auto; background: white; border-radius: 20px; box-shadow: 0 20px 40px rgba(0,0,0,0.1); overflow: hidden; }}
        .header {{ background: {gradient}; color: white; padding: 30px 40px; text-align: center; }}
        .header h1 {{ font-size: 2.5rem; font-weight: 700; margin-bottom: 10px; text-shadow: 0 2px 4px rgba(0,0,0,0.3); }}
        .header .subtitle {{ font-size: 1.2rem; opacity: 0.9; font-weight: 300; }}
        .content {{ padding: 40px; }}
        .section {{ margin-bottom: 50px; }}
        .section-title {{ font-size: 1.8rem; color: #1e3c72; margin-bottom: 25px; font-weight: 600; border-left: 4px solid {secondary}; padding-left: 20px; }}
        .accent-bar {{ height: 4px; width: 80px; border-radius: 2px; background: {gradient}; margin: -15px 0 25px 24px; }}
        .performance-table {{ background: white; border-radius: 15px; overflow: hidden; box-shadow: 0 10px 30px rgba(0,0,0,0.1); }}
        table {{ width: 100%; border-collapse: collapse; }}
        th {{ background: linear-gradient(135deg, #1e3c72 0%, #2a5298 100%); color: white; padding: 20px 15px; text-align: left; font-weight: 600; font-size: 1rem; }}
        td {{ padding: 20px 15px; border-bottom: 1px solid #f0f0f0; font-size: 1rem; }}
        tr:last-child td {{ border-bottom: none; }}
        tr:hover {{ background-color: #f8f9ff; }}
        .ctr-highlight {{ background: {gradient}; color: white; padding: 5px 12px; border-radius: 20px; font-weight: 600; display: inline-block; min-width: 60px; text-align: center; }}
        .metrics-grid {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr)); gap: 25px; }}
        .metric-card {{ background: {gradient}; color: white; padding: 30px; border-radius: 15px; text-align: center; transition: all 0.3s ease; }}
        .metric-card:hover {{ transform: translateY(-5px); box-shadow: 0 15px 35px rgba(0,0,0,0.25); }}
        .metric-value {{ font-size: 2.2rem; font-weight: 700; margin-bottom: 10px; }}
        .metric-label {{ font-size: 1rem; opacity: 0.9; }}
        .timeline-container {{ background: white; border-radius: 15px; padding: 30px; box-shadow: 0 10px 30px rgba(0,0,0,0.1); }}
        .timeline-header {{ display: grid; grid-template-columns: 150px 1fr; gap: 10px; margin-bottom: 20px; border-bottom: 2px solid #e8ecf4; padding-bottom: 15px; }}
        .channel-label {{ font-weight: 600; color: #1e3c72; font-size: 1.1rem; align-self: end; }}
        .month-labels, .timeline-months {{ display: grid; grid-template-columns: repeat({month_count}, 1fr); gap: 5px; }}
        .month {{ text-align: center; font-weight: 600; color: #1e3c72; background: #f8f9ff; padding: 8px; border-radius: 8px; font-size: 0.9rem; }}
        .timeline-row {{ display: grid; grid-template-columns: 150px 1fr; gap: 10px; margin-bottom: 15px; align-items: center; }}
        .channel-name {{ font-weight: 600; color: #333; font-size: 1rem; }}
        .month-status {{ text-align: center; padding: 12px 0; border-radius: 8px; font-weight: bold; font-size: 1.1rem; }}
        .month-status.active, .legend-indicator.active {{ background: #28a745; color: white; }}
        .month-status.inactive, .legend-indicator.inactive {{ background: #e9ecef; color: #6c757d; }}
        .timeline-legend {{ display: flex; justify-content: center; gap: 30px; margin-top: 25px; padding-top: 20px; border-top: 1px solid #e8ecf4; }}
        .legend-item {{ display: flex; align-items: center; gap: 8px; }}
        .legend-indicator {{ width: 20px; height: 20px; border-radius: 4px; }}
        @media (max-width: 1200px) {{
            .timeline-header, .timeline-row {{ grid-template-columns: 120px 1fr; }}
        }}
        @media (max-width: 768px) {{
            .header h1 {{ font-size: 2rem; }}
            .content {{ padding: 20px; }}
            .timeline-header, .timeline-row {{ grid-template-columns: 100px 1fr; gap: 5px; }}
            .month, .month-status {{ font-size: 0.8rem; padding: 6px 2px; }}
            .channel-label, .channel-name {{ font-size: 0.9rem; }}
        }}"""


def _render_platform_rows(platforms: Sequence[Any]) -> str:
    rows = []
    for platform in platforms:
        name = _e(str(_value(platform, "name") or ""))
        impressions, reach, clicks = (format_number(_value(platform, key)) for key in ("impressions", "reach", "clicks"))
        ctr = format_percent(_value(platform, "ctr"))
        rows.append(f"""
                            <tr>
                                <td><strong>{name}</strong></td>
                                <td>{impressions}</td>
                                <td>{reach}</td>
                                <td>{clicks}</td>
                                <td><span class="ctr-highlight">{ctr}</span></td>
                            </tr>""")
    return "".join(rows)


def _render_metric_card(value: str, label: str) -> str:
    return f"""
                    <div class="metric-card">
                        <div class="metric-value">{value}</div>
                        <div class="metric-label">{label}</div>
                    </div>"""


def _render_month_cell(active: bool) -> str:
    status, mark = ("active", "✓") if active else ("inactive", "-")
    return f'\n                            <div class="month-status {status}">{mark}</div>'


def _render_timeline_rows(channels: Sequence[Any], start_index: int) -> str:
    rows = []
    for channel in channels:
        name = _e(str(_value(channel, "name") or ""))
        months = list(_value(channel, "active_months") or ())[start_index:]
        cells = "".join(_render_month_cell(bool(active)) for active in months)
        rows.append(f"""
                    <div class="timeline-row">
                        <div class="channel-name">{name}</div>
                        <div class="timeline-months">{cells}
                        </div>
                    </div>""")
    return "".join(rows)


def generate_dashboard_html(data: DashboardData) -> str:
    """Render the full dashboard document for ``data``."""
    start_index = min(max(data.first_active_month_index, 0), len(MONTHS) - 1)
    months = visible_months(start_index)
    results = data.overall_results
    brand = _e(data.brand_name)

    styles = _render_styles(_e(data.primary_color), _e(data.secondary_color), len(months))
    month_labels = "".join(f'<div class="month">{month[:3]}</div>' for month in months)
    metric_cards = "".join([
        _render_metric_card(format_total(results.total_impressions), "Total Impressions"),
        _render_metric_card(format_total(results.total_reach), "Unique Users Reached"),
        _render_metric_card(format_total(results.total_clicks), "Total Clicks"),
        _render_metric_card(format_percent(results.weighted_avg_ctr), "Weighted Average CTR"),
    ])

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{brand} Digital Performance Dashboard</title>
    <style>{styles}
    </style>
</head>
<body>
    <div class="dashboard">
        <div class="header">
            <h1>{brand}</h1>
            <div class="subtitle">Digital Performance Dashboard | {_e(data.reporting_period)}</div>
        </div>

        <div class="content">
            <div class="section">
                <h2 class="section-title">Platform Performance</h2>
                <div class="accent-bar"></div>
                <div class="performance-table">
                    <table>
                        <thead>
                            <tr>
                                <th>Platform</th>
                                <th>Impressions</th>
                                <th>Reach</th>
                                <th>Clicks</th>
                                <th>CTR</th>
                            </tr>
                        </thead>
                        <tbody>{_render_platform_rows(data.platforms)}
                        </tbody>
                    </table>
                </div>
            </div>

            <div class="section">
                <h2 class="section-title">Overall Results</h2>
                <div class="accent-bar"></div>
                <div class="metrics-grid">{metric_cards}
                </div>
            </div>

            <div class="section">
                <h2 class="section-title">Year to Go - Media Timeline</h2>
                <div class="accent-bar"></div>
                <div class="timeline-container">
                    <div class="timeline-header">
                        <div class="channel-label">Channel</div>
                        <div class="month-labels">{month_labels}</div>
                    </div>{_render_timeline_rows(data.channels, start_index)}
                    <div class="timeline-legend">
                        <div class="legend-item">
                            <div class="legend-indicator active"></div>
                            <span>Active</span>
                        </div>
                        <div class="legend-item">
                            <div class="legend-indicator inactive"></div>
                            <span>Paused</span>
                        </div>
                    </div>
                </div>
            </div>
        </div>
    </div>
</body>
</html>
"""

__all__ = [
    "DashboardData",
    "generate_dashboard_html",
    "first_active_month_index",
    "visible_months",
    "format_number",
    "format_value",
    "format_total",
    "format_percent",
    "get_display_unit",
]

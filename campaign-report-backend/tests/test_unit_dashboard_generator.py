from app.models.schemas.reports import ChannelEntry, OverallResults, PlatformEntry
from app.services.dashboard_generator import (
    DashboardData,
    first_active_month_index,
    format_number,
    format_percent,
    format_total,
    generate_dashboard_html,
    get_display_unit,
    visible_months,
)
from app.services.metrics_aggregator import aggregate_platform_metrics


def _data(**overrides) -> DashboardData:
    platforms = overrides.pop("platforms", [
        PlatformEntry(name="Meta", impressions=100000, reach=60000, clicks=500, ctr=0.5),
        PlatformEntry(name="TikTok", impressions=50000, reach=30000, clicks=1000, ctr=2.0),
    ])
    channels = overrides.pop("channels", [
        ChannelEntry(name="Social", active_months=[False, False, True] + [False] * 9),
    ])
    values = dict(
        brand_name="Acme",
        primary_color="#667eea",
        secondary_color="#764ba2",
        reporting_period="January - March 2025",
        overall_results=aggregate_platform_metrics(platforms),
        platforms=platforms,
        channels=channels,
        first_active_month_index=first_active_month_index(channels),
    )
    values.update(overrides)
    return DashboardData(**values)


def test_display_units():
    assert format_total(999) == "999"
    assert format_total(15000) == "15.0K"
    assert format_total(2500000) == "2.50M"
    assert get_display_unit(9999) == ""
    assert get_display_unit(10000) == "K"
    assert get_display_unit(1000000) == "M"


def test_number_and_percent_formatting():
    assert format_number(1234567) == "1,234,567"
    assert format_number(0) == "-"
    assert format_number(None) == "-"
    assert format_percent(1) == "1.00%"
    assert format_percent(None) == "0.00%"


def test_first_active_month_index():
    assert first_active_month_index([]) == 0
    assert first_active_month_index([ChannelEntry(name="TV")]) == 0
    channels = [
        ChannelEntry(name="TV", active_months=[False] * 5 + [True] + [False] * 6),
        {"name": "Radio", "active_months": [False] * 3 + [True] + [False] * 8},
    ]
    assert first_active_month_index(channels) == 3


def test_visible_months_start_at_index():
    assert visible_months(0)[0] == "January"
    assert len(visible_months(0)) == 12
    assert visible_months(9) == ["October", "November", "December"]


def test_rendering_is_pure():
    data = _data()
    assert generate_dashboard_html(data) == generate_dashboard_html(data)


def test_document_structure():
    html = generate_dashboard_html(_data())
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Acme Digital Performance Dashboard</title>" in html
    assert "Digital Performance Dashboard | January - March 2025" in html
    for title in ("Platform Performance", "Overall Results", "Year to Go - Media Timeline"):
        assert title in html
    for label in ("Total Impressions", "Unique Users Reached", "Total Clicks", "Weighted Average CTR"):
        assert label in html
    assert "Active" in html and "Paused" in html
    assert "linear-gradient(135deg, #667eea 0%, #764ba2 100%)" in html


def test_overall_results_values():
    html = generate_dashboard_html(_data())
    assert "150.0K" in html
    assert "90.0K" in html
    assert "1,500" in html
    assert "1.00%" in html


def test_platform_rows():
    html = generate_dashboard_html(_data(platforms=[PlatformEntry(name="Meta", impressions=1234, clicks=0, ctr=0.456)]))
    assert "<td><strong>Meta</strong></td>" in html
    assert "<td>1,234</td>" in html
    assert "<td>-</td>" in html
    assert '<span class="ctr-highlight">0.46%</span>' in html


def test_timeline_starts_at_first_active_month():
    html = generate_dashboard_html(_data())
    assert '<div class="month">Mar</div>' in html
    assert '<div class="month">Jan</div>' not in html
    assert html.count('class="month-status ') == 10
    assert "repeat(10, 1fr)" in html


def test_all_inactive_channel_shows_full_year():
    channels = [ChannelEntry(name="Social")]
    html = generate_dashboard_html(_data(channels=channels))
    assert '<div class="month">Jan</div>' in html
    assert html.count('class="month-status inactive"') == 12
    assert "✓" not in html


def test_no_rows_still_renders():
    html = generate_dashboard_html(_data(platforms=[], channels=[], overall_results=OverallResults()))
    assert "Overall Results" in html
    assert "0.00%" in html
    assert html.count('<div class="metric-value">-</div>') == 3


def test_text_is_escaped():
    html = generate_dashboard_html(_data(
        brand_name="<script>alert(1)</script>",
        platforms=[PlatformEntry(name="A & B")],
    ))
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "A &amp; B" in html

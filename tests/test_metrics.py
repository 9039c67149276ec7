import pytest
from pydantic import ValidationError

from restaurantiq.schemas import MonthlyData
from restaurantiq.services.errors import AnalyticsError, DuplicatePeriodError
from restaurantiq.services.metrics import (
    build_dashboard_overview,
    calculate_process_metrics,
    health_status,
    monthly_trend,
    order_months,
    period_trend,
    process_flow,
    round_half_up,
    total_cost,
    weekly_breakdown,
)


def test_process_metrics_for_a_month(month: MonthlyData) -> None:
    metrics = calculate_process_metrics(month)

    assert total_cost(month) == pytest.approx(96000)
    assert metrics.total_cost == pytest.approx(96000)
    assert metrics.gross_profit == pytest.approx(4000)
    assert metrics.gross_margin == pytest.approx(4.0)
    assert metrics.food_cost_pct == pytest.approx(35.0)
    assert metrics.labour_cost_pct == pytest.approx(32.0)
    assert metrics.energy_cost_pct == pytest.approx(9.0)
    assert metrics.waste_pct == pytest.approx(4.0)


def test_process_metrics_with_zero_revenue_reports_zero_percentages(make_month) -> None:
    metrics = calculate_process_metrics(
        make_month(revenue=0, delivery_revenue=0, dine_in_revenue=0, takeaway_revenue=0)
    )

    assert metrics.gross_profit == pytest.approx(-96000)
    assert metrics.gross_margin == 0
    assert metrics.food_cost_pct == 0
    assert metrics.waste_pct == 0


def test_process_metrics_of_nothing_is_none() -> None:
    assert calculate_process_metrics(None) is None


def test_month_names_are_normalised(make_month) -> None:
    assert make_month(month="  march ").month == "March"
    with pytest.raises(ValidationError):
        make_month(month="Marchember")


def test_order_months_sorts_chronologically(make_month) -> None:
    january = make_month(month="January", year=2026)
    november = make_month(month="November", year=2025)
    december = make_month(month="December", year=2025)

    ordered = order_months([january, december, november])

    assert [entry.period_label for entry in ordered] == ["Nov 2025", "Dec 2025", "Jan 2026"]


def test_order_months_rejects_duplicate_periods(make_month) -> None:
    with pytest.raises(DuplicatePeriodError):
        order_months([make_month(), make_month(revenue=90000, dine_in_revenue=70000)])


def test_period_trend_direction_and_magnitude() -> None:
    up = period_trend(110, 100)
    down = period_trend(90, 100)

    assert up.direction == "up"
    assert up.change_percent == pytest.approx(10.0)
    assert down.direction == "down"
    assert down.change_percent == pytest.approx(10.0)
    assert period_trend(100, 100).direction == "up"
    assert period_trend(100, 0) is None
    assert period_trend(100, None) is None


@pytest.mark.parametrize(
    ("metric", "value", "expected"),
    [
        ("food_cost_pct", 32, "good"),
        ("food_cost_pct", 35, "warning"),
        ("food_cost_pct", 38.5, "critical"),
        ("waste_pct", 5, "warning"),
        ("gross_margin", 65, "good"),
        ("gross_margin", 50, "warning"),
        ("gross_margin", 4, "critical"),
        ("repeat_customer_rate", 30, "warning"),
    ],
)
def test_health_status_bands(metric: str, value: float, expected: str) -> None:
    assert health_status(metric, value) == expected


def test_health_status_unknown_metric() -> None:
    with pytest.raises(AnalyticsError):
        health_status("covers", 10)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.49) == 0


def test_weekly_breakdown_spreads_the_month(month: MonthlyData) -> None:
    weeks = weekly_breakdown(calculate_process_metrics(month))

    assert [week.week for week in weeks] == ["Week 1", "Week 2", "Week 3", "Week 4"]
    assert weeks[0].revenue == 21174
    assert weeks[2].revenue == 24856
    assert weeks[0].costs == 20327
    assert weeks[0].profit == 847


def test_process_flow_attributes_costs_to_stages(month: MonthlyData) -> None:
    flow = process_flow(month)
    stages = {stage.id: stage for stage in flow.stages}

    assert stages["procurement"].cost == pytest.approx(35000)
    assert stages["procurement"].percent_of_revenue == pytest.approx(35.0)
    assert stages["cooking"].cost == pytest.approx(9000)
    assert stages["aftersales"].cost == pytest.approx(4000)
    assert len(flow.links) == 6
    assert {(link.source, link.target) for link in flow.links} >= {("service", "waste"), ("service", "aftersales")}


def test_process_flow_without_data_is_zeroed() -> None:
    flow = process_flow(None)

    assert all(stage.cost == 0 and stage.percent_of_revenue == 0 for stage in flow.stages)


def test_monthly_trend_uses_period_labels(make_month) -> None:
    points = monthly_trend([make_month(month="February"), make_month(month="January")])

    assert [point.label for point in points] == ["Jan 2026", "Feb 2026"]
    assert points[0].costs == pytest.approx(96000)
    assert points[0].profit == pytest.approx(4000)


def test_dashboard_overview_compares_latest_with_previous(make_month) -> None:
    previous = make_month(month="December", year=2025, revenue=80000, dine_in_revenue=60000)
    latest = make_month()

    overview = build_dashboard_overview([latest, previous])

    assert overview.period == "Jan 2026"
    assert overview.metrics.revenue == pytest.approx(100000)
    assert overview.previous_metrics.revenue == pytest.approx(80000)
    assert overview.revenue_trend.direction == "up"
    assert overview.revenue_trend.change_percent == pytest.approx(25.0)
    assert overview.margin_trend is not None
    assert overview.health["food_cost_pct"] == "warning"
    assert overview.health["gross_margin"] == "critical"
    assert [item.name for item in overview.revenue_breakdown] == ["Dine-In", "Delivery", "Takeaway"]
    assert len(overview.cost_breakdown) == 8
    assert len(overview.weekly) == 4
    assert len(overview.trend) == 2


def test_dashboard_overview_single_month_has_no_trends(month: MonthlyData) -> None:
    overview = build_dashboard_overview([month])

    assert overview.previous_metrics is None
    assert overview.revenue_trend is None
    assert overview.margin_trend is None


def test_dashboard_overview_without_data() -> None:
    overview = build_dashboard_overview([])

    assert overview.metrics is None
    assert overview.weekly == []
    assert overview.trend == []
    assert overview.health == {}

"""Monthly profit-and-loss metrics behind the dashboard."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel

from restaurantiq.schemas import MonthlyData, Restaurant
from restaurantiq.services.errors import AnalyticsError, DuplicatePeriodError
from restaurantiq.services.reference_data import (
    COST_FIELDS,
    HEALTH_BANDS,
    PROCESS_LINKS,
    PROCESS_STAGES,
    WEEKLY_SPLIT_FACTORS,
    WEEKS_PER_MONTH,
)

HealthStatus = Literal["good", "warning", "critical"]


class ProcessMetrics(BaseModel):
    """Headline figures for a single month."""

    revenue: float
    total_cost: float
    gross_profit: float
    gross_margin: float
    food_cost_pct: float
    labour_cost_pct: float
    energy_cost_pct: float
    waste_pct: float


class PeriodTrend(BaseModel):
    direction: Literal["up", "down"]
    change_percent: float


class NamedAmount(BaseModel):
    name: str
    value: float


class MonthlyPoint(BaseModel):
    label: str
    revenue: float
    costs: float
    profit: float


class WeeklyPoint(BaseModel):
    week: str
    revenue: int
    costs: int
    profit: int


class ProcessStageCost(BaseModel):
    id: str
    label: str
    description: str
    cost_label: str
    cost: float
    percent_of_revenue: float


class ProcessLink(BaseModel):
    source: str
    target: str


class ProcessFlow(BaseModel):
    stages: List[ProcessStageCost]
    links: List[ProcessLink]


class DashboardOverview(BaseModel):
    restaurant: Optional[Restaurant] = None
    period: Optional[str] = None
    metrics: Optional[ProcessMetrics] = None
    previous_metrics: Optional[ProcessMetrics] = None
    revenue_trend: Optional[PeriodTrend] = None
    margin_trend: Optional[PeriodTrend] = None
    health: Dict[str, HealthStatus] = {}
    cost_breakdown: List[NamedAmount] = []
    revenue_breakdown: List[NamedAmount] = []
    weekly_average: Optional[WeeklyPoint] = None
    weekly: List[WeeklyPoint] = []
    trend: List[MonthlyPoint] = []


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""

    return int(math.floor(value + 0.5))


def percent_of(part: float, whole: float) -> float:
    """``part`` as a percentage of ``whole``; 0 when ``whole`` is not positive."""

    if whole <= 0:
        return 0.0
    return part * 100 / whole


def total_cost(month: MonthlyData) -> float:
    return sum(getattr(month, field) for field in COST_FIELDS)


def calculate_process_metrics(month: Optional[MonthlyData]) -> Optional[ProcessMetrics]:
    if month is None:
        return None

    total = total_cost(month)
    profit = month.revenue - total
    return ProcessMetrics(
        revenue=month.revenue,
        total_cost=total,
        gross_profit=profit,
        gross_margin=percent_of(profit, month.revenue),
        food_cost_pct=percent_of(month.food_cost, month.revenue),
        labour_cost_pct=percent_of(month.labour_cost, month.revenue),
        energy_cost_pct=percent_of(month.energy_cost, month.revenue),
        waste_pct=percent_of(month.waste_cost, month.revenue),
    )


def order_months(series: Iterable[MonthlyData]) -> List[MonthlyData]:
    """Sort a monthly series oldest first, rejecting repeated periods."""

    seen: Dict[Tuple[int, int, int], MonthlyData] = {}
    for entry in series:
        key = (entry.restaurant_id, entry.year, entry.month_number)
        if key in seen:
            raise DuplicatePeriodError(
                f"Duplicate monthly data for {entry.month} {entry.year} (restaurant {entry.restaurant_id})"
            )
        seen[key] = entry
    return sorted(seen.values(), key=lambda entry: (entry.year, entry.month_number))


def latest_two(series: Sequence[MonthlyData]) -> Tuple[Optional[MonthlyData], Optional[MonthlyData]]:
    ordered = order_months(series)
    latest = ordered[-1] if ordered else None
    previous = ordered[-2] if len(ordered) > 1 else None
    return latest, previous


def period_trend(current: float, previous: Optional[float]) -> Optional[PeriodTrend]:
    if previous is None or previous == 0:
        return None
    diff = (current - previous) / previous * 100
    return PeriodTrend(direction="up" if diff >= 0 else "down", change_percent=abs(diff))


def health_status(metric: str, value: float) -> HealthStatus:
    try:
        good, warning, higher_is_better = HEALTH_BANDS[metric]
    except KeyError as exc:
        raise AnalyticsError(f"No health band defined for '{metric}'") from exc

    if higher_is_better:
        if value >= good:
            return "good"
        if value >= warning:
            return "warning"
        return "critical"
    if value <= good:
        return "good"
    if value <= warning:
        return "warning"
    return "critical"


def monthly_trend(series: Iterable[MonthlyData]) -> List[MonthlyPoint]:
    points: List[MonthlyPoint] = []
    for month in order_months(series):
        total = total_cost(month)
        points.append(
            MonthlyPoint(label=month.period_label, revenue=month.revenue, costs=total, profit=month.revenue - total)
        )
    return points


def cost_breakdown(month: MonthlyData) -> List[NamedAmount]:
    return [NamedAmount(name=label, value=getattr(month, field)) for field, label in COST_FIELDS.items()]


def revenue_breakdown(month: MonthlyData) -> List[NamedAmount]:
    return [
        NamedAmount(name="Dine-In", value=month.dine_in_revenue),
        NamedAmount(name="Delivery", value=month.delivery_revenue),
        NamedAmount(name="Takeaway", value=month.takeaway_revenue),
    ]


def weekly_average(metrics: ProcessMetrics) -> WeeklyPoint:
    return WeeklyPoint(
        week="Average",
        revenue=round_half_up(metrics.revenue / WEEKS_PER_MONTH),
        costs=round_half_up(metrics.total_cost / WEEKS_PER_MONTH),
        profit=round_half_up(metrics.gross_profit / WEEKS_PER_MONTH),
    )


def weekly_breakdown(metrics: ProcessMetrics) -> List[WeeklyPoint]:
    """Spread a month over four illustrative weeks."""

    weekly_revenue = metrics.revenue / WEEKS_PER_MONTH
    weekly_cost = metrics.total_cost / WEEKS_PER_MONTH
    weekly_profit = metrics.gross_profit / WEEKS_PER_MONTH
    return [
        WeeklyPoint(
            week=f"Week {index}",
            revenue=round_half_up(weekly_revenue * factor),
            costs=round_half_up(weekly_cost * factor),
            profit=round_half_up(weekly_profit * factor),
        )
        for index, factor in enumerate(WEEKLY_SPLIT_FACTORS, start=1)
    ]


def process_flow(month: Optional[MonthlyData]) -> ProcessFlow:
    stages: List[ProcessStageCost] = []
    for stage in PROCESS_STAGES:
        cost = float(getattr(month, stage["cost_field"])) if month is not None else 0.0
        revenue = month.revenue if month is not None else 0.0
        stages.append(
            ProcessStageCost(
                id=stage["id"],
                label=stage["label"],
                description=stage["description"],
                cost_label=stage["cost_label"],
                cost=cost,
                percent_of_revenue=percent_of(cost, revenue),
            )
        )
    links = [ProcessLink(source=source, target=target) for source, target in PROCESS_LINKS]
    return ProcessFlow(stages=stages, links=links)


def build_dashboard_overview(
    series: Sequence[MonthlyData],
    restaurant: Optional[Restaurant] = None,
) -> DashboardOverview:
    latest, previous = latest_two(series)
    if latest is None:
        return DashboardOverview(restaurant=restaurant)

    metrics = calculate_process_metrics(latest)
    previous_metrics = calculate_process_metrics(previous)
    health = {
        "food_cost_pct": health_status("food_cost_pct", metrics.food_cost_pct),
        "labour_cost_pct": health_status("labour_cost_pct", metrics.labour_cost_pct),
        "energy_cost_pct": health_status("energy_cost_pct", metrics.energy_cost_pct),
        "waste_pct": health_status("waste_pct", metrics.waste_pct),
        "gross_margin": health_status("gross_margin", metrics.gross_margin),
        "repeat_customer_rate": health_status("repeat_customer_rate", latest.repeat_customer_rate),
    }

    return DashboardOverview(
        restaurant=restaurant,
        period=latest.period_label,
        metrics=metrics,
        previous_metrics=previous_metrics,
        revenue_trend=period_trend(metrics.revenue, previous_metrics.revenue if previous_metrics else None),
        margin_trend=period_trend(
            metrics.gross_margin, previous_metrics.gross_margin if previous_metrics else None
        ),
        health=health,
        cost_breakdown=cost_breakdown(latest),
        revenue_breakdown=revenue_breakdown(latest),
        weekly_average=weekly_average(metrics),
        weekly=weekly_breakdown(metrics),
        trend=monthly_trend(series),
    )


__all__ = [
    "DashboardOverview",
    "HealthStatus",
    "MonthlyPoint",
    "NamedAmount",
    "PeriodTrend",
    "ProcessFlow",
    "ProcessMetrics",
    "WeeklyPoint",
    "build_dashboard_overview",
    "calculate_process_metrics",
    "cost_breakdown",
    "health_status",
    "latest_two",
    "monthly_trend",
    "order_months",
    "percent_of",
    "period_trend",
    "process_flow",
    "revenue_breakdown",
    "round_half_up",
    "total_cost",
    "weekly_average",
    "weekly_breakdown",
]

"""Cost-versus-target analysis and direct/indirect/overhead classification."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from restaurantiq.schemas import CostCategory, Ingredient, MonthlyData
from restaurantiq.services.metrics import latest_two, order_months, percent_of, total_cost
from restaurantiq.services.reference_data import COST_FIELDS, COST_TARGETS

CLASSIFICATIONS = ("direct", "indirect", "overhead")
CLASSIFICATION_LABELS = {
    "direct": "Direct Costs",
    "indirect": "Indirect Costs",
    "overhead": "Overhead Costs",
}
_TRENDED_COSTS = ("food_cost", "labour_cost", "energy_cost", "waste_cost")


class CostTargetStatus(BaseModel):
    key: str
    name: str
    amount: float
    percent_of_revenue: float
    target: float
    over_target: bool
    gauge_percent: float


class CostPercentPoint(BaseModel):
    label: str
    food: float
    labour: float
    energy: float
    waste: float


class MarginPoint(BaseModel):
    label: str
    margin: float
    revenue: float


class CostAnalysis(BaseModel):
    period: Optional[str] = None
    costs: List[CostTargetStatus] = []
    percent_trend: List[CostPercentPoint] = []
    margin_trend: List[MarginPoint] = []


class ClassifiedCost(BaseModel):
    key: str
    name: str
    amount: float


class ClassificationGroup(BaseModel):
    classification: str
    label: str
    total: float
    share_of_cost: float
    categories: List[ClassifiedCost] = []


class ClassificationTrendPoint(BaseModel):
    label: str
    direct: float
    indirect: float
    overhead: float
    total: float


class CostClassification(BaseModel):
    period: Optional[str] = None
    revenue: float = 0.0
    total_cost: float = 0.0
    profit: float = 0.0
    groups: List[ClassificationGroup] = []
    pie: List[ClassificationGroup] = []
    trend: List[ClassificationTrendPoint] = []
    ingredient_counts: Dict[str, int] = {}


def gauge_fill(percent: float, target: float) -> float:
    """How full a target gauge is drawn; 150% of the target fills it."""

    if target <= 0:
        return 100.0
    return min(percent / (target * 1.5) * 100, 100.0)


def analyse_costs(series: Sequence[MonthlyData]) -> CostAnalysis:
    latest, _ = latest_two(series)
    if latest is None:
        return CostAnalysis()

    costs: List[CostTargetStatus] = []
    for key, name in COST_FIELDS.items():
        amount = getattr(latest, key)
        pct = percent_of(amount, latest.revenue)
        target = COST_TARGETS[key]
        costs.append(
            CostTargetStatus(
                key=key,
                name=name,
                amount=amount,
                percent_of_revenue=pct,
                target=target,
                over_target=pct > target,
                gauge_percent=gauge_fill(pct, target),
            )
        )

    ordered = order_months(series)
    percent_trend = [
        CostPercentPoint(
            label=month.period_label,
            **{key.replace("_cost", ""): percent_of(getattr(month, key), month.revenue) for key in _TRENDED_COSTS},
        )
        for month in ordered
    ]
    margin_trend = [
        MarginPoint(
            label=month.period_label,
            margin=percent_of(month.revenue - total_cost(month), month.revenue),
            revenue=month.revenue,
        )
        for month in ordered
    ]
    return CostAnalysis(
        period=latest.period_label,
        costs=costs,
        percent_trend=percent_trend,
        margin_trend=margin_trend,
    )


def _tracked_amount(month: MonthlyData, key: str) -> float:
    # Categories without a monthly field (delivery, training...) contribute nothing.
    if key not in COST_FIELDS:
        return 0.0
    return float(getattr(month, key))


def classify_costs(
    series: Sequence[MonthlyData],
    categories: Sequence[CostCategory],
    ingredients: Sequence[Ingredient] = (),
) -> CostClassification:
    latest, _ = latest_two(series)
    if latest is None:
        return CostClassification()

    groups = {
        classification: ClassificationGroup(
            classification=classification,
            label=CLASSIFICATION_LABELS[classification],
            total=0.0,
            share_of_cost=0.0,
        )
        for classification in CLASSIFICATIONS
    }
    for category in categories:
        amount = _tracked_amount(latest, category.key)
        if amount > 0:
            group = groups[category.classification]
            group.categories.append(ClassifiedCost(key=category.key, name=category.name, amount=amount))
            group.total += amount

    cost_total = sum(group.total for group in groups.values())
    for group in groups.values():
        group.share_of_cost = percent_of(group.total, cost_total)

    trend: List[ClassificationTrendPoint] = []
    for month in order_months(series):
        totals = {classification: 0.0 for classification in CLASSIFICATIONS}
        for category in categories:
            bucket = category.classification if category.classification in ("direct", "indirect") else "overhead"
            totals[bucket] += _tracked_amount(month, category.key)
        trend.append(ClassificationTrendPoint(label=month.period_label, total=sum(totals.values()), **totals))

    ingredient_counts = {
        classification: sum(1 for ingredient in ingredients if ingredient.classification == classification)
        for classification in CLASSIFICATIONS
    }

    ordered_groups = [groups[classification] for classification in CLASSIFICATIONS]
    return CostClassification(
        period=latest.period_label,
        revenue=latest.revenue,
        total_cost=cost_total,
        profit=latest.revenue - cost_total,
        groups=ordered_groups,
        pie=[group for group in ordered_groups if group.total > 0],
        trend=trend,
        ingredient_counts=ingredient_counts,
    )


__all__ = [
    "CLASSIFICATIONS",
    "ClassificationGroup",
    "CostAnalysis",
    "CostClassification",
    "CostTargetStatus",
    "analyse_costs",
    "classify_costs",
    "gauge_fill",
]

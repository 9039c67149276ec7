"""Quick profitability assessment from a handful of headline inputs.

The operator gives monthly revenue, a channel split and the share of revenue
each cost category takes. Categories the operator did not mention start from
their defaults.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from restaurantiq.schemas import CostCategory
from restaurantiq.services.metrics import percent_of, round_half_up
from restaurantiq.services.reference_data import WEEKS_PER_MONTH

STAGE_LABELS = {
    "procurement": "Procurement",
    "storage": "Storage",
    "preparation": "Preparation",
    "cooking": "Cooking",
    "service": "Service",
    "waste": "Waste Mgmt",
    "aftersales": "After-Sales",
    "fixed": "Fixed Costs",
}


class ActiveCost(BaseModel):
    enabled: bool = True
    percentage: float = Field(..., ge=0, le=100)


class AssessmentInput(BaseModel):
    restaurant_name: str = ""
    cuisine_type: str = ""
    location: str = ""
    seats: int = Field(default=50, ge=0)
    monthly_revenue: float = Field(default=80000, ge=0)
    dine_in_percent: float = Field(default=70, ge=0, le=100)
    delivery_percent: float = Field(default=18, ge=0, le=100)
    takeaway_percent: float = Field(default=12, ge=0, le=100)
    monthly_covers: int = Field(default=2000, ge=0)
    avg_ticket: float = Field(default=28, ge=0)
    active_costs: Dict[int, ActiveCost] = Field(default_factory=dict)


class AssessedCost(BaseModel):
    category_id: Optional[int] = None
    key: str
    name: str
    value: float
    percentage: float
    stage: str


class StageCost(BaseModel):
    stage: str
    label: str
    value: float


class AssessmentRecommendation(BaseModel):
    key: str
    title: str
    description: str
    saving: int


class AssessmentResult(BaseModel):
    restaurant_name: str
    total_cost_percent: float
    total_cost: float
    profit: float
    margin: float
    weekly_revenue: float
    weekly_profit: float
    weekly_covers: float
    revenue_per_seat: float
    cost_breakdown: List[AssessedCost]
    stage_costs: List[StageCost]
    dine_in_revenue: float
    delivery_revenue: float
    takeaway_revenue: float
    recommendations: List[AssessmentRecommendation]
    total_saving: int


def short_label(name: str) -> str:
    """'Food & Ingredients' -> 'Food', 'Food Waste' -> 'Food'."""

    return re.sub(r" .*", "", re.sub(r" & .*", "", name))


def resolve_active_costs(
    categories: Sequence[CostCategory],
    active_costs: Dict[int, ActiveCost],
) -> Dict[int, ActiveCost]:
    resolved: Dict[int, ActiveCost] = {}
    for category in categories:
        if category.id is None:
            continue
        resolved[category.id] = active_costs.get(category.id) or ActiveCost(
            enabled=category.is_default, percentage=category.default_percentage
        )
    return resolved


def _category_recommendation(category: CostCategory, percentage: float, revenue: float) -> Optional[AssessmentRecommendation]:
    if category.key == "food_cost" and percentage > 32:
        return AssessmentRecommendation(
            key="food-cost",
            title="Reduce food cost percentage",
            description=f"Food cost at {percentage:g}% is above the 28-32% target. "
            "Consider supplier renegotiation and portion control.",
            saving=round_half_up(revenue * ((percentage - 30) / 100)),
        )
    if category.key == "labour_cost" and percentage > 30:
        return AssessmentRecommendation(
            key="labour-cost",
            title="Optimise staff scheduling",
            description=f"Labour at {percentage:g}% exceeds 25-30% benchmark. "
            "Smart scheduling could save significantly.",
            saving=round_half_up(revenue * ((percentage - 28) / 100)),
        )
    if category.key == "energy_cost" and percentage > 8:
        return AssessmentRecommendation(
            key="energy-cost",
            title="Cut energy consumption",
            description=f"Energy at {percentage:g}% is above the 5-8% target. "
            "Energy-efficient equipment and power schedules help.",
            saving=round_half_up(revenue * percentage * 0.0015),
        )
    if category.key == "waste_cost" and percentage > 3:
        return AssessmentRecommendation(
            key="waste-reduction",
            title="Reduce food waste",
            description=f"Waste at {percentage:g}% can be improved. "
            "FIFO inventory and daily waste tracking are effective.",
            saving=round_half_up(revenue * percentage * 0.003),
        )
    return None


def assess(inputs: AssessmentInput, categories: Sequence[CostCategory]) -> AssessmentResult:
    revenue = inputs.monthly_revenue
    active = resolve_active_costs(categories, inputs.active_costs)

    total_percent = sum(cost.percentage for cost in active.values() if cost.enabled)
    total = revenue * (total_percent / 100)
    profit = revenue - total
    margin = percent_of(profit, revenue)

    breakdown: List[AssessedCost] = []
    stage_totals: Dict[str, float] = {}
    recommendations: List[AssessmentRecommendation] = []
    for category in categories:
        cost = active.get(category.id)
        if cost is None or not cost.enabled:
            continue
        value = revenue * (cost.percentage / 100)
        breakdown.append(
            AssessedCost(
                category_id=category.id,
                key=category.key,
                name=short_label(category.name),
                value=value,
                percentage=cost.percentage,
                stage=category.process_stage,
            )
        )
        stage_totals[category.process_stage] = stage_totals.get(category.process_stage, 0.0) + value
        recommendation = _category_recommendation(category, cost.percentage, revenue)
        if recommendation is not None:
            recommendations.append(recommendation)

    if margin < 55:
        recommendations.append(
            AssessmentRecommendation(
                key="menu-engineering",
                title="Menu engineering opportunity",
                description="Analyse dishes by popularity and profitability. "
                "Remove low-margin items, promote high-margin stars.",
                saving=round_half_up(revenue * 0.02),
            )
        )
    if inputs.delivery_percent < 15:
        recommendations.append(
            AssessmentRecommendation(
                key="delivery-growth",
                title="Grow delivery channel",
                description="Delivery revenue is low. Partnering with platforms and creating "
                "delivery-optimised items could boost revenue.",
                saving=round_half_up(revenue * 0.04),
            )
        )

    return AssessmentResult(
        restaurant_name=inputs.restaurant_name,
        total_cost_percent=total_percent,
        total_cost=total,
        profit=profit,
        margin=margin,
        weekly_revenue=revenue / WEEKS_PER_MONTH,
        weekly_profit=profit / WEEKS_PER_MONTH,
        weekly_covers=inputs.monthly_covers / WEEKS_PER_MONTH,
        revenue_per_seat=revenue / inputs.seats if inputs.seats > 0 else 0.0,
        cost_breakdown=breakdown,
        stage_costs=[
            StageCost(stage=stage, label=STAGE_LABELS.get(stage, stage.title()), value=value)
            for stage, value in stage_totals.items()
        ],
        dine_in_revenue=revenue * (inputs.dine_in_percent / 100),
        delivery_revenue=revenue * (inputs.delivery_percent / 100),
        takeaway_revenue=revenue * (inputs.takeaway_percent / 100),
        recommendations=recommendations,
        total_saving=sum(item.saving for item in recommendations),
    )


__all__ = [
    "ActiveCost",
    "AssessmentInput",
    "AssessmentRecommendation",
    "AssessmentResult",
    "assess",
    "resolve_active_costs",
    "short_label",
]

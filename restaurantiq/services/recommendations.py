"""Rule-based improvement suggestions for the latest month."""

from __future__ import annotations

import logging
from typing import List, Literal, Optional

from pydantic import BaseModel

from restaurantiq.schemas import MonthlyData
from restaurantiq.services.metrics import calculate_process_metrics, round_half_up

logger = logging.getLogger(__name__)

RecommendationCategory = Literal["cost", "revenue", "efficiency", "retention"]
Impact = Literal["high", "medium", "low"]

CATEGORY_LABELS = {
    "cost": "Cost Reduction",
    "revenue": "Revenue Growth",
    "efficiency": "Efficiency",
    "retention": "Customer Retention",
}


class Recommendation(BaseModel):
    id: str
    title: str
    description: str
    category: RecommendationCategory
    category_label: str
    impact: Impact
    estimated_saving: int
    action: str


class RecommendationSummary(BaseModel):
    period: Optional[str] = None
    recommendations: List[Recommendation] = []
    total_saving: int = 0
    high_impact_count: int = 0


def _recommendation(
    id: str,
    title: str,
    description: str,
    category: RecommendationCategory,
    impact: Impact,
    saving: float,
    action: str,
) -> Recommendation:
    return Recommendation(
        id=id,
        title=title,
        description=description,
        category=category,
        category_label=CATEGORY_LABELS[category],
        impact=impact,
        estimated_saving=round_half_up(saving),
        action=action,
    )


def generate_recommendations(month: MonthlyData, currency: str = "£") -> List[Recommendation]:
    metrics = calculate_process_metrics(month)
    recommendations: List[Recommendation] = []

    if metrics.food_cost_pct > 32:
        recommendations.append(
            _recommendation(
                "food-cost",
                "Reduce Food Cost Percentage",
                f"Your food cost is at {metrics.food_cost_pct:.1f}%, above the industry target of 28-32%. "
                "Consider renegotiating supplier contracts, reviewing portion sizes, or sourcing seasonal ingredients.",
                "cost",
                "high",
                month.food_cost * ((metrics.food_cost_pct - 30) / 100),
                "Review top 10 ingredient costs and find 2-3 alternatives",
            )
        )

    if metrics.labour_cost_pct > 30:
        recommendations.append(
            _recommendation(
                "labour-cost",
                "Optimise Labour Scheduling",
                f"Labour costs at {metrics.labour_cost_pct:.1f}% exceed the 25-30% target. Implement smart "
                "scheduling based on peak hours, consider cross-training staff, or adopt table management technology.",
                "efficiency",
                "high",
                month.labour_cost * ((metrics.labour_cost_pct - 28) / 100),
                "Analyse peak hours and adjust shift patterns",
            )
        )

    if metrics.energy_cost_pct > 8:
        recommendations.append(
            _recommendation(
                "energy-cost",
                "Reduce Energy Consumption",
                f"Energy costs at {metrics.energy_cost_pct:.1f}% are above the 5-8% benchmark. Consider "
                "energy-efficient equipment, LED lighting, smart thermostats, and scheduled equipment shutdowns.",
                "cost",
                "medium",
                month.energy_cost * 0.15,
                "Audit equipment usage and implement power schedules",
            )
        )

    if metrics.waste_pct > 3:
        recommendations.append(
            _recommendation(
                "waste-reduction",
                "Implement Waste Reduction Programme",
                f"Food waste at {metrics.waste_pct:.1f}% can be reduced. Use FIFO inventory management, track "
                "waste daily, optimise menu to use shared ingredients, and consider composting partnerships.",
                "efficiency",
                "medium",
                month.waste_cost * 0.3,
                "Start daily waste tracking and identify top waste items",
            )
        )

    if month.delivery_revenue < month.dine_in_revenue * 0.2:
        recommendations.append(
            _recommendation(
                "delivery-growth",
                "Grow Online Delivery Channel",
                "Your delivery revenue is below 20% of dine-in. Consider partnering with delivery platforms, "
                "creating delivery-optimised menu items, and running targeted promotions.",
                "revenue",
                "high",
                month.revenue * 0.05,
                "Sign up for 1-2 delivery platforms and create a delivery menu",
            )
        )

    if month.repeat_customer_rate < 35:
        recommendations.append(
            _recommendation(
                "customer-retention",
                "Boost Customer Retention",
                f"Repeat customer rate at {month.repeat_customer_rate:.0f}% can be improved. Implement a loyalty "
                "programme, collect customer feedback, and send personalised offers.",
                "retention",
                "medium",
                month.revenue * 0.03,
                "Launch a simple loyalty card or digital rewards programme",
            )
        )

    if metrics.gross_margin < 55:
        recommendations.append(
            _recommendation(
                "menu-engineering",
                "Menu Engineering Opportunity",
                "Analyse your menu items by popularity and profitability. Remove low-margin, low-popularity items "
                "and promote high-margin dishes through strategic placement and specials.",
                "revenue",
                "medium",
                month.revenue * 0.02,
                "Categorise all menu items into Stars, Puzzles, Plowhorses, and Dogs",
            )
        )

    if month.avg_ticket_size < 25:
        recommendations.append(
            _recommendation(
                "upselling",
                "Increase Average Ticket Size",
                f"Average ticket at {currency}{month.avg_ticket_size:.2f} has growth potential. Train staff on "
                "upselling techniques, add combo deals, and introduce premium sides or desserts.",
                "revenue",
                "medium",
                month.total_covers * 3,
                "Create 3 suggested pairings for top dishes and train staff",
            )
        )

    logger.debug("Generated %d recommendations for %s", len(recommendations), month.period_label)
    return recommendations


def summarise_recommendations(month: Optional[MonthlyData], currency: str = "£") -> RecommendationSummary:
    if month is None:
        return RecommendationSummary()

    recommendations = generate_recommendations(month, currency)
    return RecommendationSummary(
        period=month.period_label,
        recommendations=recommendations,
        total_saving=sum(item.estimated_saving for item in recommendations),
        high_impact_count=sum(1 for item in recommendations if item.impact == "high"),
    )


__all__ = [
    "CATEGORY_LABELS",
    "Recommendation",
    "RecommendationSummary",
    "generate_recommendations",
    "summarise_recommendations",
]

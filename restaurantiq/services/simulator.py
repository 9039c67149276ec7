"""What-if simulator applied to a single month of trading."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from restaurantiq.schemas import MonthlyData
from restaurantiq.services.metrics import percent_of, total_cost


class Scenario(BaseModel):
    """Percentage adjustments; every field defaults to no change."""

    food_cost_change: float = Field(default=0, ge=-30, le=30)
    labour_cost_change: float = Field(default=0, ge=-30, le=30)
    energy_cost_change: float = Field(default=0, ge=-30, le=30)
    waste_reduction: float = Field(default=0, ge=0, le=50)
    delivery_revenue_change: float = Field(default=0, ge=-30, le=50)
    menu_price_change: float = Field(default=0, ge=-15, le=25)
    cover_change: float = Field(default=0, ge=-20, le=30)
    marketing_change: float = Field(default=0, ge=-50, le=100)

    @property
    def has_changes(self) -> bool:
        return any(value != 0 for value in self.model_dump().values())


class SimulatedCost(BaseModel):
    name: str
    original: float
    simulated: float


class ScenarioResult(BaseModel):
    original_revenue: float
    new_revenue: float
    original_cost: float
    new_cost: float
    original_profit: float
    new_profit: float
    original_margin: float
    new_margin: float
    profit_change: float
    margin_change: float
    cost_breakdown: List[SimulatedCost]
    has_changes: bool


def _scaled(value: float, change_percent: float) -> float:
    return value * (1 + change_percent / 100)


def simulate_scenario(month: MonthlyData, scenario: Scenario) -> ScenarioResult:
    food = _scaled(month.food_cost, scenario.food_cost_change)
    labour = _scaled(month.labour_cost, scenario.labour_cost_change)
    energy = _scaled(month.energy_cost, scenario.energy_cost_change)
    waste = month.waste_cost * (1 - scenario.waste_reduction / 100)
    marketing = _scaled(month.marketing_cost, scenario.marketing_change)

    price_factor = 1 + scenario.menu_price_change / 100
    cover_factor = 1 + scenario.cover_change / 100
    new_revenue = (
        month.dine_in_revenue * price_factor * cover_factor
        + month.takeaway_revenue * price_factor * cover_factor
        + _scaled(month.delivery_revenue, scenario.delivery_revenue_change)
    )
    # Rent, supplies and technology do not move with the scenario.
    new_cost = food + labour + energy + month.rent_cost + marketing + month.supplies_cost + month.technology_cost + waste

    original_cost = total_cost(month)
    original_profit = month.revenue - original_cost
    new_profit = new_revenue - new_cost
    original_margin = percent_of(original_profit, month.revenue)
    new_margin = percent_of(new_profit, new_revenue)

    return ScenarioResult(
        original_revenue=month.revenue,
        new_revenue=new_revenue,
        original_cost=original_cost,
        new_cost=new_cost,
        original_profit=original_profit,
        new_profit=new_profit,
        original_margin=original_margin,
        new_margin=new_margin,
        profit_change=new_profit - original_profit,
        margin_change=new_margin - original_margin,
        cost_breakdown=[
            SimulatedCost(name="Food", original=month.food_cost, simulated=food),
            SimulatedCost(name="Labour", original=month.labour_cost, simulated=labour),
            SimulatedCost(name="Energy", original=month.energy_cost, simulated=energy),
            SimulatedCost(name="Rent", original=month.rent_cost, simulated=month.rent_cost),
            SimulatedCost(name="Marketing", original=month.marketing_cost, simulated=marketing),
            SimulatedCost(name="Waste", original=month.waste_cost, simulated=waste),
        ],
        has_changes=scenario.has_changes,
    )


__all__ = ["Scenario", "ScenarioResult", "SimulatedCost", "simulate_scenario"]

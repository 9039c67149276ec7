"""Run every analysis over one restaurant dataset."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from restaurantiq.schemas import RestaurantDataset
from restaurantiq.services.cost_analysis import CostAnalysis, CostClassification, analyse_costs, classify_costs
from restaurantiq.services.menu_costing import MenuCosting, cost_menu, recipe_costs
from restaurantiq.services.metrics import DashboardOverview, ProcessFlow, build_dashboard_overview, latest_two, process_flow
from restaurantiq.services.promotions import PromotionEvaluation, evaluate_promotions
from restaurantiq.services.recommendations import RecommendationSummary, summarise_recommendations
from restaurantiq.services.simulator import Scenario, ScenarioResult, simulate_scenario
from restaurantiq.services.supplier_risk import SupplierRiskReport, analyse_supplier_risk


class RestaurantInsights(BaseModel):
    overview: DashboardOverview
    process_flow: ProcessFlow
    cost_analysis: CostAnalysis
    cost_classification: CostClassification
    recommendations: RecommendationSummary
    baseline_scenario: Optional[ScenarioResult] = None
    supplier_risk: SupplierRiskReport
    menu_costing: MenuCosting
    promotions: List[PromotionEvaluation]


def build_insights(dataset: RestaurantDataset, currency: str = "£") -> RestaurantInsights:
    series = dataset.monthly_data
    latest, _ = latest_two(series)
    return RestaurantInsights(
        overview=build_dashboard_overview(series, dataset.restaurant),
        process_flow=process_flow(latest),
        cost_analysis=analyse_costs(series),
        cost_classification=classify_costs(series, dataset.cost_categories, dataset.ingredients),
        recommendations=summarise_recommendations(latest, currency),
        baseline_scenario=simulate_scenario(latest, Scenario()) if latest is not None else None,
        supplier_risk=analyse_supplier_risk(dataset.suppliers, dataset.ingredients, dataset.supplier_ingredients),
        menu_costing=cost_menu(dataset.menu_items, dataset.recipes, dataset.ingredients),
        promotions=evaluate_promotions(
            dataset.promotions,
            dataset.menu_items,
            recipe_costs(dataset.recipes, dataset.ingredients),
        ),
    )


__all__ = ["RestaurantInsights", "build_insights"]

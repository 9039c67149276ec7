"""Dashboard, cost, recommendation and what-if endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from restaurantiq.api.http_errors import raise_analytics_error
from restaurantiq.config.settings import get_settings
from restaurantiq.schemas import CostCategory, Ingredient, MonthlyData, Restaurant
from restaurantiq.services.cost_analysis import CostAnalysis, CostClassification, analyse_costs, classify_costs
from restaurantiq.services.errors import AnalyticsError
from restaurantiq.services.metrics import (
    DashboardOverview,
    ProcessFlow,
    build_dashboard_overview,
    latest_two,
    process_flow,
)
from restaurantiq.services.recommendations import RecommendationSummary, summarise_recommendations
from restaurantiq.services.reference_data import default_cost_categories
from restaurantiq.services.simulator import Scenario, ScenarioResult, simulate_scenario

router = APIRouter(prefix="/api", tags=["analytics"])


class MonthlySeriesRequest(BaseModel):
    restaurant: Optional[Restaurant] = None
    monthly_data: List[MonthlyData] = Field(default_factory=list)


class ClassificationRequest(MonthlySeriesRequest):
    cost_categories: Optional[List[CostCategory]] = None
    ingredients: List[Ingredient] = Field(default_factory=list)


class SimulatorRequest(MonthlySeriesRequest):
    scenario: Scenario = Field(default_factory=Scenario)


def _latest(series: List[MonthlyData]) -> Optional[MonthlyData]:
    try:
        latest, _ = latest_two(series)
    except AnalyticsError as exc:
        raise_analytics_error(exc)
    return latest


@router.get("/cost-categories", response_model=List[CostCategory])
def list_cost_categories() -> List[CostCategory]:
    return default_cost_categories()


@router.post("/dashboard/overview", response_model=DashboardOverview)
def dashboard_overview(payload: MonthlySeriesRequest) -> DashboardOverview:
    try:
        return build_dashboard_overview(payload.monthly_data, payload.restaurant)
    except AnalyticsError as exc:
        raise_analytics_error(exc)


@router.post("/process-flow", response_model=ProcessFlow)
def process_flow_costs(payload: MonthlySeriesRequest) -> ProcessFlow:
    return process_flow(_latest(payload.monthly_data))


@router.post("/costs/analysis", response_model=CostAnalysis)
def cost_analysis(payload: MonthlySeriesRequest) -> CostAnalysis:
    try:
        return analyse_costs(payload.monthly_data)
    except AnalyticsError as exc:
        raise_analytics_error(exc)


@router.post("/costs/classification", response_model=CostClassification)
def cost_classification(payload: ClassificationRequest) -> CostClassification:
    categories = payload.cost_categories if payload.cost_categories is not None else default_cost_categories()
    try:
        return classify_costs(payload.monthly_data, categories, payload.ingredients)
    except AnalyticsError as exc:
        raise_analytics_error(exc)


@router.post("/recommendations", response_model=RecommendationSummary)
def recommendations(payload: MonthlySeriesRequest) -> RecommendationSummary:
    return summarise_recommendations(_latest(payload.monthly_data), get_settings().currency_symbol)


@router.post("/simulator", response_model=ScenarioResult)
def simulator(payload: SimulatorRequest) -> ScenarioResult:
    latest = _latest(payload.monthly_data)
    if latest is None:
        raise_analytics_error(AnalyticsError("Monthly data is required to run a simulation."))
    return simulate_scenario(latest, payload.scenario)

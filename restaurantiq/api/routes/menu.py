"""Menu costing and promotion simulator endpoints."""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from restaurantiq.api.http_errors import raise_analytics_error
from restaurantiq.schemas import Ingredient, MenuItem, MenuItemIngredient, Promotion
from restaurantiq.services.errors import AnalyticsError
from restaurantiq.services.menu_costing import DEFAULT_TARGET_MONTHLY_PROFIT, MenuCosting, cost_menu, recipe_costs
from restaurantiq.services.promotions import (
    DiscountBasis,
    DiscountScenario,
    DiscountSimulation,
    PromotionEvaluation,
    discount_scenarios,
    evaluate_promotions,
    resolve_discount_basis,
    simulate_discount,
)

router = APIRouter(prefix="/api", tags=["menu"])


class MenuPayload(BaseModel):
    menu_items: List[MenuItem] = Field(default_factory=list)
    recipes: Dict[int, List[MenuItemIngredient]] = Field(default_factory=dict)
    ingredients: List[Ingredient] = Field(default_factory=list)


class MenuCostingRequest(MenuPayload):
    target_monthly_profit: float = Field(default=DEFAULT_TARGET_MONTHLY_PROFIT, ge=0)


class DiscountRequest(MenuPayload):
    menu_item_id: Optional[int] = None
    discount_percent: float = Field(default=10, ge=0, le=100)
    target_profit: float = Field(default=10000, ge=0)


class DiscountResponse(BaseModel):
    basis: DiscountBasis
    simulation: DiscountSimulation
    scenarios: List[DiscountScenario]


class PromotionEvaluationRequest(MenuPayload):
    promotions: List[Promotion] = Field(default_factory=list)


@router.post("/menu/costing", response_model=MenuCosting)
def menu_costing(payload: MenuCostingRequest) -> MenuCosting:
    return cost_menu(payload.menu_items, payload.recipes, payload.ingredients, payload.target_monthly_profit)


@router.post("/promotions/simulate", response_model=DiscountResponse)
def simulate_promotion(payload: DiscountRequest) -> DiscountResponse:
    costs = recipe_costs(payload.recipes, payload.ingredients)
    try:
        basis = resolve_discount_basis(payload.menu_items, payload.menu_item_id, costs)
    except AnalyticsError as exc:
        raise_analytics_error(exc)

    simulation = simulate_discount(
        basis.item_name,
        basis.original_price,
        basis.ingredient_cost,
        payload.discount_percent,
        payload.target_profit,
    )
    return DiscountResponse(
        basis=basis,
        simulation=simulation,
        scenarios=discount_scenarios(basis, payload.target_profit),
    )


@router.post("/promotions/evaluate", response_model=List[PromotionEvaluation])
def evaluate(payload: PromotionEvaluationRequest) -> List[PromotionEvaluation]:
    costs = recipe_costs(payload.recipes, payload.ingredients)
    return evaluate_promotions(payload.promotions, payload.menu_items, costs)

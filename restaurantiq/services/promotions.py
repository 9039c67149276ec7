"""Discount simulator: what a price cut does to profit per serve and volume."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel

from restaurantiq.schemas import MenuItem, Promotion
from restaurantiq.services.errors import UnknownMenuItemError

logger = logging.getLogger(__name__)

SCENARIO_DISCOUNTS = (5, 10, 15, 20, 25, 30)
ESTIMATED_COST_RATIO = 0.30
MENU_AVERAGE_COST_RATIO = 0.35
EMPTY_MENU_PRICE = 15.0


class DiscountBasis(BaseModel):
    item_name: str
    original_price: float
    ingredient_cost: float
    source: Literal["recipe", "estimated", "menu_average"]
    menu_item_id: Optional[int] = None


class DiscountSimulation(BaseModel):
    item_name: str
    discount_percent: float
    target_profit: float
    original_price: float
    discounted_price: float
    ingredient_cost: float
    original_profit: float
    profit_per_serve: float
    serves_needed: int
    original_serves_needed: int
    extra_serves: int
    margin_original: float
    margin_discounted: float


class DiscountScenario(BaseModel):
    discount_percent: float
    selling_price: float
    profit_per_serve: float
    serves_needed: int


class PromotionEvaluation(BaseModel):
    promotion_id: Optional[int] = None
    name: str
    basis: DiscountBasis
    simulation: DiscountSimulation


def _serves_for(target: float, profit: float) -> int:
    if profit <= 0:
        return 0
    return math.ceil(target / profit)


def simulate_discount(
    item_name: str,
    original_price: float,
    ingredient_cost: float,
    discount_percent: float,
    target_profit: float,
) -> DiscountSimulation:
    discounted_price = original_price * (1 - discount_percent / 100)
    profit_per_serve = discounted_price - ingredient_cost
    original_profit = original_price - ingredient_cost
    serves_needed = _serves_for(target_profit, profit_per_serve)
    original_serves_needed = _serves_for(target_profit, original_profit)

    margin_original = original_profit / original_price * 100 if original_price > 0 else 0.0
    margin_discounted = (
        profit_per_serve / discounted_price * 100 if profit_per_serve > 0 and discounted_price > 0 else 0.0
    )
    return DiscountSimulation(
        item_name=item_name,
        discount_percent=discount_percent,
        target_profit=target_profit,
        original_price=original_price,
        discounted_price=discounted_price,
        ingredient_cost=ingredient_cost,
        original_profit=original_profit,
        profit_per_serve=profit_per_serve,
        serves_needed=serves_needed,
        original_serves_needed=original_serves_needed,
        extra_serves=serves_needed - original_serves_needed,
        margin_original=margin_original,
        margin_discounted=margin_discounted,
    )


def discount_scenarios(basis: DiscountBasis, target_profit: float) -> List[DiscountScenario]:
    scenarios: List[DiscountScenario] = []
    for discount in SCENARIO_DISCOUNTS:
        price = basis.original_price * (1 - discount / 100)
        profit = price - basis.ingredient_cost
        scenarios.append(
            DiscountScenario(
                discount_percent=discount,
                selling_price=price,
                profit_per_serve=profit,
                serves_needed=_serves_for(target_profit, profit),
            )
        )
    return scenarios


def resolve_discount_basis(
    menu_items: Sequence[MenuItem],
    menu_item_id: Optional[int],
    recipe_costs: Mapping[int, float],
) -> DiscountBasis:
    """Pick the price and ingredient cost a discount is simulated against.

    A menu item with a costed recipe uses that cost, an item without one is
    assumed to cost 30% of its price, and no item at all means an average menu
    item at a 35% cost ratio.
    """

    if menu_item_id is None:
        if menu_items:
            price = sum(item.selling_price for item in menu_items) / len(menu_items)
        else:
            price = EMPTY_MENU_PRICE
        return DiscountBasis(
            item_name="Average Menu Item",
            original_price=price,
            ingredient_cost=price * MENU_AVERAGE_COST_RATIO,
            source="menu_average",
        )

    item = next((candidate for candidate in menu_items if candidate.id == menu_item_id), None)
    if item is None:
        raise UnknownMenuItemError(f"Menu item {menu_item_id} not found")

    if menu_item_id in recipe_costs:
        return DiscountBasis(
            item_name=item.name,
            original_price=item.selling_price,
            ingredient_cost=recipe_costs[menu_item_id],
            source="recipe",
            menu_item_id=menu_item_id,
        )
    return DiscountBasis(
        item_name=item.name,
        original_price=item.selling_price,
        ingredient_cost=item.selling_price * ESTIMATED_COST_RATIO,
        source="estimated",
        menu_item_id=menu_item_id,
    )


def evaluate_promotions(
    promotions: Sequence[Promotion],
    menu_items: Sequence[MenuItem],
    recipe_costs: Mapping[int, float],
) -> List[PromotionEvaluation]:
    menu_ids = {item.id for item in menu_items}
    evaluations: List[PromotionEvaluation] = []
    for promotion in promotions:
        if not promotion.is_active:
            continue
        item_id = promotion.menu_item_id
        if item_id is not None and item_id not in menu_ids:
            # The item left the menu; the promotion is read as menu wide.
            logger.warning("Promotion %s targets menu item %s, which is not on the menu", promotion.id, item_id)
            item_id = None
        basis = resolve_discount_basis(menu_items, item_id, recipe_costs)
        simulation = simulate_discount(
            basis.item_name,
            basis.original_price,
            basis.ingredient_cost,
            promotion.discount_percent,
            promotion.target_profit or 0.0,
        )
        evaluations.append(
            PromotionEvaluation(promotion_id=promotion.id, name=promotion.name, basis=basis, simulation=simulation)
        )
    return evaluations


__all__ = [
    "DiscountBasis",
    "DiscountScenario",
    "DiscountSimulation",
    "PromotionEvaluation",
    "SCENARIO_DISCOUNTS",
    "discount_scenarios",
    "evaluate_promotions",
    "resolve_discount_basis",
    "simulate_discount",
]

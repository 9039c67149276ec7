"""Recipe costing and profitability for menu items."""

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from restaurantiq.schemas import Ingredient, MenuItem, MenuItemIngredient
from restaurantiq.services.metrics import percent_of
from restaurantiq.services.reference_data import WEEKS_PER_MONTH

DEFAULT_TARGET_MONTHLY_PROFIT = 15000.0


class RecipeLine(BaseModel):
    ingredient_id: int
    ingredient_name: str
    quantity: float
    unit: str
    unit_price: float
    line_cost: float


class MenuItemCosting(BaseModel):
    menu_item_id: Optional[int] = None
    name: str
    category: str
    selling_price: float
    lines: List[RecipeLine]
    total_cost: float
    profit: float
    margin: float
    food_cost_pct: float
    serves_needed: int
    weekly_serves_needed: int


class MenuCosting(BaseModel):
    target_monthly_profit: float
    items: List[MenuItemCosting] = []
    average_price: float = 0.0
    average_cost: float = 0.0
    average_margin: float = 0.0
    average_food_cost_pct: float = 0.0


def _index(ingredients: Sequence[Ingredient]) -> Dict[int, Ingredient]:
    return {ingredient.id: ingredient for ingredient in ingredients if ingredient.id is not None}


def recipe_lines(recipe: Sequence[MenuItemIngredient], ingredients: Sequence[Ingredient]) -> List[RecipeLine]:
    """Cost each recipe line at current prices, skipping unknown ingredients."""

    by_id = _index(ingredients)
    lines: List[RecipeLine] = []
    for entry in recipe:
        ingredient = by_id.get(entry.ingredient_id)
        if ingredient is None:
            continue
        lines.append(
            RecipeLine(
                ingredient_id=entry.ingredient_id,
                ingredient_name=ingredient.name,
                quantity=entry.quantity,
                unit=entry.unit,
                unit_price=ingredient.current_price,
                line_cost=entry.quantity * ingredient.current_price,
            )
        )
    return lines


def recipe_cost(recipe: Sequence[MenuItemIngredient], ingredients: Sequence[Ingredient]) -> float:
    return sum(line.line_cost for line in recipe_lines(recipe, ingredients))


def recipe_costs(
    recipes: Mapping[int, Sequence[MenuItemIngredient]],
    ingredients: Sequence[Ingredient],
) -> Dict[int, float]:
    """Cost of every menu item that has at least one recipe line."""

    return {item_id: recipe_cost(recipe, ingredients) for item_id, recipe in recipes.items() if recipe}


def cost_menu_item(
    item: MenuItem,
    recipe: Sequence[MenuItemIngredient],
    ingredients: Sequence[Ingredient],
    target_monthly_profit: float = DEFAULT_TARGET_MONTHLY_PROFIT,
) -> MenuItemCosting:
    lines = recipe_lines(recipe, ingredients)
    cost = sum(line.line_cost for line in lines)
    profit = item.selling_price - cost
    serves = math.ceil(target_monthly_profit / profit) if profit > 0 else 0
    return MenuItemCosting(
        menu_item_id=item.id,
        name=item.name,
        category=item.category,
        selling_price=item.selling_price,
        lines=lines,
        total_cost=cost,
        profit=profit,
        margin=percent_of(profit, item.selling_price),
        food_cost_pct=percent_of(cost, item.selling_price),
        serves_needed=serves,
        weekly_serves_needed=math.ceil(serves / WEEKS_PER_MONTH),
    )


def cost_menu(
    items: Sequence[MenuItem],
    recipes: Mapping[int, Sequence[MenuItemIngredient]],
    ingredients: Sequence[Ingredient],
    target_monthly_profit: float = DEFAULT_TARGET_MONTHLY_PROFIT,
) -> MenuCosting:
    costed = [
        cost_menu_item(item, recipes.get(item.id, []), ingredients, target_monthly_profit) for item in items
    ]
    if not costed:
        return MenuCosting(target_monthly_profit=target_monthly_profit)

    count = len(costed)
    return MenuCosting(
        target_monthly_profit=target_monthly_profit,
        items=costed,
        average_price=sum(item.selling_price for item in costed) / count,
        average_cost=sum(item.total_cost for item in costed) / count,
        average_margin=sum(item.margin for item in costed) / count,
        average_food_cost_pct=sum(item.food_cost_pct for item in costed) / count,
    )


__all__ = [
    "DEFAULT_TARGET_MONTHLY_PROFIT",
    "MenuCosting",
    "MenuItemCosting",
    "RecipeLine",
    "cost_menu",
    "cost_menu_item",
    "recipe_cost",
    "recipe_costs",
    "recipe_lines",
]

import pytest

from restaurantiq.schemas import Ingredient, MenuItem, MenuItemIngredient
from restaurantiq.services.menu_costing import cost_menu, cost_menu_item, recipe_cost, recipe_costs

INGREDIENTS = [
    Ingredient(id=1, restaurant_id=1, name="Chicken Breast", current_price=6.80),
    Ingredient(id=2, restaurant_id=1, name="Basmati Rice", current_price=2.20),
]

SOUVLAKI = MenuItem(id=1, restaurant_id=1, name="Grilled Chicken Souvlaki", selling_price=16.50)
SOUVLAKI_RECIPE = [
    MenuItemIngredient(menu_item_id=1, ingredient_id=1, quantity=0.25, unit="kg"),
    MenuItemIngredient(menu_item_id=1, ingredient_id=2, quantity=0.15, unit="kg"),
]


def test_recipe_cost_sums_lines() -> None:
    assert recipe_cost(SOUVLAKI_RECIPE, INGREDIENTS) == pytest.approx(2.03)


def test_recipe_cost_skips_unknown_ingredients() -> None:
    recipe = SOUVLAKI_RECIPE + [MenuItemIngredient(menu_item_id=1, ingredient_id=99, quantity=1, unit="kg")]

    assert recipe_cost(recipe, INGREDIENTS) == pytest.approx(2.03)


def test_cost_menu_item_profitability() -> None:
    costing = cost_menu_item(SOUVLAKI, SOUVLAKI_RECIPE, INGREDIENTS, 15000)

    assert [line.ingredient_name for line in costing.lines] == ["Chicken Breast", "Basmati Rice"]
    assert costing.lines[0].line_cost == pytest.approx(1.70)
    assert costing.total_cost == pytest.approx(2.03)
    assert costing.profit == pytest.approx(14.47)
    assert costing.margin == pytest.approx(14.47 / 16.5 * 100)
    assert costing.food_cost_pct == pytest.approx(2.03 / 16.5 * 100)
    assert costing.serves_needed == 1037
    assert costing.weekly_serves_needed == 239


def test_unprofitable_item_needs_no_serves() -> None:
    item = MenuItem(id=2, restaurant_id=1, name="Loss leader", selling_price=1.0)

    costing = cost_menu_item(item, SOUVLAKI_RECIPE, INGREDIENTS)

    assert costing.profit < 0
    assert costing.serves_needed == 0
    assert costing.weekly_serves_needed == 0


def test_cost_menu_averages() -> None:
    free = MenuItem(id=2, restaurant_id=1, name="Bread basket", selling_price=0.0)

    menu = cost_menu([SOUVLAKI, free], {1: SOUVLAKI_RECIPE}, INGREDIENTS)

    assert menu.target_monthly_profit == 15000
    assert len(menu.items) == 2
    assert menu.items[1].total_cost == 0
    assert menu.items[1].margin == 0
    assert menu.average_price == pytest.approx(8.25)
    assert menu.average_cost == pytest.approx(1.015)


def test_recipe_costs_only_for_items_with_recipes() -> None:
    costs = recipe_costs({1: SOUVLAKI_RECIPE, 2: []}, INGREDIENTS)

    assert list(costs) == [1]
    assert costs[1] == pytest.approx(2.03)


def test_empty_menu() -> None:
    menu = cost_menu([], {}, INGREDIENTS, 5000)

    assert menu.items == []
    assert menu.average_margin == 0

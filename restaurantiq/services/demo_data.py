"""Bundled demo restaurant used by the demo endpoints and the tests."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List

from restaurantiq.schemas import (
    Ingredient,
    MenuItem,
    MenuItemIngredient,
    MonthlyData,
    Promotion,
    Restaurant,
    RestaurantDataset,
    Supplier,
    SupplierIngredient,
)
from restaurantiq.services.reference_data import default_cost_categories

DEMO_RESTAURANT_ID = 1

_MONTHLY_FIELDS = (
    "month", "year", "revenue", "food_cost", "labour_cost", "energy_cost", "rent_cost",
    "marketing_cost", "supplies_cost", "technology_cost", "waste_cost", "delivery_revenue",
    "dine_in_revenue", "takeaway_revenue", "total_covers", "avg_ticket_size", "repeat_customer_rate",
)

_MONTHLY_ROWS = [
    ("September", 2025, 82000, 27060, 24600, 5740, 6500, 2460, 2050, 820, 3280, 12300, 57400, 12300, 2050, 28.50, 32),
    ("October", 2025, 88500, 28320, 25665, 6195, 6500, 3540, 2210, 885, 2655, 15930, 58410, 14160, 2210, 29.80, 34),
    ("November", 2025, 91200, 29184, 26448, 6384, 6500, 3648, 2280, 912, 2736, 16416, 60192, 14592, 2280, 30.10, 36),
    ("December", 2025, 105000, 33600, 30450, 7350, 6500, 4200, 2625, 1050, 3150, 15750, 73500, 15750, 2625, 32.00, 38),
    ("January", 2026, 78000, 26520, 23400, 6240, 6500, 3120, 1950, 780, 3510, 14040, 50700, 13260, 1950, 27.50, 30),
    ("February", 2026, 84500, 28730, 24505, 5915, 6500, 3380, 2112, 845, 2535, 15210, 55770, 13520, 2112, 29.20, 33),
]

_SUPPLIERS = [
    ("Fresh Fields Wholesale", "orders@freshfields.co.uk", "produce"),
    ("Mediterranean Imports Ltd", "sales@medimports.co.uk", "specialty"),
    ("London Meat Co", "info@londonmeat.co.uk", "protein"),
    ("Ocean Harvest Fish", "trade@oceanharvest.co.uk", "seafood"),
    ("Dairy Direct", "wholesale@dairydirect.co.uk", "dairy"),
]

# key -> (name, unit, current price, previous price, category)
_INGREDIENTS = {
    "olive_oil": ("Extra Virgin Olive Oil", "litre", 8.50, 7.20, "oils"),
    "chicken": ("Chicken Breast", "kg", 6.80, 5.90, "protein"),
    "lamb": ("Lamb Shoulder", "kg", 12.50, 11.00, "protein"),
    "sea_bass": ("Sea Bass Fillet", "kg", 18.00, 16.50, "seafood"),
    "tomatoes": ("Vine Tomatoes", "kg", 2.80, 2.40, "produce"),
    "feta": ("Feta Cheese", "kg", 9.20, 8.50, "dairy"),
    "halloumi": ("Halloumi", "kg", 11.00, 10.20, "dairy"),
    "pitta": ("Pitta Bread", "pack", 1.80, 1.50, "bakery"),
    "hummus": ("Hummus (made in-house)", "kg", 3.50, 3.20, "prepared"),
    "rice": ("Basmati Rice", "kg", 2.20, 1.90, "grains"),
    "salad": ("Mixed Salad Leaves", "kg", 4.50, 4.00, "produce"),
    "lemon": ("Lemons", "kg", 2.10, 1.80, "produce"),
    "garlic": ("Garlic", "kg", 5.00, 4.50, "produce"),
    "spices": ("Spice Mix (Za'atar)", "kg", 15.00, 13.00, "spices"),
    "onions": ("Red Onions", "kg", 1.20, 1.00, "produce"),
}

# (supplier number, ingredient key, unit price, preferred, lead time days)
_SUPPLIER_LINKS = [
    (1, "tomatoes", 2.80, True, 1),
    (1, "salad", 4.50, True, 1),
    (1, "lemon", 2.10, True, 1),
    (1, "garlic", 5.00, True, 1),
    (1, "onions", 1.20, True, 1),
    (2, "olive_oil", 8.50, True, 3),
    (2, "feta", 9.20, True, 3),
    (2, "halloumi", 11.00, True, 3),
    (2, "hummus", 3.50, False, 3),
    (2, "spices", 15.00, True, 5),
    (2, "pitta", 1.80, True, 2),
    (3, "chicken", 6.80, True, 1),
    (3, "lamb", 12.50, True, 2),
    (4, "sea_bass", 18.00, True, 1),
    (5, "feta", 9.80, False, 2),
    (5, "halloumi", 11.50, False, 2),
]

_MENU = [
    ("Grilled Chicken Souvlaki", "main", 16.50, "Marinated chicken skewers with rice and salad", [
        ("chicken", 0.25), ("rice", 0.15), ("salad", 0.08), ("olive_oil", 0.03), ("lemon", 0.05), ("spices", 0.01),
    ]),
    ("Lamb Kofta Plate", "main", 18.50, "Spiced lamb kofta with hummus and pitta", [
        ("lamb", 0.22), ("hummus", 0.10), ("pitta", 1), ("onions", 0.05), ("spices", 0.015), ("olive_oil", 0.02),
    ]),
    ("Pan-Fried Sea Bass", "main", 22.00, "Fresh sea bass with Mediterranean vegetables", [
        ("sea_bass", 0.20), ("tomatoes", 0.10), ("olive_oil", 0.04), ("lemon", 0.05), ("garlic", 0.02),
    ]),
    ("Halloumi Mezze Platter", "starter", 12.50, "Grilled halloumi with hummus, pitta, and salad", [
        ("halloumi", 0.15), ("hummus", 0.12), ("pitta", 1), ("salad", 0.06), ("olive_oil", 0.02),
    ]),
    ("Greek Salad", "starter", 9.50, "Classic Greek salad with feta and olive oil", [
        ("feta", 0.08), ("tomatoes", 0.12), ("olive_oil", 0.03), ("onions", 0.04), ("salad", 0.10),
    ]),
    ("Chicken Shawarma Wrap", "main", 13.50, "Spiced chicken in warm pitta with garlic sauce", [
        ("chicken", 0.20), ("pitta", 1), ("garlic", 0.02), ("salad", 0.05), ("spices", 0.01), ("olive_oil", 0.02),
    ]),
]

SEA_BASS_MENU_ITEM_ID = 3


def build_demo_dataset() -> RestaurantDataset:
    """Assemble a fresh copy of the demo restaurant."""

    restaurant_id = DEMO_RESTAURANT_ID
    restaurant = Restaurant(
        id=restaurant_id,
        name="The Golden Fork",
        type="Mediterranean",
        location="London, Shoreditch",
        seating_capacity=65,
        avg_monthly_covers=2200,
    )

    monthly_data = [
        MonthlyData(id=index, restaurant_id=restaurant_id, **dict(zip(_MONTHLY_FIELDS, row)))
        for index, row in enumerate(_MONTHLY_ROWS, start=1)
    ]

    suppliers = [
        Supplier(id=index, restaurant_id=restaurant_id, name=name, contact_info=contact, category=category)
        for index, (name, contact, category) in enumerate(_SUPPLIERS, start=1)
    ]

    ingredient_ids: Dict[str, int] = {}
    ingredients: List[Ingredient] = []
    for index, (key, (name, unit, current, previous, category)) in enumerate(_INGREDIENTS.items(), start=1):
        ingredient_ids[key] = index
        ingredients.append(
            Ingredient(
                id=index,
                restaurant_id=restaurant_id,
                name=name,
                unit=unit,
                current_price=current,
                previous_price=previous,
                category=category,
                classification="direct",
            )
        )

    supplier_ingredients = [
        SupplierIngredient(
            id=index,
            supplier_id=supplier_id,
            ingredient_id=ingredient_ids[key],
            unit_price=price,
            is_preferred=preferred,
            lead_time_days=lead_time,
        )
        for index, (supplier_id, key, price, preferred, lead_time) in enumerate(_SUPPLIER_LINKS, start=1)
    ]

    menu_items: List[MenuItem] = []
    recipes: Dict[int, List[MenuItemIngredient]] = {}
    line_id = 0
    for item_id, (name, category, price, description, lines) in enumerate(_MENU, start=1):
        menu_items.append(
            MenuItem(
                id=item_id,
                restaurant_id=restaurant_id,
                name=name,
                category=category,
                selling_price=price,
                description=description,
            )
        )
        recipe: List[MenuItemIngredient] = []
        for key, quantity in lines:
            line_id += 1
            recipe.append(
                MenuItemIngredient(
                    id=line_id,
                    menu_item_id=item_id,
                    ingredient_id=ingredient_ids[key],
                    quantity=quantity,
                    unit=_INGREDIENTS[key][1],
                )
            )
        recipes[item_id] = recipe

    promotions = [
        Promotion(
            id=1,
            restaurant_id=restaurant_id,
            name="Lunch Special - 15% Off",
            discount_percent=15,
            menu_item_id=None,
            target_profit=50000,
        ),
        Promotion(
            id=2,
            restaurant_id=restaurant_id,
            name="Sea Bass Promo - 10% Off",
            discount_percent=10,
            menu_item_id=SEA_BASS_MENU_ITEM_ID,
            target_profit=8000,
        ),
    ]

    return RestaurantDataset(
        restaurant=restaurant,
        monthly_data=monthly_data,
        cost_categories=default_cost_categories(),
        suppliers=suppliers,
        ingredients=ingredients,
        supplier_ingredients=supplier_ingredients,
        menu_items=menu_items,
        recipes=recipes,
        promotions=promotions,
    )


@lru_cache(maxsize=1)
def get_demo_dataset() -> RestaurantDataset:
    """Cached demo dataset; callers must not mutate it."""

    return build_demo_dataset()


__all__ = ["DEMO_RESTAURANT_ID", "SEA_BASS_MENU_ITEM_ID", "build_demo_dataset", "get_demo_dataset"]

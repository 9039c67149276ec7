"""Benchmarks, default cost categories and process stages shared by the analytics."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from restaurantiq.schemas import CostCategory

WEEKS_PER_MONTH = 4.345
WEEKLY_SPLIT_FACTORS: Tuple[float, ...] = (0.92, 1.02, 1.08, 0.98)

# Monthly cost fields, in display order.
COST_FIELDS: Dict[str, str] = {
    "food_cost": "Food",
    "labour_cost": "Labour",
    "energy_cost": "Energy",
    "rent_cost": "Rent",
    "marketing_cost": "Marketing",
    "supplies_cost": "Supplies",
    "technology_cost": "Technology",
    "waste_cost": "Waste",
}

# Target share of revenue (%) per tracked cost.
COST_TARGETS: Dict[str, float] = {
    "food_cost": 32,
    "labour_cost": 30,
    "energy_cost": 8,
    "rent_cost": 10,
    "marketing_cost": 5,
    "supplies_cost": 4,
    "technology_cost": 2,
    "waste_cost": 3,
}

# metric -> (good, warning, higher_is_better)
HEALTH_BANDS: Dict[str, Tuple[float, float, bool]] = {
    "food_cost_pct": (32, 38, False),
    "labour_cost_pct": (30, 35, False),
    "energy_cost_pct": (8, 12, False),
    "waste_pct": (3, 5, False),
    "gross_margin": (65, 50, True),
    "repeat_customer_rate": (40, 25, True),
}

PROCESS_STAGES: List[Dict[str, Optional[str]]] = [
    {"id": "procurement", "label": "Procurement", "description": "Sourcing raw ingredients and supplies", "cost_field": "food_cost", "cost_label": "Food Cost"},
    {"id": "storage", "label": "Storage", "description": "Inventory management and cold storage", "cost_field": "energy_cost", "cost_label": "Energy (Storage)"},
    {"id": "preparation", "label": "Preparation", "description": "Prepping ingredients and mise en place", "cost_field": "labour_cost", "cost_label": "Labour (Prep)"},
    {"id": "cooking", "label": "Cooking", "description": "Main kitchen production line", "cost_field": "energy_cost", "cost_label": "Energy (Cooking)"},
    {"id": "service", "label": "Service", "description": "Front-of-house delivery to customers", "cost_field": "labour_cost", "cost_label": "Labour (Service)"},
    {"id": "waste", "label": "Waste Mgmt", "description": "Food waste and disposal handling", "cost_field": "waste_cost", "cost_label": "Waste Cost"},
    {"id": "aftersales", "label": "After-Sales", "description": "Customer retention and marketing", "cost_field": "marketing_cost", "cost_label": "Marketing"},
]

PROCESS_LINKS: List[Tuple[str, str]] = [
    ("procurement", "storage"),
    ("storage", "preparation"),
    ("preparation", "cooking"),
    ("cooking", "service"),
    ("service", "waste"),
    ("service", "aftersales"),
]

_DEFAULT_COST_CATEGORY_ROWS = [
    ("Food & Ingredients", "food_cost", "Raw ingredients, beverages, and consumables", 30, "ShoppingCart", "procurement", "direct"),
    ("Labour", "labour_cost", "Staff wages, benefits, and payroll taxes", 28, "Users", "preparation", "direct"),
    ("Energy & Utilities", "energy_cost", "Gas, electric, water, and waste disposal", 7, "Zap", "cooking", "indirect"),
    ("Rent & Rates", "rent_cost", "Property lease, business rates, insurance", 8, "Building2", "fixed", "overhead"),
    ("Marketing", "marketing_cost", "Advertising, social media, promotions", 4, "Megaphone", "aftersales", "overhead"),
    ("Supplies & Equipment", "supplies_cost", "Cleaning, tableware, disposables, small equipment", 3, "Package", "storage", "indirect"),
    ("Technology", "technology_cost", "POS system, booking software, WiFi", 1, "Monitor", "service", "overhead"),
    ("Food Waste", "waste_cost", "Spoilage, over-production, plate waste", 3, "Trash2", "waste", "indirect"),
    ("Packaging & Delivery", "delivery_cost", "Takeaway containers, delivery platform fees", 2, "Truck", "service", "direct"),
    ("Training & Development", "training_cost", "Staff training, certification, development", 1, "GraduationCap", "preparation", "overhead"),
    ("Maintenance & Repairs", "maintenance_cost", "Equipment servicing, building maintenance", 2, "Wrench", "fixed", "indirect"),
    ("Licenses & Compliance", "license_cost", "Alcohol license, food hygiene, permits", 1, "Shield", "fixed", "overhead"),
]


def default_cost_categories() -> List[CostCategory]:
    """Return fresh copies of the built-in cost categories, numbered from 1."""

    return [
        CostCategory(
            id=index,
            name=name,
            key=key,
            description=description,
            default_percentage=percentage,
            icon=icon,
            process_stage=stage,
            classification=classification,
            is_default=True,
            sort_order=index,
        )
        for index, (name, key, description, percentage, icon, stage, classification) in enumerate(
            _DEFAULT_COST_CATEGORY_ROWS, start=1
        )
    ]


__all__ = [
    "COST_FIELDS",
    "COST_TARGETS",
    "HEALTH_BANDS",
    "PROCESS_LINKS",
    "PROCESS_STAGES",
    "WEEKLY_SPLIT_FACTORS",
    "WEEKS_PER_MONTH",
    "default_cost_categories",
]

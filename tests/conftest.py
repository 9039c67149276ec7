from typing import Any, Callable

import pytest

from restaurantiq.schemas import MonthlyData

BASE_MONTH = {
    "restaurant_id": 1,
    "month": "January",
    "year": 2026,
    "revenue": 100000,
    "food_cost": 35000,
    "labour_cost": 32000,
    "energy_cost": 9000,
    "rent_cost": 8000,
    "marketing_cost": 4000,
    "supplies_cost": 3000,
    "technology_cost": 1000,
    "waste_cost": 4000,
    "delivery_revenue": 10000,
    "dine_in_revenue": 80000,
    "takeaway_revenue": 10000,
    "total_covers": 4000,
    "avg_ticket_size": 25,
    "repeat_customer_rate": 30,
}


@pytest.fixture(name="make_month")
def make_month_fixture() -> Callable[..., MonthlyData]:
    def _make(**overrides: Any) -> MonthlyData:
        return MonthlyData(**{**BASE_MONTH, **overrides})

    return _make


@pytest.fixture(name="month")
def month_fixture(make_month: Callable[..., MonthlyData]) -> MonthlyData:
    return make_month()

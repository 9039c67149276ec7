"""Read-only access to the bundled demo restaurant."""

from __future__ import annotations

from fastapi import APIRouter

from restaurantiq.config.settings import get_settings
from restaurantiq.schemas import RestaurantDataset
from restaurantiq.services.demo_data import get_demo_dataset
from restaurantiq.services.insights import RestaurantInsights, build_insights

router = APIRouter(prefix="/api/demo", tags=["demo"])


@router.get("/dataset", response_model=RestaurantDataset)
def demo_dataset() -> RestaurantDataset:
    return get_demo_dataset()


@router.get("/insights", response_model=RestaurantInsights)
def demo_insights() -> RestaurantInsights:
    return build_insights(get_demo_dataset(), get_settings().currency_symbol)

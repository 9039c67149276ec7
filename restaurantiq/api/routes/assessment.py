"""Quick assessment endpoint for restaurants without monthly history."""

from __future__ import annotations

from fastapi import APIRouter

from restaurantiq.services.quick_assessment import AssessmentInput, AssessmentResult, assess
from restaurantiq.services.reference_data import default_cost_categories

router = APIRouter(prefix="/api/assessment", tags=["assessment"])


@router.post("", response_model=AssessmentResult)
def quick_assessment(payload: AssessmentInput) -> AssessmentResult:
    return assess(payload, default_cost_categories())

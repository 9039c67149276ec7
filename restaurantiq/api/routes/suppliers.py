"""Supplier concentration endpoint."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from restaurantiq.schemas import Ingredient, Supplier, SupplierIngredient
from restaurantiq.services.supplier_risk import SupplierRiskReport, analyse_supplier_risk

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


class SupplierRiskRequest(BaseModel):
    suppliers: List[Supplier] = Field(default_factory=list)
    ingredients: List[Ingredient] = Field(default_factory=list)
    supplier_ingredients: List[SupplierIngredient] = Field(default_factory=list)


@router.post("/risk", response_model=SupplierRiskReport)
def supplier_risk(payload: SupplierRiskRequest) -> SupplierRiskReport:
    return analyse_supplier_risk(payload.suppliers, payload.ingredients, payload.supplier_ingredients)

"""Supply-chain concentration and price inflation analysis.

An ingredient bought from exactly one registered supplier is a single-source
risk. Each supplier is scored by how many of those it holds and how much of the
ingredient catalogue it controls::

    risk_score = single_source_count * 2 + control_percent / 10
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel

from restaurantiq.schemas import Ingredient, Supplier, SupplierIngredient
from restaurantiq.services.metrics import NamedAmount

RiskLevel = Literal["high", "medium", "low"]

HIGH_RISK_ABOVE = 5
MEDIUM_RISK_ABOVE = 2


class IngredientSourcing(BaseModel):
    ingredient_id: Optional[int]
    name: str
    supplier_count: int


class SupplierRiskScore(BaseModel):
    supplier_id: Optional[int]
    name: str
    category: str
    controlled_ingredients: int
    single_source_count: int
    control_percent: float
    risk_score: float
    risk_level: RiskLevel


class PriceChangeAlert(BaseModel):
    ingredient_id: Optional[int]
    name: str
    unit: str
    current_price: float
    previous_price: float
    change_percent: float
    supplier_count: int
    single_source_warning: bool


class SupplierRiskReport(BaseModel):
    single_source: List[IngredientSourcing] = []
    multi_source: List[IngredientSourcing] = []
    no_supplier: List[IngredientSourcing] = []
    suppliers: List[SupplierRiskScore] = []
    price_changes: List[PriceChangeAlert] = []
    distribution: List[NamedAmount] = []


def risk_level(score: float) -> RiskLevel:
    if score > HIGH_RISK_ABOVE:
        return "high"
    if score > MEDIUM_RISK_ABOVE:
        return "medium"
    return "low"


def analyse_supplier_risk(
    suppliers: Sequence[Supplier],
    ingredients: Sequence[Ingredient],
    links: Sequence[SupplierIngredient],
) -> SupplierRiskReport:
    known_suppliers = {supplier.id for supplier in suppliers}
    # Links to suppliers that are not in the list are ignored.
    active_links = [link for link in links if link.supplier_id in known_suppliers]

    supplier_count: Counter = Counter(link.ingredient_id for link in active_links)
    links_by_supplier: Dict[int, List[SupplierIngredient]] = {}
    for link in active_links:
        links_by_supplier.setdefault(link.supplier_id, []).append(link)

    single: List[IngredientSourcing] = []
    multi: List[IngredientSourcing] = []
    missing: List[IngredientSourcing] = []
    for ingredient in ingredients:
        count = supplier_count.get(ingredient.id, 0)
        entry = IngredientSourcing(ingredient_id=ingredient.id, name=ingredient.name, supplier_count=count)
        if count == 1:
            single.append(entry)
        elif count >= 2:
            multi.append(entry)
        else:
            missing.append(entry)

    catalogue_size = max(len(ingredients), 1)
    scores: List[SupplierRiskScore] = []
    for supplier in suppliers:
        supplier_links = links_by_supplier.get(supplier.id, [])
        controlled = len(supplier_links)
        single_count = sum(1 for link in supplier_links if supplier_count[link.ingredient_id] == 1)
        control_percent = controlled * 100 / catalogue_size
        score = single_count * 2 + control_percent / 10
        scores.append(
            SupplierRiskScore(
                supplier_id=supplier.id,
                name=supplier.name,
                category=supplier.category,
                controlled_ingredients=controlled,
                single_source_count=single_count,
                control_percent=control_percent,
                risk_score=score,
                risk_level=risk_level(score),
            )
        )
    scores.sort(key=lambda item: item.risk_score, reverse=True)

    price_changes: List[PriceChangeAlert] = []
    for ingredient in ingredients:
        previous = ingredient.previous_price
        if not previous or previous <= 0:
            continue
        count = supplier_count.get(ingredient.id, 0)
        price_changes.append(
            PriceChangeAlert(
                ingredient_id=ingredient.id,
                name=ingredient.name,
                unit=ingredient.unit,
                current_price=ingredient.current_price,
                previous_price=previous,
                change_percent=(ingredient.current_price - previous) / previous * 100,
                supplier_count=count,
                single_source_warning=count <= 1,
            )
        )
    price_changes.sort(key=lambda item: item.change_percent, reverse=True)

    distribution = [
        NamedAmount(name=name, value=len(bucket))
        for name, bucket in (("Single Source", single), ("Multi Source", multi), ("No Supplier", missing))
        if bucket
    ]

    return SupplierRiskReport(
        single_source=single,
        multi_source=multi,
        no_supplier=missing,
        suppliers=scores,
        price_changes=price_changes,
        distribution=distribution,
    )


__all__ = [
    "IngredientSourcing",
    "PriceChangeAlert",
    "RiskLevel",
    "SupplierRiskReport",
    "SupplierRiskScore",
    "analyse_supplier_risk",
    "risk_level",
]

import calendar
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Classification = Literal["direct", "indirect", "overhead"]

MONTH_NAMES: List[str] = [name for name in calendar.month_name if name]


class Restaurant(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    type: str
    location: str
    seating_capacity: int = Field(..., ge=0)
    avg_monthly_covers: int = Field(..., ge=0)


class MonthlyData(BaseModel):
    id: Optional[int] = None
    restaurant_id: int
    month: str
    year: int = Field(..., ge=1900, le=2200)
    revenue: float = Field(..., ge=0)
    food_cost: float = Field(..., ge=0)
    labour_cost: float = Field(..., ge=0)
    energy_cost: float = Field(..., ge=0)
    rent_cost: float = Field(..., ge=0)
    marketing_cost: float = Field(..., ge=0)
    supplies_cost: float = Field(..., ge=0)
    technology_cost: float = Field(..., ge=0)
    waste_cost: float = Field(..., ge=0)
    delivery_revenue: float = Field(..., ge=0)
    dine_in_revenue: float = Field(..., ge=0)
    takeaway_revenue: float = Field(..., ge=0)
    total_covers: int = Field(..., ge=0)
    avg_ticket_size: float = Field(..., ge=0)
    repeat_customer_rate: float = Field(..., ge=0, le=100)

    @field_validator("month", mode="before")
    @classmethod
    def _normalize_month(cls, value: object) -> str:
        label = str(value or "").strip().title()
        if label not in MONTH_NAMES:
            raise ValueError(f"Unknown month name: {value!r}")
        return label

    @property
    def month_number(self) -> int:
        return MONTH_NAMES.index(self.month) + 1

    @property
    def period_label(self) -> str:
        return f"{self.month[:3]} {self.year}"


class CostCategory(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)
    description: str = ""
    default_percentage: float = Field(..., ge=0, le=100)
    icon: str = ""
    process_stage: str
    classification: Classification = "direct"
    is_default: bool = True
    sort_order: int = 0


class RestaurantCostItem(BaseModel):
    id: Optional[int] = None
    restaurant_id: int
    cost_category_id: int
    enabled: bool = True
    custom_label: Optional[str] = None
    custom_percentage: Optional[float] = Field(default=None, ge=0, le=100)


class Supplier(BaseModel):
    id: Optional[int] = None
    restaurant_id: int
    name: str = Field(..., min_length=1)
    contact_info: Optional[str] = None
    category: str = "general"
    is_active: bool = True


class Ingredient(BaseModel):
    id: Optional[int] = None
    restaurant_id: int
    name: str = Field(..., min_length=1)
    unit: str = "kg"
    current_price: float = Field(..., ge=0)
    previous_price: Optional[float] = Field(default=None, ge=0)
    category: str = "general"
    classification: Classification = "direct"


class SupplierIngredient(BaseModel):
    id: Optional[int] = None
    supplier_id: int
    ingredient_id: int
    unit_price: float = Field(..., ge=0)
    is_preferred: bool = False
    lead_time_days: Optional[int] = Field(default=None, ge=0)


class MenuItem(BaseModel):
    id: Optional[int] = None
    restaurant_id: int
    name: str = Field(..., min_length=1)
    category: str = "main"
    selling_price: float = Field(..., ge=0)
    description: Optional[str] = None
    is_active: bool = True


class MenuItemIngredient(BaseModel):
    id: Optional[int] = None
    menu_item_id: int
    ingredient_id: int
    quantity: float = Field(..., ge=0)
    unit: str


class Promotion(BaseModel):
    id: Optional[int] = None
    restaurant_id: int
    name: str = Field(..., min_length=1)
    discount_percent: float = Field(..., ge=0, le=100)
    menu_item_id: Optional[int] = None
    target_profit: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True


class RestaurantDataset(BaseModel):
    """Everything known about one restaurant, as used by the demo snapshot."""

    model_config = ConfigDict(extra="ignore")

    restaurant: Restaurant
    monthly_data: List[MonthlyData] = Field(default_factory=list)
    cost_categories: List[CostCategory] = Field(default_factory=list)
    suppliers: List[Supplier] = Field(default_factory=list)
    ingredients: List[Ingredient] = Field(default_factory=list)
    supplier_ingredients: List[SupplierIngredient] = Field(default_factory=list)
    menu_items: List[MenuItem] = Field(default_factory=list)
    recipes: Dict[int, List[MenuItemIngredient]] = Field(default_factory=dict)
    promotions: List[Promotion] = Field(default_factory=list)

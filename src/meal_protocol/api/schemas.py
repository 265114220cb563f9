"""Pydantic models for the protocol calculation API."""

from pydantic import BaseModel, ConfigDict, Field

from meal_protocol.domain.meals import Meal


class MealPayload(BaseModel):
    """Meal payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    protocol: str = ""

    def to_domain(self) -> Meal:
        """Convert into a domain meal."""
        return Meal(id=self.id, name=self.name, protocol=self.protocol)


class CalculateRequest(BaseModel):
    """Request body for a protocol calculation."""

    body_weight_kg: float
    meals: list[MealPayload] = Field(min_length=1)


class NutritionRecordModel(BaseModel):
    """Nutrition for one food phrase."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    kcal: float
    protein_g: float
    carb_g: float
    lipid_g: float
    quantity_g: float
    matched_food: str | None = None
    found: bool


class NutritionTotalsModel(BaseModel):
    """Summed nutrition fields."""

    model_config = ConfigDict(from_attributes=True)

    kcal: float
    protein_g: float
    carb_g: float
    lipid_g: float
    quantity_g: float


class MealResultModel(BaseModel):
    """Records and totals for one meal."""

    model_config = ConfigDict(from_attributes=True)

    meal: MealPayload
    records: list[NutritionRecordModel]
    totals: NutritionTotalsModel


class MacroPerKgModel(BaseModel):
    """Macronutrients per kilogram of body weight."""

    model_config = ConfigDict(from_attributes=True)

    protein_g_per_kg: float
    carb_g_per_kg: float
    lipid_g_per_kg: float


class MacroSplitModel(BaseModel):
    """Caloric share of each macronutrient."""

    model_config = ConfigDict(from_attributes=True)

    protein_pct: float
    carb_pct: float
    lipid_pct: float


class MealShareModel(BaseModel):
    """A meal's share of the grand totals."""

    model_config = ConfigDict(from_attributes=True)

    meal_id: str
    kcal_pct: float
    protein_pct: float
    carb_pct: float
    lipid_pct: float
    quantity_pct: float


class CalculateResponse(BaseModel):
    """Full protocol report."""

    model_config = ConfigDict(from_attributes=True)

    results: list[MealResultModel]
    grand_totals: NutritionTotalsModel
    body_weight_kg: float
    per_kg: MacroPerKgModel
    macro_split: MacroSplitModel
    meal_shares: list[MealShareModel]


class ReferenceFoodModel(BaseModel):
    """Reference food row, values per 100 g."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    kcal: float
    protein_g: float
    carb_g: float
    lipid_g: float


class FoodListResponse(BaseModel):
    """Reference foods ordered by name."""

    foods: list[ReferenceFoodModel]

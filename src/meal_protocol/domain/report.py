"""Domain models for derived protocol ratios."""

from dataclasses import dataclass

from meal_protocol.domain.meals import MealResult, NutritionTotals


@dataclass(frozen=True)
class MacroPerKg:
    """Macronutrient grams per kilogram of body weight."""

    protein_g_per_kg: float
    carb_g_per_kg: float
    lipid_g_per_kg: float


@dataclass(frozen=True)
class MacroSplit:
    """Share of total energy contributed by each macronutrient, in percent."""

    protein_pct: float
    carb_pct: float
    lipid_pct: float


@dataclass(frozen=True)
class MealShare:
    """A meal's percentage of each grand-total field."""

    meal_id: str
    kcal_pct: float
    protein_pct: float
    carb_pct: float
    lipid_pct: float
    quantity_pct: float


@dataclass(frozen=True)
class ProtocolReport:
    """Full result of a protocol calculation."""

    results: list[MealResult]
    grand_totals: NutritionTotals
    body_weight_kg: float
    per_kg: MacroPerKg
    macro_split: MacroSplit
    meal_shares: list[MealShare]

"""Domain models for meal protocol calculations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Meal:
    """A meal as supplied by the caller."""

    id: str
    name: str
    protocol: str


@dataclass(frozen=True)
class NutritionRecord:
    """Nutrition computed for a single food phrase."""

    name: str
    kcal: float
    protein_g: float
    carb_g: float
    lipid_g: float
    quantity_g: float
    matched_food: str | None = None

    @property
    def found(self) -> bool:
        """Whether the phrase matched a reference food."""
        return self.matched_food is not None


@dataclass(frozen=True)
class NutritionTotals:
    """Field-wise sums of nutrition records."""

    kcal: float
    protein_g: float
    carb_g: float
    lipid_g: float
    quantity_g: float


@dataclass(frozen=True)
class MealResult:
    """Records and totals for one meal."""

    meal: Meal
    records: list[NutritionRecord]
    totals: NutritionTotals

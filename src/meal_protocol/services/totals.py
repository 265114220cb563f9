"""Totals and derived ratios for protocol results."""

from collections.abc import Iterable

from meal_protocol.domain.meals import MealResult, NutritionRecord, NutritionTotals
from meal_protocol.domain.report import (
    MacroPerKg,
    MacroSplit,
    MealShare,
    ProtocolReport,
)

PROTEIN_KCAL_PER_G = 4.0
CARB_KCAL_PER_G = 4.0
LIPID_KCAL_PER_G = 9.0


def sum_records(records: Iterable[NutritionRecord]) -> NutritionTotals:
    """Field-wise sum of nutrition records."""
    total = NutritionTotals(0.0, 0.0, 0.0, 0.0, 0.0)
    for record in records:
        total = NutritionTotals(
            kcal=total.kcal + record.kcal,
            protein_g=total.protein_g + record.protein_g,
            carb_g=total.carb_g + record.carb_g,
            lipid_g=total.lipid_g + record.lipid_g,
            quantity_g=total.quantity_g + record.quantity_g,
        )
    return total


def sum_meal_totals(results: Iterable[MealResult]) -> NutritionTotals:
    """Grand totals across meal results."""
    total = NutritionTotals(0.0, 0.0, 0.0, 0.0, 0.0)
    for result in results:
        total = NutritionTotals(
            kcal=total.kcal + result.totals.kcal,
            protein_g=total.protein_g + result.totals.protein_g,
            carb_g=total.carb_g + result.totals.carb_g,
            lipid_g=total.lipid_g + result.totals.lipid_g,
            quantity_g=total.quantity_g + result.totals.quantity_g,
        )
    return total


def macros_per_kg(totals: NutritionTotals, body_weight_kg: float) -> MacroPerKg:
    """Macronutrient grams per kilogram of body weight."""
    if body_weight_kg <= 0:
        raise ValueError("body_weight_kg must be positive")
    return MacroPerKg(
        protein_g_per_kg=totals.protein_g / body_weight_kg,
        carb_g_per_kg=totals.carb_g / body_weight_kg,
        lipid_g_per_kg=totals.lipid_g / body_weight_kg,
    )


def macro_split(totals: NutritionTotals) -> MacroSplit:
    """Caloric share of each macronutrient relative to total kcal.

    All shares are 0 when total kcal is 0.
    """
    return MacroSplit(
        protein_pct=_percent(totals.protein_g * PROTEIN_KCAL_PER_G, totals.kcal),
        carb_pct=_percent(totals.carb_g * CARB_KCAL_PER_G, totals.kcal),
        lipid_pct=_percent(totals.lipid_g * LIPID_KCAL_PER_G, totals.kcal),
    )


def meal_share(result: MealResult, grand_totals: NutritionTotals) -> MealShare:
    """Percentage of each grand-total field contributed by one meal."""
    return MealShare(
        meal_id=result.meal.id,
        kcal_pct=_percent(result.totals.kcal, grand_totals.kcal),
        protein_pct=_percent(result.totals.protein_g, grand_totals.protein_g),
        carb_pct=_percent(result.totals.carb_g, grand_totals.carb_g),
        lipid_pct=_percent(result.totals.lipid_g, grand_totals.lipid_g),
        quantity_pct=_percent(result.totals.quantity_g, grand_totals.quantity_g),
    )


def build_report(results: list[MealResult], body_weight_kg: float) -> ProtocolReport:
    """Fold meal results into grand totals and derived ratios."""
    grand_totals = sum_meal_totals(results)
    return ProtocolReport(
        results=results,
        grand_totals=grand_totals,
        body_weight_kg=body_weight_kg,
        per_kg=macros_per_kg(grand_totals, body_weight_kg),
        macro_split=macro_split(grand_totals),
        meal_shares=[meal_share(result, grand_totals) for result in results],
    )


def _percent(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100.0

"""Tests for totals and derived ratios."""

import pytest

from meal_protocol.domain.meals import (
    Meal,
    MealResult,
    NutritionRecord,
    NutritionTotals,
)
from meal_protocol.services.totals import (
    build_report,
    macro_split,
    macros_per_kg,
    sum_records,
)


def _result(meal_id: str, *records: NutritionRecord) -> MealResult:
    return MealResult(
        meal=Meal(id=meal_id, name=f"Meal {meal_id}", protocol=""),
        records=list(records),
        totals=sum_records(records),
    )


def _record(kcal: float, protein: float, carb: float, lipid: float, grams: float):
    return NutritionRecord(
        name="item",
        kcal=kcal,
        protein_g=protein,
        carb_g=carb,
        lipid_g=lipid,
        quantity_g=grams,
        matched_food="item",
    )


def test_sum_records_of_nothing_is_zero() -> None:
    assert sum_records([]) == NutritionTotals(0.0, 0.0, 0.0, 0.0, 0.0)


def test_macros_per_kg() -> None:
    totals = NutritionTotals(
        kcal=2000, protein_g=140, carb_g=210, lipid_g=70, quantity_g=1500
    )

    per_kg = macros_per_kg(totals, body_weight_kg=70)

    assert per_kg.protein_g_per_kg == pytest.approx(2.0)
    assert per_kg.carb_g_per_kg == pytest.approx(3.0)
    assert per_kg.lipid_g_per_kg == pytest.approx(1.0)


def test_macros_per_kg_rejects_non_positive_weight() -> None:
    totals = NutritionTotals(0.0, 0.0, 0.0, 0.0, 0.0)

    with pytest.raises(ValueError):
        macros_per_kg(totals, body_weight_kg=0)


def test_macro_split_uses_energy_per_gram() -> None:
    # 4 kcal/g protein and carbs, 9 kcal/g lipids: 100 + 200 + 90 = 390 kcal.
    totals = NutritionTotals(
        kcal=390, protein_g=25, carb_g=50, lipid_g=10, quantity_g=300
    )

    split = macro_split(totals)

    assert split.protein_pct == pytest.approx(100 / 390 * 100)
    assert split.carb_pct == pytest.approx(200 / 390 * 100)
    assert split.lipid_pct == pytest.approx(90 / 390 * 100)
    assert split.protein_pct + split.carb_pct + split.lipid_pct == pytest.approx(100)


def test_macro_split_with_zero_energy() -> None:
    split = macro_split(NutritionTotals(0.0, 0.0, 0.0, 0.0, 0.0))

    assert (split.protein_pct, split.carb_pct, split.lipid_pct) == (0.0, 0.0, 0.0)


def test_build_report_grand_totals_and_meal_shares() -> None:
    breakfast = _result("1", _record(300, 20, 40, 5, 200), _record(100, 5, 10, 5, 100))
    lunch = _result("2", _record(600, 45, 50, 20, 300))

    report = build_report([breakfast, lunch], body_weight_kg=80)

    assert report.grand_totals == NutritionTotals(
        kcal=1000, protein_g=70, carb_g=100, lipid_g=30, quantity_g=600
    )
    assert report.body_weight_kg == 80
    assert report.per_kg.protein_g_per_kg == pytest.approx(0.875)
    first, second = report.meal_shares
    assert first.meal_id == "1"
    assert first.kcal_pct == pytest.approx(40)
    assert first.protein_pct == pytest.approx(25 / 70 * 100)
    assert first.quantity_pct == pytest.approx(50)
    assert second.lipid_pct == pytest.approx(20 / 30 * 100)
    assert first.kcal_pct + second.kcal_pct == pytest.approx(100)


def test_meal_share_of_zero_total_is_zero() -> None:
    empty = _result("1", _record(0, 0, 0, 0, 0))

    report = build_report([empty], body_weight_kg=70)

    assert report.meal_shares[0].kcal_pct == 0.0
    assert report.meal_shares[0].quantity_pct == 0.0

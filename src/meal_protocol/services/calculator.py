"""Protocol calculation service."""

import asyncio
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from meal_protocol.domain.errors import (
    CalculationError,
    FoodLookupError,
    ProtocolValidationError,
)
from meal_protocol.domain.meals import Meal, MealResult, NutritionRecord
from meal_protocol.domain.nutrition import ReferenceFood
from meal_protocol.domain.report import ProtocolReport
from meal_protocol.services.foods import FoodLookupService
from meal_protocol.services.parsing import (
    extract_quantity,
    normalize_food_name,
    tokenize_protocol,
)
from meal_protocol.services.totals import build_report, sum_records

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ParsedPhrase:
    phrase: str
    quantity_g: float
    key: str


@dataclass
class ProtocolCalculatorService:
    """Turns meal protocols into nutrition records and totals."""

    lookup_service: FoodLookupService
    not_found_marker: str = " (não encontrado)"
    concurrency: int = 4

    async def calculate(
        self, meals: Sequence[Meal], body_weight_kg: float
    ) -> list[MealResult]:
        """Calculate records and totals for every meal with a protocol.

        Meals with blank protocols are skipped. Each distinct food is looked up
        once. Raises ProtocolValidationError for unusable input and
        CalculationError when no lookup reached the reference table.
        """
        active_meals = validate_request(meals, body_weight_kg)
        parsed = [
            (meal, [_parse(phrase) for phrase in tokenize_protocol(meal.protocol)])
            for meal in active_meals
        ]
        keys = sorted({item.key for _, items in parsed for item in items if item.key})
        foods = await self._resolve(keys)

        results = [
            self._build_meal_result(meal, items, foods) for meal, items in parsed
        ]
        _logger.info(
            "Calculated %s meals (%s distinct foods, %s matched)",
            len(results),
            len(keys),
            sum(1 for food in foods.values() if food is not None),
        )
        return results

    async def build_report(
        self, meals: Sequence[Meal], body_weight_kg: float
    ) -> ProtocolReport:
        """Calculate meals and derive grand totals and ratios."""
        results = await self.calculate(meals, body_weight_kg)
        return build_report(results, body_weight_kg)

    async def _resolve(self, keys: list[str]) -> dict[str, ReferenceFood | None]:
        """Look up each key, absorbing per-key failures."""
        if not keys:
            return {}
        semaphore = asyncio.Semaphore(max(self.concurrency, 1))
        failures: list[str] = []

        async def lookup(key: str) -> ReferenceFood | None:
            async with semaphore:
                try:
                    return await self.lookup_service.find(key)
                except FoodLookupError as exc:
                    _logger.warning("Treating %r as not found: %s", key, exc.cause)
                    failures.append(key)
                    return None

        found = await asyncio.gather(*(lookup(key) for key in keys))
        if len(failures) == len(keys):
            raise CalculationError(
                f"Reference table unavailable: all {len(keys)} lookups failed"
            )
        return dict(zip(keys, found, strict=True))

    def _build_meal_result(
        self,
        meal: Meal,
        items: list[_ParsedPhrase],
        foods: dict[str, ReferenceFood | None],
    ) -> MealResult:
        records = [self._build_record(item, foods.get(item.key)) for item in items]
        return MealResult(meal=meal, records=records, totals=sum_records(records))

    def _build_record(
        self, item: _ParsedPhrase, food: ReferenceFood | None
    ) -> NutritionRecord:
        if food is None:
            _logger.warning("Food not found: %r (key=%r)", item.phrase, item.key)
            return NutritionRecord(
                name=f"{item.phrase}{self.not_found_marker}",
                kcal=0.0,
                protein_g=0.0,
                carb_g=0.0,
                lipid_g=0.0,
                quantity_g=0.0,
            )
        factor = item.quantity_g / 100.0
        return NutritionRecord(
            name=item.phrase,
            kcal=food.kcal * factor,
            protein_g=food.protein_g * factor,
            carb_g=food.carb_g * factor,
            lipid_g=food.lipid_g * factor,
            quantity_g=item.quantity_g,
            matched_food=food.name,
        )


def validate_request(meals: Sequence[Meal], body_weight_kg: float) -> list[Meal]:
    """Check the request and return the meals that have protocol text."""
    if not math.isfinite(body_weight_kg) or body_weight_kg <= 0:
        raise ProtocolValidationError("Body weight must be a positive number of kg")
    active = [meal for meal in meals if meal.protocol.strip()]
    if not active:
        raise ProtocolValidationError("At least one meal needs a protocol")
    return active


def _parse(phrase: str) -> _ParsedPhrase:
    return _ParsedPhrase(
        phrase=phrase,
        quantity_g=extract_quantity(phrase).amount,
        key=normalize_food_name(phrase),
    )

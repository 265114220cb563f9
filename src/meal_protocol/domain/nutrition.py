"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReferenceFood:
    """Reference composition row, all values per 100 g."""

    name: str
    kcal: float
    protein_g: float
    carb_g: float
    lipid_g: float


@dataclass(frozen=True)
class ExtractedQuantity:
    """Quantity parsed from a food phrase, normalized to grams."""

    amount: float
    unit: str = "g"

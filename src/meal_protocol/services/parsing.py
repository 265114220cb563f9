"""Free-text protocol parsing.

A protocol is a meal description such as
``"100g aveia; 200ml leite desnatado; 1 banana"``. Entries are separated by
semicolons, alternatives within an entry are joined by ``ou`` and only the
first alternative is used for calculation.
"""

import re

from meal_protocol.domain.nutrition import ExtractedQuantity

DEFAULT_QUANTITY_G = 100.0

# Grams per unit. These are fixed household-measure estimates, not densities.
UNIT_TO_GRAMS: dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "ml": 1.0,
    "l": 1000.0,
    "unidade": 50.0,
    "unidades": 50.0,
    "colher": 15.0,
    "colheres": 15.0,
    "xícara": 240.0,
    "xícaras": 240.0,
    "fatia": 50.0,
    "fatias": 50.0,
}

# Longest first so "unidades" is not matched as "unidade" + "s".
_UNIT_ALTERNATION = "|".join(
    re.escape(unit) for unit in sorted(UNIT_TO_GRAMS, key=len, reverse=True)
)
_UNIT = rf"(?P<unit>{_UNIT_ALTERNATION})(?![^\W\d_])"
_AMOUNT = r"(?P<amount>\d+(?:\.\d+)?)"

_QUANTITY_RE = re.compile(rf"^{_AMOUNT}\s*(?:{_UNIT})?", re.IGNORECASE)
_QUANTITY_WITH_UNIT_RE = re.compile(rf"^{_AMOUNT}\s*{_UNIT}\s*", re.IGNORECASE)
_BARE_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?\s*")
_OF_RE = re.compile(r"^de\s+", re.IGNORECASE)
_ALTERNATIVE_RE = re.compile(r"\s+ou\s+", re.IGNORECASE)
_PLUS_RE = re.compile(r"^\+\s*")


def tokenize_protocol(protocol: str) -> list[str]:
    """Split a protocol into food phrases, keeping the first of any alternatives."""
    phrases: list[str] = []
    for token in protocol.split(";"):
        candidate = token.strip()
        if not candidate:
            continue
        if _ALTERNATIVE_RE.search(candidate):
            candidate = _ALTERNATIVE_RE.split(candidate, maxsplit=1)[0]
        candidate = _PLUS_RE.sub("", candidate.strip()).strip()
        if candidate:
            phrases.append(candidate)
    return phrases


def extract_quantity(phrase: str) -> ExtractedQuantity:
    """Parse the leading amount and unit of a phrase and convert it to grams."""
    match = _QUANTITY_RE.match(phrase.strip())
    if match is None:
        return ExtractedQuantity(amount=DEFAULT_QUANTITY_G)
    amount = float(match.group("amount"))
    unit = (match.group("unit") or "g").lower()
    return ExtractedQuantity(amount=amount * UNIT_TO_GRAMS[unit])


def normalize_food_name(phrase: str) -> str:
    """Strip quantity, unit and a leading "de" to build a search key."""
    name = phrase.strip()
    name = _QUANTITY_WITH_UNIT_RE.sub("", name)
    name = _BARE_NUMBER_RE.sub("", name)
    name = _OF_RE.sub("", name)
    return name.strip().lower()

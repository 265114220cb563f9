"""Supabase implementation for the reference nutrition table."""

from dataclasses import dataclass

from supabase import Client

from meal_protocol.domain.nutrition import ReferenceFood
from meal_protocol.services.foods import FoodRepository

_COLUMNS = "name, kcal, prot, carb, lip"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed, read-only reference food table."""

    client: Client
    table: str = "foods"

    def search_by_name(self, query: str, limit: int) -> list[ReferenceFood]:
        """Search foods whose name contains the query, case-insensitively."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .ilike("name", f"%{_escape_like(query)}%")
            .order("name")
            .limit(limit)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def get_by_name(self, name: str) -> ReferenceFood | None:
        """Return the food whose name equals the given one, ignoring case."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .ilike("name", _escape_like(name))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_foods(self, search: str | None, limit: int) -> list[ReferenceFood]:
        """List reference foods by name, optionally filtered by a substring."""
        query = self.client.table(self.table).select(_COLUMNS)
        if search:
            query = query.ilike("name", f"%{_escape_like(search)}%")
        response = query.order("name").limit(limit).execute()
        return [_parse_food(row) for row in response.data or []]


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the query is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_food(row: dict[str, object]) -> ReferenceFood:
    """Parse a reference row into a domain model."""
    return ReferenceFood(
        name=str(row.get("name") or ""),
        kcal=float(row.get("kcal") or 0.0),
        protein_g=float(row.get("prot") or 0.0),
        carb_g=float(row.get("carb") or 0.0),
        lipid_g=float(row.get("lip") or 0.0),
    )

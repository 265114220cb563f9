"""Reference food lookup with caching and retries."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar

from meal_protocol.domain.errors import FoodLookupError
from meal_protocol.domain.nutrition import ReferenceFood
from meal_protocol.services.cache import MISSING, Cache

_logger = logging.getLogger(__name__)

T = TypeVar("T")

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class FoodRepository(Protocol):
    """Read-only access to the reference nutrition table."""

    def search_by_name(self, query: str, limit: int) -> list[ReferenceFood]:
        """Return foods whose name contains the query, ordered by name."""

    def get_by_name(self, name: str) -> ReferenceFood | None:
        """Return the food whose name equals the given one, ignoring case."""

    def list_foods(self, search: str | None, limit: int) -> list[ReferenceFood]:
        """List foods ordered by name, optionally filtered by a substring."""


@dataclass
class FoodLookupService:
    """Resolves a normalized search key to at most one reference food."""

    repository: FoodRepository
    cache: Cache
    candidate_limit: int = 10
    cache_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    debug: bool = False

    async def find(self, key: str) -> ReferenceFood | None:
        """Return the best reference food for a key, or None when nothing matches.

        When a full page of candidates has no exact name, the exact name is
        queried separately. Raises FoodLookupError when the reference table
        cannot be queried.
        """
        query = key.strip().lower()
        if not query:
            return None
        cache_key = f"foods:{query}:{self.candidate_limit}"
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached  # type: ignore[return-value]

        candidates = await self._call_with_retry(
            lambda: asyncio.to_thread(
                self.repository.search_by_name, query, self.candidate_limit
            ),
            key=query,
        )
        food = pick_best_match(query, candidates)
        if len(candidates) >= self.candidate_limit and not _is_exact(food, query):
            # The exact name may sort after the fetched page.
            exact = await self._call_with_retry(
                lambda: asyncio.to_thread(self.repository.get_by_name, query),
                key=query,
            )
            food = exact or food
        self.cache.set(cache_key, food, ttl_seconds=self.cache_ttl_seconds)
        if self.debug:
            _logger.info(
                "Food lookup: key=%s candidates=%s match=%s",
                query,
                len(candidates),
                food.name if food else None,
            )
        return food

    async def list_foods(
        self, search: str | None = None, limit: int = 100
    ) -> list[ReferenceFood]:
        """Browse the reference table by name, optionally filtered by a substring.

        Raises FoodLookupError when the reference table cannot be queried.
        """
        term = (search or "").strip().lower() or None
        return await self._call_with_retry(
            lambda: asyncio.to_thread(self.repository.list_foods, term, limit),
            key=term or "*",
        )

    async def _call_with_retry(
        self,
        func: "Callable[[], Awaitable[T]]",
        *,
        key: str,
    ) -> T:
        """Call the repository with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Food lookup failed (attempt %s/%s, key=%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    key,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise FoodLookupError(key, exc) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def pick_best_match(
    query: str, candidates: list[ReferenceFood]
) -> ReferenceFood | None:
    """Pick an exact name match if present, otherwise the first by name."""
    matching = [food for food in candidates if query in food.name.lower()]
    if not matching:
        return None
    for food in matching:
        if _is_exact(food, query):
            return food
    return min(matching, key=lambda food: food.name.lower())


def _is_exact(food: ReferenceFood | None, query: str) -> bool:
    return food is not None and food.name.strip().lower() == query

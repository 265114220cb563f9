"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_protocol.adapters.supabase_food_repository import SupabaseFoodRepository
from meal_protocol.config import Settings
from meal_protocol.services.cache import InMemoryCache
from meal_protocol.services.calculator import ProtocolCalculatorService
from meal_protocol.services.foods import FoodLookupService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_lookup_service: FoodLookupService
    calculator_service: ProtocolCalculatorService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(
        supabase_client, table=resolved_settings.foods_table
    )
    cache = InMemoryCache()
    food_lookup_service = FoodLookupService(
        repository=food_repository,
        cache=cache,
        candidate_limit=resolved_settings.lookup_candidate_limit,
        cache_ttl_seconds=resolved_settings.lookup_cache_ttl_seconds,
        retry_attempts=resolved_settings.lookup_retry_attempts,
        retry_delay_seconds=resolved_settings.lookup_retry_delay_seconds,
        debug=resolved_settings.debug,
    )
    calculator_service = ProtocolCalculatorService(
        lookup_service=food_lookup_service,
        not_found_marker=resolved_settings.not_found_marker,
        concurrency=resolved_settings.lookup_concurrency,
    )

    async def close_resources() -> None:
        cache.clear()

    return AppContainer(
        settings=resolved_settings,
        food_lookup_service=food_lookup_service,
        calculator_service=calculator_service,
        close_resources=close_resources,
    )

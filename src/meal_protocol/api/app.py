"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from meal_protocol.api.schemas import (
    CalculateRequest,
    CalculateResponse,
    FoodListResponse,
    ReferenceFoodModel,
)
from meal_protocol.app_logging import configure_logging
from meal_protocol.containers import AppContainer
from meal_protocol.domain.errors import (
    CalculationError,
    FoodLookupError,
    ProtocolValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ProtocolValidationError)
    async def validation_error(
        _request: Request, exc: ProtocolValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(CalculationError)
    async def calculation_error(
        _request: Request, exc: CalculationError
    ) -> JSONResponse:
        logger.error("Protocol calculation failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
        )

    @app.exception_handler(FoodLookupError)
    async def lookup_error(_request: Request, exc: FoodLookupError) -> JSONResponse:
        logger.error("Reference table query failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Reference table unavailable"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/protocols/calculate", response_model=CalculateResponse)
    async def calculate_protocol(
        payload: CalculateRequest, request: Request
    ) -> CalculateResponse:
        """Calculate nutrition totals and ratios for a set of meal protocols."""
        state_container: AppContainer = request.app.state.container
        report = await state_container.calculator_service.build_report(
            [meal.to_domain() for meal in payload.meals],
            payload.body_weight_kg,
        )
        return CalculateResponse.model_validate(report, from_attributes=True)

    @app.get("/foods", response_model=FoodListResponse)
    async def list_foods(
        request: Request,
        search: str | None = None,
        limit: int = Query(default=100, ge=1, le=1000),
    ) -> FoodListResponse:
        """Browse the reference table, optionally filtered by name."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.food_lookup_service.list_foods(search, limit)
        return FoodListResponse(
            foods=[ReferenceFoodModel.model_validate(food) for food in foods]
        )

    return app

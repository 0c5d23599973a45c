"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from price_cache.app_logging import configure_logging
from price_cache.config import parse_item_codes
from price_cache.containers import AppContainer
from price_cache.domain.prices import ItemPrice, LookupFailure


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    warm_item_codes = parse_item_codes(container.settings.warm_item_codes)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if warm_item_codes:
            try:
                await app.state.container.price_cache.get_prices_for(*warm_item_codes)
            except Exception:
                logger.exception("Failed to warm price cache")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Health check with the number of cached item codes."""
        state_container: AppContainer = request.app.state.container
        return {"status": "ok", "cached_items": len(state_container.price_cache.store)}

    @app.get("/prices")
    async def get_prices(
        request: Request, codes: str | None = None
    ) -> dict[str, object]:
        """Return prices for a comma separated list of item codes."""
        state_container: AppContainer = request.app.state.container
        item_codes = parse_item_codes(codes)
        try:
            prices = await state_container.price_cache.get_prices_for(*item_codes)
        except LookupFailure as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
            ) from exc
        return {
            "prices": [
                asdict(ItemPrice(item_code=code, price=price))
                for code, price in zip(item_codes, prices, strict=True)
            ]
        }

    @app.get("/prices/{item_code}")
    async def get_price(item_code: str, request: Request) -> dict[str, object]:
        """Return the price for a single item code."""
        state_container: AppContainer = request.app.state.container
        try:
            price = await state_container.price_cache.get_price_for(item_code)
        except LookupFailure as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
            ) from exc
        return asdict(ItemPrice(item_code=item_code, price=price))

    return app

"""Shared test fixtures."""

import asyncio
import logging
from dataclasses import dataclass, field

import pytest

from price_cache.adapters.price_client import PriceService
from price_cache.config import Settings
from price_cache.containers import AppContainer, build_container


@dataclass
class FakePriceService(PriceService):
    """Price service double with per-item prices, failures and delays."""

    prices: dict[str, float] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def get_price_for(self, item_code: str) -> float:
        self.calls.append(item_code)
        delay = self.delays.get(item_code)
        if delay:
            await asyncio.sleep(delay)
        if item_code in self.failures:
            raise self.failures[item_code]
        if item_code not in self.prices:
            raise RuntimeError(f"unknown item {item_code}")
        return self.prices[item_code]

    def call_count(self, item_code: str) -> int:
        return self.calls.count(item_code)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        price_service_url="https://prices.test",
        price_service_api_key="price-key",
    )


@pytest.fixture
def price_service() -> FakePriceService:
    return FakePriceService(prices={"A": 10.0, "B": 20.0, "C": 30.0})


@pytest.fixture
def container(settings: Settings, price_service: FakePriceService) -> AppContainer:
    return build_container(settings, price_service=price_service)


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    logger = logging.getLogger("price_cache")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

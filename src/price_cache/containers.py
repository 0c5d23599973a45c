"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from price_cache.adapters.price_client import HttpxPriceClient, PriceService
from price_cache.adapters.retrying_price_client import RetryingPriceService
from price_cache.config import Settings
from price_cache.services.transparent_cache import TransparentCache


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    price_service: PriceService
    price_cache: TransparentCache
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, price_service: PriceService | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    http_client: HttpxPriceClient | None = None
    if price_service is None:
        http_client = HttpxPriceClient.create(
            base_url=resolved_settings.price_service_url,
            api_key=resolved_settings.price_service_api_key,
            timeout_seconds=resolved_settings.price_service_timeout_seconds,
        )
        price_service = http_client
        if resolved_settings.retry_attempts > 0:
            price_service = RetryingPriceService(
                price_service=http_client,
                retry_attempts=resolved_settings.retry_attempts,
                retry_delay_seconds=resolved_settings.retry_delay_seconds,
            )
    price_cache = TransparentCache(
        price_service=price_service,
        max_age=timedelta(seconds=resolved_settings.cache_max_age_seconds),
    )

    async def close_resources() -> None:
        await price_cache.close()
        if http_client is not None:
            await http_client.close()

    return AppContainer(
        settings=resolved_settings,
        price_service=price_service,
        price_cache=price_cache,
        close_resources=close_resources,
    )

"""Retry wrapper around a price service."""

import asyncio
import logging
from dataclasses import dataclass

from price_cache.adapters.price_client import PriceService

_logger = logging.getLogger(__name__)


@dataclass
class RetryingPriceService(PriceService):
    """Price service that retries failed lookups with a fixed delay."""

    price_service: PriceService
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def get_price_for(self, item_code: str) -> float:
        """Fetch a price, retrying up to ``retry_attempts`` extra times."""
        attempt = 0
        while True:
            try:
                return await self.price_service.get_price_for(item_code)
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Price lookup for %s failed (attempt %s/%s, status=%s): %s",
                    item_code,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"

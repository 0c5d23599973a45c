"""Read-through cache in front of the price service."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import timedelta

from price_cache.adapters.price_client import PriceService
from price_cache.domain.prices import LookupFailure
from price_cache.services.cache import EntryStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransparentCache:
    """Serve prices from memory until they are older than ``max_age``.

    Misses and stale entries are fetched from ``price_service`` and written
    back. Concurrent misses for the same item code are not de-duplicated:
    while one lookup is awaiting the price service, another miss for that
    code calls it too and the last write wins.
    """

    price_service: PriceService
    max_age: timedelta
    store: EntryStore = field(default_factory=EntryStore)
    _detached: set["asyncio.Task[float]"] = field(
        default_factory=set, init=False, repr=False, compare=False
    )

    @property
    def pending_lookups(self) -> int:
        """Lookups still running after their batch already returned."""
        return len(self._detached)

    async def get_price_for(self, item_code: str) -> float:
        """Return a fresh price, fetching it only when the cache can't."""
        entry = self.store.get(item_code)
        if entry is not None and not entry.is_expired():
            return entry.value

        _logger.info("Fetching item %s price from price service", item_code)
        try:
            price = await self.price_service.get_price_for(item_code)
        except Exception as exc:
            raise LookupFailure(item_code, exc) from exc

        self.store.set(item_code, price, self.max_age)
        return price

    async def get_prices_for(self, *item_codes: str) -> list[float]:
        """Resolve several item codes concurrently.

        Prices come back in the order the codes were given. The first lookup
        failure is raised as soon as it is seen and no partial results are
        returned; lookups still in flight keep running in the background and
        may still fill the cache.
        """
        if not item_codes:
            return []

        tasks = [
            asyncio.create_task(self.get_price_for(item_code))
            for item_code in item_codes
        ]
        try:
            done, pending = await asyncio.wait(
                tasks, return_when=asyncio.FIRST_EXCEPTION
            )
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        errors = [
            task.exception()
            for task in tasks
            if task in done and task.exception() is not None
        ]
        if errors:
            self._detach(pending)
            _logger.warning("Batch price lookup cancelled due to error: %s", errors[0])
            raise errors[0]

        return [task.result() for task in tasks]

    async def close(self) -> None:
        """Cancel lookups left running by failed batches and wait for them."""
        tasks = list(self._detached)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._detached.clear()

    def _detach(self, tasks: set["asyncio.Task[float]"]) -> None:
        for task in tasks:
            self._detached.add(task)
            task.add_done_callback(self._on_detached_done)

    def _on_detached_done(self, task: "asyncio.Task[float]") -> None:
        self._detached.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.debug("Lookup failed after its batch returned: %s", exc)

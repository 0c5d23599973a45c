"""HTTP client for the upstream price service."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx


class PriceService(Protocol):
    """Interface for the expensive price lookup the cache fronts."""

    async def get_price_for(self, item_code: str) -> float:
        """Fetch the current price for an item code."""


@dataclass
class HttpxPriceClient(PriceService):
    """HTTPX-backed price service client."""

    base_url: str
    api_key: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls, base_url: str, api_key: str, timeout_seconds: float = 15.0
    ) -> "HttpxPriceClient":
        """Create a price client with a managed httpx session."""
        return cls(
            base_url=base_url,
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_price_for(self, item_code: str) -> float:
        """Fetch the current price for an item code."""
        url = f"{self.base_url}/prices/{_path_segment(item_code)}"
        response = await self.http_client.get(
            url,
            params={"api_key": self.api_key},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        price = payload.get("price") if isinstance(payload, dict) else None
        if price is None:
            raise RuntimeError(f"Price service returned no price for {item_code}")
        return float(price)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _path_segment(item_code: str) -> str:
    """Percent-encode an item code so it stays a single path segment."""
    segment = quote(item_code, safe="")
    if segment in {".", ".."}:
        return segment.replace(".", "%2E")
    return segment

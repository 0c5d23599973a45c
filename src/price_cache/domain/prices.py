"""Price domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemPrice:
    """Price resolved for a single item code."""

    item_code: str
    price: float


class LookupFailure(RuntimeError):
    """Raised when the price service cannot produce a price for an item."""

    def __init__(self, item_code: str, cause: Exception) -> None:
        self.item_code = item_code
        self.cause = cause
        super().__init__(
            f"getting price for item {item_code} from price service: {cause}"
        )

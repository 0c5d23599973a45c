"""In-memory entry store for cached prices."""

import threading
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True)
class CacheEntry:
    """A cached price and the instant it stops being usable."""

    value: float
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once ``now`` has reached the expiration instant."""
        current = now or datetime.now(tz=UTC)
        return current >= self.expires_at


class EntryStore:
    """Lock-guarded mapping from item code to its latest cache entry.

    Expired entries are kept until a fresh fetch overwrites them.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, item_code: str) -> CacheEntry | None:
        """Return the stored entry for an item code, expired or not."""
        with self._lock:
            return self._entries.get(item_code)

    def set(self, item_code: str, value: float, max_age: timedelta) -> CacheEntry:
        """Store a fresh entry that expires ``max_age`` from now."""
        entry = CacheEntry(value=value, expires_at=datetime.now(tz=UTC) + max_age)
        with self._lock:
            self._entries[item_code] = entry
        return entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

"""Tests for the cache entry store."""

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

from price_cache.services.cache import CacheEntry, EntryStore


def test_entry_is_fresh_before_expiry() -> None:
    now = datetime.now(tz=UTC)
    entry = CacheEntry(value=1.5, expires_at=now + timedelta(milliseconds=1))

    assert entry.is_expired(now) is False


def test_entry_is_expired_at_expiry_instant() -> None:
    now = datetime.now(tz=UTC)
    entry = CacheEntry(value=1.5, expires_at=now)

    assert entry.is_expired(now) is True
    assert entry.is_expired(now + timedelta(microseconds=1)) is True


def test_set_computes_expiry_from_max_age() -> None:
    store = EntryStore()
    before = datetime.now(tz=UTC)

    entry = store.set("A", 10.0, timedelta(seconds=30))

    assert store.get("A") == entry
    assert entry.value == 10.0
    assert before + timedelta(seconds=30) <= entry.expires_at
    assert entry.expires_at <= datetime.now(tz=UTC) + timedelta(seconds=30)


def test_set_replaces_entry_wholesale() -> None:
    store = EntryStore()
    first = store.set("A", 10.0, timedelta(seconds=30))

    second = store.set("A", 20.0, timedelta(seconds=30))

    assert store.get("A") is second
    assert first.value == 10.0
    assert len(store) == 1


def test_expired_entries_stay_in_store() -> None:
    store = EntryStore()
    store.set("A", 10.0, timedelta(0))

    entry = store.get("A")

    assert entry is not None
    assert entry.is_expired()
    assert len(store) == 1


def test_missing_key_returns_none() -> None:
    store = EntryStore()

    assert store.get("missing") is None
    assert len(store) == 0


def test_concurrent_writers_from_threads() -> None:
    store = EntryStore()
    codes = [f"item-{index}" for index in range(200)]

    def write(code: str) -> None:
        store.set(code, float(len(code)), timedelta(seconds=30))
        assert store.get(code) is not None

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(write, codes))

    assert len(store) == 200
    assert all(store.get(code) is not None for code in codes)

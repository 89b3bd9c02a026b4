import pytest

from mirante.domain import Article
from mirante.services.feed.cache import CacheKey, ResponseCache


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


def _article(url: str = "https://example.com/a") -> Article:
    return Article(id=0, title="t", source="s", url=url)


def test_entry_is_fresh_until_ttl_elapses():
    clock = FakeClock()
    cache = ResponseCache(ttl=300, clock=clock)
    key = CacheKey("popularity", 7, "global")
    cache.set(key, [_article()])

    clock.now += 299.9
    entry = cache.get(key)
    assert entry is not None
    assert entry.articles[0].url == "https://example.com/a"

    clock.now += 0.1
    assert cache.get(key) is None


def test_keys_are_independent():
    cache = ResponseCache(ttl=300, clock=FakeClock())
    cache.set(CacheKey("popularity", 7, "global"), [_article()])

    assert cache.get(CacheKey("popularity", 7, "africa")) is None
    assert cache.get(CacheKey("publishedAt", 7, "global")) is None


def test_set_replaces_entry_and_refreshes_timestamp():
    clock = FakeClock()
    cache = ResponseCache(ttl=10, clock=clock)
    key = CacheKey("popularity", 1, "asia")
    cache.set(key, [_article("https://example.com/old")])
    clock.now += 8
    cache.set(key, [_article("https://example.com/new")])
    clock.now += 8

    entry = cache.get(key)
    assert entry is not None
    assert entry.articles[0].url == "https://example.com/new"


def test_sweep_removes_only_expired_entries():
    clock = FakeClock()
    cache = ResponseCache(ttl=10, clock=clock)
    old = CacheKey("popularity", 1, "global")
    fresh = CacheKey("popularity", 3, "global")
    cache.set(old, [])
    clock.now += 6
    cache.set(fresh, [])
    clock.now += 4

    assert cache.sweep() == 1
    assert old not in cache
    assert fresh in cache
    assert len(cache) == 1


def test_ttl_must_be_positive():
    with pytest.raises(ValueError):
        ResponseCache(ttl=0)

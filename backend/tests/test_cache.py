from __future__ import annotations

from unittest.mock import MagicMock

from backend.recipes.cache import CacheGateway, InMemoryCache, SafeCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_put_then_get_within_ttl():
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    assert cache.put("receitas:arroz", ["a"], 3600)
    clock.now += 3599
    assert cache.has("receitas:arroz")
    assert cache.get("receitas:arroz") == ["a"]


def test_entry_expires_after_ttl():
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    cache.put("receitas:arroz", ["a"], 3600)
    clock.now += 3600
    assert not cache.has("receitas:arroz")
    assert cache.get("receitas:arroz") is None
    assert cache.stats()["size"] == 0


def test_get_returns_default_on_miss():
    cache = InMemoryCache()
    assert cache.get("missing", default=[]) == []


def test_forget_and_flush():
    cache = InMemoryCache()
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.forget("a")
    assert not cache.forget("a")
    assert cache.flush()
    assert not cache.has("b")


def test_stats_track_hits_and_misses():
    cache = InMemoryCache()
    cache.get("receitas:feijao")
    cache.put("receitas:feijao", [])
    cache.get("receitas:feijao")
    cache.get("receitas:feijao")
    stats = cache.stats()
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 66.7


def test_cached_empty_list_is_a_hit():
    cache = InMemoryCache()
    cache.put("receitas:nada", [])
    assert cache.get("receitas:nada") == []
    assert cache.stats()["hits"] == 1


def test_safe_cache_turns_store_failures_into_misses():
    store = MagicMock()
    store.has.side_effect = ConnectionError("down")
    store.get.side_effect = ConnectionError("down")
    store.put.side_effect = ConnectionError("down")
    store.forget.side_effect = ConnectionError("down")
    cache = SafeCache(store)

    assert cache.has("k") is False
    assert cache.get("k", "fallback") == "fallback"
    assert cache.put("k", 1, 60) is False
    assert cache.forget("k") is False


def test_put_purges_expired_entries():
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    cache.put("receitas:arroz", [], 60)
    cache.put("receitas:feijao", [], 3600)
    clock.now += 61
    cache.put("receitas:milho", [], 3600)
    assert cache.stats()["size"] == 2
    assert cache.has("receitas:feijao")


def test_in_memory_cache_implements_gateway():
    class GetPutOnly:
        def get(self, key, default=None):
            return default

        def put(self, key, value, ttl=3600):
            return True

    assert isinstance(InMemoryCache(), CacheGateway)
    assert not isinstance(GetPutOnly(), CacheGateway)


def test_safe_cache_implements_gateway_and_swallows_flush_and_stats_failures():
    store = MagicMock()
    store.flush.side_effect = ConnectionError("down")
    store.stats.side_effect = ConnectionError("down")
    cache = SafeCache(store)
    assert isinstance(cache, CacheGateway)
    assert cache.flush() is False
    assert cache.stats() == {}

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from docgen.templates import CacheStore, MemoryCacheStore, NullCacheStore


class TestMemoryCacheStore:
    def test_computes_once(self) -> None:
        cache: MemoryCacheStore[int] = MemoryCacheStore()
        calls: list[str] = []

        def compute() -> int:
            calls.append("x")
            return 42

        assert cache.get_or_compute("k", compute) == 42
        assert cache.get_or_compute("k", compute) == 42
        assert calls == ["x"]
        assert "k" in cache
        assert len(cache) == 1

    def test_failure_is_not_cached(self) -> None:
        cache: MemoryCacheStore[int] = MemoryCacheStore()

        def fail() -> int:
            msg = "boom"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="boom"):
            _ = cache.get_or_compute("k", fail)

        assert "k" not in cache
        assert cache.get_or_compute("k", lambda: 7) == 7

    def test_clear_evicts(self) -> None:
        cache: MemoryCacheStore[int] = MemoryCacheStore()
        _ = cache.get_or_compute("k", lambda: 1)

        cache.clear()

        assert "k" not in cache
        assert cache.get_or_compute("k", lambda: 2) == 2

    def test_concurrent_misses_compute_once(self) -> None:
        cache: MemoryCacheStore[int] = MemoryCacheStore()
        started = threading.Event()
        release = threading.Event()
        calls: list[int] = []

        def slow() -> int:
            calls.append(1)
            started.set()
            _ = release.wait(timeout=5)
            return 99

        with ThreadPoolExecutor(max_workers=4) as pool:
            leader = pool.submit(cache.get_or_compute, "k", slow)
            assert started.wait(timeout=5)
            followers = [pool.submit(cache.get_or_compute, "k", slow) for _ in range(3)]
            release.set()
            results = [leader.result(timeout=5)] + [f.result(timeout=5) for f in followers]

        assert results == [99, 99, 99, 99]
        assert calls == [1]

    def test_waiters_receive_leader_exception(self) -> None:
        cache: MemoryCacheStore[int] = MemoryCacheStore()
        started = threading.Event()
        release = threading.Event()

        def failing() -> int:
            started.set()
            _ = release.wait(timeout=5)
            msg = "shared failure"
            raise ValueError(msg)

        with ThreadPoolExecutor(max_workers=2) as pool:
            leader = pool.submit(cache.get_or_compute, "k", failing)
            assert started.wait(timeout=5)
            follower = pool.submit(cache.get_or_compute, "k", failing)
            release.set()

            with pytest.raises(ValueError, match="shared failure"):
                _ = leader.result(timeout=5)
            with pytest.raises(ValueError, match="shared failure"):
                _ = follower.result(timeout=5)

        assert "k" not in cache

    def test_clear_during_compute_discards_result(self) -> None:
        cache: MemoryCacheStore[int] = MemoryCacheStore()

        def compute() -> int:
            cache.clear()
            return 5

        assert cache.get_or_compute("k", compute) == 5
        assert "k" not in cache

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryCacheStore(), CacheStore)


class TestNullCacheStore:
    def test_always_computes(self) -> None:
        cache: NullCacheStore[int] = NullCacheStore()
        calls: list[int] = []

        def compute() -> int:
            calls.append(1)
            return len(calls)

        assert cache.get_or_compute("k", compute) == 1
        assert cache.get_or_compute("k", compute) == 2

    def test_satisfies_protocol(self) -> None:
        assert isinstance(NullCacheStore(), CacheStore)

"""Compute-once caches for resolved templates and raw bytes.

Caches are injected into the resolver through the CacheStore protocol.
MemoryCacheStore deduplicates concurrent misses per key: the first caller
computes while the others wait for its result. A failed computation is never
stored; everyone waiting on it receives the same exception and the next call
computes again.
"""

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

V = TypeVar("V")


@runtime_checkable
class CacheStore(Protocol[V]):
    """Protocol for a keyed compute-once cache."""

    def get_or_compute(self, key: str, compute: "Callable[[], V]") -> V:
        """Return the cached value for key, computing and storing it on a miss.

        Args:
            key: Cache key.
            compute: Zero-argument callable producing the value.

        Returns:
            The cached or freshly computed value.

        Raises:
            Exception: Whatever ``compute`` raised. Nothing is cached then.
        """
        ...

    def clear(self) -> None:
        """Evict every entry."""
        ...


@dataclass(slots=True)
class _Flight(Generic[V]):
    done: threading.Event = field(default_factory=threading.Event)
    value: V | None = None
    error: BaseException | None = None


class MemoryCacheStore(Generic[V]):
    """Thread-safe in-memory cache with single-flight miss handling.

    Example:
        >>> cache: MemoryCacheStore[int] = MemoryCacheStore()
        >>> cache.get_or_compute("answer", lambda: 42)
        42
        >>> "answer" in cache
        True
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._lock: threading.Lock = threading.Lock()
        self._values: dict[str, V] = {}
        self._flights: dict[str, _Flight[V]] = {}
        self._generation: int = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def get_or_compute(self, key: str, compute: "Callable[[], V]") -> V:
        """Return the cached value, computing it at most once per concurrent miss."""
        with self._lock:
            if key in self._values:
                return self._values[key]
            flight = self._flights.get(key)
            leader = flight is None
            if flight is None:
                flight = _Flight()
                self._flights[key] = flight
            generation = self._generation

        if not leader:
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.value  # pyright: ignore[reportReturnType]

        try:
            value = compute()
        except BaseException as e:
            flight.error = e
            with self._lock:
                self._flights.pop(key, None)
            flight.done.set()
            raise

        flight.value = value
        with self._lock:
            # A clear() during the computation invalidates its result
            if generation == self._generation:
                self._values[key] = value
            self._flights.pop(key, None)
        flight.done.set()
        return value

    def clear(self) -> None:
        """Evict every entry. In-flight computations are not stored."""
        with self._lock:
            self._values.clear()
            self._generation += 1


class NullCacheStore(Generic[V]):
    """Cache that never stores anything; every call computes."""

    def get_or_compute(self, key: str, compute: "Callable[[], V]") -> V:  # noqa: ARG002
        """Compute the value without caching it."""
        return compute()

    def clear(self) -> None:
        """Do nothing."""

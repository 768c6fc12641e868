"""Hash-bucketed index with separate chaining."""

from typing import Generic, Hashable, Iterable, TypeVar

from .base import KeyedIndex

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_CAPACITY = 100
MAX_LOAD_FACTOR = 0.75
_MASK64 = (1 << 64) - 1


def string_hash(key: str) -> int:
    """Polynomial hash over the UTF-8 bytes of ``key`` (``h = h*31 + b``)."""
    h = 0
    for byte in key.encode("utf-8"):
        h = (h * 31 + byte) & _MASK64
    return h


def _key_hash(key: Hashable) -> int:
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        return string_hash(key)
    return hash(key)


class ChainedIndex(KeyedIndex[K, V], Generic[K, V]):
    """A ``KeyedIndex`` over a bucket table with chained collisions.

    Each bucket is a list of ``[key, value]`` pairs. The table doubles
    once the load factor passes ``MAX_LOAD_FACTOR``; growth is an
    internal detail and never changes lookup results.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._buckets: list[list[list]] = [[] for _ in range(capacity)]
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._buckets)

    def _bucket(self, key: K) -> list[list]:
        return self._buckets[_key_hash(key) % len(self._buckets)]

    def insert(self, key: K, value: V) -> None:
        bucket = self._bucket(key)
        for pair in bucket:
            if pair[0] == key:
                pair[1] = value
                return
        bucket.append([key, value])
        self._size += 1
        if self._size > MAX_LOAD_FACTOR * len(self._buckets):
            self._grow()

    def find(self, key: K) -> V | None:
        for stored_key, value in self._bucket(key):
            if stored_key == key:
                return value
        return None

    def remove(self, key: K) -> bool:
        bucket = self._bucket(key)
        for i, pair in enumerate(bucket):
            if pair[0] == key:
                del bucket[i]
                self._size -= 1
                return True
        raise KeyError(key)

    def items(self) -> Iterable[tuple[K, V]]:
        for bucket in self._buckets:
            for key, value in bucket:
                yield key, value

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        try:
            bucket = self._bucket(key)  # type: ignore[arg-type]
        except TypeError:
            return False
        return any(pair[0] == key for pair in bucket)

    def _grow(self) -> None:
        old = self._buckets
        self._buckets = [[] for _ in range(len(old) * 2)]
        for bucket in old:
            for pair in bucket:
                self._bucket(pair[0]).append(pair)

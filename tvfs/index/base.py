"""Abstract keyed index interface."""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class KeyedIndex(ABC, Generic[K, V]):
    """Associative container mapping a key to a value.

    Used both for version-id lookup inside a file's tree and for
    filename lookup across the store.
    """

    @abstractmethod
    def insert(self, key: K, value: V) -> None:
        """Insert a new entry or overwrite the value of an existing key."""

    @abstractmethod
    def find(self, key: K) -> V | None:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def remove(self, key: K) -> bool:
        """Remove an entry.

        Returns True on removal. Raises KeyError if the key is absent.
        """

    @abstractmethod
    def items(self) -> Iterable[tuple[K, V]]:
        """Iterate over all key-value pairs, in no particular order."""

    @abstractmethod
    def __len__(self) -> int: ...

    def keys(self) -> Iterable[K]:
        """Iterate over all keys."""
        return (key for key, _ in self.items())

    def __contains__(self, key: object) -> bool:
        return any(k == key for k in self.keys())

    def for_each(self, fn: Callable[[K, V], None]) -> None:
        """Call ``fn(key, value)`` exactly once per entry."""
        for key, value in list(self.items()):
            fn(key, value)

"""Binary heap used for the store's top-K rankings."""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from .errors import EmptyHeapError

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class RankEntry:
    """A ranking snapshot pushed at mutation time.

    Ordered by ``rank`` and then by ``filename``, so ties resolve the
    same way on every run.
    """

    rank: float
    filename: str


class RankingHeap(Generic[T]):
    """Array-backed binary heap with a fixed orientation.

    ``max_heap=True`` keeps the largest item on top, ``False`` the
    smallest. Items must be mutually comparable with ``<`` and ``>``.
    """

    def __init__(self, max_heap: bool = True) -> None:
        self._data: list[T] = []
        self._max_heap = max_heap

    @property
    def max_heap(self) -> bool:
        return self._max_heap

    def insert(self, item: T) -> None:
        self._data.append(item)
        self._sift_up(len(self._data) - 1)

    def extract_top(self) -> T:
        """Remove and return the top item."""
        if not self._data:
            raise EmptyHeapError("Heap is empty")
        top = self._data[0]
        last = self._data.pop()
        if self._data:
            self._data[0] = last
            self._sift_down(0)
        return top

    def peek(self) -> T:
        """Return the top item without removing it."""
        if not self._data:
            raise EmptyHeapError("Heap is empty")
        return self._data[0]

    def is_empty(self) -> bool:
        return not self._data

    def __len__(self) -> int:
        return len(self._data)

    def copy(self) -> "RankingHeap[T]":
        """Return an independent heap holding the same items."""
        clone: RankingHeap[T] = RankingHeap(self._max_heap)
        clone._data = list(self._data)
        return clone

    def top(self, k: int, is_valid: Callable[[T], bool] | None = None) -> list[T]:
        """Collect up to ``k`` top items that pass ``is_valid``.

        Works on a copy: the live heap is left untouched. Items that fail
        the check are dropped from the copy and never re-inserted, so
        stale entries are filtered lazily rather than removed eagerly.
        """
        found: list[T] = []
        if k <= 0:
            return found
        scratch = self.copy()
        while len(found) < k and not scratch.is_empty():
            item = scratch.extract_top()
            if is_valid is None or is_valid(item):
                found.append(item)
        return found

    # -- Internal --

    def _before(self, a: T, b: T) -> bool:
        """True if ``a`` belongs above ``b``."""
        if self._max_heap:
            return a > b  # type: ignore[operator]
        return a < b  # type: ignore[operator]

    def _sift_up(self, index: int) -> None:
        data = self._data
        while index > 0:
            parent = (index - 1) // 2
            if not self._before(data[index], data[parent]):
                break
            data[index], data[parent] = data[parent], data[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        data = self._data
        size = len(data)
        while True:
            target = index
            for child in (2 * index + 1, 2 * index + 2):
                if child < size and self._before(data[child], data[target]):
                    target = child
            if target == index:
                return
            data[index], data[target] = data[target], data[index]
            index = target

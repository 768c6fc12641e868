"""FileSystem: the multi-file store with top-K rankings."""

import time
from dataclasses import dataclass
from typing import Callable, Iterable

from .errors import AlreadySealedError, RootBoundaryError
from .heap import RankEntry, RankingHeap
from .index.chained import DEFAULT_CAPACITY, ChainedIndex
from .timefmt import format_timestamp
from .tree import DEFAULT_SEPARATOR, Clock, HistoryEntry, VersionTree


@dataclass(frozen=True)
class Outcome:
    """Result of a store operation.

    Truthy on success. On failure ``reason`` is one of ``"exists"``,
    ``"not_found"``, ``"already_sealed"``, ``"unknown_version"`` or
    ``"at_root"``.
    """

    ok: bool
    reason: str = "ok"

    def __bool__(self) -> bool:
        return self.ok


OK = Outcome(True)
EXISTS = Outcome(False, "exists")
NOT_FOUND = Outcome(False, "not_found")
ALREADY_SEALED = Outcome(False, "already_sealed")
UNKNOWN_VERSION = Outcome(False, "unknown_version")
AT_ROOT = Outcome(False, "at_root")


@dataclass(frozen=True)
class RecentFile:
    filename: str
    last_modified: float

    def __str__(self) -> str:
        return f"{self.filename} (Last Modified: {format_timestamp(self.last_modified)})"


@dataclass(frozen=True)
class TreeSize:
    filename: str
    versions: int

    def __str__(self) -> str:
        return f"{self.filename} (Versions: {self.versions})"


class FileSystem:
    """In-memory store of versioned text files.

    Every successful mutation pushes a fresh ``RankEntry`` for the file
    into both ranking heaps. Older entries for the same file stay in
    place; ``recent_files()`` and ``biggest_trees()`` skip any entry whose
    rank no longer equals the file's current value.

    Failures are reported through falsy ``Outcome`` values (or ``None``
    for reads), never raised.
    """

    def __init__(
        self,
        *,
        clock: Clock = time.time,
        separator: str = DEFAULT_SEPARATOR,
        index_capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._clock = clock
        self._separator = separator
        self._index_capacity = index_capacity
        self._files: ChainedIndex[str, VersionTree] = ChainedIndex(index_capacity)
        self._recent: RankingHeap[RankEntry] = RankingHeap(max_heap=True)
        self._biggest: RankingHeap[RankEntry] = RankingHeap(max_heap=True)

    # -- Lookup --

    def tree(self, filename: str) -> VersionTree | None:
        return self._files.find(filename)

    def filenames(self) -> Iterable[str]:
        return self._files.keys()

    def __contains__(self, filename: object) -> bool:
        return filename in self._files

    def __len__(self) -> int:
        return len(self._files)

    # -- Operations --

    def create(self, filename: str) -> Outcome:
        if filename in self._files:
            return EXISTS
        tree = VersionTree(
            filename,
            clock=self._clock,
            separator=self._separator,
            index_capacity=self._index_capacity,
        )
        self._files.insert(filename, tree)
        self._push_rankings(tree)
        return OK

    def read(self, filename: str) -> str | None:
        tree = self._files.find(filename)
        if tree is None:
            return None
        return tree.read()

    def insert(self, filename: str, text: str) -> Outcome:
        tree = self._files.find(filename)
        if tree is None:
            return NOT_FOUND
        tree.insert(text)
        self._push_rankings(tree)
        return OK

    def update(self, filename: str, text: str) -> Outcome:
        tree = self._files.find(filename)
        if tree is None:
            return NOT_FOUND
        tree.update(text)
        self._push_rankings(tree)
        return OK

    def snapshot(self, filename: str, message: str) -> Outcome:
        tree = self._files.find(filename)
        if tree is None:
            return NOT_FOUND
        try:
            tree.snapshot(message)
        except AlreadySealedError:
            return ALREADY_SEALED
        self._push_rankings(tree)
        return OK

    def rollback(self, filename: str, version_id: int | None = None) -> Outcome:
        tree = self._files.find(filename)
        if tree is None:
            return NOT_FOUND
        try:
            moved = tree.rollback(version_id)
        except RootBoundaryError:
            return AT_ROOT
        if not moved:
            return UNKNOWN_VERSION
        self._push_rankings(tree)
        return OK

    def history(self, filename: str) -> list[HistoryEntry] | None:
        tree = self._files.find(filename)
        if tree is None:
            return None
        return tree.history()

    # -- Rankings --

    def recent_files(self, k: int) -> list[RecentFile]:
        """Up to ``k`` files, most recently modified first."""
        entries = self._recent.top(
            k, self._validator(lambda tree: tree.last_modified)
        )
        return [RecentFile(e.filename, e.rank) for e in entries]

    def biggest_trees(self, k: int) -> list[TreeSize]:
        """Up to ``k`` files with the most versions, largest first."""
        entries = self._biggest.top(
            k, self._validator(lambda tree: tree.version_count)
        )
        return [TreeSize(e.filename, int(e.rank)) for e in entries]

    # -- Internal --

    def _push_rankings(self, tree: VersionTree) -> None:
        self._recent.insert(RankEntry(tree.last_modified, tree.filename))
        self._biggest.insert(RankEntry(tree.version_count, tree.filename))

    def _validator(
        self, current: Callable[[VersionTree], float]
    ) -> Callable[[RankEntry], bool]:
        """Build a check that accepts an entry only if it is current.

        An entry is current when its rank equals the file's value now.
        Each filename is accepted at most once per query, since
        mutations that leave the value unchanged push equal entries.
        """
        seen: set[str] = set()

        def is_valid(entry: RankEntry) -> bool:
            if entry.filename in seen:
                return False
            tree = self._files.find(entry.filename)
            if tree is None or current(tree) != entry.rank:
                return False
            seen.add(entry.filename)
            return True

        return is_valid

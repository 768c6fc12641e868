"""tvfs: Time-travelling in-memory file store."""

from .errors import (
    AlreadySealedError,
    EmptyHeapError,
    InvalidStateError,
    RootBoundaryError,
)
from .filesystem import FileSystem, Outcome, RecentFile, TreeSize
from .heap import RankEntry, RankingHeap
from .index import ChainedIndex, KeyedIndex
from .tree import HistoryEntry, VersionNode, VersionTree

__all__ = [
    "AlreadySealedError",
    "ChainedIndex",
    "EmptyHeapError",
    "FileSystem",
    "HistoryEntry",
    "InvalidStateError",
    "KeyedIndex",
    "Outcome",
    "RankEntry",
    "RankingHeap",
    "RecentFile",
    "RootBoundaryError",
    "TreeSize",
    "VersionNode",
    "VersionTree",
]

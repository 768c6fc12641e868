"""Keyed index backends."""

from .base import KeyedIndex
from .chained import ChainedIndex

__all__ = ["ChainedIndex", "KeyedIndex"]

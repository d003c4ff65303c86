"""Data models for the substring trie."""

from .options import TrieInsertionOptions
from .response import IndexStats, SearchResponse, TrieStats

__all__ = [
    "IndexStats",
    "SearchResponse",
    "TrieInsertionOptions",
    "TrieStats",
]

"""
Substring Trie - in-memory index from key substrings to sets of values.

This package provides a character trie that supports prefix search, optional
search on any substring of an inserted key, and optional case and diacritic
insensitive matching. It is meant to back autocomplete or fuzzy-lookup
features inside a larger application.
"""

__version__ = "1.0.0"

from .core.index import TrieIndex
from .core.trie import Trie, TrieInsertionOptions
from .exceptions import InvalidKeyError, KeyTooLongError, TrieError, UnhashableValueError
from .models.response import IndexStats, SearchResponse, TrieStats

__all__ = [
    "Trie",
    "TrieIndex",
    "TrieInsertionOptions",
    "TrieError",
    "InvalidKeyError",
    "KeyTooLongError",
    "UnhashableValueError",
    "IndexStats",
    "SearchResponse",
    "TrieStats",
]

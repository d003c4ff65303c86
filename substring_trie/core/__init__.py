"""Core trie functionality."""

from .index import TrieIndex
from .normalizer import TextNormalizer
from .ordered_set import OrderedSet
from .trie import Trie, TrieInsertionOptions

__all__ = [
    "OrderedSet",
    "TextNormalizer",
    "Trie",
    "TrieIndex",
    "TrieInsertionOptions",
]

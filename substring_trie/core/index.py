"""Index manager that tracks the key variants of every inserted pair."""

import time
from datetime import datetime
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple

import structlog

from ..config import Settings, get_settings
from ..exceptions import KeyTooLongError, UnhashableValueError
from ..models.response import IndexStats, SearchResponse
from .trie import Trie, TrieInsertionOptions

logger = structlog.get_logger(__name__)

MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


class TrieIndex:
    """Keeps a trie consistent with the (key, value) pairs added to it.

    ``Trie.remove`` only walks the key it is given, so fully removing a pair
    inserted with case or diacritic variants needs every variant. The index
    remembers them, along with whether each variant was inserted with its
    non-prefixed suffixes, so pairs sharing a value can be restored after
    another pair is discarded.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """
        Initialize the index.

        Args:
            settings: Settings providing default options and limits
        """
        self.settings = settings or get_settings()
        self.trie: Trie = Trie()
        self._variants: Dict[Tuple[str, Hashable], Dict[str, bool]] = {}
        self._stats = {
            "total_queries": 0,
            "total_execution_time": 0.0,
            "last_updated": None,
        }

    def add(
        self,
        key: str,
        value: Hashable,
        options: Optional[TrieInsertionOptions] = None,
    ) -> List[str]:
        """
        Add a value under a key.

        Args:
            key: The key that maps to ``value``
            value: The value to store
            options: Insertion options (settings defaults if None)

        Returns:
            The key variants that were inserted
        """
        if isinstance(key, str) and len(key) > self.settings.max_key_length:
            raise KeyTooLongError(key, self.settings.max_key_length)

        if options is None:
            options = self.settings.insertion_options()

        variants = self.trie.insert(key, value, options)

        # An empty key never reaches the trie, so there is nothing to track
        if not key:
            return variants

        non_prefixed = TrieInsertionOptions.INCLUDE_NON_PREFIXED_MATCHES in options
        tracked = self._variants.setdefault((key, value), {})
        for variant in variants:
            tracked[variant] = tracked.get(variant, False) or non_prefixed

        self._stats["last_updated"] = datetime.utcnow()

        return variants

    def load(
        self,
        mappings: Mapping[str, Any],
        options: Optional[TrieInsertionOptions] = None,
    ) -> None:
        """
        Add many pairs at once.

        Args:
            mappings: Dictionary mapping keys to a value or a collection of values
            options: Insertion options applied to every pair
        """
        total_pairs = 0
        for key, values in mappings.items():
            if not isinstance(values, MULTI_VALUE_TYPES):
                values = [values]
            for value in values:
                self.add(key, value, options)
                total_pairs += 1

        logger.info("Mappings loaded", total_keys=len(mappings), total_pairs=total_pairs)

    def discard(self, key: str, value: Hashable) -> bool:
        """
        Remove a pair and every variant it was inserted under.

        Args:
            key: The key the pair was added with
            value: The value to remove

        Returns:
            True if removed, False if the pair was never added
        """
        try:
            variants = self._variants.pop((key, value), None)
        except TypeError as e:
            raise UnhashableValueError(value) from e

        if variants is None:
            return False

        for variant in variants:
            self.trie.remove(variant, value)

        # Removal clears the value along whole paths, including entries that
        # other pairs with the same value still rely on
        restored = self._restore(value)

        self._stats["last_updated"] = datetime.utcnow()
        logger.debug(
            "Pair discarded", key=key, variants=len(variants), restored_pairs=restored
        )

        return True

    def discard_many(self, pairs: Iterable[Tuple[str, Hashable]]) -> int:
        """Discard several pairs; returns how many were actually present."""
        return sum(1 for key, value in pairs if self.discard(key, value))

    def search(self, query: str, max_results: Optional[int] = None) -> SearchResponse:
        """
        Search the trie for values matching a query.

        Args:
            query: Search query (an empty query matches everything)
            max_results: Maximum number of results to return

        Returns:
            SearchResponse with results and metadata
        """
        start_time = time.time()
        if max_results is None:
            max_results = self.settings.max_results
        elif max_results <= 0:
            raise ValueError(f"max_results must be positive, got {max_results}")

        exact_matches, other_matches = self.trie.partition(query)
        matches = exact_matches + other_matches

        execution_time = (time.time() - start_time) * 1000
        self._stats["total_queries"] += 1
        self._stats["total_execution_time"] += execution_time

        return SearchResponse(
            query=query,
            results=matches[:max_results],
            exact_match_count=min(len(exact_matches), max_results),
            total_results=len(matches),
            truncated=len(matches) > max_results,
            execution_time_ms=execution_time,
        )

    def variants(self, key: str, value: Hashable) -> List[str]:
        """Get the key variants recorded for a pair (empty if unknown)."""
        return list(self._variants.get((key, value), {}))

    def _restore(self, value: Hashable) -> int:
        """Re-insert the variants of every tracked pair holding ``value``."""
        restored = 0
        for (_, tracked_value), variants in self._variants.items():
            if tracked_value != value:
                continue
            for variant, non_prefixed in variants.items():
                options = (
                    TrieInsertionOptions.INCLUDE_NON_PREFIXED_MATCHES
                    if non_prefixed
                    else TrieInsertionOptions.NONE
                )
                self.trie.insert(variant, value, options)
            restored += 1
        return restored

    def clear(self) -> None:
        """Clear the trie and all tracked pairs."""
        self.trie.clear()
        self._variants.clear()
        self._stats = {
            "total_queries": 0,
            "total_execution_time": 0.0,
            "last_updated": None,
        }
        logger.info("Index cleared")

    def get_stats(self) -> IndexStats:
        """Get index statistics."""
        return IndexStats(
            total_pairs=len(self._variants),
            total_variants=sum(len(variants) for variants in self._variants.values()),
            total_queries=self._stats["total_queries"],
            total_execution_time_ms=self._stats["total_execution_time"],
            trie=self.trie.get_stats(),
            last_updated=self._stats["last_updated"],
        )

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, pair: object) -> bool:
        try:
            return pair in self._variants
        except TypeError:
            return False

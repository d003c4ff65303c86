"""Trie mapping every substring ending of inserted keys to sets of values.

Each node represents a single character. A node's children represent the
characters that may follow it, and its values are those whose inserted key
(or key suffix) ends at that node. Values reached by a whole key are kept
apart from values reached by a key suffix so that exact matches can be
returned first.
"""

import weakref
from collections import deque
from typing import Deque, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

import structlog

from ..exceptions import InvalidKeyError, UnhashableValueError
from ..models.options import TrieInsertionOptions
from ..models.response import TrieStats
from .normalizer import TextNormalizer
from .ordered_set import OrderedSet

logger = structlog.get_logger(__name__)

V = TypeVar("V", bound=Hashable)


def _check_key(key: object) -> None:
    if not isinstance(key, str):
        raise InvalidKeyError(key)


def _check_value(value: object) -> None:
    try:
        hash(value)
    except TypeError as e:
        raise UnhashableValueError(value) from e


class Trie(Generic[V]):
    """A node of the trie; the root node is the trie itself.

    Keys are walked one code point at a time. Children are kept in a dict so
    their insertion order is preserved.
    """

    __slots__ = (
        "_children",
        "_exact_match_values",
        "_substring_match_values",
        "_parent",
        "__weakref__",
    )

    normalizer = TextNormalizer()

    def __init__(self) -> None:
        """Initialize an empty trie node."""
        self._children: Dict[str, "Trie[V]"] = {}
        self._exact_match_values: OrderedSet[V] = OrderedSet()
        self._substring_match_values: OrderedSet[V] = OrderedSet()
        self._parent: Optional["weakref.ReferenceType[Trie[V]]"] = None

    @property
    def parent(self) -> Optional["Trie[V]"]:
        """The node this node hangs from, or None for the root."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    @property
    def has_values(self) -> bool:
        return bool(self._exact_match_values) or bool(self._substring_match_values)

    def find(self, key: str) -> List[V]:
        """
        Find the branch matching a key and collect the values of all its descendants.

        If ``key`` is empty every value in the trie is returned.

        Args:
            key: The key to look up

        Returns:
            Values mapped from matches of ``key``, exact matches first and
            without duplicates
        """
        exact_matches, other_matches = self.partition(key)
        return exact_matches + other_matches

    def partition(self, key: str) -> Tuple[List[V], List[V]]:
        """
        Split the matches for a key into exact matches and all other matches.

        Args:
            key: The key to look up

        Returns:
            Tuple of (exact matches, other matches); the second list never
            repeats a value from the first
        """
        _check_key(key)

        anchor = self._descend(key)
        if anchor is None:
            return [], []

        # Breadth-first collection over everything below the matching branch
        substring_matches: OrderedSet[V] = OrderedSet(anchor._substring_match_values)
        queue: Deque[Trie[V]] = deque(anchor._children.values())

        while queue:
            node = queue.popleft()
            substring_matches.update(node._exact_match_values)
            substring_matches.update(node._substring_match_values)
            queue.extend(node._children.values())

        return (
            anchor._exact_match_values.to_list(),
            substring_matches.difference(anchor._exact_match_values).to_list(),
        )

    def insert(
        self,
        key: str,
        value: V,
        options: TrieInsertionOptions = TrieInsertionOptions.NONE,
    ) -> List[str]:
        """
        Insert a value into the trie for a key and its enabled variants.

        Runtime is O(n^2) in the key length when non-prefixed matches are
        included, since every suffix of the key gets its own branch. An empty
        key touches no node.

        Args:
            key: The key that maps to ``value``
            value: The value to store
            options: Transformations to insert ``key`` under as well

        Returns:
            The whole keys that were inserted, original key first
        """
        _check_key(key)
        _check_value(value)

        include_non_prefixed = TrieInsertionOptions.INCLUDE_NON_PREFIXED_MATCHES in options
        keys = self._key_variants(key, options)

        for variant in keys:
            for key_index in range(len(variant)):
                node = self
                for char in variant[key_index:]:
                    child = node._children.get(char)
                    if child is None:
                        child = self.__class__()
                        child._parent = weakref.ref(node)
                        node._children[char] = child
                    node = child

                if key_index == 0:
                    node._exact_match_values.add(value)

                    # Without non-prefixed matches the whole key is the only branch
                    if not include_non_prefixed:
                        break
                else:
                    node._substring_match_values.add(value)

        if key:
            logger.debug("Inserted trie key", key=key, variants=len(keys), options=options.value)

        return keys

    def remove(self, key: str, value: V) -> None:
        """
        Remove a value from every node the key maps it to.

        Only ``key`` itself is walked, not its variants. Nodes left without
        values or children are pruned. Removing a pair that was never inserted
        does nothing.

        Args:
            key: The key to remove
            value: The value to remove
        """
        _check_key(key)
        _check_value(value)

        pruned = 0
        for key_index in range(len(key)):
            suffix = key[key_index:]
            node = self._descend(suffix)
            if node is None:
                continue

            node._exact_match_values.discard(value)
            node._substring_match_values.discard(value)

            # Walk back up, detaching nodes that no longer hold anything
            for char in reversed(suffix):
                parent = node.parent
                if parent is None or node.has_values or node.has_children:
                    break
                del parent._children[char]
                node._parent = None
                node = parent
                pruned += 1

        logger.debug("Removed trie value", key=key, pruned_nodes=pruned)

    def clear(self) -> None:
        """Drop every child and value held by this node."""
        for child in self._children.values():
            child._parent = None
        self._children.clear()
        self._exact_match_values.clear()
        self._substring_match_values.clear()

    def get_stats(self) -> TrieStats:
        """Get node and value counts for the subtree rooted at this node."""
        node_count = 0
        exact_values = len(self._exact_match_values)
        substring_values = len(self._substring_match_values)
        max_depth = 0

        queue: Deque[tuple] = deque((child, 1) for child in self._children.values())
        while queue:
            node, depth = queue.popleft()
            node_count += 1
            exact_values += len(node._exact_match_values)
            substring_values += len(node._substring_match_values)
            max_depth = max(max_depth, depth)
            queue.extend((child, depth + 1) for child in node._children.values())

        return TrieStats(
            node_count=node_count,
            exact_match_entries=exact_values,
            substring_match_entries=substring_values,
            max_depth=max_depth,
        )

    def _descend(self, key: str) -> Optional["Trie[V]"]:
        """Follow ``key`` from this node; None if the branch does not exist."""
        node = self
        for char in key:
            child = node._children.get(char)
            if child is None:
                return None
            node = child
        return node

    def _key_variants(self, key: str, options: TrieInsertionOptions) -> List[str]:
        include_case_insensitive = TrieInsertionOptions.INCLUDE_CASE_INSENSITIVE_MATCHES in options
        include_diacritics_insensitive = (
            TrieInsertionOptions.INCLUDE_DIACRITICS_INSENSITIVE_MATCHES in options
        )

        keys = [key]

        def add_variant(variant: str) -> None:
            if variant != key:
                keys.append(variant)

        if include_case_insensitive:
            add_variant(self.normalizer.lowercase(key))

        if include_diacritics_insensitive:
            key_without_diacritics = self.normalizer.strip_diacritics(key)
            if key_without_diacritics != key:
                add_variant(key_without_diacritics)

                if include_case_insensitive:
                    add_variant(self.normalizer.lowercase(key_without_diacritics))

        return keys

    def __repr__(self) -> str:
        return (
            f"Trie(children={list(self._children)!r}, "
            f"exact={self._exact_match_values.to_list()!r}, "
            f"substring={self._substring_match_values.to_list()!r})"
        )

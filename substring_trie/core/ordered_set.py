"""Insertion-ordered, duplicate-free container used for trie value sets."""

from typing import Dict, Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(Generic[T]):
    """A set that remembers the order in which members were first added.

    Backed by a ``dict`` whose keys are the members, so membership tests are
    O(1) and iteration follows insertion order. Re-adding an existing member
    neither duplicates nor reorders it.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: Dict[T, None] = {}
        if items is not None:
            self.update(items)

    def add(self, item: T) -> None:
        """Append ``item`` unless it is already present."""
        if item not in self._items:
            self._items[item] = None

    def update(self, items: Iterable[T]) -> None:
        """Append every member of ``items`` not already present, in order."""
        for item in items:
            self.add(item)

    def discard(self, item: T) -> None:
        """Remove ``item`` if present; otherwise do nothing."""
        self._items.pop(item, None)

    def difference(self, other: Iterable[T]) -> "OrderedSet[T]":
        """Return a new set with the members of ``other`` removed, order kept."""
        excluded = other if isinstance(other, (OrderedSet, set, frozenset)) else set(other)
        return OrderedSet(item for item in self._items if item not in excluded)

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> List[T]:
        return list(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedSet):
            return list(self._items) == list(other._items)
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"

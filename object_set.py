"""
Insertion-ordered collection that tells members apart by identity.
"""
from typing import Dict, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar('T')


class ObjectSet(Generic[T]):
    """Ordered set of objects keyed by id().

    Adding the same object twice keeps a single member at its first position.
    Two distinct objects that compare equal are both kept.
    """

    def __init__(self, items: Optional[Iterable[T]] = None):
        # Values keep members alive, so their id() cannot be reused while stored
        self._members: Dict[int, T] = {}
        if items is not None:
            for item in items:
                self.add(item)

    def add(self, item: T):
        self._members.setdefault(id(item), item)

    def discard(self, item: T):
        self._members.pop(id(item), None)

    def clear(self):
        self._members.clear()

    def __contains__(self, item) -> bool:
        return id(item) in self._members

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __repr__(self) -> str:
        return f"ObjectSet({list(self._members.values())!r})"

from bisect import insort
from typing import Callable, Dict, Iterator, List

from .scalar import Point


class PointSet:
    """Arena of the distinct points accepted into a fuzzy segment.

    Indices are stable (insertion order) so the hull can refer to points by
    index; iteration follows the lexicographic order of the points.
    """

    def __init__(self, max_size: int):
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._max_size = int(max_size)
        self._arena: List[Point] = []
        self._index: Dict[Point, int] = {}
        self._ordered: List[Point] = []

    def size(self) -> int:
        return len(self._arena)

    def empty(self) -> bool:
        return not self._arena

    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._arena)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._ordered)

    def __contains__(self, p: Point) -> bool:
        return p in self._index

    def __getitem__(self, index: int) -> Point:
        return self._arena[index]

    def index_of(self, p: Point) -> int:
        return self._index[p]

    def next_index(self) -> int:
        return len(self._arena)

    def add(self, p: Point) -> int:
        if p in self._index:
            return self._index[p]
        if len(self._arena) >= self._max_size:
            raise OverflowError(f"point set is full ({self._max_size} points)")
        idx = len(self._arena)
        self._arena.append(p)
        self._index[p] = idx
        insort(self._ordered, p)
        return idx

    def lookup_with(self, p: Point) -> Callable[[int], Point]:
        """Lookup that also resolves next_index() to `p` without storing it."""
        arena = self._arena
        pending = len(arena)

        def lookup(i: int) -> Point:
            return p if i == pending else arena[i]
        return lookup

"""Online convex hull of a point stream growing at both ends.

The hull is a closed deque of point indices in counter-clockwise order
whose first and last entries are the same vertex (Melkman's layout). Two
insertion procedures, add_front and add_back, share that deque; each one
remembers the last vertex it inserted (its anchor) and tests the edges
around that anchor first, as one step of Melkman's algorithm does.

Insertion works in place on the deque. When the point is seen from an edge
next to the newest vertex (the usual case while a side keeps growing) the
test reads only the two deque ends, and the rotation and peeling are
amortized O(1). Otherwise, and for every point that falls inside the hull,
a linear scan of the edges decides, so an insertion is O(h) in the worst
case. Contours that double back on themselves are not simple chains, so
the anchor test alone cannot prove that a point is inside.

Points are never stored here, only indices resolved through `lookup`, so
a trial copy is just a copy of a short index deque.
"""
from collections import deque
from typing import Callable, Deque, Dict, Iterable, Iterator, List, Optional

from .scalar import Point, cross

Lookup = Callable[[int], Point]

FRONT = "front"
BACK = "back"


def monotone_chain(indices: Iterable[int], lookup: Lookup) -> List[int]:
    """Static hull of the given indices (CCW, no repeated closing vertex)."""
    seen = {}
    for i in indices:
        seen.setdefault(lookup(i), i)
    pts = sorted(seen)
    if len(pts) <= 1:
        return [seen[p] for p in pts]

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    return [seen[p] for p in lower[:-1] + upper[:-1]]


class ConvexHull:

    def __init__(self, lookup: Lookup):
        self._lookup = lookup
        self._deque: Deque[int] = deque()
        self._anchors: Dict[str, Optional[int]] = {FRONT: None, BACK: None}

    def copy(self, lookup: Optional[Lookup] = None) -> "ConvexHull":
        other = ConvexHull(lookup or self._lookup)
        other._deque = deque(self._deque)
        other._anchors = dict(self._anchors)
        return other

    def rebind(self, lookup: Lookup) -> None:
        self._lookup = lookup

    def vertices(self) -> List[int]:
        """Distinct hull vertices, CCW, without the closing repetition."""
        return list(self._deque)[:-1]

    def closed(self) -> List[int]:
        return list(self._deque)

    def points(self) -> List[Point]:
        return [self._lookup(i) for i in self.vertices()]

    def __len__(self) -> int:
        return max(0, len(self._deque) - 1)

    def __iter__(self) -> Iterator[int]:
        return iter(self.vertices())

    def add_front(self, index: int) -> bool:
        return self._add(index, FRONT)

    def add_back(self, index: int) -> bool:
        return self._add(index, BACK)

    def _add(self, index: int, side: str) -> bool:
        """Insert one point; returns True when it became a hull vertex."""
        d = self._deque
        if not d:
            d.extend((index, index))
            self._anchors[FRONT] = self._anchors[BACK] = index
            return True

        if len(d) - 1 < 3:
            # point or segment: the hull of at most three points is recomputed
            hull = monotone_chain(self.vertices() + [index], self._lookup)
            self._deque = deque(hull + hull[:1])
            if index not in hull:
                return False
            self._anchors[side] = index
            return True

        p = self._lookup(index)
        k = self._visible_edge(p, side)
        if k is None:
            return False

        # open the ring, then make the visible edge (a, b) its closing edge: [b, ..., a]
        d.pop()
        d.rotate(-(k + 1))
        L = self._lookup
        while len(d) >= 2 and cross(L(d[0]), L(d[1]), p) <= 0:
            d.popleft()
        while len(d) >= 2 and cross(L(d[-2]), L(d[-1]), p) <= 0:
            d.pop()
        d.appendleft(index)
        d.append(index)
        self._anchors[side] = index
        return True

    def _visible_edge(self, p: Point, side: str) -> Optional[int]:
        """Position k of an edge (d[k], d[k+1]) that has `p` strictly on its right."""
        d = self._deque
        L = self._lookup
        h = len(d) - 1

        if self._anchors[side] == d[0]:
            # the edges around the newest vertex sit at both ends of the deque
            if cross(L(d[-2]), L(d[-1]), p) < 0:
                return h - 1
            if cross(L(d[0]), L(d[1]), p) < 0:
                return 0

        it = iter(d)
        a = next(it)
        for k, b in enumerate(it):
            if cross(L(a), L(b), p) < 0:
                return k
            a = b
        return None

    def contains(self, p: Point) -> bool:
        pts = self.points()
        if not pts:
            return False
        if len(pts) == 1:
            return pts[0] == p
        if len(pts) == 2:
            a, b = pts
            if cross(a, b, p) != 0:
                return False
            return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
                    and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))
        h = len(pts)
        return all(cross(pts[k], pts[(k + 1) % h], p) >= 0 for k in range(h))

    def is_convex(self) -> bool:
        d = self._deque
        if not d:
            return True
        if d[0] != d[-1]:
            return False
        vs = self.vertices()
        if len(set(vs)) != len(vs):
            return False
        pts = self.points()
        if len(pts) <= 2:
            return len(set(pts)) == len(pts)
        h = len(pts)
        return all(cross(pts[k], pts[(k + 1) % h], pts[(k + 2) % h]) > 0 for k in range(h))

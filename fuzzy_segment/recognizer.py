"""Incremental recognition of fuzzy (blurred) digital straight segments.

A FuzzySegmentRecognizer walks a contour from a start position and grows
the set of accepted points one position at a time, at the front (towards
higher positions) or at the back. A point is accepted when the whole set
still fits in a strip strictly thinner than the width budget.

Typical use:

    rec = FuzzySegmentRecognizer(3, 2)
    rec.init(contour, start=0)
    while rec.extend_front():
        pass
    strip = rec.primitive()
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .config import MAX_POINTS
from .hull import BACK, FRONT, ConvexHull, monotone_chain
from .points import PointSet
from .scalar import INTEGER, Point, ScalarDomain
from .types import ParallelStrip, WidthBudget
from .width import EUCLIDEAN, check_metric, minimal_strip, same_width, thinner_than

logger = logging.getLogger(__name__)


class RecognizerStateError(RuntimeError):
    """The recognizer was used outside of its init -> extend protocol."""


@dataclass
class _Trial:
    position: int
    point: Point
    hull: Optional[ConvexHull]               # None when the accepted set does not change
    strip: ParallelStrip


class FuzzySegmentRecognizer:

    def __init__(
            self,
            width_numerator: int,
            width_denominator: int,
            domain: ScalarDomain = INTEGER,
            max_size: int = MAX_POINTS,
            metric: str = EUCLIDEAN,
        ):
        self._budget = WidthBudget(width_numerator, width_denominator)
        self._domain = domain
        self._metric = check_metric(metric)
        self._points = PointSet(max_size)
        self._hull = ConvexHull(self._points.__getitem__)
        self._strip: Optional[ParallelStrip] = None
        self._contour: Optional[Sequence[Any]] = None
        self._closed = False
        self._first = 0
        self._last = 0

    def __copy__(self):
        raise TypeError("FuzzySegmentRecognizer cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("FuzzySegmentRecognizer cannot be copied")

    # ---- container

    def size(self) -> int:
        return self._points.size()

    def empty(self) -> bool:
        return self._points.empty()

    def max_size(self) -> int:
        return self._points.max_size()

    def __len__(self) -> int:
        return self._points.size()

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    @property
    def budget(self) -> WidthBudget:
        return self._budget

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    @property
    def metric(self) -> str:
        return self._metric

    @property
    def active(self) -> bool:
        return self._contour is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def span(self) -> Tuple[int, int]:
        """(first, last) contour positions covered, both inclusive."""
        self._require_active()
        n = len(self._contour)
        if self._closed:
            return self._first % n, self._last % n
        return self._first, self._last

    @property
    def length(self) -> int:
        """Number of contour positions covered (duplicates included)."""
        return self._last - self._first + 1 if self.active else 0

    def hull_points(self) -> List[Point]:
        return self._hull.points()

    # ---- protocol

    def init(self, contour: Sequence[Any], start: int = 0, closed: bool = False) -> None:
        if self.active:
            raise RecognizerStateError("init() called on an already initialized recognizer")
        n = len(contour)
        if n == 0:
            raise IndexError("Cannot start a segment on an empty contour")
        if not 0 <= start < n:
            raise IndexError(f"Start position {start} out of range for a contour of {n} points")

        p = self._domain.point(contour[start])
        idx = self._points.add(p)
        self._hull.add_front(idx)
        self._strip = minimal_strip(self._hull.vertices(), self._points.__getitem__, self._metric)
        self._contour = contour
        self._closed = bool(closed)
        self._first = self._last = start
        logger.debug("init at position %d on %s contour of %d points",
                     start, "closed" if closed else "open", n)

    def is_extendable_front(self) -> bool:
        return self._trial(FRONT) is not None

    def is_extendable_back(self) -> bool:
        return self._trial(BACK) is not None

    def extend_front(self) -> bool:
        return self._commit(self._trial(FRONT), FRONT)

    def extend_back(self) -> bool:
        return self._commit(self._trial(BACK), BACK)

    def primitive(self) -> ParallelStrip:
        self._require_active()
        return self._strip

    # ---- internals

    def _require_active(self) -> None:
        if not self.active:
            raise RecognizerStateError("Recognizer is not initialized, call init() first")

    def _next_position(self, side: str) -> Optional[int]:
        n = len(self._contour)
        if self._last - self._first + 1 >= n:
            return None
        pos = self._last + 1 if side == FRONT else self._first - 1
        if not self._closed and not 0 <= pos < n:
            return None
        return pos

    def _trial(self, side: str) -> Optional[_Trial]:
        """Evaluate the next point on `side` against a scratch hull; never mutates."""
        self._require_active()
        pos = self._next_position(side)
        if pos is None:
            return None
        if self._points.size() >= self._points.max_size():
            return None

        p = self._domain.point(self._contour[pos % len(self._contour)])
        if p in self._points:
            return _Trial(pos, p, None, self._strip)

        idx = self._points.next_index()
        scratch = self._hull.copy(lookup=self._points.lookup_with(p))
        grew = scratch.add_front(idx) if side == FRONT else scratch.add_back(idx)
        if grew:
            strip = minimal_strip(scratch.vertices(), self._points.lookup_with(p), self._metric)
        else:
            strip = self._strip
        if not thinner_than(strip, self._budget, self._metric):
            return None
        return _Trial(pos, p, scratch, strip)

    def _commit(self, trial: Optional[_Trial], side: str) -> bool:
        if trial is None:
            return False
        if trial.hull is not None:
            self._points.add(trial.point)
            trial.hull.rebind(self._points.__getitem__)
            self._hull = trial.hull
        self._strip = trial.strip
        if side == FRONT:
            self._last = trial.position
        else:
            self._first = trial.position
        return True

    # ---- diagnostics

    def is_valid(self) -> bool:
        """Recheck every invariant from scratch (slow, for tests and debugging)."""
        if not self.active:
            return self.empty()
        lookup = self._points.__getitem__
        pts = list(self._points)

        if not self._hull.is_convex():
            logger.warning("hull %s is not strictly convex", self._hull.closed())
            return False
        outside = [p for p in pts if not self._hull.contains(p)]
        if outside:
            logger.warning("%d accepted points lie outside the hull, e.g. %s", len(outside), outside[0])
            return False
        reference = minimal_strip(monotone_chain(range(self.size()), lookup), lookup, self._metric)
        if not same_width(reference, self._strip, self._metric):
            logger.warning("stored strip %s differs from recomputed %s", self._strip, reference)
            return False
        if not thinner_than(self._strip, self._budget, self._metric):
            logger.warning("strip %s is not thinner than %s", self._strip, self._budget)
            return False
        escaped = [p for p in pts if not self._strip.contains(p)]
        if escaped:
            logger.warning("%d accepted points escape the strip, e.g. %s", len(escaped), escaped[0])
            return False
        return True

    def __str__(self) -> str:
        if not self.active:
            return f"[FuzzySegmentRecognizer] uninitialized budget={self._budget}"
        first, last = self.span
        return (f"[FuzzySegmentRecognizer] size={self.size()} span=({first}, {last}) "
                f"budget={self._budget} metric={self._metric} strip={self._strip}")

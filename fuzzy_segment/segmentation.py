"""Decompositions of a contour into fuzzy segments."""
import logging
from typing import Any, Callable, List, Sequence

from .config import MAX_POINTS
from .recognizer import FuzzySegmentRecognizer
from .scalar import INTEGER, ScalarDomain
from .types import Segment
from .width import EUCLIDEAN

logger = logging.getLogger(__name__)


def _factory(
        width_numerator: int,
        width_denominator: int,
        domain: ScalarDomain,
        max_size: int,
        metric: str,
    ) -> Callable[[], FuzzySegmentRecognizer]:
    def make() -> FuzzySegmentRecognizer:
        return FuzzySegmentRecognizer(width_numerator, width_denominator,
                                      domain=domain, max_size=max_size, metric=metric)
    # fail fast on a bad budget or metric, even for an empty contour
    make()
    return make


def _segment(rec: FuzzySegmentRecognizer) -> Segment:
    first, last = rec.span
    return Segment(first=first, last=last, strip=rec.primitive(), size=rec.size(), closed=rec.closed)


def greedy_segmentation(
        contour: Sequence[Any],
        width_numerator: int,
        width_denominator: int,
        *,
        closed: bool = False,
        domain: ScalarDomain = INTEGER,
        max_size: int = MAX_POINTS,
        metric: str = EUCLIDEAN,
    ) -> List[Segment]:
    """Cut the contour into maximal-at-the-front segments.

    Each segment starts on the last point of the previous one. On a closed
    contour the walk stops once it is back at position 0.
    """
    make = _factory(width_numerator, width_denominator, domain, max_size, metric)
    n = len(contour)
    out: List[Segment] = []
    if n == 0:
        return out

    # position n is position 0 seen again after a full turn
    stop = n if closed else n - 1
    start = 0
    while start < n:
        rec = make()
        rec.init(contour, start=start, closed=closed)
        while start + rec.length - 1 < stop and rec.extend_front():
            pass
        out.append(_segment(rec))
        end = start + rec.length - 1
        if end >= stop:
            break
        # a single point segment (capacity 1) is stepped over
        start = end if rec.length > 1 else end + 1
    logger.debug("greedy segmentation: %d points -> %d segments", n, len(out))
    return out


def maximal_segments(
        contour: Sequence[Any],
        width_numerator: int,
        width_denominator: int,
        *,
        domain: ScalarDomain = INTEGER,
        max_size: int = MAX_POINTS,
        metric: str = EUCLIDEAN,
    ) -> List[Segment]:
    """Tangential cover of an open contour.

    Every returned segment can be extended neither at the front nor at the
    back. Consecutive segments overlap and have increasing first/last
    positions.
    """
    make = _factory(width_numerator, width_denominator, domain, max_size, metric)
    n = len(contour)
    out: List[Segment] = []
    if n == 0:
        return out

    rec = make()
    rec.init(contour, start=0)
    while rec.extend_front():
        pass
    out.append(_segment(rec))

    while out[-1].last < n - 1:
        rec = make()
        rec.init(contour, start=out[-1].last + 1)
        while rec.extend_back():
            pass
        while rec.extend_front():
            pass
        out.append(_segment(rec))
    logger.debug("maximal segments: %d points -> %d segments", n, len(out))
    return out

"""Minimum-width enclosing strip of a convex polygon.

Every hull edge is a candidate strip direction; the vertex farthest from
the edge line is tracked with a rotating pointer so one pass over the h
edges costs O(h). Widths are kept as exact ratios and compared by
cross-multiplication, never as floats.
"""
import logging
from typing import Any, Callable, Sequence, Tuple

from .scalar import Point, cross, dot
from .types import ParallelStrip, WidthBudget

logger = logging.getLogger(__name__)

EUCLIDEAN = "euclidean"
AXIS = "axis"
METRICS = (EUCLIDEAN, AXIS)


def check_metric(metric: str) -> str:
    if metric not in METRICS:
        raise ValueError(f"Unknown width metric '{metric}', expected one of {METRICS}")
    return metric


def strip_key(strip: ParallelStrip, metric: str) -> Tuple[Any, Any]:
    """Width of `strip` as a ratio (num, den), den > 0.

    euclidean: nu^2 / |N|^2 (squared perpendicular width)
    axis:      nu / max(|a|, |b|)
    """
    a, b = strip.normal
    if metric == EUCLIDEAN:
        return strip.nu * strip.nu, a * a + b * b
    return strip.nu, max(abs(a), abs(b))


def _less(k1: Tuple[Any, Any], k2: Tuple[Any, Any]) -> bool:
    return k1[0] * k2[1] < k2[0] * k1[1]


def thinner(s1: ParallelStrip, s2: ParallelStrip, metric: str = EUCLIDEAN) -> bool:
    return _less(strip_key(s1, metric), strip_key(s2, metric))


def same_width(s1: ParallelStrip, s2: ParallelStrip, metric: str = EUCLIDEAN) -> bool:
    (n1, d1), (n2, d2) = strip_key(s1, metric), strip_key(s2, metric)
    return n1 * d2 == n2 * d1


def thinner_than(strip: ParallelStrip, budget: WidthBudget, metric: str = EUCLIDEAN) -> bool:
    """Strict test width(strip) < budget; a strip exactly as wide as the budget fails."""
    num, den = strip_key(strip, metric)
    bn, bd = budget.numerator, budget.denominator
    if metric == EUCLIDEAN:
        return num * (bd * bd) < (bn * bn) * den
    return num * bd < bn * den


def _edge_strip(a: Point, b: Point, height: Any) -> ParallelStrip:
    normal = (a[1] - b[1], b[0] - a[0])
    return ParallelStrip(normal=normal, mu=dot(normal, a), nu=height)


def minimal_strip(
        vertices: Sequence[int],
        lookup: Callable[[int], Point],
        metric: str = EUCLIDEAN,
    ) -> ParallelStrip:
    """Thinnest strip containing the convex polygon `vertices` (CCW, distinct).

    One point gives the horizontal line through it, two points the line
    through both; both have zero width.
    """
    pts = [lookup(i) for i in vertices]
    h = len(pts)
    if h == 0:
        raise ValueError("Cannot compute the width of an empty hull")
    zero = pts[0][0] - pts[0][0]
    if h == 1:
        p = pts[0]
        normal = (zero, zero + 1)
        return ParallelStrip(normal=normal, mu=dot(normal, p), nu=zero)
    if h == 2:
        return _edge_strip(pts[0], pts[1], zero)

    def height(k: int, j: int) -> Any:
        return cross(pts[k % h], pts[(k + 1) % h], pts[j % h])

    best = None
    best_key = None
    j = 1
    for k in range(h):
        if j < k + 1:
            j = k + 1
        while height(k, j + 1) > height(k, j):
            j += 1
        cand = _edge_strip(pts[k], pts[(k + 1) % h], height(k, j))
        key = strip_key(cand, metric)
        if best is None or _less(key, best_key):
            best, best_key = cand, key
    logger.debug("minimal strip over %d hull edges: %s", h, best)
    return best

"""Unit tests for FuzzySegmentRecognizer (recognizer.py).

Covers the init -> extend protocol, query purity, threshold exactness,
capacity, closed contours and the self-check.
"""

import copy
import logging
from collections import deque
from fractions import Fraction

import numpy as np
import pytest

from fuzzy_segment.recognizer import FuzzySegmentRecognizer, RecognizerStateError
from fuzzy_segment.scalar import INT64, RATIONAL
from fuzzy_segment.types import ParallelStrip, WidthBudget
from fuzzy_segment.width import AXIS


def _snapshot(rec):
    return rec.size(), list(rec), rec.primitive(), rec.span


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:

    def test_collinear_points_extend_both_ways(self, diagonal_contour):
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(diagonal_contour, start=3)
        assert rec.size() == 1
        for _ in range(3):
            assert rec.extend_front()
            assert rec.extend_back()
        assert rec.size() == 7
        assert rec.primitive().nu == 0
        assert not rec.extend_front()
        assert not rec.extend_back()
        assert rec.is_valid()

    def test_back_exhausted_on_first_point(self, diagonal_contour):
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(diagonal_contour, start=0)
        assert not rec.is_extendable_back()
        assert not rec.extend_back()
        assert rec.size() == 1

    def test_far_point_is_rejected(self):
        contour = [(5, 9), (0, 0), (1, 0), (2, 0), (3, 0)]
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour, start=1)
        while rec.extend_front():
            pass
        assert rec.size() == 4
        assert not rec.extend_back()
        assert rec.size() == 4
        assert rec.span == (1, 4)

    def test_narrow_zigzag_is_accepted(self):
        half = Fraction(1, 2)
        contour = [(0, 0), (1, half), (2, 0), (3, half)]
        rec = FuzzySegmentRecognizer(1, 1, domain=RATIONAL)
        rec.init(contour)
        assert rec.extend_front()
        assert rec.extend_front()
        assert rec.extend_front()
        strip = rec.primitive()
        assert strip.euclidean_width_squared() == Fraction(1, 4)
        assert all(strip.contains(p) for p in contour)
        assert rec.is_valid()

    def test_capacity_stops_growth(self):
        contour = [(i, 0) for i in range(6)]
        rec = FuzzySegmentRecognizer(1, 1, max_size=3)
        rec.init(contour, start=2)
        assert rec.extend_front()
        assert rec.extend_back()
        assert rec.size() == rec.max_size() == 3
        assert not rec.is_extendable_front()
        assert not rec.extend_front()
        assert not rec.extend_back()
        assert rec.size() == 3


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

class TestProperties:

    def test_width_equal_to_budget_is_rejected(self):
        contour = [(0, 0), (1, 1), (2, 0)]
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour)
        assert rec.extend_front()
        assert not rec.extend_front()

        wider = FuzzySegmentRecognizer(3, 2)
        wider.init(contour)
        assert wider.extend_front()
        assert wider.extend_front()

    def test_queries_do_not_mutate(self, noisy_contour):
        contour = noisy_contour(30, seed=1)
        rec = FuzzySegmentRecognizer(2, 1)
        rec.init(contour, start=15)
        for _ in range(4):
            rec.extend_front()
            rec.extend_back()
        before = _snapshot(rec)
        for _ in range(3):
            rec.is_extendable_front()
            rec.is_extendable_back()
        assert _snapshot(rec) == before

    def test_rejection_is_idempotent(self):
        contour = [(0, 0), (4, 0), (8, 0), (4, 5)]
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour)
        assert rec.extend_front()
        assert rec.extend_front()
        before = _snapshot(rec)
        for _ in range(5):
            assert not rec.is_extendable_front()
            assert not rec.extend_front()
        assert _snapshot(rec) == before

    @pytest.mark.parametrize("seed", range(5))
    def test_width_is_monotone_and_strip_contains_points(self, noisy_contour, seed):
        contour = noisy_contour(60, seed=seed, noise=3)
        rec = FuzzySegmentRecognizer(5, 2)
        rec.init(contour, start=30)
        last = rec.primitive().euclidean_width_squared()
        grew = True
        while grew:
            grew = False
            for extend in (rec.extend_front, rec.extend_back):
                if extend():
                    grew = True
                    strip = rec.primitive()
                    width = strip.euclidean_width_squared()
                    assert width >= last
                    assert width < Fraction(25, 4)
                    assert all(strip.contains(p) for p in rec)
                    last = width
        assert rec.is_valid()

    def test_duplicate_points_advance_the_span_only(self):
        contour = [(0, 0), (1, 0), (0, 0), (2, 0)]
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour)
        assert rec.extend_front()
        assert rec.extend_front()
        assert rec.size() == 2
        assert rec.span == (0, 2)
        assert rec.length == 3
        assert rec.extend_front()
        assert rec.size() == 3

    def test_iteration_order(self):
        contour = [(3, 0), (2, 0), (1, 0)]
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour)
        rec.extend_front()
        rec.extend_front()
        assert list(rec) == [(1, 0), (2, 0), (3, 0)]
        assert len(rec) == 3


class TestMetricsAndDomains:

    def test_axis_metric_is_stricter(self):
        contour = [(0, 0), (1, 1), (2, 2), (0, 1)]
        euclid = FuzzySegmentRecognizer(1, 1)
        euclid.init(contour)
        axis = FuzzySegmentRecognizer(1, 1, metric=AXIS)
        axis.init(contour)
        for _ in range(2):
            assert euclid.extend_front()
            assert axis.extend_front()
        assert euclid.extend_front()
        assert not axis.extend_front()
        assert axis.is_valid() and euclid.is_valid()

    def test_int64_domain(self, diagonal_contour):
        rec = FuzzySegmentRecognizer(1, 1, domain=INT64)
        rec.init(diagonal_contour)
        while rec.extend_front():
            pass
        assert rec.size() == 7
        assert isinstance(next(iter(rec))[0], np.int64)
        assert rec.is_valid()

    def test_numpy_contour(self):
        contour = np.array([[0, 0], [1, 0], [2, 1], [3, 1]], dtype=np.int32)
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour)
        while rec.extend_front():
            pass
        assert rec.size() == 4
        assert list(rec)[0] == (0, 0)

    def test_non_integer_point_in_integer_domain(self):
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init([(0, 0), (0.5, 1)])
        with pytest.raises(ValueError):
            rec.extend_front()


class TestClosedContours:

    def test_back_wraps_around(self, square_contour):
        rec = FuzzySegmentRecognizer(1, 2)
        rec.init(square_contour, start=0, closed=True)
        assert rec.extend_back()
        assert rec.span == (15, 0)
        assert rec.closed

    def test_stops_after_a_full_turn(self):
        contour = [(0, 0), (1, 0), (2, 0), (1, 0)]
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(contour, start=1, closed=True)
        steps = 0
        while rec.extend_front():
            steps += 1
        assert steps == 3
        assert rec.length == 4
        assert not rec.extend_back()
        assert rec.size() == 3


class TestErrors:

    def test_uninitialized(self):
        rec = FuzzySegmentRecognizer(1, 1)
        assert rec.empty()
        assert rec.is_valid()
        with pytest.raises(RecognizerStateError):
            rec.primitive()
        with pytest.raises(RecognizerStateError):
            rec.extend_front()
        with pytest.raises(RecognizerStateError):
            rec.is_extendable_back()

    def test_init_twice(self, diagonal_contour):
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(diagonal_contour)
        with pytest.raises(RecognizerStateError):
            rec.init(diagonal_contour)

    @pytest.mark.parametrize("num, den", [(0, 1), (1, 0), (-1, 2), (2, -3)])
    def test_non_positive_budget(self, num, den):
        with pytest.raises(ValueError):
            FuzzySegmentRecognizer(num, den)

    @pytest.mark.parametrize("num, den", [(1, Fraction(3, 2)), (Fraction(1, 2), 1), (0.5, 1)])
    def test_non_integral_budget(self, num, den):
        with pytest.raises(ValueError):
            FuzzySegmentRecognizer(num, den)

    def test_unknown_metric(self):
        with pytest.raises(ValueError):
            FuzzySegmentRecognizer(1, 1, metric="chebyshev")

    def test_bad_start(self, diagonal_contour):
        with pytest.raises(IndexError):
            FuzzySegmentRecognizer(1, 1).init([])
        with pytest.raises(IndexError):
            FuzzySegmentRecognizer(1, 1).init(diagonal_contour, start=7)

    def test_copy_is_forbidden(self):
        rec = FuzzySegmentRecognizer(1, 1)
        with pytest.raises(TypeError):
            copy.copy(rec)
        with pytest.raises(TypeError):
            copy.deepcopy(rec)


class TestDisplay:

    def test_str(self, diagonal_contour):
        rec = FuzzySegmentRecognizer(3, 2)
        assert "uninitialized" in str(rec)
        rec.init(diagonal_contour)
        rec.extend_front()
        text = str(rec)
        assert "size=2" in text
        assert "budget=3/2" in text
        assert "ParallelStrip" in text


class TestSelfCheck:
    """is_valid() detects a corrupted instance and names the broken invariant."""

    @pytest.fixture
    def diagonal_rec(self, diagonal_contour):
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init(diagonal_contour)
        rec.extend_front()
        rec.extend_front()
        assert rec.is_valid()
        return rec

    @pytest.fixture
    def triangle_rec(self):
        rec = FuzzySegmentRecognizer(1, 1)
        rec.init([(0, 0), (4, 0), (0, 1)])
        assert rec.extend_front()
        assert rec.extend_front()
        assert rec.is_valid()
        return rec

    def _check_fails(self, rec, caplog, message):
        with caplog.at_level(logging.WARNING, logger="fuzzy_segment.recognizer"):
            assert not rec.is_valid()
        assert message in caplog.text

    def test_collinear_vertex_in_hull(self, diagonal_rec, caplog):
        middle = diagonal_rec._points.index_of((1, 1))
        diagonal_rec._hull._deque.insert(1, middle)
        self._check_fails(diagonal_rec, caplog, "not strictly convex")

    def test_point_outside_hull(self, triangle_rec, caplog):
        a = triangle_rec._points.index_of((0, 0))
        b = triangle_rec._points.index_of((4, 0))
        triangle_rec._hull._deque = deque([a, b, a])
        self._check_fails(triangle_rec, caplog, "outside the hull")

    def test_stored_strip_is_not_minimal(self, diagonal_rec, caplog):
        diagonal_rec._strip = ParallelStrip(normal=(0, 1), mu=0, nu=2)
        self._check_fails(diagonal_rec, caplog, "differs from recomputed")

    def test_strip_reaches_budget(self, triangle_rec, caplog):
        # 4/sqrt(17) is under 1 but over 1/2
        triangle_rec._budget = WidthBudget(1, 2)
        self._check_fails(triangle_rec, caplog, "is not thinner than 1/2")

    def test_accepted_point_escapes_strip(self, diagonal_rec, caplog):
        # same zero width, shifted off the diagonal
        diagonal_rec._strip = ParallelStrip(normal=(-1, 1), mu=1, nu=0)
        self._check_fails(diagonal_rec, caplog, "escape the strip")

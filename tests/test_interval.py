"""
Tests for Interval Arithmetic and 2D Boxes
"""

import numpy as np
import pytest
from certmin.bounds.interval import Interval, Box, split_box, ROUND_EPS


class TestInterval:
    """Test basic interval operations."""

    def test_creation(self):
        iv = Interval(1.0, 2.0)
        assert iv.lo == 1.0
        assert iv.hi == 2.0

    def test_point_interval(self):
        iv = Interval.point(3.0)
        assert iv.lo == 3.0
        assert iv.hi == 3.0
        assert iv.width == 0.0

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            Interval(2.0, 1.0)
        with pytest.raises(ValueError):
            Interval(float('nan'), 1.0)

    def test_tiny_inversion_collapses(self):
        iv = Interval(1.0 + ROUND_EPS / 4, 1.0)
        assert iv.lo == iv.hi

    def test_immutable(self):
        iv = Interval(1.0, 2.0)
        with pytest.raises(AttributeError):
            iv.lo = 0.0

    def test_contains(self):
        iv = Interval(1.0, 3.0)
        assert iv.contains(2.0)
        assert iv.contains(1.0)
        assert iv.contains(3.0)
        assert not iv.contains(0.0)
        assert not iv.contains(4.0)

    def test_width_and_midpoint(self):
        iv = Interval(1.0, 4.0)
        assert iv.width == 3.0
        assert iv.midpoint == 2.5

    def test_ordering_by_lower_bound(self):
        a = Interval(0.0, 10.0)
        b = Interval(1.0, 2.0)
        c = Interval(-1.0, 5.0)
        assert sorted([a, b, c]) == [c, a, b]

    def test_bisect(self):
        left, right = Interval(-2.0, 2.0).bisect()
        assert left == Interval(-2.0, 0.0)
        assert right == Interval(0.0, 2.0)


class TestIntervalArithmetic:
    """Test interval arithmetic operations."""

    def test_addition(self):
        c = Interval(1.0, 2.0) + Interval(3.0, 4.0)
        assert c.lo <= 4.0 <= c.hi
        assert c.lo <= 6.0 <= c.hi

    def test_scalar_on_both_sides(self):
        iv = Interval(1.0, 2.0)
        for c in (iv + 1, 1 + iv):
            assert c.lo <= 2.0 and c.hi >= 3.0
        c = 5 - iv
        assert c.lo <= 3.0 and c.hi >= 4.0
        c = 2 * iv
        assert c.lo <= 2.0 and c.hi >= 4.0

    def test_subtraction(self):
        c = Interval(3.0, 5.0) - Interval(1.0, 2.0)
        assert c.lo <= 1.0 <= c.hi
        assert c.lo <= 4.0 <= c.hi

    def test_multiplication_mixed_signs(self):
        c = Interval(-2.0, 3.0) * Interval(-1.0, 4.0)
        assert c.lo <= -8.0
        assert c.hi >= 12.0

    def test_division(self):
        c = Interval(1.0, 2.0) / Interval(4.0, 8.0)
        assert c.lo <= 0.125 and c.hi >= 0.5
        c = Interval(6.0, 12.0) / 6
        assert c.lo <= 1.0 and c.hi >= 2.0

    def test_division_by_zero_interval(self):
        c = Interval(1.0, 2.0) / Interval(-1.0, 1.0)
        assert c.lo == float('-inf')
        assert c.hi == float('inf')

    def test_square_contains_zero(self):
        c = Interval(-2.0, 3.0).square()
        # x^2 on [-2,3] has range [0, 9]
        assert c.lo <= 0.0
        assert c.lo >= -ROUND_EPS
        assert c.hi >= 9.0

    def test_square_is_tighter_than_product(self):
        iv = Interval(-1.0, 1.0)
        assert (iv * iv).lo < iv.square().lo

    def test_even_power(self):
        c = Interval(-2.0, 1.0) ** 4
        assert c.lo <= 0.0 and c.hi >= 16.0
        c = Interval(-3.0, -2.0) ** 4
        assert c.lo <= 16.0 and c.hi >= 81.0
        assert c.lo > 15.0

    def test_odd_power(self):
        c = Interval(-2.0, 1.0) ** 3
        assert c.lo <= -8.0 and c.hi >= 1.0

    def test_invalid_power(self):
        with pytest.raises(ValueError):
            Interval(1.0, 2.0) ** 0.5

    def test_abs(self):
        assert Interval(-3.0, 2.0).abs() == Interval(0.0, 3.0)
        assert Interval(-3.0, -2.0).abs() == Interval(2.0, 3.0)

    def test_sqrt(self):
        c = Interval(4.0, 9.0).sqrt()
        assert 2.0 - ROUND_EPS <= c.lo <= 2.0
        assert 3.0 <= c.hi <= 3.0 + ROUND_EPS

    def test_sqrt_negative(self):
        with pytest.raises(ValueError):
            Interval(-2.0, -1.0).sqrt()

    def test_exp(self):
        c = Interval(0.0, 1.0).exp()
        assert c.lo <= 1.0 <= c.hi
        assert c.lo <= np.e <= c.hi

    def test_sin_contains_extrema(self):
        c = Interval(0.0, np.pi).sin()
        assert c.hi == 1.0
        assert c.lo <= 0.0
        c = Interval(0.0, 7.0).sin()
        assert c == Interval(-1.0, 1.0)

    def test_cos(self):
        c = Interval(-0.5, 0.5).cos()
        assert c.lo <= np.cos(0.5)
        assert c.hi >= 1.0 - ROUND_EPS


class TestBox:
    """Test 2D boxes and quadrant splitting."""

    def test_from_bounds(self):
        box = Box.from_bounds(-2, 2, -1, 3)
        assert box.x == Interval(-2.0, 2.0)
        assert box.y == Interval(-1.0, 3.0)
        assert box.width == 4.0
        assert box.area == 16.0
        assert box.center == (0.0, 1.0)

    def test_contains(self):
        box = Box.from_bounds(0, 1, 0, 1)
        assert box.contains(0.5, 0.5)
        assert box.contains(1.0, 0.0)
        assert not box.contains(1.5, 0.5)

    def test_split_order(self):
        box = Box.from_bounds(-2, 2, -1, 3)
        q = box.split()
        assert q[0] == Box.from_bounds(-2, 0, -1, 1)
        assert q[1] == Box.from_bounds(-2, 0, 1, 3)
        assert q[2] == Box.from_bounds(0, 2, -1, 1)
        assert q[3] == Box.from_bounds(0, 2, 1, 3)

    def test_split_halves_both_extents(self):
        box = Box.from_bounds(-3, 3, -2, 2)
        for sub in split_box(box):
            assert sub.x.width == pytest.approx(box.x.width / 2)
            assert sub.y.width == pytest.approx(box.y.width / 2)
            assert sub.area == pytest.approx(box.area / 4)

    def test_split_covers_parent(self):
        box = Box.from_bounds(-1.5, 2.5, 0.0, 4.0)
        subs = split_box(box)
        assert sum(s.area for s in subs) == pytest.approx(box.area)
        # Every corner of the parent belongs to exactly one quadrant
        for px in (box.x.lo, box.x.hi):
            for py in (box.y.lo, box.y.hi):
                assert sum(s.contains(px, py) for s in subs) == 1
        # The center is shared by all four
        cx, cy = box.center
        assert all(s.contains(cx, cy) for s in subs)

    def test_canonical_round_trip(self):
        box = Box.from_bounds(-2, 2, -1, 3)
        assert Box.from_canonical(box.to_canonical()) == box

    def test_hashable(self):
        a = Box.from_bounds(0, 1, 0, 1)
        b = Box.from_bounds(0, 1, 0, 1)
        assert len({a, b}) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

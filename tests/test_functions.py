"""
Tests for the Objective Function Library
"""

import numpy as np
import pytest
from certmin.bounds.interval import Box, Interval
from certmin.functions import (
    FUNCTIONS,
    NaturalExtension,
    get_function,
    list_functions,
)
from certmin.solver.branch_and_bound import minimize


KNOWN_MINIMA = {
    "sphere": ((0.0, 0.0), 0.0),
    "booth": ((1.0, 3.0), 0.0),
    "matyas": ((0.0, 0.0), 0.0),
    "three_hump_camel": ((0.0, 0.0), 0.0),
    "six_hump_camel": ((0.0898, -0.7126), -1.0316284534898774),
    "beale": ((3.0, 0.5), 0.0),
    "goldstein_price": ((0.0, -1.0), 3.0),
    "rosenbrock": ((1.0, 1.0), 0.0),
    "levi": ((1.0, 1.0), 0.0),
}


def _random_sub_boxes(root: Box, rng, count: int):
    for _ in range(count):
        xs = np.sort(rng.uniform(root.x.lo, root.x.hi, 2))
        ys = np.sort(rng.uniform(root.y.lo, root.y.hi, 2))
        yield Box.from_bounds(xs[0], xs[1], ys[0], ys[1])


class TestRegistry:
    """Test lookup of functions by name."""

    def test_list_is_sorted(self):
        names = list_functions()
        assert names == sorted(names)
        assert set(names) == set(KNOWN_MINIMA)

    def test_get_function(self):
        f = get_function("booth")
        assert f.name == "booth"
        assert f.root_box == Box.from_bounds(-10, 10, -10, 10)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Available"):
            get_function("nope")

    def test_names_match_keys(self):
        for name, f in FUNCTIONS.items():
            assert f.name == name


class TestEnclosures:
    """Interval evaluations must contain every point value."""

    @pytest.mark.parametrize("name", sorted(KNOWN_MINIMA))
    def test_point_values_enclosed(self, name):
        f = get_function(name)
        rng = np.random.default_rng(0)
        for box in _random_sub_boxes(f.root_box, rng, 20):
            enclosure = f(box)
            for px, py in zip(
                rng.uniform(box.x.lo, box.x.hi, 10),
                rng.uniform(box.y.lo, box.y.hi, 10),
            ):
                value = f.point_value(px, py)
                tol = 1e-9 * max(1.0, abs(value))
                assert enclosure.lo - tol <= value <= enclosure.hi + tol

    @pytest.mark.parametrize("name", sorted(KNOWN_MINIMA))
    def test_known_minimizer(self, name):
        (x, y), fstar = KNOWN_MINIMA[name]
        f = get_function(name)
        assert f.point_value(x, y) == pytest.approx(fstar, abs=1e-3)
        assert f.root_box.contains(x, y)

    def test_point_box_is_tight(self):
        f = get_function("sphere")
        enclosure = f(Box.from_bounds(1, 1, 2, 2))
        assert enclosure.lo == pytest.approx(5.0)
        assert enclosure.hi == pytest.approx(5.0)

    def test_natural_extension_wraps_constants(self):
        ext = NaturalExtension(lambda x, y: 4.0)
        assert ext(Box.from_bounds(0, 1, 0, 1)) == Interval(4.0, 4.0)


class TestCertifiedMinima:
    """The search encloses the known global minimum."""

    @pytest.mark.parametrize("name", sorted(KNOWN_MINIMA))
    def test_minimum_is_bracketed(self, name):
        _, fstar = KNOWN_MINIMA[name]
        f = get_function(name)
        ctx = minimize(f, f.root_box.width / 16)
        tol = 1e-9 * max(1.0, abs(fstar))
        assert ctx.candidates.best().lower_bound <= fstar + tol
        assert ctx.min_ub >= fstar - tol


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

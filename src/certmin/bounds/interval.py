"""
Interval Arithmetic and 2D Boxes

Provides rigorous interval enclosures for evaluating objective functions
over rectangular regions.

This is the foundation of certified minimization:
- Every function value over a box is guaranteed to be in the computed interval
- The lower end of an enclosure is a certified lower bound for the box
- The upper end is an upper bound achievable somewhere in the box

Note: Outward rounding is emulated with a small epsilon instead of
hardware directed rounding.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union
import numpy as np


# Small epsilon for conservative rounding
ROUND_EPS = 1e-15

Number = Union[int, float]


@dataclass(frozen=True, order=True)
class Interval:
    """
    A closed interval [lo, hi].

    Intervals are immutable and ordered by (lo, hi), so sorting a
    collection of intervals orders it by lower bound first.
    """
    lo: float
    hi: float

    def __post_init__(self):
        lo = float(self.lo)
        hi = float(self.hi)
        if np.isnan(lo) or np.isnan(hi):
            raise ValueError(f"Invalid interval: [{lo}, {hi}]")
        if lo > hi + ROUND_EPS:
            raise ValueError(f"Invalid interval: [{lo}, {hi}]")
        if lo > hi:
            # Numerical noise: collapse to a point
            lo = hi = (lo + hi) / 2
        object.__setattr__(self, 'lo', lo)
        object.__setattr__(self, 'hi', hi)

    @classmethod
    def point(cls, x: float) -> 'Interval':
        """Create a point interval [x, x]."""
        return cls(x, x)

    @classmethod
    def entire(cls) -> 'Interval':
        return cls(float('-inf'), float('inf'))

    @property
    def width(self) -> float:
        return self.hi - self.lo

    @property
    def midpoint(self) -> float:
        return (self.lo + self.hi) / 2.0

    def contains(self, x: float) -> bool:
        return self.lo <= x <= self.hi

    def contains_zero(self) -> bool:
        return self.lo <= 0 <= self.hi

    def hull(self, other: 'Interval') -> 'Interval':
        """Convex hull of two intervals."""
        return Interval(min(self.lo, other.lo), max(self.hi, other.hi))

    def bisect(self) -> Tuple['Interval', 'Interval']:
        """Split at the midpoint into left and right halves."""
        m = self.midpoint
        return Interval(self.lo, m), Interval(m, self.hi)

    # Arithmetic operations with outward rounding

    @staticmethod
    def _coerce(other: Union['Interval', Number]) -> 'Interval':
        if isinstance(other, Interval):
            return other
        return Interval.point(float(other))

    def __neg__(self) -> 'Interval':
        return Interval(-self.hi, -self.lo)

    def __add__(self, other: Union['Interval', Number]) -> 'Interval':
        other = self._coerce(other)
        return Interval(
            self.lo + other.lo - ROUND_EPS,
            self.hi + other.hi + ROUND_EPS
        )

    def __radd__(self, other: Number) -> 'Interval':
        return self.__add__(other)

    def __sub__(self, other: Union['Interval', Number]) -> 'Interval':
        other = self._coerce(other)
        return Interval(
            self.lo - other.hi - ROUND_EPS,
            self.hi - other.lo + ROUND_EPS
        )

    def __rsub__(self, other: Number) -> 'Interval':
        return self._coerce(other).__sub__(self)

    def __mul__(self, other: Union['Interval', Number]) -> 'Interval':
        other = self._coerce(other)
        products = [
            self.lo * other.lo,
            self.lo * other.hi,
            self.hi * other.lo,
            self.hi * other.hi
        ]
        return Interval(
            min(products) - ROUND_EPS,
            max(products) + ROUND_EPS
        )

    def __rmul__(self, other: Number) -> 'Interval':
        return self.__mul__(other)

    def __truediv__(self, other: Union['Interval', Number]) -> 'Interval':
        other = self._coerce(other)
        if other.contains_zero():
            # Division by an interval containing zero is unbounded
            return Interval.entire()
        recip = Interval(
            1.0 / other.hi - ROUND_EPS,
            1.0 / other.lo + ROUND_EPS
        )
        return self * recip

    def __rtruediv__(self, other: Number) -> 'Interval':
        return self._coerce(other).__truediv__(self)

    def __pow__(self, n: int) -> 'Interval':
        """Integer power x^n."""
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"Only non-negative integer powers are supported, got {n!r}")
        if n == 0:
            return Interval.point(1.0)
        elif n == 1:
            return self
        elif n == 2:
            return self.square()
        elif n % 2 == 0:
            # Even power
            if self.hi <= 0:
                return Interval(
                    self.hi ** n - ROUND_EPS,
                    self.lo ** n + ROUND_EPS
                )
            elif self.lo >= 0:
                return Interval(
                    self.lo ** n - ROUND_EPS,
                    self.hi ** n + ROUND_EPS
                )
            else:
                return Interval(
                    0 - ROUND_EPS,
                    max(self.lo ** n, self.hi ** n) + ROUND_EPS
                )
        else:
            # Odd power is monotonic
            return Interval(self.lo ** n - ROUND_EPS, self.hi ** n + ROUND_EPS)

    def square(self) -> 'Interval':
        """Optimized x^2 computation."""
        if self.hi <= 0:
            return Interval(
                self.hi * self.hi - ROUND_EPS,
                self.lo * self.lo + ROUND_EPS
            )
        elif self.lo >= 0:
            return Interval(
                self.lo * self.lo - ROUND_EPS,
                self.hi * self.hi + ROUND_EPS
            )
        else:
            # Interval contains zero
            return Interval(
                -ROUND_EPS,
                max(self.lo * self.lo, self.hi * self.hi) + ROUND_EPS
            )

    def abs(self) -> 'Interval':
        """Absolute value."""
        if self.lo >= 0:
            return self
        elif self.hi <= 0:
            return Interval(-self.hi, -self.lo)
        else:
            return Interval(0, max(-self.lo, self.hi))

    def sqrt(self) -> 'Interval':
        """Square root (defined for non-negative)."""
        if self.hi < 0:
            raise ValueError(f"sqrt undefined on {self!r}")

        lo = max(0.0, self.lo)
        return Interval(
            max(0.0, np.sqrt(lo) - ROUND_EPS),
            np.sqrt(self.hi) + ROUND_EPS
        )

    def exp(self) -> 'Interval':
        """Exponential function."""
        return Interval(
            max(0.0, np.exp(self.lo) - ROUND_EPS),
            np.exp(self.hi) + ROUND_EPS
        )

    def sin(self) -> 'Interval':
        """Sine function with proper range handling."""
        # For wide intervals, return [-1, 1]
        if self.width >= 2 * np.pi:
            return Interval(-1, 1)

        # Reduce to [0, 2*pi]
        lo_red = self.lo % (2 * np.pi)
        hi_red = lo_red + self.width

        vals = [np.sin(lo_red), np.sin(hi_red)]

        # Max at pi/2 + 2k*pi
        if lo_red <= np.pi/2 <= hi_red or lo_red <= np.pi/2 + 2*np.pi <= hi_red:
            vals.append(1)
        # Min at 3*pi/2 + 2k*pi
        if lo_red <= 3*np.pi/2 <= hi_red or lo_red <= 3*np.pi/2 + 2*np.pi <= hi_red:
            vals.append(-1)

        return Interval(
            max(-1.0, min(vals) - ROUND_EPS),
            min(1.0, max(vals) + ROUND_EPS)
        )

    def cos(self) -> 'Interval':
        """Cosine function."""
        return (self + np.pi/2).sin()

    def to_canonical(self) -> Dict[str, Any]:
        return {"lo": self.lo, "hi": self.hi}

    def __repr__(self) -> str:
        return f"[{self.lo:.6g}, {self.hi:.6g}]"


@dataclass(frozen=True)
class Box:
    """
    A 2D search region: one interval per dimension.

    Attributes:
        x: Extent along the first dimension
        y: Extent along the second dimension
    """
    x: Interval
    y: Interval

    @classmethod
    def from_bounds(cls, x_lo: float, x_hi: float, y_lo: float, y_hi: float) -> 'Box':
        return cls(Interval(x_lo, x_hi), Interval(y_lo, y_hi))

    @property
    def width(self) -> float:
        """Width of the x-extent (splitting keeps both extents in step)."""
        return self.x.width

    @property
    def area(self) -> float:
        return self.x.width * self.y.width

    @property
    def center(self) -> Tuple[float, float]:
        return self.x.midpoint, self.y.midpoint

    def contains(self, px: float, py: float) -> bool:
        return self.x.contains(px) and self.y.contains(py)

    def split(self) -> Tuple['Box', 'Box', 'Box', 'Box']:
        """Split into four quadrants, see :func:`split_box`."""
        return split_box(self)

    def to_canonical(self) -> Dict[str, Any]:
        return {"x": self.x.to_canonical(), "y": self.y.to_canonical()}

    @classmethod
    def from_canonical(cls, data: Dict[str, Any]) -> 'Box':
        return cls(
            Interval(data["x"]["lo"], data["x"]["hi"]),
            Interval(data["y"]["lo"], data["y"]["hi"]),
        )

    def __repr__(self) -> str:
        return f"Box(x={self.x!r}, y={self.y!r})"


def split_box(box: Box) -> Tuple[Box, Box, Box, Box]:
    """
    Split a 2D box into four sub-boxes by bisecting each dimension.

    The quadrants are returned in a fixed order:
    (xl, yl), (xl, yr), (xr, yl), (xr, yr). Together they cover the
    parent exactly; neighbours share an edge at the midpoints.

    Args:
        box: Box to split

    Returns:
        Tuple of four congruent sub-boxes
    """
    xl, xr = box.x.bisect()
    yl, yr = box.y.bisect()
    return Box(xl, yl), Box(xl, yr), Box(xr, yl), Box(xr, yr)

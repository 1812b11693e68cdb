"""
Objective Function Library

Classic two-variable test functions for global minimization, each
paired with its usual search domain. Every formula is written once and
evaluated either on floats (point value) or on Intervals (natural
interval extension, a sound enclosure over a box).

Known minima (for reference):
- sphere, booth, matyas, three_hump_camel, beale, rosenbrock, levi: 0
- six_hump_camel: -1.0316284...
- goldstein_price: 3
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Union
import numpy as np

from .bounds.interval import Box, Interval
from .contract import ObjectiveFunction


Value = Union[float, Interval]


def _sin(v: Value) -> Value:
    if isinstance(v, Interval):
        return v.sin()
    return float(np.sin(v))


@dataclass(frozen=True)
class NaturalExtension:
    """
    Interval evaluation obtained by running a formula on the box extents.

    Picklable as long as ``formula`` is a module-level function, so it
    can be shipped to worker processes.
    """
    formula: Callable[[Value, Value], Value]

    def __call__(self, box: Box) -> Interval:
        result = self.formula(box.x, box.y)
        if not isinstance(result, Interval):
            return Interval.point(result)
        return result


def sphere(x: Value, y: Value) -> Value:
    return x**2 + y**2


def booth(x: Value, y: Value) -> Value:
    return (x + 2 * y - 7)**2 + (2 * x + y - 5)**2


def matyas(x: Value, y: Value) -> Value:
    return 0.26 * (x**2 + y**2) - 0.48 * x * y


def three_hump_camel(x: Value, y: Value) -> Value:
    return 2 * x**2 - 1.05 * x**4 + x**6 / 6 + x * y + y**2


def six_hump_camel(x: Value, y: Value) -> Value:
    x2 = x**2
    y2 = y**2
    return (4 - 2.1 * x2 + x**4 / 3) * x2 + x * y + (-4 + 4 * y2) * y2


def beale(x: Value, y: Value) -> Value:
    return (
        (1.5 - x + x * y)**2
        + (2.25 - x + x * y**2)**2
        + (2.625 - x + x * y**3)**2
    )


def goldstein_price(x: Value, y: Value) -> Value:
    a = 1 + (x + y + 1)**2 * (19 - 14 * x + 3 * x**2 - 14 * y + 6 * x * y + 3 * y**2)
    b = 30 + (2 * x - 3 * y)**2 * (18 - 32 * x + 12 * x**2 + 48 * y - 36 * x * y + 27 * y**2)
    return a * b


def rosenbrock(x: Value, y: Value) -> Value:
    return (1 - x)**2 + 100 * (y - x**2)**2


def levi(x: Value, y: Value) -> Value:
    return (
        _sin(3 * np.pi * x)**2
        + (x - 1)**2 * (1 + _sin(3 * np.pi * y)**2)
        + (y - 1)**2 * (1 + _sin(2 * np.pi * y)**2)
    )


def _entry(formula, root_box: Box, description: str) -> ObjectiveFunction:
    return ObjectiveFunction(
        name=formula.__name__,
        evaluate=NaturalExtension(formula),
        root_box=root_box,
        point_value=formula,
        description=description,
    )


FUNCTIONS: Dict[str, ObjectiveFunction] = {
    f.name: f for f in [
        _entry(sphere, Box.from_bounds(-2, 2, -2, 2), "x^2 + y^2"),
        _entry(booth, Box.from_bounds(-10, 10, -10, 10), "(x + 2y - 7)^2 + (2x + y - 5)^2"),
        _entry(matyas, Box.from_bounds(-10, 10, -10, 10), "0.26(x^2 + y^2) - 0.48xy"),
        _entry(three_hump_camel, Box.from_bounds(-5, 5, -5, 5),
               "2x^2 - 1.05x^4 + x^6/6 + xy + y^2"),
        _entry(six_hump_camel, Box.from_bounds(-3, 3, -2, 2),
               "(4 - 2.1x^2 + x^4/3)x^2 + xy + (-4 + 4y^2)y^2"),
        _entry(beale, Box.from_bounds(-4.5, 4.5, -4.5, 4.5),
               "(1.5 - x + xy)^2 + (2.25 - x + xy^2)^2 + (2.625 - x + xy^3)^2"),
        _entry(goldstein_price, Box.from_bounds(-2, 2, -2, 2), "Goldstein-Price"),
        _entry(rosenbrock, Box.from_bounds(-5, 5, -5, 5), "(1 - x)^2 + 100(y - x^2)^2"),
        _entry(levi, Box.from_bounds(-10, 10, -10, 10), "Levi N.13"),
    ]
}


def list_functions() -> List[str]:
    """Sorted names of the available functions."""
    return sorted(FUNCTIONS)


def get_function(name: str) -> ObjectiveFunction:
    """
    Look up a function by name.

    Raises:
        ValueError: if the name is unknown
    """
    try:
        return FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown function '{name}'. Available: {', '.join(list_functions())}"
        ) from None

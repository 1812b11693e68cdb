"""
Problem Contract Definition

Defines the minimization problem structure:
- Objective function given as an interval evaluation over boxes
- Root box (initial search domain)
- Precision threshold at which boxes stop being split

The objective is an external collaborator: the solver only relies on
the enclosure property, never on how it is computed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import math

from .bounds.interval import Box, Interval


IntervalFunction = Callable[[Box], Interval]
PointFunction = Callable[[float, float], float]


def validate_precision(precision: Any) -> float:
    """
    Check the box-width threshold before any search is started.

    A non-positive threshold would never stop the splitting.

    Raises:
        ValueError: if precision is not a finite number > 0
    """
    try:
        value = float(precision)
    except (TypeError, ValueError):
        raise ValueError(f"Precision must be a number, got {precision!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"Precision must be a finite number > 0, got {precision!r}")
    return value


@dataclass(frozen=True)
class ObjectiveFunction:
    """
    An objective function that can be minimized.

    For every point (px, py) inside a box, f(px, py) must lie within
    ``evaluate(box)``. This soundness property is assumed, not checked.

    Attributes:
        name: Registry name
        evaluate: Interval evaluation Box -> Interval
        root_box: Initial search domain
        point_value: Optional plain evaluation f(x, y), for reporting and tests
        description: Human-readable formula
    """
    name: str
    evaluate: IntervalFunction
    root_box: Box
    point_value: Optional[PointFunction] = None
    description: str = ""

    def __call__(self, box: Box) -> Interval:
        return self.evaluate(box)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "root_box": self.root_box.to_canonical(),
            "description": self.description,
        }

    @classmethod
    def create(
        cls,
        evaluate: IntervalFunction,
        root_box: Box,
        name: str = "unnamed",
        point_value: Optional[PointFunction] = None,
    ) -> 'ObjectiveFunction':
        """Wrap a bare interval evaluation with its root box."""
        return cls(name=name, evaluate=evaluate, root_box=root_box, point_value=point_value)


@dataclass(frozen=True)
class RunParameters:
    """
    Read-only configuration shared with every worker of a run.

    Attributes:
        objective: Function to minimize (with its root box)
        precision: Box width at or below which splitting stops
    """
    objective: ObjectiveFunction
    precision: float

    def __post_init__(self):
        object.__setattr__(self, 'precision', validate_precision(self.precision))

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "objective": self.objective.to_canonical(),
            "precision": self.precision,
        }

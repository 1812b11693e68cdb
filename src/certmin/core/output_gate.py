"""
Output Gate

Validates a minimization result before it leaves the solver.

A result is admissible only if:
- every partition of the root box reported back
- min_ub is a number (not NaN)
- no candidate has a lower bound above min_ub
- candidates are ordered by lower bound

Any violation raises ValueError; a partial or stale result is never
reported as final.
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .canonical_json import canonical_hash

if TYPE_CHECKING:
    from ..solver.candidates import Minimizer


@dataclass
class MinimizationResult:
    """
    Final answer of a (distributed) run.

    Attributes:
        function: Name of the minimized function
        precision: Box width threshold used
        min_ub: Certified upper bound on the global minimum
        candidates: Boxes that may contain a global minimizer, by lower bound
        n_workers: Size of the worker pool
        partitions: Number of sub-boxes the root was split into
        workers_reported: Number of partitions whose worker reported
    """
    function: str
    precision: float
    min_ub: float
    candidates: List['Minimizer'] = field(default_factory=list)
    n_workers: int = 1
    partitions: int = 1
    workers_reported: int = 1
    nodes_explored: int = 0
    boxes_pruned: int = 0
    elapsed: float = 0.0
    receipts_hash: Optional[str] = None

    @property
    def lower_bound(self) -> float:
        """Certified lower bound on the global minimum."""
        if not self.candidates:
            return float('inf')
        return self.candidates[0].lower_bound

    @property
    def gap(self) -> float:
        return self.min_ub - self.lower_bound

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "function": self.function,
            "precision": self.precision,
            "min_ub": self.min_ub,
            "lower_bound": self.lower_bound,
            "n_candidates": len(self.candidates),
            "candidates": [m.to_canonical() for m in self.candidates],
            "n_workers": self.n_workers,
            "partitions": self.partitions,
            "nodes_explored": self.nodes_explored,
            "boxes_pruned": self.boxes_pruned,
            "elapsed": self.elapsed,
            "receipts_hash": self.receipts_hash,
        }

    def fingerprint(self) -> str:
        """Hash of the mathematical content (timing excluded)."""
        return canonical_hash({
            "function": self.function,
            "precision": self.precision,
            "min_ub": self.min_ub,
            "candidates": [m.to_canonical() for m in self.candidates],
        })


class OutputGate:
    """Checks the invariants of a result before it is emitted."""

    def validate(self, result: MinimizationResult) -> bool:
        if result.workers_reported != result.partitions:
            raise ValueError(
                f"Only {result.workers_reported} of {result.partitions} partitions reported"
            )

        if math.isnan(result.min_ub):
            raise ValueError("min_ub is NaN")

        prev = float('-inf')
        for m in result.candidates:
            if m.lower_bound > result.min_ub:
                raise ValueError(
                    f"Stale candidate {m.box!r}: lower bound {m.lower_bound} > min_ub {result.min_ub}"
                )
            if m.lower_bound < prev:
                raise ValueError("Candidates are not ordered by lower bound")
            prev = m.lower_bound

        return True

    def emit(self, result: MinimizationResult) -> MinimizationResult:
        """
        Validate and emit a result through the output gate.

        This is the only way results should leave the solver.
        """
        self.validate(result)
        return result

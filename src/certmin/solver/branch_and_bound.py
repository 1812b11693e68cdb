"""
Branch-and-Bound Minimization over 2D Boxes

Depth-first search that evaluates an interval enclosure of the objective
on each box and then:
- prunes the box when its lower bound exceeds the best known upper bound
- tightens the best upper bound (discarding stale candidates) when the
  box proves a smaller value is achievable
- records the box as a candidate minimizer once it is narrower than
  the precision threshold
- otherwise splits it into four quadrants and explores them in order

All mutable state of one search lives in a SearchContext owned by a
single worker, so several searches can run side by side.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Any

from ..bounds.interval import Box, Interval
from ..contract import IntervalFunction, ObjectiveFunction, validate_precision
from ..receipts import ActionType, ReceiptChain
from .candidates import CandidateSet, Minimizer


logger = logging.getLogger(__name__)

# visitor(box, action, depth) is called once per evaluated box
BoxVisitor = Callable[[Box, ActionType, int], None]


@dataclass
class SearchConfig:
    """Configuration for one sequential search."""
    precision: float = 1e-3
    log_frequency: int = 10_000
    record_receipts: bool = False

    def __post_init__(self):
        self.precision = validate_precision(self.precision)


@dataclass
class SearchContext:
    """
    State of one branch-and-bound search.

    Attributes:
        min_ub: Best upper bound found on the global minimum (non-increasing)
        candidates: Boxes that may still contain a global minimizer
        receipts: Optional audit trail of the search
        visitor: Optional callback invoked for each evaluated box
    """
    min_ub: float = float('inf')
    candidates: CandidateSet = field(default_factory=CandidateSet)
    receipts: Optional[ReceiptChain] = None
    visitor: Optional[BoxVisitor] = None
    log_frequency: int = 10_000

    nodes_explored: int = 0
    boxes_pruned: int = 0
    boxes_split: int = 0
    bound_updates: int = 0
    candidates_discarded: int = 0
    max_depth: int = 0
    start_time: float = field(default_factory=time.time)

    def tighten(self, value: float) -> bool:
        """
        Lower min_ub to ``value`` and purge candidates made irrelevant.

        Returns:
            True if the bound improved
        """
        if not value < self.min_ub:
            return False
        self.min_ub = value
        self.bound_updates += 1
        self.candidates_discarded += self.candidates.discard_above(value)
        return True

    def _emit(self, box: Box, action: ActionType, depth: int, **params: Any) -> None:
        if self.visitor is not None:
            self.visitor(box, action, depth)
        if self.receipts is not None:
            self.receipts.add_receipt(action, {"box": box.to_canonical(), "depth": depth, **params})

    def _log_progress(self) -> None:
        elapsed = time.time() - self.start_time
        logger.debug(
            "Nodes: %d | Candidates: %d | Pruned: %d | UB: %.6g | Depth: %d | Time: %.2fs",
            self.nodes_explored,
            len(self.candidates),
            self.boxes_pruned,
            self.min_ub,
            self.max_depth,
            elapsed,
        )

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "nodes_explored": self.nodes_explored,
            "boxes_pruned": self.boxes_pruned,
            "boxes_split": self.boxes_split,
            "bound_updates": self.bound_updates,
            "candidates": len(self.candidates),
            "candidates_discarded": self.candidates_discarded,
            "max_depth": self.max_depth,
            "min_ub": self.min_ub,
            "elapsed_time": time.time() - self.start_time,
        }


def search(
    f: IntervalFunction,
    box: Box,
    threshold: float,
    ctx: SearchContext,
    depth: int = 0,
) -> None:
    """
    Recursive branch-and-bound on ``box``.

    Updates ``ctx.min_ub`` and ``ctx.candidates`` in place. Quadrants are
    explored in the order returned by :meth:`Box.split`, so a bound found
    in an early quadrant is already available to prune later ones.

    Precondition: ``threshold > 0`` (checked by :func:`minimize`).

    Args:
        f: Interval evaluation of the objective
        box: Box to explore
        threshold: Width at or below which a box is no longer split
        ctx: Search state shared by all recursive calls
        depth: Recursion depth of ``box``
    """
    r: Interval = f(box)
    ctx.nodes_explored += 1
    if depth > ctx.max_depth:
        ctx.max_depth = depth
    if ctx.log_frequency and ctx.nodes_explored % ctx.log_frequency == 0:
        ctx._log_progress()

    # Box cannot contain the minimum
    if r.lo > ctx.min_ub:
        ctx.boxes_pruned += 1
        ctx._emit(box, ActionType.PRUNE, depth, lower_bound=r.lo, min_ub=ctx.min_ub)
        return

    # Box proves a better upper bound
    if r.hi < ctx.min_ub:
        ctx.tighten(r.hi)
        if ctx.receipts is not None:
            ctx.receipts.add_receipt(
                ActionType.TIGHTEN,
                {"box": box.to_canonical(), "depth": depth, "min_ub": ctx.min_ub},
            )

    # Splitting is symmetric, so the x-width alone decides termination
    if box.width <= threshold:
        ctx.candidates.insert(Minimizer(box, r.lo, r.hi))
        ctx._emit(box, ActionType.RECORD, depth, lower_bound=r.lo, upper_bound=r.hi)
        return

    ctx.boxes_split += 1
    ctx._emit(box, ActionType.SPLIT, depth)
    for sub in box.split():
        search(f, sub, threshold, ctx, depth + 1)


def minimize(
    f: ObjectiveFunction,
    precision: float,
    box: Optional[Box] = None,
    ctx: Optional[SearchContext] = None,
    config: Optional[SearchConfig] = None,
) -> SearchContext:
    """
    Run a complete sequential search.

    Args:
        f: Objective (its root box is used when ``box`` is None)
        precision: Box width threshold, must be > 0
        box: Search domain (default: ``f.root_box``)
        ctx: Existing context to continue from (e.g. with a seeded bound)
        config: Logging / receipt options

    Returns:
        The search context holding min_ub, candidates and statistics
    """
    threshold = validate_precision(precision)
    if box is None:
        box = f.root_box
    if config is None:
        config = SearchConfig(precision=threshold)
    if ctx is None:
        ctx = SearchContext(
            receipts=ReceiptChain() if config.record_receipts else None,
            log_frequency=config.log_frequency,
        )

    if ctx.receipts is not None:
        ctx.receipts.add_receipt(
            ActionType.INIT,
            {"box": box.to_canonical(), "precision": threshold, "min_ub": ctx.min_ub},
        )

    logger.info("Searching %r with precision %g", box, threshold)
    search(f, box, threshold, ctx)
    logger.info(
        "Search finished: %d nodes, %d pruned, %d candidates, min_ub=%.16g",
        ctx.nodes_explored, ctx.boxes_pruned, len(ctx.candidates), ctx.min_ub,
    )

    if ctx.receipts is not None:
        ctx.receipts.add_receipt(
            ActionType.TERMINATE,
            {"min_ub": ctx.min_ub, "candidates": len(ctx.candidates)},
        )
    return ctx

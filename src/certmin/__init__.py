"""
certmin - Certified Global Minimization of Two-Variable Functions

Interval branch-and-bound that returns a verified enclosure of the
global minimum instead of a point estimate:
- min_ub: an upper bound on the global minimum that is achieved
- candidates: small boxes that may still contain a global minimizer

Key Features:
- Interval arithmetic with outward rounding for sound enclosures
- Depth-first branch-and-bound with immediate candidate purging
- Partitioned runs over a worker pool with a min-reduction and
  reconciliation of candidate lists against the global bound
- Optional receipt chain for auditing a search
"""

__version__ = "0.1.0"

from .bounds.interval import (
    Interval,
    Box,
    split_box,
    ROUND_EPS,
)
from .contract import (
    ObjectiveFunction,
    RunParameters,
    validate_precision,
)
from .receipts import (
    Receipt,
    ReceiptChain,
    ActionType,
)
from .core.canonical_json import canonical_dumps, canonical_hash
from .core.output_gate import MinimizationResult, OutputGate
from .solver.candidates import CandidateSet, Minimizer
from .solver.branch_and_bound import (
    SearchConfig,
    SearchContext,
    search,
    minimize,
)
from .solver.distributed import (
    DistributedConfig,
    DistributedMinimizer,
    DistributionError,
    minimize_distributed,
    partition,
    reduce_results,
)
from .functions import FUNCTIONS, get_function, list_functions

__all__ = [
    # Bounds
    "Interval",
    "Box",
    "split_box",
    "ROUND_EPS",
    # Contract
    "ObjectiveFunction",
    "RunParameters",
    "validate_precision",
    # Receipts
    "Receipt",
    "ReceiptChain",
    "ActionType",
    "canonical_dumps",
    "canonical_hash",
    # Output gate
    "MinimizationResult",
    "OutputGate",
    # Solver
    "CandidateSet",
    "Minimizer",
    "SearchConfig",
    "SearchContext",
    "search",
    "minimize",
    "DistributedConfig",
    "DistributedMinimizer",
    "DistributionError",
    "minimize_distributed",
    "partition",
    "reduce_results",
    # Functions
    "FUNCTIONS",
    "get_function",
    "list_functions",
]

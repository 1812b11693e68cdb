"""
Solver Module - Branch-and-Bound and its Distribution

Provides:
- search / minimize: sequential depth-first branch-and-bound
- CandidateSet: surviving boxes ordered by lower bound
- DistributedMinimizer: partitioned run over a worker pool with a final reduction
"""

from .candidates import CandidateSet, Minimizer
from .branch_and_bound import (
    SearchConfig,
    SearchContext,
    search,
    minimize,
)
from .distributed import (
    DistributedConfig,
    DistributedMinimizer,
    DistributionError,
    WorkerResult,
    WorkerTask,
    minimize_distributed,
    partition,
    reduce_results,
    run_worker,
)

__all__ = [
    'CandidateSet',
    'Minimizer',
    'SearchConfig',
    'SearchContext',
    'search',
    'minimize',
    'DistributedConfig',
    'DistributedMinimizer',
    'DistributionError',
    'WorkerResult',
    'WorkerTask',
    'minimize_distributed',
    'partition',
    'reduce_results',
    'run_worker',
]

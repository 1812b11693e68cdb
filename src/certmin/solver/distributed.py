"""
Distributed Branch-and-Bound

Fans a search out over a pool of independent workers and folds the
partial results back into one answer.

Protocol:
1. The coordinator partitions the root box ``partition_depth`` times
   (4 ** depth sub-boxes; depth 1 gives the four root quadrants).
2. Every worker receives the same read-only RunParameters together
   with its own sub-box.
3. Each worker runs the sequential search on its sub-box with a fresh
   context (min_ub = +inf, empty candidate set). Workers never talk to
   each other while searching.
4. Once every worker has reported, the coordinator takes the minimum of
   the local upper bounds and reconciles the merged candidate list
   against that global bound.

A worker that fails or never reports is fatal for the run: no partial
result is produced.
"""

import logging
import time
import concurrent.futures
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..bounds.interval import Box
from ..contract import ObjectiveFunction, RunParameters
from ..core.output_gate import MinimizationResult, OutputGate
from ..receipts import ActionType, ReceiptChain
from .branch_and_bound import SearchContext, search
from .candidates import CandidateSet, Minimizer


logger = logging.getLogger(__name__)

EXECUTORS = ("process", "thread", "serial")


class DistributionError(RuntimeError):
    """A worker failed or did not report; the run cannot be finalized."""


@dataclass
class DistributedConfig:
    """Configuration for a distributed run."""
    partition_depth: int = 1
    max_workers: int = 4
    executor: str = "process"
    record_receipts: bool = False
    log_frequency: int = 10_000

    def __post_init__(self):
        if not isinstance(self.partition_depth, int) or self.partition_depth < 0:
            raise ValueError(f"partition_depth must be an integer >= 0, got {self.partition_depth!r}")
        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ValueError(f"max_workers must be an integer >= 1, got {self.max_workers!r}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")


@dataclass(frozen=True)
class WorkerTask:
    """One unit of work: a sub-box plus the broadcast run parameters."""
    index: int
    box: Box
    params: RunParameters
    record_receipts: bool = False
    log_frequency: int = 10_000


@dataclass
class WorkerResult:
    """What a worker reports back to the coordinator."""
    index: int
    box: Box
    min_ub: float
    candidates: List[Minimizer]
    stats: Dict[str, Any] = field(default_factory=dict)
    receipts_hash: Optional[str] = None


def partition(box: Box, depth: int) -> List[Box]:
    """
    Split ``box`` ``depth`` times into 4 ** depth sub-boxes.

    The order is deterministic: each level replaces a box by its
    quadrants in :meth:`Box.split` order.
    """
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    boxes = [box]
    for _ in range(depth):
        boxes = [sub for b in boxes for sub in b.split()]
    return boxes


def run_worker(task: WorkerTask) -> WorkerResult:
    """Search one sub-box with a fresh, exclusively owned context."""
    ctx = SearchContext(
        receipts=ReceiptChain() if task.record_receipts else None,
        log_frequency=task.log_frequency,
    )
    if ctx.receipts is not None:
        ctx.receipts.add_receipt(
            ActionType.INIT,
            {"worker": task.index, "box": task.box.to_canonical(), "params": task.params.to_canonical()},
        )

    search(task.params.objective, task.box, task.params.precision, ctx)

    if ctx.receipts is not None:
        ctx.receipts.add_receipt(
            ActionType.TERMINATE,
            {"worker": task.index, "min_ub": ctx.min_ub, "candidates": len(ctx.candidates)},
        )

    return WorkerResult(
        index=task.index,
        box=task.box,
        min_ub=ctx.min_ub,
        candidates=ctx.candidates.records(),
        stats=ctx.get_statistics(),
        receipts_hash=ctx.receipts.final_hash if ctx.receipts is not None else None,
    )


def reduce_results(
    results: Sequence[WorkerResult],
    expected: int,
) -> Tuple[float, CandidateSet]:
    """
    Combine worker results into the global bound and candidate set.

    Takes the minimum of all local upper bounds, merges every worker's
    candidates and discards those whose lower bound exceeds the global
    bound, which may be tighter than the bound the worker purged with.

    Args:
        results: One result per worker
        expected: Number of workers that must have reported

    Returns:
        Tuple of (global min_ub, reconciled candidate set)

    Raises:
        DistributionError: if a worker is missing or reported twice
    """
    indices = sorted(r.index for r in results)
    if indices != list(range(expected)):
        missing = sorted(set(range(expected)) - set(indices))
        raise DistributionError(
            f"Cannot reduce: expected {expected} worker results, got indices {indices}"
            + (f" (missing {missing})" if missing else "")
        )

    ordered = sorted(results, key=lambda r: r.index)
    global_min_ub = min((r.min_ub for r in ordered), default=float('inf'))

    merged = CandidateSet()
    for r in ordered:
        merged.merge(r.candidates)
    discarded = merged.discard_above(global_min_ub)
    if discarded:
        logger.debug("Reconciliation discarded %d stale candidates", discarded)

    return global_min_ub, merged


class DistributedMinimizer:
    """
    Coordinator for a distributed branch-and-bound run.

    Example:
        >>> from certmin.functions import get_function
        >>> runner = DistributedMinimizer(get_function("sphere"), precision=0.5)
        >>> result = runner.run()
        >>> result.min_ub
    """

    def __init__(
        self,
        objective: ObjectiveFunction,
        precision: float,
        config: DistributedConfig = None,
        root_box: Optional[Box] = None,
    ):
        self.params = RunParameters(objective=objective, precision=precision)
        self.config = config or DistributedConfig()
        self.root_box = root_box if root_box is not None else objective.root_box
        self.receipts = ReceiptChain() if self.config.record_receipts else None
        self.worker_results: List[WorkerResult] = []

    def tasks(self) -> List[WorkerTask]:
        return [
            WorkerTask(
                index=i,
                box=box,
                params=self.params,
                record_receipts=self.config.record_receipts,
                log_frequency=self.config.log_frequency,
            )
            for i, box in enumerate(partition(self.root_box, self.config.partition_depth))
        ]

    def _execute(self, tasks: List[WorkerTask]) -> List[WorkerResult]:
        if self.config.executor == "serial":
            results = []
            for task in tasks:
                try:
                    results.append(run_worker(task))
                except Exception as e:
                    raise DistributionError(f"Worker {task.index} failed: {e}") from e
            return results

        if self.config.executor == "process":
            pool_cls = concurrent.futures.ProcessPoolExecutor
        else:
            pool_cls = concurrent.futures.ThreadPoolExecutor

        results = []
        with pool_cls(max_workers=self.config.max_workers) as executor:
            futures = {executor.submit(run_worker, task): task for task in tasks}
            for future in concurrent.futures.as_completed(futures):
                task = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    for pending in futures:
                        pending.cancel()
                    raise DistributionError(f"Worker {task.index} failed: {e}") from e
                logger.debug(
                    "Worker %d done: min_ub=%.16g, %d candidates, %d nodes",
                    result.index, result.min_ub, len(result.candidates),
                    result.stats.get("nodes_explored", 0),
                )
                results.append(result)
        return results

    def run(self) -> MinimizationResult:
        """Partition, search every partition, reduce and validate."""
        start = time.time()
        tasks = self.tasks()
        logger.info(
            "Minimizing %s over %r: %d partitions, %d workers (%s), precision %g",
            self.params.objective.name, self.root_box, len(tasks),
            self.config.max_workers, self.config.executor, self.params.precision,
        )

        results = self._execute(tasks)
        self.worker_results = sorted(results, key=lambda r: r.index)
        min_ub, candidates = reduce_results(results, expected=len(tasks))

        if self.receipts is not None:
            self.receipts.add_receipt(
                ActionType.REDUCE,
                {
                    "params": self.params.to_canonical(),
                    "workers": [
                        {"index": r.index, "min_ub": r.min_ub, "receipts_hash": r.receipts_hash}
                        for r in self.worker_results
                    ],
                    "min_ub": min_ub,
                    "candidates": len(candidates),
                },
            )

        result = MinimizationResult(
            function=self.params.objective.name,
            precision=self.params.precision,
            min_ub=min_ub,
            candidates=candidates.records(),
            n_workers=min(self.config.max_workers, len(tasks)),
            partitions=len(tasks),
            workers_reported=len(results),
            nodes_explored=_total(self.worker_results, "nodes_explored"),
            boxes_pruned=_total(self.worker_results, "boxes_pruned"),
            elapsed=time.time() - start,
            receipts_hash=self.receipts.final_hash if self.receipts is not None else None,
        )
        return OutputGate().emit(result)


def _total(results: Iterable[WorkerResult], key: str) -> int:
    return sum(int(r.stats.get(key, 0)) for r in results)


def minimize_distributed(
    objective: ObjectiveFunction,
    precision: float,
    config: DistributedConfig = None,
) -> MinimizationResult:
    """Convenience wrapper around :class:`DistributedMinimizer`."""
    return DistributedMinimizer(objective, precision, config).run()

"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the
analytics metrics the API serves for the Analytics panel and
Comparison Mode.

Usage:
    rec = Recorder()
    rec.start("binary-search", {"array": [1, 3, 5], "target": 5})
    rec.run_to_completion()          # generates every step
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    Two Recorders (one per algorithm) are run to completion, then
    compare(rec1, rec2) → ComparisonResult.

Metrics are computed from the step stream alone (step-type counts and
the terminal step), so the Recorder needs no algorithm-specific code.
"""

import copy
import dataclasses
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Step, StepType, check_sequence
from engine.stepper import Stepper

logger = logging.getLogger(__name__)

# Step types that each record one comparison.
COMPARISON_STEP_TYPES = frozenset({
    StepType.COMPARISON,
    StepType.DP_COMPARISON,
    StepType.HEAP_COMPARE,
    StepType.HASH_MAP_COMPARISON,
    StepType.STRING_COMPARISON,
    StepType.BASE_CASE_CHECK,
})


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:         str            = ""
    algo_label:       str            = ""
    total_steps:      int            = 0          # number of Steps generated
    comparisons:      int            = 0          # steps in COMPARISON_STEP_TYPES
    step_type_counts: Dict[str, int] = field(default_factory=dict)
    terminal_type:    str            = ""         # stepType of the final step
    result:           Dict[str, Any] = field(default_factory=dict)   # final step variables
    wall_time_ms:     float          = 0.0        # wall-clock time to generate

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_steps:       str = ""   # which run needed fewer steps
    winner_comparisons: str = ""   # which run made fewer comparisons
    winner_time:        str = ""   # which run generated faster

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps       : Full list of Steps from the run.
        metrics     : Computed RunMetrics (available after run_to_completion).
        stepper     : A Stepper loaded with the run, ready for playback.
    """

    def __init__(self):
        self.steps:     List[Step]           = []
        self.metrics:   Optional[RunMetrics] = None
        self.stepper:   Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo] = None
        self._inputs:    Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, inputs: Optional[Dict[str, Any]] = None) -> None:
        """
        Select the algorithm and its (already coerced) inputs for this run.
        Inputs left out fall back to the algorithm's example inputs.
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._inputs    = copy.deepcopy(info.defaults)
        self._inputs.update(inputs or {})
        self.steps      = []
        self.metrics    = None
        self.stepper    = Stepper()

    def run_to_completion(self) -> RunMetrics:
        """Generate every step, load the stepper, compute metrics."""
        if self._algo_info is None or self.stepper is None:
            raise RuntimeError("Call start() first.")

        start = time.perf_counter()
        steps = self._algo_info.fn(**self._inputs)
        wall_ms = (time.perf_counter() - start) * 1000

        check_sequence(steps)
        self.steps = steps
        self.stepper.load(steps)

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "Ran %s: %d steps, %d comparisons, ended with %s in %.2f ms",
            self.metrics.algo_key, self.metrics.total_steps, self.metrics.comparisons,
            self.metrics.terminal_type, self.metrics.wall_time_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algoKey": self._algo_info.key if self._algo_info else "",
            "inputs":  {k: _plain(v) for k, v in self._inputs.items()},
            "metrics": self.metrics.to_dict() if self.metrics else {},
            "steps":   [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1]
        counts = Counter(s.step_type.value for s in self.steps)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            total_steps=len(self.steps),
            comparisons=sum(1 for s in self.steps if s.step_type in COMPARISON_STEP_TYPES),
            step_type_counts=dict(counts),
            terminal_type=last.step_type.value,
            result=dict(last.variables),
            wall_time_ms=round(wall_ms, 2),
        )


def _plain(value: Any) -> Any:
    """Graph / BinaryTree inputs export through their own to_dict()."""
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else value


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_time=winner(l.wall_time_ms, r.wall_time_ms, l.algo_label, r.algo_label),
    )

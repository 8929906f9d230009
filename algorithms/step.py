"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm produces an ordered list of Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • Which logical data structures exist and what they hold right now
    • Which indices / nodes / links / keys are highlighted, and how
    • A snapshot of the algorithm's variables (the "watch window")
    • A plain-English explanation of *why* this step happened
    • A playback timing hint

Design decisions:
  - Step is a frozen dataclass. It is a SNAPSHOT. The generator is the
    only writer; the stepper / recorder / API are pure readers.
  - StepBuilder deep-copies everything it hands to a Step, so a
    generator can keep mutating its working copy after emitting.
  - `step_type` is a StepType enum member, never a bare string. The
    wire format (to_dict) uses the enum's string value.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


# ---------------------------------------------------------------------------
# Step types, grouped by algorithm family
# ---------------------------------------------------------------------------
class StepType(str, Enum):
    # shared
    INITIALIZATION            = "initialization"
    COMPARISON                = "comparison"
    ASSIGNMENT                = "assignment"
    LOOP_START                = "loop_start"
    RETURN                    = "return"
    RETURN_FOUND              = "return_found"
    RETURN_NOT_FOUND          = "return_not_found"

    # pointers / linked lists
    POINTER_INITIALIZATION    = "pointer_initialization"
    POINTER_UPDATE            = "pointer_update"
    POINTER_MOVE_LEFT         = "pointer_move_left"
    POINTER_MOVE_RIGHT        = "pointer_move_right"
    LINK_REVERSAL             = "link_reversal"
    NODE_TRAVERSAL            = "node_traversal"

    # sorting
    SWAP                      = "swap"
    NO_SWAP                   = "no_swap"
    PASS_COMPLETE             = "pass_complete"

    # graphs
    GRAPH_COMPONENT_START     = "graph_component_start"
    GRAPH_NODE_VISIT          = "graph_node_visit"
    GRAPH_EDGE_EXPLORE        = "graph_edge_explore"
    GRAPH_CYCLE_DETECTED      = "graph_cycle_detected"
    GRAPH_BACKTRACK           = "graph_backtrack"

    # queues / trees
    QUEUE_ENQUEUE             = "queue_enqueue"
    QUEUE_PEEK                = "queue_peek"
    QUEUE_DEQUEUE             = "queue_dequeue"
    LEVEL_COMPLETE            = "level_complete"
    TREE_TRAVERSAL            = "tree_traversal"

    # recursion
    RECURSIVE_CALL            = "recursive_call"
    BASE_CASE_CHECK           = "base_case_check"
    BASE_CASE_REACHED         = "base_case_reached"
    RECURSIVE_RETURN          = "recursive_return"
    CALL_STACK_POP            = "call_stack_pop"

    # heaps
    HEAP_INITIALIZATION       = "heap_initialization"
    HEAP_PUSH                 = "heap_push"
    HEAP_COMPARE              = "heap_compare"
    HEAP_MAINTAIN_SIZE        = "heap_maintain_size"
    HEAP_RESULT_FOUND         = "heap_result_found"

    # dynamic programming
    DP_TABLE_INITIALIZATION   = "dp_table_initialization"
    DP_AMOUNT_PROCESSING      = "dp_amount_processing"
    DP_COIN_CONSIDERATION     = "dp_coin_consideration"
    DP_SUBPROBLEM_LOOKUP      = "dp_subproblem_lookup"
    DP_COMPARISON             = "dp_comparison"
    DP_TABLE_UPDATE           = "dp_table_update"
    DP_OPTIMAL_SOLUTION_FOUND = "dp_optimal_solution_found"
    DP_PATH_RECONSTRUCTION    = "dp_path_reconstruction"
    DP_NO_SOLUTION            = "dp_no_solution"

    # greedy
    GREEDY_INSIGHT            = "greedy_insight"
    FORMULA_DERIVATION        = "formula_derivation"
    DECISION_TREE             = "decision_tree"
    COST_CALCULATION          = "cost_calculation"
    ELEMENT_REMOVAL           = "element_removal"
    OPTIMALITY_PROOF          = "optimality_proof"

    # strings / stacks
    CHARACTER_ACCESS          = "character_access"
    CHARACTER_CHECK           = "character_check"
    FREQUENCY_COUNT           = "frequency_count"
    STRING_COMPARISON         = "string_comparison"
    HASH_MAP_COMPARISON       = "hash_map_comparison"
    STACK_PUSH                = "stack_push"
    STACK_PEEK                = "stack_peek"
    STACK_POP                 = "stack_pop"
    VALIDATION_SUCCESS        = "validation_success"
    VALIDATION_FAILURE        = "validation_failure"


# A sequence ends with exactly one of these.
TERMINAL_STEP_TYPES = frozenset({
    StepType.RETURN,
    StepType.RETURN_FOUND,
    StepType.RETURN_NOT_FOUND,
    StepType.HEAP_RESULT_FOUND,
    StepType.DP_NO_SOLUTION,
    StepType.OPTIMALITY_PROOF,
    StepType.VALIDATION_SUCCESS,
    StepType.VALIDATION_FAILURE,
})


# ---------------------------------------------------------------------------
# Payload records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DataStructure:
    """
    Attributes:
        type     : Rendering tag — "array", "linkedlist", "graph", "tree",
                   "queue", "stack", "heap", "hashmap", "call_stack", …
        data     : Snapshot of the structure's value at this step.
        metadata : Display hints (label, position, optional style).
    """

    type:     str
    data:     Any
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "data": self.data, "metadata": self.metadata}


@dataclass(frozen=True)
class Highlight:
    """
    Attributes:
        type      : What `values` refer to — "indices", "nodes", "links",
                    "keys", "characters", "graph_nodes", "graph_edges", …
        values    : The highlighted elements, in order.
        style     : Visual style — "current", "compare", "visited", "match",
                    "highlight", "active", …
        color     : Optional colour override.
        intensity : Optional 0..1 strength (window shading etc.).
    """

    type:      str
    values:    List[Any]
    style:     str
    color:     Optional[str]   = None
    intensity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "values": self.values, "style": self.style}
        if self.color is not None:
            out["color"] = self.color
        if self.intensity is not None:
            out["intensity"] = self.intensity
        return out


@dataclass(frozen=True)
class Timing:
    duration: int = 1000   # ms the frame should stay on screen at 1× speed
    delay:    int = 0      # ms before the frame's animation starts

    def to_dict(self) -> Dict[str, int]:
        return {"duration": self.duration, "delay": self.delay}


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        id              : 0-based position of this step in the run.
        step_type       : Why this step exists (drives the animation style).
        explanation     : Human-readable text templated from the variables.
        variables       : {name: value} snapshot of algorithm variables.
        data_structures : {structure_name: DataStructure}.
        highlights      : {structure_name: [Highlight, …]}.
        step_context    : Secondary annotation (operation, loop kind, node id…).
        timing          : Suggested playback timing.
    """

    id:              int
    step_type:       StepType
    explanation:     str                          = ""
    variables:       Dict[str, Any]               = field(default_factory=dict)
    data_structures: Dict[str, DataStructure]     = field(default_factory=dict)
    highlights:      Dict[str, List[Highlight]]   = field(default_factory=dict)
    step_context:    Dict[str, Any]               = field(default_factory=dict)
    timing:          Timing                       = field(default_factory=Timing)

    @property
    def is_terminal(self) -> bool:
        return self.step_type in TERMINAL_STEP_TYPES

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form using the visualizer's camelCase keys."""
        return {
            "id":             self.id,
            "stepType":       self.step_type.value,
            "stepContext":    self.step_context,
            "dataStructures": {k: v.to_dict() for k, v in self.data_structures.items()},
            "highlights":     {k: [h.to_dict() for h in hs] for k, hs in self.highlights.items()},
            "explanation":    self.explanation,
            "variables":      self.variables,
            "timing":         self.timing.to_dict(),
        }


# ---------------------------------------------------------------------------
# Sequence contract
# ---------------------------------------------------------------------------
class InvalidStepSequence(ValueError):
    """Raised when a generated sequence breaks the Step contract."""


def check_sequence(steps: List[Step]) -> None:
    """
    Verify the contract every generator promises:
      • non-empty
      • steps[i].id == i
      • exactly one terminal step, and it is the last one
    """
    if not steps:
        raise InvalidStepSequence("sequence is empty")
    for i, s in enumerate(steps):
        if s.id != i:
            raise InvalidStepSequence(f"step at position {i} has id {s.id}")
    terminals = [s.id for s in steps if s.is_terminal]
    if terminals != [len(steps) - 1]:
        raise InvalidStepSequence(
            f"expected a single terminal step at {len(steps) - 1}, found {terminals}"
        )


# ---------------------------------------------------------------------------
# Convenience builder so generators don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that generators use to construct Steps cleanly.

    Structures are *tracked* once; the builder keeps a reference to the
    live working object and deep-copies it at build() time, so every
    emitted Step shows the state at that moment and nothing later.

    Usage inside a generator:
        steps = []
        sb = StepBuilder()
        sb.track("searchArray", "array", working, label="Search Array")
        sb.begin(StepType.COMPARISON, duration=800)
        sb.highlight("searchArray", "indices", [mid], "current")
        sb.explanation = f"Comparing {working[mid]} with {target}"
        sb.variables   = {"mid": mid}
        steps.append(sb.build(len(steps)))
    """

    def __init__(self):
        self._structures: Dict[str, Dict[str, Any]] = {}
        self.begin(StepType.INITIALIZATION)

    # -- per-step annotations --
    def begin(self, step_type: StepType, duration: int = 1000, delay: int = 0) -> "StepBuilder":
        """Start a fresh step: clears highlights, variables, context and text."""
        self.step_type:    StepType                    = step_type
        self.step_context: Dict[str, Any]              = {}
        self.highlights:   Dict[str, List[Highlight]]  = {}
        self.explanation:  str                         = ""
        self.variables:    Dict[str, Any]              = {}
        self.timing:       Timing                      = Timing(duration=duration, delay=delay)
        return self

    def highlight(
        self,
        name: str,
        kind: str,
        values: Iterable[Any],
        style: str,
        color: Optional[str] = None,
        intensity: Optional[float] = None,
    ) -> "StepBuilder":
        self.highlights.setdefault(name, []).append(
            Highlight(type=kind, values=list(values), style=style, color=color, intensity=intensity)
        )
        return self

    def no_highlights(self, name: str) -> "StepBuilder":
        """Record an explicit empty highlight list for `name`."""
        self.highlights[name] = []
        return self

    # -- structures --
    def track(self, name: str, kind: str, data: Any, label: str, x: int = 0, y: int = 0,
              **style: Any) -> "StepBuilder":
        """Register (or replace) the live object rendered as `name`."""
        metadata: Dict[str, Any] = {"label": label, "position": {"x": x, "y": y}}
        if style:
            metadata["style"] = dict(style)
        self._structures[name] = {"type": kind, "data": data, "metadata": metadata}
        return self

    def relabel(self, name: str, label: str) -> "StepBuilder":
        self._structures[name]["metadata"]["label"] = label
        return self

    # -- build --
    def build(self, step_id: int) -> Step:
        return Step(
            id=step_id,
            step_type=self.step_type,
            explanation=self.explanation,
            variables=copy.deepcopy(self.variables),
            data_structures={
                name: DataStructure(
                    type=s["type"],
                    data=copy.deepcopy(s["data"]),
                    metadata=copy.deepcopy(s["metadata"]),
                )
                for name, s in self._structures.items()
            },
            highlights={name: [copy.deepcopy(h) for h in hs] for name, hs in self.highlights.items()},
            step_context=copy.deepcopy(self.step_context),
            timing=self.timing,
        )

"""
animation.py — Step Type → Animation Kind
==========================================
The visualizer picks an animation style from each step's type.  This
table is the one place that decision is made, and it must name every
StepType: a new step type without an entry fails at import time rather
than silently rendering with no animation.

Kinds:
    fade_in    structures appear (initialization)
    highlight  focus moves to an element, nothing changes
    compare    two or more elements are weighed against each other
    move       a pointer / cursor moves
    swap       two elements trade places
    write      a value or link is written
    push       something enters a stack / queue / heap
    pop        something leaves a stack / queue / heap
    flash      a milestone (pass, level or base case reached)
    success    terminal, positive outcome
    failure    terminal, negative outcome
"""

from typing import Dict, List

from algorithms.step import Step, StepType

ANIMATION_KINDS: Dict[StepType, str] = {
    # shared
    StepType.INITIALIZATION:            "fade_in",
    StepType.COMPARISON:                "compare",
    StepType.ASSIGNMENT:                "write",
    StepType.LOOP_START:                "highlight",
    StepType.RETURN:                    "success",
    StepType.RETURN_FOUND:              "success",
    StepType.RETURN_NOT_FOUND:          "failure",

    # pointers / linked lists
    StepType.POINTER_INITIALIZATION:    "move",
    StepType.POINTER_UPDATE:            "move",
    StepType.POINTER_MOVE_LEFT:         "move",
    StepType.POINTER_MOVE_RIGHT:        "move",
    StepType.LINK_REVERSAL:             "write",
    StepType.NODE_TRAVERSAL:            "move",

    # sorting
    StepType.SWAP:                      "swap",
    StepType.NO_SWAP:                   "highlight",
    StepType.PASS_COMPLETE:             "flash",

    # graphs
    StepType.GRAPH_COMPONENT_START:     "highlight",
    StepType.GRAPH_NODE_VISIT:          "highlight",
    StepType.GRAPH_EDGE_EXPLORE:        "move",
    StepType.GRAPH_CYCLE_DETECTED:      "flash",
    StepType.GRAPH_BACKTRACK:           "move",

    # queues / trees
    StepType.QUEUE_ENQUEUE:             "push",
    StepType.QUEUE_PEEK:                "highlight",
    StepType.QUEUE_DEQUEUE:             "pop",
    StepType.LEVEL_COMPLETE:            "flash",
    StepType.TREE_TRAVERSAL:            "move",

    # recursion
    StepType.RECURSIVE_CALL:            "push",
    StepType.BASE_CASE_CHECK:           "compare",
    StepType.BASE_CASE_REACHED:         "flash",
    StepType.RECURSIVE_RETURN:          "write",
    StepType.CALL_STACK_POP:            "pop",

    # heaps
    StepType.HEAP_INITIALIZATION:       "fade_in",
    StepType.HEAP_PUSH:                 "push",
    StepType.HEAP_COMPARE:              "compare",
    StepType.HEAP_MAINTAIN_SIZE:        "swap",
    StepType.HEAP_RESULT_FOUND:         "success",

    # dynamic programming
    StepType.DP_TABLE_INITIALIZATION:   "fade_in",
    StepType.DP_AMOUNT_PROCESSING:      "highlight",
    StepType.DP_COIN_CONSIDERATION:     "highlight",
    StepType.DP_SUBPROBLEM_LOOKUP:      "highlight",
    StepType.DP_COMPARISON:             "compare",
    StepType.DP_TABLE_UPDATE:           "write",
    StepType.DP_OPTIMAL_SOLUTION_FOUND: "flash",
    StepType.DP_PATH_RECONSTRUCTION:    "move",
    StepType.DP_NO_SOLUTION:            "failure",

    # greedy
    StepType.GREEDY_INSIGHT:            "highlight",
    StepType.FORMULA_DERIVATION:        "highlight",
    StepType.DECISION_TREE:             "compare",
    StepType.COST_CALCULATION:          "write",
    StepType.ELEMENT_REMOVAL:           "pop",
    StepType.OPTIMALITY_PROOF:          "success",

    # strings / stacks
    StepType.CHARACTER_ACCESS:          "highlight",
    StepType.CHARACTER_CHECK:           "compare",
    StepType.FREQUENCY_COUNT:           "write",
    StepType.STRING_COMPARISON:         "compare",
    StepType.HASH_MAP_COMPARISON:       "compare",
    StepType.STACK_PUSH:                "push",
    StepType.STACK_PEEK:                "highlight",
    StepType.STACK_POP:                 "pop",
    StepType.VALIDATION_SUCCESS:        "success",
    StepType.VALIDATION_FAILURE:        "failure",
}


def missing_step_types() -> List[StepType]:
    """StepType members with no entry in ANIMATION_KINDS."""
    return [t for t in StepType if t not in ANIMATION_KINDS]


def animation_kind(step: Step) -> str:
    return ANIMATION_KINDS[step.step_type]


_missing = missing_step_types()
if _missing:
    raise RuntimeError(
        "no animation kind for step types: " + ", ".join(t.value for t in _missing)
    )

"""
two_sum.py — Two Sum (two pointers)
====================================
Finds a pair summing to `target` in a SORTED COPY of the input.

The reported indices (`solution`) are positions in the sorted copy;
`solutionValues` are the original values, which always sum to `target`.
"""

from typing import List, Optional, Sequence

from algorithms.step import Step, StepBuilder, StepType

ARRAY = "array"


def two_sum(array: Sequence[int], target: int) -> List[Step]:
    working = sorted(array)
    left, right = 0, len(working) - 1

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(ARRAY, "array", working, label="Sorted Array")

    # --- initialisation ---
    sb.begin(StepType.INITIALIZATION, duration=1200)
    sb.explanation = f"Starting two sum search for target {target} using two pointers approach"
    sb.variables = {"left": left, "right": right, "target": target, "currentSum": None}
    steps.append(sb.build(len(steps)))

    # --- pointers ---
    sb.begin(StepType.POINTER_INITIALIZATION, duration=1200)
    sb.step_context = {"operation": "store", "dataStructure": "array"}
    if working:
        sb.highlight(ARRAY, "indices", [left], "current", color="blue")
        sb.highlight(ARRAY, "indices", [right], "current", color="red")
    sb.explanation = (
        f"Set left pointer at index {left} (value: {_show(working, left)}) and right pointer "
        f"at index {right} (value: {_show(working, right)})"
    )
    sb.variables = {
        "left": left, "right": right, "target": target,
        "leftValue": _at(working, left), "rightValue": _at(working, right),
    }
    steps.append(sb.build(len(steps)))

    # --- main loop ---
    while left < right:
        lv, rv = working[left], working[right]
        current_sum = lv + rv

        sb.begin(StepType.COMPARISON)
        sb.step_context = {"operation": "compare", "dataStructure": "array"}
        sb.highlight(ARRAY, "indices", [left, right], "compare")
        sb.explanation = (
            f"Current sum: {lv} + {rv} = {current_sum}. Comparing with target {target}"
        )
        sb.variables = {
            "left": left, "right": right, "target": target,
            "currentSum": current_sum, "leftValue": lv, "rightValue": rv,
        }
        steps.append(sb.build(len(steps)))

        if current_sum == target:
            sb.begin(StepType.RETURN, duration=1500)
            sb.step_context = {"operation": "return_value", "dataStructure": "array"}
            sb.highlight(ARRAY, "indices", [left, right], "match", color="green")
            sb.explanation = (
                f"Found target sum! Indices [{left}, {right}] with values [{lv}, {rv}]"
            )
            sb.variables = {
                "left": left, "right": right, "target": target,
                "currentSum": current_sum, "found": True,
                "solution": [left, right], "solutionValues": [lv, rv],
            }
            steps.append(sb.build(len(steps)))
            return steps

        if current_sum < target:
            old_left = left
            left += 1
            sb.begin(StepType.POINTER_MOVE_LEFT, duration=800)
            sb.explanation = (
                f"Sum {current_sum} < target {target}. Moving left pointer right "
                f"from index {old_left} to {left}"
            )
            sb.variables = {
                "left": left, "right": right, "target": target, "currentSum": current_sum,
                "previousLeft": old_left, "reason": "sum too small",
            }
        else:
            old_right = right
            right -= 1
            sb.begin(StepType.POINTER_MOVE_RIGHT, duration=800)
            sb.explanation = (
                f"Sum {current_sum} > target {target}. Moving right pointer left "
                f"from index {old_right} to {right}"
            )
            sb.variables = {
                "left": left, "right": right, "target": target, "currentSum": current_sum,
                "previousRight": old_right, "reason": "sum too large",
            }
        sb.step_context = {"operation": "move_pointer", "dataStructure": "array"}
        sb.highlight(ARRAY, "indices", [left], "current", color="blue")
        sb.highlight(ARRAY, "indices", [right], "current", color="red")
        steps.append(sb.build(len(steps)))

    # --- pointers crossed ---
    sb.begin(StepType.RETURN, duration=1500)
    sb.step_context = {"operation": "return_value", "dataStructure": "array"}
    sb.no_highlights(ARRAY)
    sb.explanation = (
        f"Pointers have crossed (left >= right). No two numbers sum to {target}"
    )
    sb.variables = {"left": left, "right": right, "target": target, "found": False}
    steps.append(sb.build(len(steps)))
    return steps


def _at(values: List[int], i: int) -> Optional[int]:
    return values[i] if 0 <= i < len(values) else None


def _show(values: List[int], i: int) -> str:
    v = _at(values, i)
    return "null" if v is None else str(v)

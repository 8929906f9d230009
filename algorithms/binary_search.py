"""
binary_search.py — Binary Search
=================================
Classic left / right / mid search over a SORTED COPY of the input.

Returned indices refer to positions in that sorted copy, not to the
caller's original order: this is a sorted-array algorithm, and the
generator always sorts first.

Emits a Step at:
  1. Initialisation  →  the sorted array, no highlights
  2. Each iteration  →  COMPARISON: window [left..right], boundary markers,
                        midpoint
  3. Narrowing       →  ASSIGNMENT: the new window (nothing if it is empty)
  4. Match           →  RETURN with a "match" highlight (short-circuits)
  5. Exhausted       →  RETURN with empty highlights
"""

from typing import List, Sequence

from algorithms.step import Step, StepBuilder, StepType

ARRAY = "searchArray"


def binary_search(array: Sequence[int], target: int) -> List[Step]:
    """
    Args:
        array  : Values to search (any order; a sorted copy is searched).
        target : Value to look for.

    Returns:
        list[Step] – ends with a single RETURN step; `variables["found"]`
        tells whether the target was located.
    """
    working = sorted(array)
    left, right = 0, len(working) - 1

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(ARRAY, "array", working, label="Sorted Array")

    sb.begin(StepType.INITIALIZATION, duration=1200)
    sb.step_context = {"operation": "initialize", "dataStructure": "array"}
    sb.explanation = f"Starting binary search for target value {target} in sorted array"
    sb.variables = {"left": left, "right": right, "target": target, "found": False}
    steps.append(sb.build(len(steps)))

    while left <= right:
        mid = (left + right) // 2

        sb.begin(StepType.COMPARISON)
        sb.step_context = {"loopType": "while", "operation": "compare", "dataStructure": "array"}
        _window(sb, left, right)
        sb.highlight(ARRAY, "indices", [mid], "current", color="yellow")
        sb.explanation = (
            f"Comparing middle element {working[mid]} at index {mid} with target {target}"
        )
        sb.variables = {
            "left": left, "right": right, "mid": mid,
            "target": target, "current": working[mid],
        }
        steps.append(sb.build(len(steps)))

        if working[mid] == target:
            sb.begin(StepType.RETURN, duration=1500)
            sb.step_context = {"operation": "return_value", "dataStructure": "array"}
            sb.highlight(ARRAY, "indices", [mid], "match", color="green")
            sb.explanation = f"Target {target} found at index {mid}!"
            sb.variables = {
                "left": left, "right": right, "mid": mid, "target": target,
                "found": True, "foundIndex": mid, "foundValue": working[mid],
            }
            steps.append(sb.build(len(steps)))
            return steps

        if working[mid] < target:
            left = mid + 1
            direction = "right"
            detail = f"{working[mid]} < {target}, searching right half. New left: {left}"
        else:
            right = mid - 1
            direction = "left"
            detail = f"{working[mid]} > {target}, searching left half. New right: {right}"

        sb.begin(StepType.ASSIGNMENT, duration=800)
        sb.step_context = {"operation": "assign", "dataStructure": "array"}
        if left <= right:
            _window(sb, left, right)
        else:
            sb.no_highlights(ARRAY)
        sb.explanation = detail
        sb.variables = {
            "left": left, "right": right, "target": target,
            "searchDirection": direction,
        }
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.RETURN, duration=1500)
    sb.step_context = {"operation": "return_value", "dataStructure": "array"}
    sb.no_highlights(ARRAY)
    sb.explanation = f"Target {target} not found in the array"
    sb.variables = {"left": left, "right": right, "target": target, "found": False}
    steps.append(sb.build(len(steps)))
    return steps


def _window(sb: StepBuilder, left: int, right: int) -> None:
    """Shade [left..right] and mark its boundaries."""
    sb.highlight(ARRAY, "indices", range(left, right + 1), "highlight", intensity=0.3)
    if left == right:
        sb.highlight(ARRAY, "indices", [left], "active", color="purple")
    else:
        sb.highlight(ARRAY, "indices", [left, right], "compare", color="blue")

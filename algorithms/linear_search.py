"""
linear_search.py — Linear Search
=================================
Scans the array left to right in the caller's order (no sorting).

Per index:
  1. LOOP_START   – current index highlighted, earlier indices visited
  2. COMPARISON   – same index, "compare" style
  3. RETURN_FOUND – on a match (short-circuits)
     or ASSIGNMENT – "continue searching", indices 0..i visited
Exhausted → RETURN_NOT_FOUND with every index visited and
`currentIndex == len(array)`.
"""

from typing import List, Sequence

from algorithms.step import Step, StepBuilder, StepType

ARRAY = "searchArray"


def linear_search(array: Sequence[int], target: int) -> List[Step]:
    working = list(array)
    n = len(working)

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(ARRAY, "array", working, label="Search Array")

    sb.begin(StepType.INITIALIZATION, duration=1200)
    sb.step_context = {"operation": "initialize", "dataStructure": "array"}
    sb.explanation = f"Starting linear search for target value {target} in array"
    sb.variables = {"target": target, "length": n, "currentIndex": -1, "found": False}
    steps.append(sb.build(len(steps)))

    for i, value in enumerate(working):
        watch = {
            "target": target, "length": n, "currentIndex": i,
            "currentElement": value, "found": False,
        }

        sb.begin(StepType.LOOP_START, duration=800)
        sb.step_context = {"loopType": "for", "iterationNumber": i, "dataStructure": "array"}
        if i > 0:
            sb.highlight(ARRAY, "indices", range(i), "visited")
        sb.highlight(ARRAY, "indices", [i], "current", color="yellow")
        sb.explanation = f"Examining element at index {i}"
        sb.variables = dict(watch)
        steps.append(sb.build(len(steps)))

        sb.begin(StepType.COMPARISON, duration=800)
        sb.step_context = {"operation": "compare", "dataStructure": "array"}
        if i > 0:
            sb.highlight(ARRAY, "indices", range(i), "visited")
        sb.highlight(ARRAY, "indices", [i], "compare", color="blue")
        sb.explanation = f"Comparing: {value} = {target} ?"
        sb.variables = dict(watch)
        steps.append(sb.build(len(steps)))

        if value == target:
            sb.begin(StepType.RETURN_FOUND, duration=1500)
            sb.step_context = {"operation": "read", "dataStructure": "array"}
            if i > 0:
                sb.highlight(ARRAY, "indices", range(i), "visited")
            sb.highlight(ARRAY, "indices", [i], "match", color="green")
            sb.explanation = f"Target {target} found at index {i}!"
            sb.variables = dict(watch, found=True, foundIndex=i)
            steps.append(sb.build(len(steps)))
            return steps

        sb.begin(StepType.ASSIGNMENT, duration=600)
        sb.step_context = {"operation": "read", "dataStructure": "array"}
        sb.highlight(ARRAY, "indices", range(i + 1), "visited")
        sb.explanation = f"{value} ≠ {target}, continue searching..."
        sb.variables = dict(watch)
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.RETURN_NOT_FOUND, duration=1500)
    sb.step_context = {"operation": "return_value", "dataStructure": "array"}
    if n:
        sb.highlight(ARRAY, "indices", range(n), "visited")
    sb.explanation = f"Target {target} not found in the array"
    sb.variables = {"target": target, "length": n, "currentIndex": n, "found": False}
    steps.append(sb.build(len(steps)))
    return steps

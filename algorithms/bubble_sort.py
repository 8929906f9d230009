"""
bubble_sort.py — Bubble Sort
=============================
Repeatedly swaps adjacent out-of-order pairs; after pass i the largest
unsorted element has bubbled into position n-i-1.

No early exit on a swap-free pass, so the step count depends only on
the input length.
"""

from typing import List, Sequence

from algorithms.step import Step, StepBuilder, StepType

ARRAY = "array"


def bubble_sort(array: Sequence[int]) -> List[Step]:
    arr = list(array)
    n = len(arr)
    swaps = 0

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(ARRAY, "array", arr, label="Array")

    sb.begin(StepType.INITIALIZATION)
    sb.explanation = "Starting Bubble Sort with the given array"
    sb.variables = {"outerLoop": 0, "innerLoop": 0, "swaps": 0}
    steps.append(sb.build(len(steps)))

    for i in range(n - 1):
        settled = list(range(n - i, n))

        sb.begin(StepType.LOOP_START, duration=800)
        sb.step_context = {"loopType": "for", "iterationNumber": i, "dataStructure": "array"}
        if settled:
            sb.highlight(ARRAY, "indices", settled, "visited")
        sb.explanation = f"Pass {i + 1}: Looking for the largest unsorted element"
        sb.variables = {"outerLoop": i, "innerLoop": 0, "swaps": swaps}
        steps.append(sb.build(len(steps)))

        for j in range(n - i - 1):
            sb.begin(StepType.COMPARISON, duration=800)
            sb.step_context = {"operation": "compare", "dataStructure": "array"}
            sb.highlight(ARRAY, "indices", [j, j + 1], "compare")
            sb.explanation = f"Comparing {arr[j]} and {arr[j + 1]}"
            sb.variables = {"outerLoop": i, "innerLoop": j, "swaps": swaps}
            steps.append(sb.build(len(steps)))

            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swaps += 1
                sb.begin(StepType.SWAP)
                sb.step_context = {"operation": "swap", "dataStructure": "array"}
                sb.highlight(ARRAY, "indices", [j, j + 1], "swap", color="red")
                sb.explanation = (
                    f"Swapping {arr[j + 1]} and {arr[j]} because {arr[j + 1]} > {arr[j]}"
                )
            else:
                sb.begin(StepType.NO_SWAP, duration=600)
                sb.step_context = {"operation": "compare", "dataStructure": "array"}
                sb.highlight(ARRAY, "indices", [j, j + 1], "compare")
                sb.explanation = f"No swap needed: {arr[j]} ≤ {arr[j + 1]}"
            sb.variables = {"outerLoop": i, "innerLoop": j, "swaps": swaps}
            steps.append(sb.build(len(steps)))

        sb.begin(StepType.PASS_COMPLETE, duration=800)
        sb.step_context = {"operation": "store", "dataStructure": "array"}
        sb.highlight(ARRAY, "indices", [n - i - 1] + settled, "visited")
        sb.explanation = (
            f"Pass {i + 1} complete. Element {arr[n - i - 1]} is now in its correct position"
        )
        sb.variables = {"outerLoop": i, "innerLoop": n - i - 1, "swaps": swaps}
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.RETURN, duration=1500)
    sb.step_context = {"operation": "return_value", "dataStructure": "array"}
    if n:
        sb.highlight(ARRAY, "indices", range(n), "match", color="green")
    sb.explanation = "Bubble Sort completed! Array is now sorted."
    sb.variables = {"outerLoop": max(n - 1, 0), "innerLoop": 0, "swaps": swaps, "sorted": list(arr)}
    steps.append(sb.build(len(steps)))
    return steps

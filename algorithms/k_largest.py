"""
k_largest.py — K Largest Elements (size-k min-heap)
====================================================
Streams the input once, keeping the k largest values seen so far in a
min-heap (heapq). The heap root is always the smallest of the kept
values, so a new value either replaces it or is skipped.

An out-of-range k (k <= 0 or k > len(values)) yields a single
RETURN_NOT_FOUND step instead of raising.
"""

import heapq
from typing import Any, Dict, List, Sequence

from algorithms.step import Step, StepBuilder, StepType

HEAP  = "heap"
INPUT = "inputArray"

DEFAULT_INPUT = (3, 1, 4, 1, 5, 9, 2, 6, 5, 3)
DEFAULT_K     = 4


def k_largest_elements(values: Sequence[int] = DEFAULT_INPUT, k: int = DEFAULT_K) -> List[Step]:
    values = list(values)
    n = len(values)

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(INPUT, "array", values, label="Input Array", y=100)

    if k <= 0 or k > n:
        sb.begin(StepType.RETURN_NOT_FOUND)
        sb.step_context = {"operation": "return_value", "dataStructure": "min_heap", "kValue": k}
        sb.explanation = (
            f"Invalid k = {k}: k must be between 1 and the input length ({n}). "
            "Nothing to compute."
        )
        sb.variables = {"k": k, "inputLength": n, "valid": False}
        steps.append(sb.build(len(steps)))
        return steps

    heap: List[int] = []
    state: Dict[str, Any] = {
        "elements": heap, "size": 0, "capacity": k, "inputArray": values,
        "currentInputIndex": -1, "kValue": k, "result": [],
    }
    sb.track(HEAP, "heap", state, label=f"Min-Heap (capacity: {k})")

    def emit(index: int) -> None:
        state["size"] = len(heap)
        state["currentInputIndex"] = index
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.HEAP_INITIALIZATION, duration=1500)
    sb.step_context = {"operation": "initialize", "dataStructure": "min_heap", "kValue": k,
                       "heapSize": 0, "heapCapacity": k}
    sb.highlight(INPUT, "indices", range(n), "highlight")
    sb.explanation = (
        f"Initialize a min-heap with capacity {k} to find the {k} largest elements. "
        "Min-heap ensures the smallest element is always at the root."
    )
    sb.variables = {"k": k, "inputLength": n, "heapSize": 0, "heapCapacity": k}
    emit(-1)

    for i, current in enumerate(values):
        sb.relabel(HEAP, f"Min-Heap (size: {len(heap)}/{k})")

        sb.begin(StepType.COMPARISON)
        sb.step_context = {"operation": "read", "dataStructure": "min_heap",
                           "currentInputElement": current, "inputIndex": i,
                           "heapSize": len(heap), "kValue": k}
        sb.highlight(INPUT, "indices", [i], "input_current")
        if heap:
            sb.highlight(HEAP, "heap_elements", [0], "heap_top")
        sb.explanation = (
            f"Processing element {current} at index {i}. Current heap size: {len(heap)}/{k}."
        )
        sb.variables = {"currentElement": current, "currentIndex": i, "heapSize": len(heap),
                        "heapMin": heap[0] if heap else None, "isHeapFull": len(heap) >= k}
        emit(i)

        if len(heap) < k:
            heapq.heappush(heap, current)
            sb.relabel(HEAP, f"Min-Heap (size: {len(heap)}/{k})")

            sb.begin(StepType.HEAP_PUSH, duration=1200)
            sb.step_context = {"operation": "insert", "dataStructure": "min_heap",
                               "currentInputElement": current, "inputIndex": i,
                               "heapOperation": "push", "heapSize": len(heap), "kValue": k}
            sb.highlight(INPUT, "indices", [i], "processing")
            sb.highlight(HEAP, "heap_elements", [heap.index(current)], "heap_highlight")
            sb.explanation = (
                f"Heap has space ({len(heap) - 1}/{k}). Add {current} to the min-heap "
                "and maintain heap property."
            )
            sb.variables = {"currentElement": current, "operation": "push",
                            "heapSize": len(heap), "heapElements": list(heap)}
            emit(i)
            continue

        heap_min = heap[0]
        sb.begin(StepType.HEAP_COMPARE)
        sb.step_context = {"operation": "compare", "dataStructure": "min_heap",
                           "currentInputElement": current, "heapElement": heap_min,
                           "inputIndex": i, "heapOperation": "peek",
                           "heapSize": len(heap), "kValue": k}
        sb.highlight(INPUT, "indices", [i], "input_current")
        sb.highlight(HEAP, "heap_elements", [0], "heap_compare")
        sb.explanation = (
            f"Heap is full ({k}/{k}). Compare current element {current} with heap "
            f"minimum {heap_min}."
        )
        sb.variables = {"currentElement": current, "heapMin": heap_min,
                        "comparison": f"{current} vs {heap_min}",
                        "willReplace": current > heap_min}
        emit(i)

        if current > heap_min:
            removed = heapq.heapreplace(heap, current)
            sb.begin(StepType.HEAP_MAINTAIN_SIZE, duration=1400)
            sb.step_context = {"operation": "optimize", "dataStructure": "min_heap",
                               "currentInputElement": current, "heapElement": removed,
                               "inputIndex": i, "heapOperation": "pop",
                               "heapMaintained": True, "heapSize": len(heap), "kValue": k}
            sb.highlight(INPUT, "indices", [i], "processing")
            sb.highlight(HEAP, "heap_elements", [0], "heap_top")
            sb.explanation = (
                f"{current} > {removed} (heap min). Remove {removed} and add {current}. "
                f"Heap maintains size {k} with larger elements."
            )
            sb.variables = {"currentElement": current, "removedElement": removed,
                            "newHeapMin": heap[0], "operation": "replace_min",
                            "heapElements": list(heap)}
        else:
            sb.begin(StepType.NO_SWAP, duration=800)
            sb.step_context = {"operation": "skip", "dataStructure": "min_heap",
                               "currentInputElement": current, "heapElement": heap_min,
                               "inputIndex": i, "heapMaintained": True,
                               "heapSize": len(heap), "kValue": k}
            sb.highlight(INPUT, "indices", [i], "mismatch")
            sb.explanation = (
                f"{current} ≤ {heap_min} (heap min). Skip {current} as it's not among "
                f"the {k} largest elements."
            )
            sb.variables = {"currentElement": current, "heapMin": heap_min,
                            "operation": "skip", "reason": "not_larger_than_min"}
        emit(i)

    result = sorted(heap, reverse=True)
    state["result"] = result
    sb.relabel(HEAP, f"Result: {k} Largest Elements")

    sb.begin(StepType.HEAP_RESULT_FOUND, duration=2000)
    sb.step_context = {"operation": "return_value", "dataStructure": "min_heap",
                       "heapSize": len(heap), "kValue": k}
    sb.highlight(HEAP, "heap_elements", range(len(heap)), "heap_result")
    sb.explanation = (
        f"Algorithm Complete! Found the {k} largest elements: "
        f"[{', '.join(str(v) for v in result)}]. "
        f"Min-heap efficiently maintained the top {k} elements."
    )
    sb.variables = {"result": result, "kValue": k, "totalProcessed": n,
                    "heapFinalSize": len(heap), "efficiency": "O(n log k)"}
    emit(-1)
    return steps

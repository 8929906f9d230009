"""
min_cost.py — Minimum Cost to Reduce an Array to One Element (greedy)
======================================================================
Operation: pick two elements, remove the larger, pay the smaller.

Greedy choice: always pair the global minimum with some other element.
Every operation then costs `min`, and (n - 1) operations are needed, so
the optimum is (n - 1) × min. The generator demonstrates the strategy
on the actual array, removing the first non-anchor element each time.
"""

from typing import List, Sequence

from algorithms.step import Step, StepBuilder, StepType

ARRAY = "array"


def min_cost_array(values: Sequence[int]) -> List[Step]:
    arr = list(values)
    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(ARRAY, "array", arr, label="Array")

    if len(arr) <= 1:
        sb.begin(StepType.INITIALIZATION, duration=1500)
        sb.explanation = (
            "Empty array - no operations needed." if not arr
            else "Array has only one element - already at target size."
        )
        sb.variables = {"arraySize": len(arr), "totalCost": 0, "operationsNeeded": 0}
        steps.append(sb.build(len(steps)))

        sb.begin(StepType.RETURN)
        sb.step_context = {"operation": "return_value", "dataStructure": "array"}
        if arr:
            sb.highlight(ARRAY, "indices", [0], "match", color="gold")
        sb.explanation = "Total cost: 0."
        sb.variables = {"arraySize": len(arr), "totalCost": 0, "operationsNeeded": 0}
        steps.append(sb.build(len(steps)))
        return steps

    min_el = min(arr)
    min_idx = arr.index(min_el)
    n = len(arr)
    ops_needed = n - 1
    predicted = ops_needed * min_el
    total = 0
    op_count = 0

    sb.begin(StepType.INITIALIZATION, duration=2000)
    sb.explanation = (
        "Problem: Reduce array to size 1 using minimum total cost. Rules: Pick any two "
        "elements, remove the larger one, pay cost equal to the smaller element."
    )
    sb.variables = {"problemType": "Cost Minimization", "rules": "Remove larger, pay smaller",
                    "goal": "Minimize total cost", "initialSize": n, "targetSize": 1}
    steps.append(sb.build(len(steps)))

    sb.begin(StepType.GREEDY_INSIGHT, duration=3000)
    sb.step_context = {"operation": "read", "dataStructure": "array"}
    sb.highlight(ARRAY, "indices", [min_idx], "highlight", color="green")
    sb.explanation = (
        "KEY INSIGHT: We can always choose which elements to pair! Since we want to "
        f"minimize cost, we should always use the smallest element ({min_el}) as our "
        '"cost anchor" - pair it with every other element.'
    )
    sb.variables = {"keyInsight": "Always use minimum element", "minElement": min_el,
                    "minIndex": min_idx,
                    "strategy": "Greedy Choice: Use min element for all operations",
                    "whyOptimal": "Any other choice would cost more"}
    steps.append(sb.build(len(steps)))

    sb.begin(StepType.FORMULA_DERIVATION, duration=2500)
    sb.step_context = {"operation": "calculate", "dataStructure": "array"}
    sb.highlight(ARRAY, "indices", [min_idx], "highlight", color="green")
    sb.explanation = (
        f"FORMULA DERIVATION: We need {ops_needed} operations to go from {n} elements to 1. "
        f"Each operation costs {min_el}. Total = {ops_needed} × {min_el} = {predicted}"
    )
    sb.variables = {"arrayLength": n, "minElement": min_el, "operationsNeeded": ops_needed,
                    "predictedCost": predicted, "formula": "(n-1) × min_element",
                    "calculation": f"{ops_needed} × {min_el} = {predicted}"}
    steps.append(sb.build(len(steps)))

    while len(arr) > 1:
        # first element that isn't the anchor itself
        target_idx = 0 if min_idx != 0 else 1
        target = arr[target_idx]
        others = [v for i, v in enumerate(arr) if i != min_idx]
        to_remove = max(min_el, target)

        sb.begin(StepType.DECISION_TREE, duration=2000)
        sb.step_context = {"operation": "compare", "dataStructure": "array"}
        sb.highlight(ARRAY, "indices", [min_idx], "highlight", color="green")
        sb.highlight(ARRAY, "indices", [target_idx], "compare", color="blue")
        sb.explanation = (
            f"DECISION: Pair min element {min_el} with {target}. We could pair {target} with "
            f"other elements, but that would cost more! This pairing costs {min_el} "
            "(the minimum possible)."
        )
        sb.variables = {"currentPair": [min_el, target], "availableChoices": len(others),
                        "chosenCost": min_el, "whyThisChoice": "Minimizes operation cost",
                        "elementToRemove": to_remove, "totalCost": total,
                        "minElement": min_el, "operationNumber": op_count}
        steps.append(sb.build(len(steps)))

        op_count += 1
        total += min_el

        sb.begin(StepType.COST_CALCULATION, duration=1800)
        sb.step_context = {"operation": "calculate", "dataStructure": "array"}
        sb.highlight(ARRAY, "indices", [target_idx], "active", color="red")
        sb.highlight(ARRAY, "indices", [min_idx], "highlight", color="green")
        sb.explanation = (
            f"COST CALCULATION: Remove {to_remove}, pay cost of smaller element = {min_el}. "
            f"Running total: {total}. Progress: {op_count}/{ops_needed} operations."
        )
        sb.variables = {"operationNumber": op_count, "operationCost": min_el,
                        "runningTotal": total, "elementsRemaining": len(arr) - 1,
                        "progressPercentage": round(op_count / ops_needed * 100),
                        "remainingCost": predicted - total}
        steps.append(sb.build(len(steps)))

        del arr[target_idx]
        if target_idx < min_idx:
            min_idx -= 1

        sb.begin(StepType.ELEMENT_REMOVAL, duration=1500)
        sb.step_context = {"operation": "write", "dataStructure": "array"}
        if len(arr) > 1:
            sb.highlight(ARRAY, "indices", [min_idx], "highlight", color="green")
            sb.explanation = (
                f"Removed {to_remove}. Array size: {len(arr)}. Our greedy anchor "
                f"({min_el}) remains for next operations."
            )
        else:
            sb.highlight(ARRAY, "indices", [0], "match", color="gold")
            sb.explanation = f"COMPLETE! Final element: {arr[0]}. Total cost: {total}"
        sb.variables = {"removedElement": to_remove, "newArraySize": len(arr),
                        "remainingElements": list(arr), "isComplete": len(arr) == 1,
                        "greedyAnchor": min_el, "operationsLeft": len(arr) - 1,
                        "totalCost": total, "minElement": min_el,
                        "operationNumber": op_count}
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.OPTIMALITY_PROOF, duration=3000)
    sb.step_context = {"operation": "return_value", "dataStructure": "array"}
    sb.highlight(ARRAY, "indices", [0], "match", color="gold")
    sb.explanation = (
        "PROOF OF OPTIMALITY: Our greedy choice was optimal! Any other strategy would use "
        f"larger elements as costs, increasing the total. Formula verified: {op_count} "
        f"operations × {min_el} = {total}."
    )
    sb.variables = {"totalCost": total, "predictedCost": predicted,
                    "formulaVerified": total == predicted, "operations": op_count,
                    "minElement": min_el, "finalElement": arr[0]}
    steps.append(sb.build(len(steps)))
    return steps

"""
factorial.py — Recursive Factorial, Call Stack Made Visible
============================================================
factorial(n) = 1                      if n <= 1
             = n × factorial(n - 1)   otherwise

The recursion is simulated with an explicit list of call frames, so the
rendered call stack and the recursion tree are ordinary data. The
descent pushes one frame per call; the unwind computes each product and
pops the frame.
"""

from typing import Any, Dict, List

from algorithms.step import Step, StepBuilder, StepType

CALL_STACK = "callStack"
TREE       = "recursionTree"


def factorial(n: int) -> List[Step]:
    call_stack: List[Dict[str, Any]]      = []
    tree:       Dict[str, Dict[str, Any]] = {}

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(CALL_STACK, "call_stack",     call_stack, label="Call Stack")
    sb.track(TREE,       "recursion_tree", tree,       label="Recursion Tree", x=1)

    sb.begin(StepType.INITIALIZATION, duration=1500)
    sb.explanation = (
        f"Starting factorial calculation for n = {n}. We'll track both the call stack and "
        "recursion tree to show how recursive calls work."
    )
    sb.variables = {"inputN": n, "totalCalls": 0, "maxDepth": max(n, 1)}
    steps.append(sb.build(len(steps)))

    # -- descent --
    current = n
    level = 0
    while True:
        call_id = f"call_{level}"
        parent_id = f"call_{level - 1}" if level else None
        call_stack.append({"id": call_id, "n": current, "isActive": True, "level": level,
                           "parentId": parent_id})
        tree[call_id] = {"id": call_id, "n": current, "level": level, "parentId": parent_id,
                         "children": [], "status": "active"}
        if parent_id:
            tree[parent_id]["children"].append(call_id)

        sb.begin(StepType.RECURSIVE_CALL, duration=1200)
        sb.step_context = {"operation": "call", "dataStructure": "call_stack",
                           "recursionLevel": level, "callId": call_id,
                           "parentCallId": parent_id}
        sb.highlight(CALL_STACK, "call_frames", [call_id], "active")
        sb.highlight(TREE, "tree_nodes", [call_id], "active")
        sb.explanation = (
            f"{'Recursive call' if level else 'Initial call'}: factorial({current}). "
            f"Added to call stack at level {level}."
        )
        sb.variables = {"currentN": current, "recursionLevel": level,
                        "callStackSize": len(call_stack), "activeCall": call_id}
        steps.append(sb.build(len(steps)))

        is_base = current <= 1
        sb.begin(StepType.BASE_CASE_CHECK)
        sb.step_context = {"operation": "compare", "dataStructure": "call_stack",
                           "recursionLevel": level, "callId": call_id}
        sb.highlight(CALL_STACK, "call_frames", [call_id], "highlight")
        sb.highlight(TREE, "tree_nodes", [call_id], "highlight")
        sb.explanation = (
            f"Checking base case: Is {current} <= 1? "
            + ("Yes - base case reached!" if is_base else "No - need recursive call.")
        )
        sb.variables = {"currentN": current, "baseCaseReached": is_base,
                        "recursionLevel": level, "condition": f"{current} <= 1"}
        steps.append(sb.build(len(steps)))

        if is_base:
            break
        current -= 1
        level += 1

    # -- unwind --
    result = 1
    while call_stack:
        frame = call_stack[-1]
        call_id, frame_n, level = frame["id"], frame["n"], frame["level"]
        frame["isActive"] = False
        tree[call_id]["status"] = "completed"

        if frame_n <= 1:
            frame["returnValue"] = tree[call_id]["returnValue"] = result
            sb.begin(StepType.BASE_CASE_REACHED, duration=1500)
            sb.step_context = {"operation": "return_value", "dataStructure": "call_stack",
                               "recursionLevel": level, "callId": call_id}
            sb.highlight(CALL_STACK, "call_frames", [call_id], "base_case")
            sb.highlight(TREE, "tree_nodes", [call_id], "base_case")
            sb.explanation = (
                f"Base case reached! factorial({frame_n}) = 1. Ready to return value and "
                "unwind the call stack."
            )
            sb.variables = {"currentN": frame_n, "returnValue": result,
                            "recursionLevel": level, "isBaseCase": True}
        else:
            inner = result
            result = frame_n * inner
            frame["returnValue"] = tree[call_id]["returnValue"] = result
            sb.begin(StepType.RECURSIVE_RETURN, duration=1200)
            sb.step_context = {"operation": "return_value", "dataStructure": "call_stack",
                               "recursionLevel": level, "callId": call_id}
            sb.highlight(CALL_STACK, "call_frames", [call_id], "returning")
            sb.highlight(TREE, "tree_nodes", [call_id], "returning")
            sb.explanation = (
                f"Returning from factorial({frame_n}): {frame_n} × factorial({frame_n - 1}) "
                f"= {frame_n} × {inner} = {result}"
            )
            sb.variables = {"currentN": frame_n, "recursiveResult": inner,
                            "returnValue": result,
                            "calculation": f"{frame_n} × {inner} = {result}",
                            "recursionLevel": level}
        steps.append(sb.build(len(steps)))

        call_stack.pop()
        sb.begin(StepType.CALL_STACK_POP)
        sb.step_context = {"operation": "return_value", "dataStructure": "call_stack",
                           "recursionLevel": level, "callId": call_id}
        sb.highlight(CALL_STACK, "call_frames", [], "highlight")
        sb.highlight(TREE, "tree_nodes", [call_id], "returning")
        sb.explanation = (
            f"Call stack unwinding: factorial({frame_n}) completed, removed from stack. "
            + ("Returning to caller." if call_stack else "All calls completed!")
        )
        sb.variables = {"currentN": frame_n, "returnValue": result,
                        "callStackSize": len(call_stack), "recursionLevel": level}
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.RETURN, duration=2000)
    sb.step_context = {"operation": "return_value", "dataStructure": "call_stack"}
    sb.highlight(TREE, "tree_nodes", list(tree), "match")
    sb.explanation = (
        f"Factorial calculation complete! factorial({n}) = {result}. All recursive calls "
        "have been resolved and the call stack is empty."
    )
    sb.variables = {"inputN": n, "finalResult": result, "totalCalls": len(tree),
                    "maxDepth": max(node["level"] for node in tree.values()) + 1}
    steps.append(sb.build(len(steps)))
    return steps

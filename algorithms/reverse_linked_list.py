"""
reverse_linked_list.py — In-place Linked List Reversal
=======================================================
Three-pointer reversal (prev / current / next).

The rendered list keeps its original `next` fields; reversal progress is
recorded as a growing table of reversed links, each "from-to" with "null"
for the end of the list. The final value order is recomputed by walking
that table from the new head.
"""

from typing import Any, Dict, List, Optional, Sequence

from algorithms.step import Step, StepBuilder, StepType

LIST = "linkedList"


def reverse_linked_list(values: Sequence[int]) -> List[Step]:
    values = list(values)
    nodes = [
        {"id": f"node{i}", "value": v, "next": f"node{i + 1}" if i < len(values) - 1 else None}
        for i, v in enumerate(values)
    ]
    by_id = {n["id"]: n for n in nodes}
    head = nodes[0]["id"] if nodes else None

    state: Dict[str, Any] = {"nodes": nodes, "head": head, "reversedLinks": []}

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(LIST, "linkedlist", state, label="Linked List")

    sb.begin(StepType.INITIALIZATION, duration=1500)
    sb.explanation = (
        f"Starting with linked list: {' -> '.join(str(v) for v in values)}. "
        "We'll reverse it using three pointers: prev, current, and next."
    )
    sb.variables = {"originalList": values, "listLength": len(values), "head": head}
    steps.append(sb.build(len(steps)))

    prev: Optional[str] = None
    current: Optional[str] = head
    nxt: Optional[str] = None

    sb.begin(StepType.POINTER_INITIALIZATION, duration=1200)
    sb.step_context = {"operation": "store", "dataStructure": "linkedlist", "pointerType": "prev"}
    sb.highlight(LIST, "nodes", [current] if current else [], "current")
    sb.explanation = (
        f"Initialize three pointers: prev = null, current = {current or 'null'} (head), "
        "next = null. These will help us safely reverse the links."
    )
    sb.variables = {"prev": prev, "current": current, "next": nxt, "iteration": 0}
    steps.append(sb.build(len(steps)))

    iteration = 0
    while current is not None:
        iteration += 1
        node = by_id[current]
        nxt = node["next"]

        # 1. remember where we were going
        sb.begin(StepType.POINTER_UPDATE)
        sb.step_context = {
            "operation": "store", "dataStructure": "linkedlist",
            "pointerType": "next", "nodeId": current,
        }
        sb.highlight(LIST, "nodes", [current], "current")
        sb.highlight(LIST, "nodes", [nxt] if nxt else [], "highlight")
        sb.explanation = (
            f"Iteration {iteration}: Current is not null, so continue. "
            f"Store next = {nxt or 'null'} before breaking the link."
        )
        sb.variables = {
            "prev": prev, "current": current, "next": nxt,
            "iteration": iteration, "currentValue": node["value"],
        }
        steps.append(sb.build(len(steps)))

        # 2. point current back at prev
        state["reversingMeta"] = {"from": current, "to": prev, "originalNext": nxt}
        sb.begin(StepType.LINK_REVERSAL, duration=1500)
        sb.step_context = {"operation": "reverse", "dataStructure": "linkedlist", "nodeId": current}
        sb.highlight(LIST, "nodes", [current], "active")
        sb.highlight(LIST, "nodes", [prev] if prev else [], "visited")
        sb.explanation = (
            f"Reverse the link: Make {current} point to {prev or 'null'} "
            f"instead of {nxt or 'null'}."
        )
        sb.variables = {
            "prev": prev, "current": current, "next": nxt,
            "iteration": iteration, "currentValue": node["value"],
            "linkReversed": f"{current} -> {prev or 'null'}",
        }
        steps.append(sb.build(len(steps)))
        del state["reversingMeta"]

        state["reversedLinks"].append(f"{current}-{prev or 'null'}")

        # 3. advance
        prev, current = current, nxt
        sb.begin(StepType.NODE_TRAVERSAL)
        sb.step_context = {"operation": "access", "dataStructure": "linkedlist", "nodeId": current}
        sb.highlight(LIST, "nodes", [prev], "visited")
        sb.highlight(LIST, "nodes", [current] if current else [], "current")
        sb.explanation = (
            f"Move pointers forward: prev = {prev}, current = {current or 'null'}. "
            "Ready for next iteration."
        )
        sb.variables = {
            "prev": prev, "current": current, "next": None, "iteration": iteration,
            "nodesProcessed": iteration, "remainingNodes": len(values) - iteration,
        }
        steps.append(sb.build(len(steps)))

    reversed_values = _walk(by_id, state["reversedLinks"], prev, limit=len(values))

    state["head"] = prev
    sb.relabel(LIST, "Reversed Linked List")
    sb.begin(StepType.RETURN, duration=2000)
    sb.highlight(LIST, "nodes", [n["id"] for n in nodes], "match")
    sb.highlight(LIST, "links", state["reversedLinks"], "reversed")
    sb.explanation = (
        f"Reversal complete! The linked list is now: "
        f"{' -> '.join(str(v) for v in reversed_values)}. The new head is {prev or 'null'}."
    )
    sb.variables = {
        "prev": prev, "current": current, "next": nxt, "newHead": prev,
        "originalList": values, "reversedList": reversed_values,
        "totalIterations": iteration,
    }
    steps.append(sb.build(len(steps)))
    return steps


def _walk(by_id: Dict[str, Dict[str, Any]], links: List[str],
          start: Optional[str], limit: int) -> List[int]:
    """Follow the reversed-link table from `start`, at most `limit` nodes."""
    targets = {}
    for link in links:
        src, dst = link.split("-", 1)
        targets[src] = None if dst == "null" else dst

    out: List[int] = []
    node_id = start
    while node_id is not None and len(out) < limit:
        out.append(by_id[node_id]["value"])
        node_id = targets.get(node_id)
    return out

"""
inorder_traversal.py — In-Order Tree Traversal (Left → Root → Right)
=====================================================================
The recursive traversal is simulated with an explicit stack of call
frames. Each frame moves through phases:

    entering  → go left (if there is a left child)
    left_done → visit the node, then go right (if there is a right child)
    right_done → pop and return to the caller

Calls are only made for existing children, so null-node base cases never
appear in the step stream.
"""

from typing import Any, Dict, List, Optional

from algorithms.step import Step, StepBuilder, StepType
from structures.tree import BinaryTree

TREE       = "tree"
CALL_STACK = "callStack"
RESULT     = "result"


def inorder_traversal(tree: Optional[BinaryTree] = None) -> List[Step]:
    tree = tree if tree is not None else BinaryTree.example("medium")
    root = tree.root

    call_stack: List[Dict[str, Any]] = []
    result:     List[float]          = []
    visited:    List[str]            = []

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(TREE,       "tree",       tree.to_dict(), label="Binary Tree")
    sb.track(CALL_STACK, "call_stack", call_stack,     label="Call Stack", x=1)
    sb.track(RESULT,     "array",      result,         label="In-Order Result", y=1)

    sb.begin(StepType.INITIALIZATION, duration=1500)
    sb.explanation = (
        "Starting in-order traversal"
        + (f" from root node {root}" if root else " of empty tree")
        + ". In-order traversal visits nodes in order: Left → Root → Right."
    )
    sb.variables = {"treeSize": len(tree), "rootId": root,
                    "expectedResult": tree.inorder_values()}
    steps.append(sb.build(len(steps)))

    counter = 0

    def enter(node_id: str, parent_call: Optional[str], depth: int) -> None:
        nonlocal counter
        call_id = f"call_{counter}"
        counter += 1
        call_stack.append({"id": call_id, "nodeId": node_id, "phase": "entering",
                           "parentCallId": parent_call, "depth": depth})
        value = tree.nodes[node_id].value

        sb.begin(StepType.RECURSIVE_CALL)
        sb.step_context = {"operation": "call", "dataStructure": "call_stack",
                           "recursionLevel": depth, "callId": call_id,
                           "parentCallId": parent_call, "nodeId": node_id}
        sb.highlight(TREE, "nodes", [node_id], "current")
        sb.highlight(CALL_STACK, "call_frames", [call_id], "highlight")
        sb.explanation = f"Calling inOrder({node_id}) - visiting node with value {value}"
        sb.variables = {"currentNode": node_id, "callStackSize": len(call_stack),
                        "recursionDepth": depth, "currentPhase": "entering"}
        steps.append(sb.build(len(steps)))

        sb.begin(StepType.BASE_CASE_CHECK, duration=800)
        sb.step_context = {"operation": "validate", "dataStructure": "tree",
                           "recursionLevel": depth, "callId": call_id, "nodeId": node_id}
        sb.highlight(TREE, "nodes", [node_id], "processing")
        sb.highlight(CALL_STACK, "call_frames", [call_id], "active")
        sb.explanation = "Checking base case: is current node null? No, continue with traversal."
        sb.variables = {"isBaseCase": False, "currentNode": node_id, "recursionDepth": depth}
        steps.append(sb.build(len(steps)))

    if root is not None:
        enter(root, None, 0)

    while call_stack:
        frame = call_stack[-1]
        node = tree.nodes[frame["nodeId"]]
        call_id, depth = frame["id"], frame["depth"]

        if frame["phase"] == "entering":
            frame["phase"] = "left_done"
            if node.left:
                sb.begin(StepType.TREE_TRAVERSAL)
                sb.step_context = {"operation": "access", "dataStructure": "tree",
                                   "recursionLevel": depth, "callId": call_id,
                                   "nodeId": node.id}
                sb.highlight(TREE, "nodes", [node.id], "current")
                sb.highlight(TREE, "nodes", [node.left], "highlight")
                sb.highlight(CALL_STACK, "call_frames", [call_id], "active")
                sb.explanation = (
                    f"Processing node {node.id} (value: {node.value}). First, traverse left "
                    f"subtree (node {node.left})."
                )
                sb.variables = {"currentNode": node.id, "leftChild": node.left,
                                "phase": "traversing_left"}
                steps.append(sb.build(len(steps)))
                enter(node.left, call_id, depth + 1)
                continue

        if frame["phase"] == "left_done":
            frame["phase"] = "visiting"
            visited.append(node.id)
            result.append(node.value)

            sb.begin(StepType.TREE_TRAVERSAL, duration=1200)
            sb.step_context = {"operation": "write", "dataStructure": "tree",
                               "recursionLevel": depth, "callId": call_id, "nodeId": node.id}
            sb.highlight(TREE, "nodes", [node.id], "visited")
            sb.highlight(CALL_STACK, "call_frames", [call_id], "active")
            sb.highlight(RESULT, "indices", [len(result) - 1], "highlight")
            sb.explanation = (
                f"Visiting node {node.id}: adding value {node.value} to result. Left subtree "
                "done, now processing current node."
            )
            sb.variables = {"visitedValue": node.value, "resultLength": len(result),
                            "currentPhase": "visiting_node",
                            "traversalProgress": f"{len(visited)}/{len(tree)}"}
            steps.append(sb.build(len(steps)))

            frame["phase"] = "right_done"
            if node.right:
                sb.begin(StepType.TREE_TRAVERSAL)
                sb.step_context = {"operation": "access", "dataStructure": "tree",
                                   "recursionLevel": depth, "callId": call_id,
                                   "nodeId": node.id}
                sb.highlight(TREE, "nodes", [node.id], "visited")
                sb.highlight(TREE, "nodes", [node.right], "highlight")
                sb.highlight(CALL_STACK, "call_frames", [call_id], "active")
                sb.explanation = (
                    f"Current node {node.id} processed. Now traverse right subtree "
                    f"(node {node.right})."
                )
                sb.variables = {"currentNode": node.id, "rightChild": node.right,
                                "phase": "traversing_right"}
                steps.append(sb.build(len(steps)))
                enter(node.right, call_id, depth + 1)
                continue

        call_stack.pop()
        parent_call = frame["parentCallId"]
        if parent_call is None:
            continue

        sb.begin(StepType.RECURSIVE_RETURN, duration=800)
        sb.step_context = {"operation": "return_value", "dataStructure": "call_stack",
                           "recursionLevel": depth - 1, "callId": parent_call}
        sb.highlight(TREE, "nodes", [node.id], "match")
        if call_stack:
            sb.highlight(CALL_STACK, "call_frames", [call_stack[-1]["id"]], "returning")
        else:
            sb.no_highlights(CALL_STACK)
        sb.explanation = (
            f"Completed processing node {node.id} and its subtrees. Returning to parent call."
        )
        sb.variables = {"completedNode": node.id, "callStackSize": len(call_stack),
                        "returnedFrom": call_id}
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.RETURN, duration=2000)
    sb.highlight(TREE, "nodes", visited, "match")
    sb.highlight(RESULT, "indices", range(len(result)), "match")
    sb.explanation = (
        f"In-order traversal complete! Result: [{', '.join(str(v) for v in result)}]. "
        "All nodes visited in sorted order (for BST)."
    )
    sb.variables = {"finalResult": list(result), "totalNodes": len(visited),
                    "traversalOrder": "left → root → right", "isComplete": True}
    steps.append(sb.build(len(steps)))
    return steps

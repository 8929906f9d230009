"""
bfs_traversal.py — Level-Order Tree Traversal
==============================================
Breadth-first traversal of a binary tree using a FIFO queue.

Three structures are rendered side by side:
    tree   – the input tree (never changes)
    queue  – queue elements {nodeId, level, id, addedAtStep}
    result – values in visit order

The queue is a collections.deque; popleft() keeps dequeue O(1).
"""

from collections import deque
from typing import Any, Deque, Dict, List, Optional

from algorithms.step import Step, StepBuilder, StepType
from structures.tree import BinaryTree

TREE   = "tree"
QUEUE  = "queue"
RESULT = "result"


def bfs_traversal(tree: Optional[BinaryTree] = None) -> List[Step]:
    tree = tree if tree is not None else BinaryTree.example("medium")
    root = tree.root

    queue:   Deque[Dict[str, Any]] = deque()
    result:  List[float]           = []
    visited: List[str]             = []
    level_nodes: Dict[int, List[str]] = {}

    # the rendered queue must be a plain list; sync it before each build
    queue_view: List[Dict[str, Any]] = []

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(TREE,   "tree",  tree.to_dict(), label="Binary Tree")
    sb.track(QUEUE,  "queue", queue_view,     label="Queue (FIFO)", x=1, orientation="horizontal")
    sb.track(RESULT, "array", result,         label="Level-Order Result", y=1)

    def emit() -> None:
        queue_view[:] = list(queue)
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.INITIALIZATION, duration=1500)
    sb.explanation = (
        "Starting breadth-first (level-order) traversal"
        + (f" from root node {root}" if root else " of empty tree")
        + ". BFS uses a queue to visit nodes level by level."
    )
    sb.variables = {
        "treeSize": len(tree), "rootId": root,
        "expectedResult": tree.level_order_values(),
        "queueSize": 0, "currentLevel": 0,
    }
    emit()

    if tree.is_empty():
        sb.begin(StepType.RETURN)
        sb.explanation = "Tree is empty. Traversal complete with empty result."
        sb.variables = {"finalResult": [], "isComplete": True}
        emit()
        return steps

    counter = 0

    def enqueue(node_id: str, level: int) -> Dict[str, Any]:
        nonlocal counter
        elem = {"nodeId": node_id, "level": level, "id": f"queue_elem_{counter}",
                "addedAtStep": len(steps)}
        counter += 1
        queue.append(elem)
        level_nodes.setdefault(level, []).append(node_id)
        return elem

    elem = enqueue(root, 0)
    sb.begin(StepType.QUEUE_ENQUEUE, duration=1200)
    sb.step_context = {
        "operation": "enqueue", "dataStructure": "queue", "queueElement": root,
        "queueSize": 1, "currentLevel": 0, "nodeId": root,
    }
    sb.highlight(TREE, "nodes", [root], "highlight")
    sb.highlight(QUEUE, "queue_elements", [elem["id"]], "highlight")
    sb.explanation = (
        f"Enqueued root node {root} (value: {tree.nodes[root].value}) to start BFS. "
        f"Queue size: {len(queue)}"
    )
    sb.variables = {"enqueuedNode": root, "queueSize": len(queue), "currentLevel": 0,
                    "action": "enqueue"}
    emit()

    current_level = 0
    processed_in_level = 0
    nodes_in_level = 1

    while queue:
        front = queue[0]

        if front["level"] > current_level:
            sb.begin(StepType.LEVEL_COMPLETE)
            sb.step_context = {
                "operation": "read", "dataStructure": "tree", "currentLevel": current_level,
                "nodesInCurrentLevel": nodes_in_level, "processedInLevel": processed_in_level,
            }
            sb.highlight(TREE, "nodes", level_nodes.get(current_level, []), "level_complete")
            sb.explanation = (
                f"Level {current_level} complete! Processed {processed_in_level} nodes. "
                f"Moving to level {front['level']}."
            )
            sb.variables = {
                "completedLevel": current_level, "nodesInLevel": nodes_in_level,
                "nextLevel": front["level"], "totalProcessed": len(visited),
            }
            emit()

            current_level = front["level"]
            processed_in_level = 0
            nodes_in_level = sum(1 for e in queue if e["level"] == current_level)

        sb.begin(StepType.QUEUE_PEEK, duration=800)
        sb.step_context = {
            "operation": "peek", "dataStructure": "queue", "queueElement": front["nodeId"],
            "queueSize": len(queue), "currentLevel": front["level"], "nodeId": front["nodeId"],
        }
        sb.highlight(TREE, "nodes", [front["nodeId"]], "current")
        sb.highlight(QUEUE, "queue_front", [front["id"]], "highlight")
        sb.explanation = (
            f"Peeking at queue front: node {front['nodeId']} (level {front['level']}). "
            "Next to be processed."
        )
        sb.variables = {"frontNode": front["nodeId"], "nodeLevel": front["level"],
                        "queueSize": len(queue), "action": "peek"}
        emit()

        elem = queue.popleft()
        node = tree.nodes[elem["nodeId"]]
        visited.append(node.id)
        result.append(node.value)
        processed_in_level += 1

        sb.begin(StepType.QUEUE_DEQUEUE, duration=1200)
        sb.step_context = {
            "operation": "dequeue", "dataStructure": "queue", "queueElement": node.id,
            "queueSize": len(queue), "currentLevel": elem["level"], "nodeId": node.id,
        }
        sb.highlight(TREE, "nodes", [node.id], "visited")
        sb.highlight(RESULT, "indices", [len(result) - 1], "highlight")
        sb.explanation = (
            f"Dequeued and visited node {node.id} (value: {node.value}). Added to result. "
            f"Queue size: {len(queue)}"
        )
        sb.variables = {
            "dequeuedNode": node.id, "visitedValue": node.value, "queueSize": len(queue),
            "resultLength": len(result), "currentLevel": elem["level"],
            "levelProgress": f"{processed_in_level}/{nodes_in_level}",
        }
        emit()

        # left child first, then right
        for side, child_id in (("left", node.left), ("right", node.right)):
            if child_id is None:
                continue
            child_level = elem["level"] + 1
            child_elem = enqueue(child_id, child_level)
            child_value = tree.nodes[child_id].value

            sb.begin(StepType.QUEUE_ENQUEUE)
            sb.step_context = {
                "operation": "enqueue", "dataStructure": "queue", "queueElement": child_id,
                "queueSize": len(queue), "currentLevel": child_level, "nodeId": child_id,
            }
            sb.highlight(TREE, "nodes", [node.id], "visited")
            sb.highlight(TREE, "nodes", [child_id], "highlight")
            sb.highlight(QUEUE, "queue_elements", [child_elem["id"]], "highlight")
            sb.explanation = (
                f"Enqueued {side} child {child_id} (value: {child_value}) at level "
                f"{child_level}. Queue size: {len(queue)}"
            )
            sb.variables = {
                "enqueuedNode": child_id, "childSide": side, "parentNode": node.id,
                "nodeLevel": child_level, "queueSize": len(queue), "nodeValue": child_value,
            }
            emit()

    sb.begin(StepType.RETURN, duration=2000)
    sb.highlight(TREE, "nodes", visited, "match")
    sb.highlight(RESULT, "indices", range(len(result)), "match")
    sb.explanation = (
        f"BFS traversal complete! Result: [{', '.join(str(v) for v in result)}]. "
        "Nodes visited level by level using queue's FIFO principle."
    )
    sb.variables = {
        "finalResult": list(result), "totalNodes": len(visited),
        "traversalOrder": "level by level (BFS)", "isComplete": True,
        "totalLevels": current_level + 1,
    }
    emit()
    return steps

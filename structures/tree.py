"""
tree.py — Binary Tree Input
============================
Id-keyed binary tree used by the tree generators (level-order BFS,
in-order traversal).

Nodes reference their children by id, never by object, so a tree
serialises straight to the {"nodes": [...], "root": id} shape the
visualizer draws.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class TreeNode:
    id:    str
    value: float
    left:  Optional[str] = None
    right: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "left": self.left, "right": self.right}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeNode":
        return cls(
            id=str(data["id"]),
            value=data["value"],
            left=data.get("left"),
            right=data.get("right"),
        )


class BinaryTree:
    """
    Attributes:
        nodes : {node_id: TreeNode}, in declaration order.
        root  : id of the root node, or None for the empty tree.
    """

    def __init__(self, nodes: Optional[Sequence[TreeNode]] = None, root: Optional[str] = None):
        self.nodes: Dict[str, TreeNode] = {n.id: n for n in (nodes or [])}
        self.root:  Optional[str]       = root if self.nodes else None
        self.validate()

    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Raise ValueError unless every child id exists, every node has at
        most one parent, and the root reaches no node twice.
        """
        if self.root is not None and self.root not in self.nodes:
            raise ValueError(f"root {self.root!r} is not a node")

        parents: Dict[str, str] = {}
        for node in self.nodes.values():
            for child in (node.left, node.right):
                if child is None:
                    continue
                if child not in self.nodes:
                    raise ValueError(f"node {node.id!r} points at unknown child {child!r}")
                if child in parents or child == self.root:
                    raise ValueError(f"node {child!r} has more than one parent")
                parents[child] = node.id

    def get(self, node_id: Optional[str]) -> Optional[TreeNode]:
        return self.nodes.get(node_id) if node_id is not None else None

    def is_empty(self) -> bool:
        return self.root is None

    def __len__(self) -> int:
        return len(self.nodes)

    # ------------------------------------------------------------------
    # reference orders (used by tests and the result panels)
    # ------------------------------------------------------------------
    def level_order_values(self) -> List[float]:
        out: List[float] = []
        queue = [self.root] if self.root else []
        while queue:
            node = self.nodes[queue.pop(0)]
            out.append(node.value)
            queue.extend(c for c in (node.left, node.right) if c)
        return out

    def inorder_values(self) -> List[float]:
        out: List[float] = []
        stack: List[TreeNode] = []
        cur = self.get(self.root)
        while stack or cur:
            while cur:
                stack.append(cur)
                cur = self.get(cur.left)
            cur = stack.pop()
            out.append(cur.value)
            cur = self.get(cur.right)
        return out

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": [n.to_dict() for n in self.nodes.values()], "root": self.root}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BinaryTree":
        nodes = [TreeNode.from_dict(nd) for nd in data.get("nodes", [])]
        return cls(nodes, root=data.get("root", nodes[0].id if nodes else None))

    @classmethod
    def from_level_order(cls, values: Sequence[Optional[float]]) -> "BinaryTree":
        """
        Build from a LeetCode-style level-order list where None marks a
        missing child, e.g. [1, None, 2, 3]. Ids are node1, node2, …
        """
        values = list(values)
        if not values or values[0] is None:
            return cls()

        nodes: List[TreeNode] = [TreeNode(id="node1", value=values[0])]
        pending = [nodes[0]]
        i = 1
        while pending and i < len(values):
            parent = pending.pop(0)
            for side in ("left", "right"):
                if i >= len(values):
                    break
                if values[i] is not None:
                    child = TreeNode(id=f"node{len(nodes) + 1}", value=values[i])
                    nodes.append(child)
                    pending.append(child)
                    setattr(parent, side, child.id)
                i += 1
        return cls(nodes, root="node1")

    @classmethod
    def example(cls, name: str = "medium") -> "BinaryTree":
        return cls.from_dict(EXAMPLE_TREES[name])

    def __repr__(self) -> str:
        return f"BinaryTree(nodes={len(self)}, root={self.root})"


EXAMPLE_TREES: Dict[str, Dict[str, Any]] = {
    "small": {
        "name": "Small Tree (3 nodes)",
        "nodes": [
            {"id": "node1", "value": 2, "left": "node2", "right": "node3"},
            {"id": "node2", "value": 1, "left": None, "right": None},
            {"id": "node3", "value": 3, "left": None, "right": None},
        ],
        "root": "node1",
    },
    "medium": {
        "name": "Medium Tree (7 nodes)",
        "nodes": [
            {"id": "node1", "value": 4, "left": "node2", "right": "node3"},
            {"id": "node2", "value": 2, "left": "node4", "right": "node5"},
            {"id": "node3", "value": 6, "left": "node6", "right": "node7"},
            {"id": "node4", "value": 1, "left": None, "right": None},
            {"id": "node5", "value": 3, "left": None, "right": None},
            {"id": "node6", "value": 5, "left": None, "right": None},
            {"id": "node7", "value": 7, "left": None, "right": None},
        ],
        "root": "node1",
    },
    "unbalanced": {
        "name": "Unbalanced Tree",
        "nodes": [
            {"id": "node1", "value": 1, "left": None, "right": "node2"},
            {"id": "node2", "value": 2, "left": None, "right": "node3"},
            {"id": "node3", "value": 3, "left": "node4", "right": None},
            {"id": "node4", "value": 2.5, "left": None, "right": None},
        ],
        "root": "node1",
    },
}

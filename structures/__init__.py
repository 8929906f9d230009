"""
structures/
-----------
Input data layer for the graph and tree generators.  Public API:

    from structures import Graph, GraphNode, GraphEdge
    from structures import BinaryTree, TreeNode, EXAMPLE_TREES
"""

from structures.graph import Graph, GraphEdge, GraphNode
from structures.tree  import EXAMPLE_TREES, BinaryTree, TreeNode

__all__ = [
    "Graph",      "GraphNode", "GraphEdge",
    "BinaryTree", "TreeNode",  "EXAMPLE_TREES",
]

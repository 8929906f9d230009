"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict:
    {
        "binary-search": AlgoInfo(key, label, fn, category, params, defaults, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the web API both
consume it, so adding a new algorithm is: write the generator, add one
entry here.  `params` names the generator's keyword arguments and the
kind of value each one takes (see algorithms/params.py); `defaults`
holds the example input used when a caller leaves a parameter out.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms.step import Step

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.reverse_linked_list  import reverse_linked_list
from algorithms.binary_search        import binary_search
from algorithms.linear_search        import linear_search
from algorithms.two_sum              import two_sum
from algorithms.bubble_sort          import bubble_sort
from algorithms.bfs_traversal        import bfs_traversal
from algorithms.cycle_detection      import cycle_detection
from algorithms.k_largest            import k_largest_elements, DEFAULT_INPUT, DEFAULT_K
from algorithms.coin_change          import coin_change
from algorithms.min_cost             import min_cost_array
from algorithms.anagram              import anagram_detection
from algorithms.balanced_parentheses import balanced_parentheses
from algorithms.factorial            import factorial
from algorithms.inorder_traversal    import inorder_traversal


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "binary-search"
    label:            str                    # human label, e.g. "Binary Search"
    fn:               Callable[..., List[Step]]   # the generator function
    category:         str                    # e.g. "search", "dynamic-programming"
    params:           Dict[str, str] = field(default_factory=dict)  # arg name → value kind
    defaults:         Dict[str, Any] = field(default_factory=dict)  # example inputs
    difficulty:       str = "Beginner"
    complexity_time:  str = ""               # e.g. "O(log n)"
    complexity_space: str = ""               # e.g. "O(1)"
    description:      str = ""               # one-liner for the UI card

    def to_dict(self) -> Dict[str, Any]:
        """Card shape served by the API (no callable)."""
        return {
            "key":             self.key,
            "label":           self.label,
            "category":        self.category,
            "difficulty":      self.difficulty,
            "params":          dict(self.params),
            "defaults":        {k: v for k, v in self.defaults.items() if v is not None},
            "complexityTime":  self.complexity_time,
            "complexitySpace": self.complexity_space,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "reverse-linked-list": AlgoInfo(
        key="reverse-linked-list", label="Reverse Linked List", fn=reverse_linked_list,
        category="linked-lists",
        params={"values": "numbers"}, defaults={"values": [1, 2, 3, 4, 5]},
        complexity_time="O(n)", complexity_space="O(1)",
        description="Reverse a singly linked list in place by redirecting each node's next pointer.",
    ),

    "binary-search": AlgoInfo(
        key="binary-search", label="Binary Search", fn=binary_search,
        category="search",
        params={"array": "numbers", "target": "number"},
        defaults={"array": [2, 5, 8, 12, 16, 23, 38, 45, 67, 78, 89, 91], "target": 23},
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Find a value in a sorted array by halving the search window every comparison.",
    ),

    "linear-search": AlgoInfo(
        key="linear-search", label="Linear Search", fn=linear_search,
        category="search",
        params={"array": "numbers", "target": "number"},
        defaults={"array": [64, 34, 25, 12, 22, 11, 90], "target": 22},
        complexity_time="O(n)", complexity_space="O(1)",
        description="Check every element in order until the target is found or the array ends.",
    ),

    "two-sum": AlgoInfo(
        key="two-sum", label="Two Sum (Two Pointers)", fn=two_sum,
        category="sliding-window",
        params={"array": "numbers", "target": "number"},
        defaults={"array": [2, 3, 6, 7, 8, 11, 15, 17], "target": 9},
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Find a pair summing to the target by moving two pointers inward over a sorted array.",
    ),

    "bubble-sort": AlgoInfo(
        key="bubble-sort", label="Bubble Sort", fn=bubble_sort,
        category="sorting",
        params={"array": "numbers"}, defaults={"array": [64, 34, 25, 12, 22, 11, 90]},
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swap adjacent out-of-order elements; the largest bubbles to the end.",
    ),

    "bfs-traversal": AlgoInfo(
        key="bfs-traversal", label="BFS (Level-Order) Traversal", fn=bfs_traversal,
        category="trees",
        params={"tree": "tree"}, defaults={"tree": None},
        complexity_time="O(n)", complexity_space="O(w)",
        description="Visit a binary tree level by level using a FIFO queue.",
    ),

    "cycle-detection": AlgoInfo(
        key="cycle-detection", label="Cycle Detection", fn=cycle_detection,
        category="graphs",
        params={"graph": "graph"}, defaults={"graph": None},
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Find a back edge in an undirected graph with depth-first search.",
    ),

    "k-largest-elements": AlgoInfo(
        key="k-largest-elements", label="K Largest Elements", fn=k_largest_elements,
        category="heaps", difficulty="Intermediate",
        params={"values": "numbers", "k": "integer"},
        defaults={"values": list(DEFAULT_INPUT), "k": DEFAULT_K},
        complexity_time="O(n log k)", complexity_space="O(k)",
        description="Keep the top K elements in a size-K min-heap, evicting the smallest.",
    ),

    "coin-change": AlgoInfo(
        key="coin-change", label="Coin Change", fn=coin_change,
        category="dynamic-programming", difficulty="Intermediate",
        params={"coins": "integers", "amount": "integer"},
        defaults={"coins": [1, 3, 4], "amount": 6},
        complexity_time="O(amount × coins)", complexity_space="O(amount)",
        description="Fewest coins for an amount, built bottom-up from every smaller amount.",
    ),

    "min-cost-array": AlgoInfo(
        key="min-cost-array", label="Minimum Cost to Make Array Size 1", fn=min_cost_array,
        category="greedy", difficulty="Intermediate",
        params={"values": "numbers"}, defaults={"values": [3, 1, 4, 2]},
        complexity_time="O(n)", complexity_space="O(1)",
        description="Pair the minimum with every other element: total cost is (n - 1) × min.",
    ),

    "anagram-detection": AlgoInfo(
        key="anagram-detection", label="Anagram Detection", fn=anagram_detection,
        category="strings",
        params={"first": "text", "second": "text"},
        defaults={"first": "listen", "second": "silent"},
        complexity_time="O(n)", complexity_space="O(k)",
        description="Compare the character frequency maps of two strings.",
    ),

    "balanced-parentheses": AlgoInfo(
        key="balanced-parentheses", label="Balanced Parentheses Checker",
        fn=balanced_parentheses,
        category="stacks",
        params={"text": "text"}, defaults={"text": "()[]{}"},
        complexity_time="O(n)", complexity_space="O(n)",
        description="Match every closing bracket against the top of a stack of openers.",
    ),

    "factorial": AlgoInfo(
        key="factorial", label="Factorial (Recursive)", fn=factorial,
        category="recursion",
        params={"n": "integer"}, defaults={"n": 5},
        complexity_time="O(n)", complexity_space="O(n)",
        description="n! computed recursively, with the call stack and recursion tree on screen.",
    ),

    "in-order-traversal": AlgoInfo(
        key="in-order-traversal", label="In-order Traversal", fn=inorder_traversal,
        category="trees",
        params={"tree": "tree"}, defaults={"tree": None},
        complexity_time="O(n)", complexity_space="O(h)",
        description="Left → root → right. Produces the sorted sequence for a binary search tree.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    """Filter registry by category."""
    return [a for a in REGISTRY.values() if a.category == category]


def run_algorithm(key: str, **inputs: Any) -> List[Step]:
    """
    Generate the full step list for `key`.  Parameters left out fall back
    to the card's example inputs.  Raises KeyError for an unknown key.
    """
    info = REGISTRY.get(key)
    if info is None:
        raise KeyError(f"Unknown algorithm: {key}")
    kwargs = copy.deepcopy(info.defaults)
    kwargs.update(inputs)
    return info.fn(**kwargs)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "run_algorithm",
]

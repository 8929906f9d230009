"""
graph.py — Undirected Graph Container
======================================
Input structure for the graph generators (cycle detection).

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (neighbours, get_edge_between, …)
  3. Factory methods                        (default demo graph, seeded random)
  4. Import from an edge-list text          (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id; insertion order is
    the iteration order, so traversals are deterministic.
  - Adjacency `_adj[node_id] → [(neighbour_id, edge_id)]` is maintained
    incrementally and lists neighbours in edge-insertion order, both
    directions per edge.
  - Edge ids default to the endpoint ids joined by a dash ("A-B"), with
    a "#n" suffix when that id is already taken; the visualizer
    highlights edges by id. The demo graph keeps short ids ("AB").
"""

import math
import random
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Node / Edge
# ---------------------------------------------------------------------------
class GraphNode:
    """
    Attributes:
        id    : Unique identifier.
        label : Text drawn on the node.
        x, y  : Canvas coordinates.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(self, node_id: str, label: Optional[str] = None, x: float = 0.0, y: float = 0.0):
        self.id:    str   = node_id
        self.label: str   = label or node_id
        self.x:     float = x
        self.y:     float = y

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "position": {"x": self.x, "y": self.y}}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphNode":
        pos = data.get("position") or {}
        return cls(
            node_id=str(data["id"]),
            label=data.get("label"),
            x=pos.get("x", data.get("x", 0.0)),
            y=pos.get("y", data.get("y", 0.0)),
        )

    def __repr__(self) -> str:
        return f"GraphNode(id={self.id}, pos=({self.x:.0f},{self.y:.0f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphNode) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class GraphEdge:
    """Undirected edge between two node ids."""

    __slots__ = ("id", "source", "target")

    def __init__(self, source: str, target: str, edge_id: Optional[str] = None):
        self.id:     str = edge_id or f"{source}-{target}"
        self.source: str = source
        self.target: str = target

    def connects(self, node_a: str, node_b: str) -> bool:
        return {self.source, self.target} == {node_a, node_b}

    def other_end(self, node_id: str) -> Optional[str]:
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphEdge":
        return cls(
            source=str(data.get("from", data.get("source"))),
            target=str(data.get("to", data.get("target"))),
            edge_id=data.get("id"),
        )

    def __repr__(self) -> str:
        return f"GraphEdge({self.source} ↔ {self.target})"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphEdge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
class Graph:
    """
    Attributes:
        nodes : {node_id: GraphNode}
        edges : {edge_id: GraphEdge}
        _adj  : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self):
        self.nodes: Dict[str, GraphNode]              = {}
        self.edges: Dict[str, GraphEdge]              = {}
        self._adj:  Dict[str, List[Tuple[str, str]]]  = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: GraphNode) -> GraphNode:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0,
                    label: Optional[str] = None) -> GraphNode:
        return self.add_node(GraphNode(node_id, label=label, x=x, y=y))

    def remove_node(self, node_id: str) -> None:
        if node_id not in self.nodes:
            return
        for eid in [eid for eid, e in self.edges.items() if node_id in (e.source, e.target)]:
            self.remove_edge(eid)
        del self.nodes[node_id]
        self._adj.pop(node_id, None)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: GraphEdge) -> GraphEdge:
        """Add an edge between two existing nodes."""
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                raise ValueError(f"edge {edge.id} references unknown node {end!r}")
        if edge.id in self.edges:
            raise ValueError(f"duplicate edge id {edge.id!r}")
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, edge_id: Optional[str] = None) -> GraphEdge:
        """An explicit `edge_id` must be unused; a generated one never clashes."""
        if edge_id is None:
            edge_id = self._free_edge_id(f"{source}-{target}")
        return self.add_edge(GraphEdge(source, target, edge_id=edge_id))

    def _free_edge_id(self, base: str) -> str:
        edge_id, n = base, 1
        while edge_id in self.edges:
            n += 1
            edge_id = f"{base}#{n}"
        return edge_id

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self.edges:
            return
        e = self.edges.pop(edge_id)
        for end in (e.source, e.target):
            self._adj[end][:] = [(n, eid) for n, eid in self._adj[end] if eid != edge_id]

    def get_edge_between(self, a: str, b: str) -> Optional[GraphEdge]:
        """First edge connecting a and b."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[str]:
        """Neighbour ids in edge-insertion order."""
        return [nbr for nbr, _ in self._adj.get(node_id, [])]

    def adjacency_list(self) -> Dict[str, List[str]]:
        return {nid: self.neighbours(nid) for nid in self.nodes}

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            g.add_node(GraphNode.from_dict(nd))
        for ed in data.get("edges", []):
            edge = GraphEdge.from_dict(ed)
            g.create_edge(edge.source, edge.target, edge_id=ed.get("id"))
        return g

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def default(cls) -> "Graph":
        """Five-node demo graph containing the cycle B-C-E-D-B."""
        g = cls()
        for nid, x, y in (("A", 100, 100), ("B", 300, 100), ("C", 500, 100),
                          ("D", 200, 250), ("E", 400, 250)):
            g.create_node(nid, x=x, y=y)
        for a, b in (("A", "B"), ("B", "C"), ("B", "D"), ("D", "E"), ("C", "E")):
            g.create_edge(a, b, edge_id=a + b)
        return g

    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 6,
        edge_probability: float = 0.3,
        seed: Optional[int] = None,
        canvas_w: float = 600,
        canvas_h: float = 350,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph, nodes laid out on a circle and
        labelled A, B, C, … Deterministic for a given seed.
        """
        rng = random.Random(seed)
        g = cls()
        ids = [_letter_id(i) for i in range(num_nodes)]
        g._layout_circle(ids, canvas_w, canvas_h)

        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    g.create_edge(ids[i], ids[j])
        return g

    @classmethod
    def from_edge_list(cls, text: str, canvas_w: float = 600, canvas_h: float = 350) -> "Graph":
        """
        Parse a simple text edge list.

        Supported formats (one or more edges per line):
            A-B                 → edge A ↔ B
            A B, B C            → comma-separated pairs
            A: B C D            → A connects to B, C, D
            # comment           → ignored

        Nodes are laid out in a circle in first-seen order.
        """
        order: List[str] = []
        pairs: List[Tuple[str, str]] = []

        def see(nid: str) -> None:
            if nid not in order:
                order.append(nid)

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                src, rest = line.split(":", 1)
                src = src.strip()
                see(src)
                for tgt in rest.replace(",", " ").split():
                    see(tgt)
                    pairs.append((src, tgt))
                continue

            for chunk in line.split(","):
                ends = chunk.replace("-", " ").split()
                if not ends:
                    continue
                if len(ends) != 2:
                    raise ValueError(f"cannot parse edge {chunk.strip()!r}")
                see(ends[0])
                see(ends[1])
                pairs.append((ends[0], ends[1]))

        g = cls()
        g._layout_circle(order, canvas_w, canvas_h)
        for a, b in pairs:
            if g.get_edge_between(a, b) is None:
                g.create_edge(a, b)
        return g

    def _layout_circle(self, ids: List[str], canvas_w: float, canvas_h: float) -> None:
        n = len(ids)
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, nid in enumerate(ids):
            angle = 2 * math.pi * i / max(n, 1)
            self.create_node(
                nid,
                x=round(cx + radius * math.cos(angle)),
                y=round(cy + radius * math.sin(angle)),
            )

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"


def _letter_id(i: int) -> str:
    """0 → A, 25 → Z, 26 → A1, …"""
    letter = chr(ord("A") + i % 26)
    return letter if i < 26 else f"{letter}{i // 26}"

"""
cycle_detection.py — Undirected Cycle Detection (DFS)
======================================================
DFS from every unvisited node (one component at a time) using an
explicit frame stack, so the step order matches the recursive
formulation without Python recursion.

An edge to an already-visited node that is not the current node's DFS
parent is a back edge, which closes a cycle. The first back edge ends
the search.

Emits a Step at:
  1. Initialisation          →  every node highlighted
  2. New component           →  GRAPH_COMPONENT_START on its start node
  3. Enter a node            →  GRAPH_NODE_VISIT
  4. Look along an edge      →  GRAPH_EDGE_EXPLORE
  5. Back edge               →  GRAPH_CYCLE_DETECTED (short-circuits)
  6. Node exhausted          →  GRAPH_BACKTRACK
  7. Done                    →  RETURN with `hasCycle`
"""

from typing import Any, Dict, List, Optional

from algorithms.step import Step, StepBuilder, StepType
from structures.graph import Graph

GRAPH = "graph"


def cycle_detection(graph: Optional[Graph] = None) -> List[Step]:
    graph = graph if graph is not None else Graph.default()
    adjacency = graph.adjacency_list()
    node_ids = graph.node_ids()
    as_dict = graph.to_dict()

    visited:      List[str]                  = []
    seen:         set                        = set()
    current_path: List[str]                  = []
    cycle_edges:  List[str]                  = []
    cycle_nodes:  List[str]                  = []
    parent_map:   Dict[str, Optional[str]]   = {}

    state: Dict[str, Any] = {
        "nodes": as_dict["nodes"],
        "edges": as_dict["edges"],
        "visited": visited,
        "currentPath": current_path,
        "cycleEdges": cycle_edges,
        "currentNode": None,
        "parentMap": parent_map,
        "currentComponent": 0,
        "adjacencyList": adjacency,
    }

    steps: List[Step] = []
    sb = StepBuilder()
    sb.track(GRAPH, "graph", state, label="Graph")

    sb.begin(StepType.INITIALIZATION, duration=1500)
    sb.highlight(GRAPH, "graph_nodes", node_ids, "highlight")
    sb.explanation = (
        f"Starting cycle detection on graph with {graph.node_count()} nodes and "
        f"{graph.edge_count()} edges. We'll use DFS to detect cycles."
    )
    sb.variables = {"totalNodes": graph.node_count(), "totalEdges": graph.edge_count(),
                    "visitedCount": 0, "components": 0}
    steps.append(sb.build(len(steps)))

    component = 0
    has_cycle = False

    def visit(node_id: str, parent_id: Optional[str]) -> None:
        seen.add(node_id)
        visited.append(node_id)
        current_path.append(node_id)
        parent_map[node_id] = parent_id
        state["currentNode"] = node_id

        sb.begin(StepType.GRAPH_NODE_VISIT, duration=1200)
        sb.step_context = {"operation": "visit", "dataStructure": "graph", "nodeId": node_id,
                           "parentNodeId": parent_id, "componentNumber": component}
        sb.highlight(GRAPH, "graph_nodes", [node_id], "current")
        sb.highlight(GRAPH, "graph_nodes", visited, "visited")
        sb.highlight(GRAPH, "graph_nodes", current_path, "path")
        sb.explanation = (
            f"Visiting node {node_id}"
            + (f" (parent: {parent_id})" if parent_id else "")
            + f" in component {component + 1}. Mark as visited and add to current path."
        )
        sb.variables = {"currentNode": node_id, "parent": parent_id, "visited": list(visited),
                        "pathLength": len(current_path), "component": component + 1}
        steps.append(sb.build(len(steps)))

    for start in node_ids:
        if start in seen:
            continue

        parent_map.clear()
        state["currentNode"] = None
        state["currentComponent"] = component

        sb.begin(StepType.GRAPH_COMPONENT_START)
        sb.step_context = {"operation": "visit", "dataStructure": "graph", "nodeId": start,
                           "componentNumber": component}
        sb.highlight(GRAPH, "graph_nodes", [start], "highlight")
        sb.highlight(GRAPH, "graph_nodes", visited, "visited")
        sb.explanation = f"Starting DFS from {start} to explore component {component + 1}."
        sb.variables = {"startNode": start, "component": component + 1,
                        "visitedInPreviousComponents": len(visited)}
        steps.append(sb.build(len(steps)))

        # frame: [node_id, parent_id, index of next neighbour to look at]
        visit(start, None)
        stack: List[List[Any]] = [[start, None, 0]]

        while stack:
            frame = stack[-1]
            node_id, parent_id, i = frame
            neighbours = adjacency[node_id]

            if i < len(neighbours):
                frame[2] += 1
                nbr = neighbours[i]
                edge = graph.get_edge_between(node_id, nbr)
                state["currentNode"] = node_id

                sb.begin(StepType.GRAPH_EDGE_EXPLORE)
                sb.step_context = {"operation": "explore", "dataStructure": "graph",
                                   "fromNodeId": node_id, "toNodeId": nbr,
                                   "edgeId": edge.id if edge else None}
                sb.highlight(GRAPH, "graph_nodes", [node_id], "current")
                sb.highlight(GRAPH, "graph_nodes", [nbr], "exploring")
                sb.highlight(GRAPH, "graph_edges", [edge.id] if edge else [], "exploring")
                sb.highlight(GRAPH, "graph_nodes", visited, "visited")
                sb.explanation = (
                    f"Exploring edge from {node_id} to {nbr}. "
                    f"Checking if {nbr} is already visited."
                )
                sb.variables = {"currentNode": node_id, "neighbor": nbr, "visited": list(visited),
                                "isNeighborVisited": nbr in seen, "isParent": nbr == parent_id}
                steps.append(sb.build(len(steps)))

                if nbr not in seen:
                    visit(nbr, node_id)
                    stack.append([nbr, node_id, 0])
                elif nbr != parent_id:
                    loop = current_path[current_path.index(nbr):] + [nbr]
                    cycle_nodes[:] = current_path
                    cycle_edges[:] = [
                        e.id for a, b in zip(loop, loop[1:])
                        for e in [graph.get_edge_between(a, b)] if e
                    ]

                    sb.begin(StepType.GRAPH_CYCLE_DETECTED, duration=2000)
                    sb.step_context = {"operation": "detect_cycle", "dataStructure": "graph",
                                       "fromNodeId": node_id, "toNodeId": nbr,
                                       "cycleDetected": True}
                    sb.highlight(GRAPH, "graph_nodes", loop, "cycle")
                    sb.highlight(GRAPH, "graph_edges", cycle_edges, "cycle")
                    sb.highlight(GRAPH, "graph_nodes", [node_id], "current")
                    sb.highlight(GRAPH, "graph_nodes", [nbr], "cycle")
                    sb.explanation = (
                        f"Cycle detected! Found back edge from {node_id} to {nbr}. "
                        f"The cycle involves nodes: {' → '.join(loop)}."
                    )
                    sb.variables = {"cycleDetected": True, "cycleNodes": loop[:-1],
                                    "cycleLength": len(loop) - 1,
                                    "backEdge": f"{node_id} → {nbr}"}
                    steps.append(sb.build(len(steps)))
                    has_cycle = True
                    break
            else:
                stack.pop()
                current_path.pop()
                state["currentNode"] = None

                sb.begin(StepType.GRAPH_BACKTRACK, duration=800)
                sb.step_context = {"operation": "backtrack", "dataStructure": "graph",
                                   "nodeId": node_id}
                sb.highlight(GRAPH, "graph_nodes", [node_id], "backtrack")
                sb.highlight(GRAPH, "graph_nodes", visited, "visited")
                sb.highlight(GRAPH, "graph_nodes", current_path, "path")
                sb.explanation = (
                    f"Backtracking from {node_id}. All neighbors explored, "
                    "removing from current path."
                )
                sb.variables = {"backtrackFrom": node_id, "pathLength": len(current_path),
                                "remainingUnvisited": len(node_ids) - len(visited)}
                steps.append(sb.build(len(steps)))

        if has_cycle:
            break
        component += 1

    state["currentNode"] = None
    parent_map.clear()

    sb.begin(StepType.RETURN, duration=2000)
    if has_cycle:
        sb.highlight(GRAPH, "graph_nodes", cycle_nodes, "cycle")
        sb.highlight(GRAPH, "graph_edges", cycle_edges, "cycle")
        sb.explanation = (
            "Cycle Detection Complete: CYCLE FOUND! The graph contains at least one "
            f"cycle with {len(cycle_edges)} edges."
        )
    else:
        sb.highlight(GRAPH, "graph_nodes", visited, "visited")
        sb.explanation = (
            "Cycle Detection Complete: NO CYCLE FOUND. The graph is acyclic (a forest of trees)."
        )
    sb.variables = {
        "result": "CYCLE_FOUND" if has_cycle else "NO_CYCLE",
        "totalNodesVisited": len(visited),
        "totalComponents": component,
        "cycleEdgesCount": len(cycle_edges),
        "hasCycle": has_cycle,
    }
    steps.append(sb.build(len(steps)))
    return steps

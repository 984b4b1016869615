"""Cycle detection and render ordering (Kahn's algorithm).

Two passes over the same index:
  1. Detection — repeatedly remove zero-in-degree nodes; whatever is left
     sits on or behind a cycle.
  2. Render order — a component-grouped breadth-first Kahn walk. Each
     weakly-connected component is emitted as one contiguous block, so
     disconnected subgraphs never interleave in row order.

Ties are always broken by input array position, so identical input gives an
identical order.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence

from grid_graph.errors import CycleDetected
from grid_graph.graph import GraphIndex
from grid_graph.models import Edge, Node
from grid_graph.validation import check_edge_references, validate_graph

logger = logging.getLogger(__name__)


def detect_cycles(index: GraphIndex) -> list[str]:
    """Return the ids Kahn's algorithm could not process, in input order.

    An empty list means the graph is acyclic. Self-loops count as cycles.
    """
    remaining: dict[str, int] = dict(index.in_degree)
    queue: deque[str] = deque(node_id for node_id, deg in remaining.items() if deg == 0)
    processed: set[str] = set()

    while queue:
        node_id = queue.popleft()
        processed.add(node_id)
        for child in index.children(node_id):
            remaining[child] -= 1
            if remaining[child] == 0:
                queue.append(child)

    return [node_id for node_id in index.node_map if node_id not in processed]


def topological_sort(index: GraphIndex) -> list[str]:
    """Component-grouped topological order of an acyclic index.

    Nodes are scanned in input order. The first zero-in-degree node of each
    component triggers a Kahn walk over that whole component, seeded with
    all of the component's zero-in-degree nodes in input order and releasing
    children in edge order.
    """
    component_of: dict[str, int] = {}
    for comp_idx, members in enumerate(index.components()):
        for node_id in members:
            component_of[node_id] = comp_idx

    roots = index.roots()
    remaining: dict[str, int] = dict(index.in_degree)
    emitted: set[int] = set()
    order: list[str] = []

    for node_id in roots:
        comp = component_of[node_id]
        if comp in emitted:
            continue
        emitted.add(comp)

        queue: deque[str] = deque(r for r in roots if component_of[r] == comp)
        while queue:
            current = queue.popleft()
            order.append(current)
            for child in index.children(current):
                remaining[child] -= 1
                if remaining[child] == 0:
                    queue.append(child)

    return order


def validate_and_sort(nodes: Sequence[Node], edges: Sequence[Edge], *, auto: bool = False) -> list[str]:
    """Validate the input and return node ids in render order.

    Steps: edge references, branch declarations (explicit mode only), cycle
    check, then the component-grouped sort.

    Raises:
        LayoutError: the first rule violated.
    """
    if not nodes:
        return []

    check_edge_references(nodes, edges)
    index = GraphIndex.build(nodes, edges)
    if not auto:
        validate_graph(index)
    return sort_index(index)


def sort_index(index: GraphIndex) -> list[str]:
    """Cycle check + topological sort on a prebuilt index."""
    cyclic = detect_cycles(index)
    if cyclic:
        cycle_edges = index.find_cycle_edges(among=cyclic)
        raise CycleDetected(
            f"Graph contains a cycle and is not a valid DAG (unprocessed nodes: {', '.join(cyclic)}).",
            node_ids=cyclic,
            edge_ids=cycle_edges,
        )

    order = topological_sort(index)
    logger.debug("Sorted %d nodes into render order", len(order))
    return order

"""Graph index: adjacency structures derived from a flat node/edge list.

The index is rebuilt from scratch for every layout call. Parent and child
lists keep edge input order, which decides the "first child" of a branch
point. Edges with unknown endpoints are left out here; the validator reports
them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import networkx as nx

from grid_graph.models import Edge, Node


@dataclass
class GraphIndex:
    """Adjacency view of one layout invocation's input.

    Attributes:
        node_map: Maps node id → Node, in input order.
        parent_map: Maps node id → parent ids, in edge input order.
        child_map: Maps node id → child ids, in edge input order.
        in_degree: Maps node id → number of incoming edges.
        edges: The edges that connect two known nodes, in input order.
        digraph: networkx view keyed by edge id, used for graph queries
            (weak components, concrete cycles).
    """

    node_map: dict[str, Node]
    parent_map: dict[str, list[str]]
    child_map: dict[str, list[str]]
    in_degree: dict[str, int]
    edges: list[Edge] = field(default_factory=list)
    digraph: nx.MultiDiGraph = field(default_factory=nx.MultiDiGraph)

    @classmethod
    def build(cls, nodes: Sequence[Node], edges: Sequence[Edge]) -> GraphIndex:
        """Build the index.

        Every node starts with in-degree 0 and empty parent/child lists; each
        edge increments its target's in-degree and appends to both lists.
        """
        node_map: dict[str, Node] = {}
        parent_map: dict[str, list[str]] = {}
        child_map: dict[str, list[str]] = {}
        in_degree: dict[str, int] = {}
        g: nx.MultiDiGraph = nx.MultiDiGraph()

        for node in nodes:
            node_map[node.id] = node
            parent_map[node.id] = []
            child_map[node.id] = []
            in_degree[node.id] = 0
            g.add_node(node.id)

        known: list[Edge] = []
        for edge in edges:
            if edge.source not in node_map or edge.target not in node_map:
                continue
            in_degree[edge.target] += 1
            parent_map[edge.target].append(edge.source)
            child_map[edge.source].append(edge.target)
            g.add_edge(edge.source, edge.target, key=edge.id)
            known.append(edge)

        return cls(
            node_map=node_map,
            parent_map=parent_map,
            child_map=child_map,
            in_degree=in_degree,
            edges=known,
            digraph=g,
        )

    def __len__(self) -> int:
        return len(self.node_map)

    def parents(self, node_id: str) -> list[str]:
        return self.parent_map.get(node_id, [])

    def children(self, node_id: str) -> list[str]:
        return self.child_map.get(node_id, [])

    def is_root(self, node_id: str) -> bool:
        return not self.parents(node_id)

    def is_merge(self, node_id: str) -> bool:
        """A merge node has more than one incoming edge."""
        return len(self.parents(node_id)) > 1

    def is_branch_point(self, node_id: str) -> bool:
        """A branch point has more than one outgoing edge."""
        return len(self.children(node_id)) > 1

    def roots(self) -> list[str]:
        """Zero-in-degree node ids, in input order."""
        return [node_id for node_id, deg in self.in_degree.items() if deg == 0]

    def components(self) -> list[list[str]]:
        """Weakly-connected components, each in input order.

        Components are ordered by their first member in input order.
        """
        position = {node_id: pos for pos, node_id in enumerate(self.node_map)}
        comps = [sorted(c, key=position.__getitem__) for c in nx.weakly_connected_components(self.digraph)]
        comps.sort(key=lambda c: position[c[0]])
        return comps

    def find_cycle_edges(self, among: Sequence[str] | None = None) -> list[str]:
        """Return the edge ids of one concrete cycle, or [] if there is none.

        ``among`` restricts the search to a subset of nodes (e.g. the nodes
        Kahn's algorithm could not process).
        """
        g = self.digraph if among is None else self.digraph.subgraph(among)
        try:
            cycle = nx.find_cycle(g)
        except nx.NetworkXNoCycle:
            return []
        return [key for _src, _tgt, key in cycle]

"""Tests for graph.py — GraphIndex construction and graph queries."""

from __future__ import annotations

import networkx as nx

from grid_graph.graph import GraphIndex
from grid_graph.models import Edge, Node

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_nodes(*ids: str) -> list[Node]:
    """Build branchless nodes from ids."""
    return [Node(id=i) for i in ids]


def make_edges(*pairs: tuple[str, str]) -> list[Edge]:
    """Build edges e0, e1, ... from (source, target) pairs."""
    return [Edge(id=f"e{i}", source=s, target=t) for i, (s, t) in enumerate(pairs)]


def make_index(ids: list[str], pairs: list[tuple[str, str]]) -> GraphIndex:
    return GraphIndex.build(make_nodes(*ids), make_edges(*pairs))


# ─── GraphIndex.build Tests ───────────────────────────────────────────────────


class TestBuild:
    def test_isolated_nodes_initialised(self):
        """Every node starts with in-degree 0 and empty neighbour lists."""
        index = make_index(["A", "B"], [])
        assert index.in_degree == {"A": 0, "B": 0}
        assert index.parent_map == {"A": [], "B": []}
        assert index.child_map == {"A": [], "B": []}

    def test_neighbour_lists_follow_edge_order(self):
        """Children and parents are listed in edge input order."""
        index = make_index(["A", "B", "C", "D"], [("A", "C"), ("A", "B"), ("B", "D"), ("C", "D")])
        assert index.children("A") == ["C", "B"]
        assert index.parents("D") == ["B", "C"]
        assert index.in_degree["D"] == 2

    def test_duplicate_edges_counted_twice(self):
        """Two edges between the same pair make the target a merge node."""
        index = make_index(["A", "B"], [("A", "B"), ("A", "B")])
        assert index.in_degree["B"] == 2
        assert index.parents("B") == ["A", "A"]
        assert index.is_merge("B")

    def test_unknown_endpoints_skipped(self):
        """Edges to unknown nodes are left out of the index without raising."""
        index = make_index(["A"], [("A", "ghost"), ("ghost", "A")])
        assert index.in_degree == {"A": 0}
        assert index.children("A") == []
        assert index.edges == []

    def test_digraph_keyed_by_edge_id(self):
        """The networkx view carries one keyed edge per input edge."""
        index = make_index(["A", "B"], [("A", "B"), ("A", "B")])
        assert isinstance(index.digraph, nx.MultiDiGraph)
        assert sorted(k for _, _, k in index.digraph.edges(keys=True)) == ["e0", "e1"]

    def test_input_nodes_not_copied_or_changed(self):
        """node_map holds the caller's node objects unchanged."""
        nodes = [Node(id="A", label={"payload": 1}, branch="main")]
        index = GraphIndex.build(nodes, [])
        assert index.node_map["A"] is nodes[0]
        assert nodes[0].label == {"payload": 1}


# ─── Query Tests ──────────────────────────────────────────────────────────────


class TestQueries:
    def test_roots_in_input_order(self):
        """roots() lists zero-in-degree nodes in input order."""
        index = make_index(["C", "A", "B"], [("A", "B")])
        assert index.roots() == ["C", "A"]

    def test_branch_point_and_merge(self):
        """Branch points have >1 child, merge nodes have >1 parent."""
        index = make_index(["A", "B", "C", "D"], [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
        assert index.is_branch_point("A")
        assert not index.is_branch_point("B")
        assert index.is_merge("D")
        assert not index.is_merge("B")
        assert index.is_root("A")
        assert not index.is_root("D")

    def test_components_ordered_by_first_member(self):
        """Weak components come out in input order, members in input order."""
        index = make_index(["r1", "y", "r2", "x"], [("r1", "x"), ("r2", "x")])
        assert index.components() == [["r1", "r2", "x"], ["y"]]

    def test_find_cycle_edges_acyclic(self):
        """A DAG has no cycle edges."""
        index = make_index(["A", "B"], [("A", "B")])
        assert index.find_cycle_edges() == []

    def test_find_cycle_edges_two_cycle(self):
        """A 2-cycle reports both of its edges."""
        index = make_index(["A", "B"], [("A", "B"), ("B", "A")])
        assert sorted(index.find_cycle_edges()) == ["e0", "e1"]

    def test_find_cycle_edges_restricted(self):
        """Restricting the search to acyclic nodes finds nothing."""
        index = make_index(["A", "B", "C"], [("A", "B"), ("B", "A"), ("A", "C")])
        assert index.find_cycle_edges(among=["C"]) == []
        assert sorted(index.find_cycle_edges(among=["A", "B"])) == ["e0", "e1"]

    def test_len(self):
        index = make_index(["A", "B", "C"], [])
        assert len(index) == 3

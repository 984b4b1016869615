"""
Graph validation - enforce the branching discipline that makes a lane layout
unambiguous.

Without these rules a merge or a fork could be drawn on more than one
plausible branch. With them, every fork point has been disambiguated by the
caller and branch assignment is deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from grid_graph.errors import (
    AmbiguousBranchChildren,
    MissingBranchOnMerge,
    RootBranchPointMissingBranch,
    UnknownNodeReference,
)
from grid_graph.graph import GraphIndex
from grid_graph.models import Edge, Node

logger = logging.getLogger(__name__)


def check_edge_references(nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Every edge endpoint must name a node in the node set.

    Raises:
        UnknownNodeReference: naming every missing id (first-appearance order)
            and every offending edge.
    """
    node_ids = {n.id for n in nodes}
    missing: list[str] = []
    bad_edges: list[str] = []

    for edge in edges:
        dangling = False
        for endpoint in (edge.source, edge.target):
            if endpoint not in node_ids:
                dangling = True
                if endpoint not in missing:
                    missing.append(endpoint)
        if dangling:
            bad_edges.append(edge.id)

    if missing:
        raise UnknownNodeReference(
            f"Edges reference unknown nodes: {', '.join(missing)}",
            node_ids=missing,
            edge_ids=bad_edges,
        )


def validate_graph(index: GraphIndex) -> None:
    """
    Check the branch declaration rules over an index.

    Checks, in order:
    - Merge nodes (more than one parent) declare a branch
    - Root branch points (no parents, more than one child) declare a branch
    - At most one child of any branch point omits its branch

    Only used in explicit mode; auto-naming has its own consistency rule.

    Raises:
        MissingBranchOnMerge, RootBranchPointMissingBranch,
        AmbiguousBranchChildren: the first violation found.
    """
    for node_id, parents in index.parent_map.items():
        if len(parents) > 1 and not index.node_map[node_id].declared_branch:
            raise MissingBranchOnMerge(
                f'Node "{node_id}" is a merge node but lacks a \'branch\' property.',
                node_ids=[node_id],
            )

    for node_id, children in index.child_map.items():
        if len(children) <= 1:
            continue
        node = index.node_map[node_id]

        if index.is_root(node_id) and not node.declared_branch:
            raise RootBranchPointMissingBranch(
                f'Node "{node_id}" is a root branch point and must have a \'branch\' property.',
                node_ids=[node_id],
            )

        without_branch = [c for c in children if not index.node_map[c].declared_branch]
        if len(without_branch) > 1:
            raise AmbiguousBranchChildren(
                f'Node "{node_id}" creates a branch. All but one child must have an explicit '
                f"'branch' property ({len(without_branch)} children without one).",
                count=len(without_branch),
                node_ids=[node_id, *without_branch],
            )

    logger.debug("Branch declarations valid for %d nodes", len(index))

"""Branch assignment: label every node with exactly one branch name.

Two interchangeable strategies, both walking nodes in render order so every
parent is labelled before its children:

  * explicit — honour declared ``branch`` values, inherit through single
    parents, fall back to the node's own id;
  * auto     — name branches with a pluggable ``name_branch`` callable and
    decide where branches continue with a first-child rule and, optionally,
    a shallowest-remaining-depth heuristic at merges.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping, Sequence
from types import MappingProxyType

import networkx as nx

from grid_graph.errors import DuplicateAutoBranchName
from grid_graph.graph import GraphIndex
from grid_graph.models import AutoBranchConfig

logger = logging.getLogger(__name__)


# ─── Explicit mode ────────────────────────────────────────────────────────────


def assign_branches(sorted_ids: Sequence[str], index: GraphIndex) -> dict[str, str]:
    """Assign branches from explicit declarations.

    For each node: its declared branch; else its single parent's branch;
    else its own id. The last case only covers roots (and validated
    merge-free nodes) without a declaration.
    """
    node_branch_map: dict[str, str] = {}

    for node_id in sorted_ids:
        node = index.node_map[node_id]
        parents = index.parents(node_id)

        if node.declared_branch:
            branch = node.declared_branch
        elif len(parents) == 1:
            branch = node_branch_map[parents[0]]
        else:
            branch = node_id

        node_branch_map[node_id] = branch

    return node_branch_map


# ─── Auto mode ────────────────────────────────────────────────────────────────


def remaining_depth(
    start: str,
    branch: str,
    exclude: str,
    node_branch_map: Mapping[str, str],
    index: GraphIndex,
    limit: int,
) -> int:
    """Length of the longest same-branch chain forward from ``start``, capped at ``limit``.

    A child is followed when it is already on ``branch``, or, while still
    unlabelled, when it is its parent's first child with a single parent
    (the child the first-child rule will make continue the branch).
    ``exclude`` (the merge node being decided) is never followed. Nodes
    reachable along several paths count at their deepest position.
    """
    chain: nx.DiGraph = nx.DiGraph()
    chain.add_node(start)
    queue: deque[str] = deque([start])

    while queue:
        current = queue.popleft()
        for pos, child in enumerate(index.children(current)):
            if child == exclude:
                continue
            assigned = node_branch_map.get(child)
            if assigned is not None:
                same_branch = assigned == branch
            else:
                same_branch = pos == 0 and len(index.parents(child)) == 1
            if not same_branch:
                continue
            if child not in chain:
                queue.append(child)
            chain.add_edge(current, child)

    # Every node in ``chain`` is reachable from ``start``, so the longest
    # path in the sub-DAG begins there.
    return min(nx.dag_longest_path_length(chain), limit)


def _shallowest_parent(
    node_id: str,
    node_branch_map: Mapping[str, str],
    index: GraphIndex,
    limit: int,
) -> str:
    """The parent whose branch has the least remaining depth (first parent on ties)."""
    best_parent = ""
    best_depth = -1
    for parent in dict.fromkeys(index.parents(node_id)):
        depth = remaining_depth(parent, node_branch_map[parent], node_id, node_branch_map, index, limit)
        if best_depth < 0 or depth < best_depth:
            best_parent, best_depth = parent, depth
    return best_parent


def assign_auto_branches(
    sorted_ids: Sequence[str],
    index: GraphIndex,
    config: AutoBranchConfig,
) -> dict[str, str]:
    """Assign generated branch names.

    Rules, per node in render order:
      - root → new branch;
      - single parent with one child → inherit;
      - single parent with several children → the first child (edge input
        order) inherits, every other child starts a new branch;
      - merge node → new branch when ``merge_creates_branch``, else the
        branch of the parent with the shallowest remaining chain.

    Declared ``branch`` values are not consulted in this mode.

    Raises:
        DuplicateAutoBranchName: if ``name_branch`` gave two branches the
            same name.
    """
    node_map = MappingProxyType(index.node_map)
    node_branch_map: dict[str, str] = {}
    branch_starts: dict[str, list[str]] = {}

    def start_branch(first_node_id: str) -> str:
        name = config.name_branch(first_node_id, node_map)
        branch_starts.setdefault(name, []).append(first_node_id)
        return name

    for node_id in sorted_ids:
        parents = index.parents(node_id)

        if not parents:
            branch = start_branch(node_id)
        elif len(parents) == 1:
            parent = parents[0]
            siblings = index.children(parent)
            if len(siblings) == 1 or siblings[0] == node_id:
                branch = node_branch_map[parent]
            else:
                branch = start_branch(node_id)
        elif config.merge_creates_branch:
            branch = start_branch(node_id)
        else:
            parent = _shallowest_parent(node_id, node_branch_map, index, config.depth_limit)
            branch = node_branch_map[parent]

        node_branch_map[node_id] = branch

    duplicates = [name for name, firsts in branch_starts.items() if len(firsts) > 1]
    if duplicates:
        offenders = [node_id for name in duplicates for node_id in branch_starts[name]]
        raise DuplicateAutoBranchName(
            f"Auto-generated branch names are not unique: {', '.join(duplicates)}. "
            "Supply a more specific name_branch function.",
            names=duplicates,
            node_ids=offenders,
        )

    logger.debug("Auto-named %d branches for %d nodes", len(branch_starts), len(node_branch_map))
    return node_branch_map

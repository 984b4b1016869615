"""Grid layout engine.

Phases:
  1. Index      (adjacency maps from the flat node/edge list)
  2. Validate   (edge references; branch declarations in explicit mode)
  3. Sort       (cycle check + component-grouped topological order)
  4. Branches   (explicit or auto-named)
  5. Lanes      (first-seen allocation, then optional caller order)
  6. Colours    (palette cycled over first-seen branches)
  7. Edges      (rounded orthogonal paths from lane/row indices)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from grid_graph.graph import GraphIndex
from grid_graph.layout.branches import assign_auto_branches, assign_branches
from grid_graph.layout.colors import create_color_map
from grid_graph.layout.edges import route_edges
from grid_graph.layout.lanes import apply_branch_order, assign_lanes, max_column
from grid_graph.layout.types import LayoutResult
from grid_graph.models import (
    AutoBranchesInput,
    Edge,
    GridConfig,
    Node,
    coerce_config,
    coerce_edges,
    coerce_nodes,
    resolve_auto_branches,
)
from grid_graph.ordering import sort_index
from grid_graph.validation import check_edge_references, validate_graph

logger = logging.getLogger(__name__)


class GridLayout:
    """Git-log-style lane layout engine.

    Holds only read-only configuration; each ``layout`` call is independent
    and may run concurrently with others.
    """

    def __init__(self, config: GridConfig | Mapping[str, Any] | None = None) -> None:
        self.config = coerce_config(config)

    def layout(
        self,
        nodes: Sequence[Node | Mapping[str, Any]],
        edges: Sequence[Edge | Mapping[str, Any]],
        branch_order: Sequence[str] | None = None,
        auto_branches: AutoBranchesInput = None,
    ) -> LayoutResult:
        """Run the full pipeline.

        Raises:
            LayoutError: the first validation or cycle error; no partial
                layout is produced.
        """
        node_list = coerce_nodes(list(nodes))
        edge_list = coerce_edges(list(edges))
        auto = resolve_auto_branches(auto_branches)

        check_edge_references(node_list, edge_list)
        if not node_list:
            return LayoutResult()

        index = GraphIndex.build(node_list, edge_list)
        if auto is None:
            validate_graph(index)
        sorted_ids = sort_index(index)

        if auto is None:
            node_branch_map = assign_branches(sorted_ids, index)
        else:
            node_branch_map = assign_auto_branches(sorted_ids, index, auto)

        node_column_map, branch_lane_map = assign_lanes(sorted_ids, node_branch_map)
        node_column_map, branch_lane_map = apply_branch_order(branch_order, branch_lane_map, node_branch_map)
        branch_color_map = create_color_map(node_branch_map, self.config.colors)
        node_render_index = {node_id: row for row, node_id in enumerate(sorted_ids)}

        edge_paths = route_edges(
            index.edges,
            index,
            node_column_map,
            node_render_index,
            node_branch_map,
            branch_color_map,
            self.config,
        )

        logger.debug(
            "Laid out %d nodes, %d edges on %d lanes",
            len(sorted_ids),
            len(edge_paths),
            len(branch_lane_map),
        )

        return LayoutResult(
            node_column_map=node_column_map,
            node_branch_map=node_branch_map,
            branch_lane_map=branch_lane_map,
            max_column=max_column(node_column_map),
            branch_color_map=branch_color_map,
            node_render_index=node_render_index,
            edge_paths=edge_paths,
            sorted_node_ids=tuple(sorted_ids),
        )


def full_layout(
    nodes: Sequence[Node | Mapping[str, Any]],
    edges: Sequence[Edge | Mapping[str, Any]],
    config: GridConfig | Mapping[str, Any] | None = None,
    branch_order: Sequence[str] | None = None,
    auto_branches: AutoBranchesInput = None,
) -> LayoutResult:
    """Run the layout pipeline, raising on invalid input."""
    return GridLayout(config).layout(nodes, edges, branch_order=branch_order, auto_branches=auto_branches)

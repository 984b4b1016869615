"""Layout stages and the engine that chains them."""

from __future__ import annotations

from grid_graph.layout.branches import assign_auto_branches, assign_branches, remaining_depth
from grid_graph.layout.colors import create_color_map
from grid_graph.layout.edges import calculate_edge_path, route_edges
from grid_graph.layout.engine import GridLayout, full_layout
from grid_graph.layout.geometry import (
    content_height,
    graph_width,
    header_height,
    label_x,
    lane_x,
    node_point,
    node_position,
    row_y,
)
from grid_graph.layout.lanes import (
    apply_branch_order,
    assign_lanes,
    drag_column_offset,
    drag_target_index,
    max_column,
    reorder_branches,
)
from grid_graph.layout.types import EdgePath, LayoutOutcome, LayoutResult, Point

__all__ = [
    "EdgePath",
    "GridLayout",
    "LayoutOutcome",
    "LayoutResult",
    "Point",
    "apply_branch_order",
    "assign_auto_branches",
    "assign_branches",
    "assign_lanes",
    "calculate_edge_path",
    "content_height",
    "create_color_map",
    "drag_column_offset",
    "drag_target_index",
    "full_layout",
    "graph_width",
    "header_height",
    "label_x",
    "lane_x",
    "max_column",
    "node_point",
    "node_position",
    "remaining_depth",
    "reorder_branches",
    "route_edges",
    "row_y",
]

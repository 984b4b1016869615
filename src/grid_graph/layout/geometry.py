"""Pixel geometry derived from lane and row indices.

Positions come from layout data times fixed metrics, never from measured
widget positions, so routing stays pure.
"""

from __future__ import annotations

from collections.abc import Iterable

from grid_graph.layout.types import LayoutResult, Point
from grid_graph.models import GridConfig


def lane_x(column: int, config: GridConfig) -> float:
    """Centre x of a lane."""
    return column * config.column_width + config.padding / 2 + config.node_diameter / 2


def row_y(row: int, config: GridConfig) -> float:
    """Centre y of a render row."""
    return row * config.row_height + config.row_height / 2


def node_point(column: int, row: int, config: GridConfig) -> Point:
    return Point(x=lane_x(column, config), y=row_y(row, config))


def node_position(node_id: str, layout: LayoutResult, config: GridConfig) -> Point:
    """Centre of a laid-out node, from its lane and render row."""
    return node_point(layout.node_column_map[node_id], layout.node_render_index[node_id], config)


def graph_width(max_column: int, config: GridConfig) -> float:
    """Width of the lane area: every lane plus outer padding."""
    return (max_column + 1) * config.column_width + config.padding


def label_x(max_column: int, config: GridConfig) -> float:
    """Left edge of the node label column, just past the lane area."""
    return graph_width(max_column, config) + config.label_left_margin


def content_height(node_count: int, config: GridConfig) -> float:
    return node_count * config.row_height


def header_height(branch_names: Iterable[str], config: GridConfig) -> float:
    """Height of the branch header, per the config's ``HeaderPolicy``.

    Vertical labels grow with the longest branch name; everything else is a
    fixed height.
    """
    policy = config.header
    if not policy.show_branch_dots and not policy.show_branch_names:
        return 0
    if not policy.show_branch_names:
        return policy.dots_only_height
    if not policy.vertical_labels:
        return policy.horizontal_height

    longest = max((len(name) for name in branch_names), default=0)
    return max(longest * policy.char_width + policy.label_padding, policy.min_vertical_height)

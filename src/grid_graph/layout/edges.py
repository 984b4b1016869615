"""Edge routing: one rounded orthogonal path and one colour per edge.

Shapes:
  - endpoints share a row or a lane → straight segment;
  - merge edge (target has more than one parent) → vertical run, corner
    near the target row, horizontal run into the target, so merges converge
    on one point;
  - any other edge → horizontal run, corner near the source row, vertical
    run into the target, so forks diverge from one point.

Colour: a merge edge keeps its source branch colour; any other edge takes
the colour of the branch it is heading into.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from grid_graph.graph import GraphIndex
from grid_graph.layout.geometry import node_point
from grid_graph.layout.types import EdgePath, Point
from grid_graph.models import Edge, GridConfig


def _fmt(value: float) -> str:
    """Compact, stable number formatting for path strings (never exponent notation)."""
    rounded = round(float(value), 6)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.6f}".rstrip("0")


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def calculate_edge_path(
    source: Point,
    target: Point,
    corner_radius: float,
    is_merge: bool,
) -> tuple[str, tuple[Point, ...]]:
    """Compute the SVG path and the orthogonal waypoints between two centres."""
    x1, y1 = source.x, source.y
    x2, y2 = target.x, target.y
    dx = x2 - x1
    dy = y2 - y1

    if dx == 0 or dy == 0:
        return f"M {_fmt(x1)} {_fmt(y1)} L {_fmt(x2)} {_fmt(y2)}", (source, target)

    sx = _sign(dx)
    sy = _sign(dy)

    if is_merge:
        corner_y = y2 - sy * corner_radius
        corner_x = x1 + sx * corner_radius
        path = (
            f"M {_fmt(x1)} {_fmt(y1)} L {_fmt(x1)} {_fmt(corner_y)} "
            f"Q {_fmt(x1)} {_fmt(y2)}, {_fmt(corner_x)} {_fmt(y2)} L {_fmt(x2)} {_fmt(y2)}"
        )
        elbow = Point(x=x1, y=y2)
    else:
        corner_x = x2 - sx * corner_radius
        corner_y = y1 + sy * corner_radius
        path = (
            f"M {_fmt(x1)} {_fmt(y1)} L {_fmt(corner_x)} {_fmt(y1)} "
            f"Q {_fmt(x2)} {_fmt(y1)}, {_fmt(x2)} {_fmt(corner_y)} L {_fmt(x2)} {_fmt(y2)}"
        )
        elbow = Point(x=x2, y=y1)

    return path, (source, elbow, target)


def route_edges(
    edges: Sequence[Edge],
    index: GraphIndex,
    node_column_map: Mapping[str, int],
    node_render_index: Mapping[str, int],
    node_branch_map: Mapping[str, str],
    branch_color_map: Mapping[str, str],
    config: GridConfig,
) -> dict[str, EdgePath]:
    """Route every edge from lane/row indices. Result keeps edge input order."""
    routes: dict[str, EdgePath] = {}

    for edge in edges:
        src = node_point(node_column_map[edge.source], node_render_index[edge.source], config)
        tgt = node_point(node_column_map[edge.target], node_render_index[edge.target], config)
        is_merge = index.is_merge(edge.target)

        path, waypoints = calculate_edge_path(src, tgt, config.corner_radius, is_merge)

        edge_branch = node_branch_map[edge.source] if is_merge else node_branch_map[edge.target]

        routes[edge.id] = EdgePath(
            id=edge.id,
            source=edge.source,
            target=edge.target,
            path=path,
            color=branch_color_map[edge_branch],
            is_merge=is_merge,
            waypoints=waypoints,
        )

    return routes

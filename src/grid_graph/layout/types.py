"""Layout types shared by the layout stages and their consumers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from grid_graph.errors import LayoutError


@dataclass(frozen=True)
class Point:
    """A 2D point in pixel coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class EdgePath:
    """A routed edge.

    ``path`` is an SVG path ``d`` string with one rounded corner (or a
    straight segment). ``waypoints`` is the same route as an orthogonal
    polyline: start, elbow, end (start, end for straight edges).
    """

    id: str
    source: str
    target: str
    path: str
    color: str
    is_merge: bool
    waypoints: tuple[Point, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "path": self.path,
            "color": self.color,
            "is_merge": self.is_merge,
            "waypoints": [[p.x, p.y] for p in self.waypoints],
        }


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class LayoutResult:
    """Self-contained layout output — everything a renderer needs.

    Attributes:
        node_column_map: Maps node id → lane index.
        node_branch_map: Maps node id → branch name.
        branch_lane_map: Maps branch name → lane index.
        max_column: Highest lane index in use (0 for an empty graph).
        branch_color_map: Maps branch name → palette colour.
        node_render_index: Maps node id → render row.
        edge_paths: Maps edge id → EdgePath, in edge input order.
        sorted_node_ids: Node ids in render order.
    """

    node_column_map: Mapping[str, int] = field(default_factory=dict)
    node_branch_map: Mapping[str, str] = field(default_factory=dict)
    branch_lane_map: Mapping[str, int] = field(default_factory=dict)
    max_column: int = 0
    branch_color_map: Mapping[str, str] = field(default_factory=dict)
    node_render_index: Mapping[str, int] = field(default_factory=dict)
    edge_paths: Mapping[str, EdgePath] = field(default_factory=dict)
    sorted_node_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in (
            "node_column_map",
            "node_branch_map",
            "branch_lane_map",
            "branch_color_map",
            "node_render_index",
            "edge_paths",
        ):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        object.__setattr__(self, "sorted_node_ids", tuple(self.sorted_node_ids))

    def branches_by_lane(self) -> list[str]:
        """Branch names ordered by lane index."""
        return [name for name, _ in sorted(self.branch_lane_map.items(), key=lambda kv: kv[1])]

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "node_column_map": dict(self.node_column_map),
            "node_branch_map": dict(self.node_branch_map),
            "branch_lane_map": dict(self.branch_lane_map),
            "max_column": self.max_column,
            "branch_color_map": dict(self.branch_color_map),
            "node_render_index": dict(self.node_render_index),
            "edge_paths": {edge_id: ep.to_dict() for edge_id, ep in self.edge_paths.items()},
            "sorted_node_ids": list(self.sorted_node_ids),
        }


@dataclass(frozen=True)
class LayoutOutcome:
    """Either a layout or the single error that prevented it."""

    result: LayoutResult | None = None
    error: LayoutError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"status": "error", "error": self.error.to_dict()}
        layout = self.result.to_dict() if self.result is not None else LayoutResult().to_dict()
        return {"status": "ok", "layout": layout}

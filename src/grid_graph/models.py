"""
Input models for the layout engine.

These models define the canonical schema the engine consumes:
- Nodes with an opaque label payload and an optional branch declaration
- Edges connecting nodes (using source/target naming convention)
- Grid metrics, palette and header sizing policy
- Auto-branch naming configuration

All models are frozen: the engine reads caller input and never mutates it.

Field Naming Convention:
- Edges use `source` and `target`
- For convenience, `from`/`to` are accepted on input and converted
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_COLORS: tuple[str, ...] = (
    "#4ECDC4",
    "#FF6B6B",
    "#FED766",
    "#45B7D1",
    "#7CFFCB",
    "#F7B267",
    "#F4A261",
    "#E76F51",
)


class Node(BaseModel):
    """A node in the graph.

    ``label`` is whatever the caller wants to display next to the node; the
    engine never looks at it. ``branch`` names the lane the node belongs to.
    An empty string counts as no declaration.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str
    label: Any = None
    branch: str | None = None

    @property
    def declared_branch(self) -> str | None:
        """The explicit branch, or None when absent or empty."""
        return self.branch or None


class Edge(BaseModel):
    """
    An edge connecting two nodes.

    Uses `source` and `target` as canonical field names.
    Accepts `from`/`to` on input.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str
    source: str
    target: str

    @model_validator(mode="before")
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert 'from'/'to' fields to 'source'/'target'."""
        if isinstance(data, dict):
            data = dict(data)
            if "from" in data and "source" not in data:
                data["source"] = data.pop("from")
            if "to" in data and "target" not in data:
                data["target"] = data.pop("to")
        return data


class HeaderPolicy(BaseModel):
    """Sizing policy for the branch header above the lanes.

    The numbers are visual-density heuristics (e.g. ~8px per character of a
    vertical branch label), not correctness constraints.
    """

    model_config = ConfigDict(frozen=True)

    show_branch_dots: bool = True
    show_branch_names: bool = True
    vertical_labels: bool = True
    char_width: float = Field(default=8, ge=0)
    label_padding: float = Field(default=16, ge=0)
    min_vertical_height: float = Field(default=48, ge=0)
    horizontal_height: float = Field(default=36, ge=0)
    dots_only_height: float = Field(default=12, ge=0)


class GridConfig(BaseModel):
    """Grid metrics (pixels) and the branch colour palette."""

    model_config = ConfigDict(frozen=True)

    row_height: float = Field(default=38, gt=0)
    column_width: float = Field(default=18, gt=0)
    node_diameter: float = Field(default=13, gt=0)
    padding: float = Field(default=20, ge=0)
    label_left_margin: float = Field(default=20, ge=0)
    corner_radius: float = Field(default=8, ge=0)
    colors: tuple[str, ...] = DEFAULT_COLORS
    header: HeaderPolicy = Field(default_factory=HeaderPolicy)

    @field_validator("colors")
    @classmethod
    def check_palette(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("colour palette must contain at least one colour")
        return value


DEFAULT_CONFIG = GridConfig()


def default_name_branch(first_node_id: str, node_map: Mapping[str, Node]) -> str:
    """Default branch naming: the id of the branch's first node, lowercased."""
    return first_node_id.lower()


class AutoBranchConfig(BaseModel):
    """Configuration for auto-naming branches.

    Attributes:
        merge_creates_branch: Merge nodes start a new branch. When False a
            merge continues on the parent branch with the shortest remaining
            depth.
        name_branch: ``(first_node_id, node_map) -> name``. Must return
            distinct names for distinct branches.
        depth_limit: Upper bound on the remaining-depth walk per parent.
    """

    model_config = ConfigDict(frozen=True)

    merge_creates_branch: bool = True
    name_branch: Callable[[str, Mapping[str, Node]], str] = default_name_branch
    depth_limit: int = Field(default=256, ge=1)


AutoBranchesInput = bool | Mapping[str, Any] | AutoBranchConfig | None


def _plain(value: Any) -> Any:
    return dict(value) if isinstance(value, Mapping) else value


def resolve_auto_branches(value: AutoBranchesInput) -> AutoBranchConfig | None:
    """Normalize the ``auto_branches`` argument.

    ``None``/``False`` select explicit mode (returns None), ``True`` selects
    auto mode with defaults, a mapping or ``AutoBranchConfig`` customizes it.
    """
    if value is None or value is False:
        return None
    if value is True:
        return AutoBranchConfig()
    if isinstance(value, AutoBranchConfig):
        return value
    return AutoBranchConfig.model_validate(_plain(value))


def coerce_nodes(nodes: list[Node | Mapping[str, Any]]) -> list[Node]:
    """Accept model instances or plain dicts."""
    return [n if isinstance(n, Node) else Node.model_validate(_plain(n)) for n in nodes]


def coerce_edges(edges: list[Edge | Mapping[str, Any]]) -> list[Edge]:
    """Accept model instances or plain dicts."""
    return [e if isinstance(e, Edge) else Edge.model_validate(_plain(e)) for e in edges]


def coerce_config(config: GridConfig | Mapping[str, Any] | None) -> GridConfig:
    if config is None:
        return DEFAULT_CONFIG
    if isinstance(config, GridConfig):
        return config
    return GridConfig.model_validate(_plain(config))


class GraphDocument(BaseModel):
    """A complete layout request as read from JSON.

    Only ``nodes`` is required. Anything malformed surfaces as a
    ``pydantic.ValidationError``.
    """

    nodes: list[Node]
    edges: list[Edge] = Field(default_factory=list)
    config: GridConfig | None = None
    branch_order: list[str] | None = None

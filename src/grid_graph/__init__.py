"""grid-graph — deterministic Git-log-style lane layout for DAGs."""

from __future__ import annotations

from grid_graph.api import compute_layout, layout_cache_key
from grid_graph.errors import (
    AmbiguousBranchChildren,
    CycleDetected,
    DuplicateAutoBranchName,
    ErrorKind,
    LayoutError,
    MissingBranchOnMerge,
    RootBranchPointMissingBranch,
    UnknownNodeReference,
)
from grid_graph.graph import GraphIndex
from grid_graph.layout import EdgePath, GridLayout, LayoutOutcome, LayoutResult, Point, full_layout
from grid_graph.models import (
    DEFAULT_COLORS,
    DEFAULT_CONFIG,
    AutoBranchConfig,
    Edge,
    GridConfig,
    HeaderPolicy,
    Node,
    default_name_branch,
)
from grid_graph.ordering import detect_cycles, topological_sort, validate_and_sort
from grid_graph.validation import check_edge_references, validate_graph

__all__ = [
    "DEFAULT_COLORS",
    "DEFAULT_CONFIG",
    "AmbiguousBranchChildren",
    "AutoBranchConfig",
    "CycleDetected",
    "DuplicateAutoBranchName",
    "Edge",
    "EdgePath",
    "ErrorKind",
    "GraphIndex",
    "GridConfig",
    "GridLayout",
    "HeaderPolicy",
    "LayoutError",
    "LayoutOutcome",
    "LayoutResult",
    "MissingBranchOnMerge",
    "Node",
    "Point",
    "RootBranchPointMissingBranch",
    "UnknownNodeReference",
    "check_edge_references",
    "compute_layout",
    "default_name_branch",
    "detect_cycles",
    "full_layout",
    "layout_cache_key",
    "topological_sort",
    "validate_and_sort",
    "validate_graph",
]

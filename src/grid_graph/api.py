"""Public entry points: error-as-value layout and cache keys."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from grid_graph.errors import LayoutError
from grid_graph.layout.engine import GridLayout
from grid_graph.layout.types import LayoutOutcome
from grid_graph.models import (
    AutoBranchesInput,
    Edge,
    GridConfig,
    Node,
    coerce_config,
    coerce_edges,
    coerce_nodes,
    default_name_branch,
    resolve_auto_branches,
)

logger = logging.getLogger(__name__)


def compute_layout(
    nodes: Sequence[Node | Mapping[str, Any]],
    edges: Sequence[Edge | Mapping[str, Any]],
    config: GridConfig | Mapping[str, Any] | None = None,
    branch_order: Sequence[str] | None = None,
    auto_branches: AutoBranchesInput = None,
) -> LayoutOutcome:
    """Lay out a graph, returning graph errors as values.

    A bad graph yields ``LayoutOutcome(error=...)`` and is logged at WARNING;
    it is up to the caller to surface it or keep a previous layout. Malformed
    models or config still raise ``pydantic.ValidationError``.
    """
    engine = GridLayout(config)
    try:
        result = engine.layout(nodes, edges, branch_order=branch_order, auto_branches=auto_branches)
    except LayoutError as e:
        logger.warning("Graph layout error (%s): %s", e.kind.value, e.message)
        return LayoutOutcome(error=e)
    return LayoutOutcome(result=result)


def _callable_token(fn: Callable[..., Any]) -> str:
    name = f"{getattr(fn, '__module__', '')}.{getattr(fn, '__qualname__', type(fn).__qualname__)}"
    if fn is default_name_branch:
        return name
    return f"{name}#{id(fn):x}"


def layout_cache_key(
    nodes: Sequence[Node | Mapping[str, Any]],
    edges: Sequence[Edge | Mapping[str, Any]],
    config: GridConfig | Mapping[str, Any] | None = None,
    branch_order: Sequence[str] | None = None,
    auto_branches: AutoBranchesInput = None,
) -> str:
    """Content hash of everything that can change a layout.

    Labels are left out since the engine never reads them. A custom
    ``name_branch`` is identified by object identity as well as its name, so
    keys built with one are only meaningful within the current process and
    while the callable is alive.
    """
    auto = resolve_auto_branches(auto_branches)
    auto_part = None
    if auto is not None:
        auto_part = {
            "merge_creates_branch": auto.merge_creates_branch,
            "depth_limit": auto.depth_limit,
            "name_branch": _callable_token(auto.name_branch),
        }

    payload = {
        "nodes": [[n.id, n.declared_branch] for n in coerce_nodes(list(nodes))],
        "edges": [[e.id, e.source, e.target] for e in coerce_edges(list(edges))],
        "config": coerce_config(config).model_dump(mode="json"),
        "branch_order": list(branch_order) if branch_order else None,
        "auto_branches": auto_part,
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()

"""Lane allocation and caller-driven lane reordering."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence


def assign_lanes(
    sorted_ids: Sequence[str],
    node_branch_map: Mapping[str, str],
) -> tuple[dict[str, int], dict[str, int]]:
    """Give each branch a permanent lane in first-seen order.

    Returns ``(node_column_map, branch_lane_map)``. A lane is never reused
    by another branch and every node of a branch shares its lane.
    """
    branch_lane_map: dict[str, int] = {}
    node_column_map: dict[str, int] = {}

    next_lane = 0
    for node_id in sorted_ids:
        branch = node_branch_map[node_id]
        if branch not in branch_lane_map:
            branch_lane_map[branch] = next_lane
            next_lane += 1
        node_column_map[node_id] = branch_lane_map[branch]

    return node_column_map, branch_lane_map


def apply_branch_order(
    order: Sequence[str] | None,
    branch_lane_map: Mapping[str, int],
    node_branch_map: Mapping[str, str],
) -> tuple[dict[str, int], dict[str, int]]:
    """Remap lanes so the listed branches come first.

    Listed branches that exist take lanes 0..k-1 in list order; unknown
    names and repeats are skipped. The remaining branches follow from k in
    their original relative order. Returns ``(node_column_map,
    branch_lane_map)``; branch membership is untouched.
    """
    if not order:
        reordered = dict(branch_lane_map)
    else:
        reordered = {}
        for name in order:
            if name in branch_lane_map and name not in reordered:
                reordered[name] = len(reordered)
        for name, _lane in sorted(branch_lane_map.items(), key=lambda kv: kv[1]):
            if name not in reordered:
                reordered[name] = len(reordered)

    node_column_map = {node_id: reordered[branch] for node_id, branch in node_branch_map.items()}
    return node_column_map, reordered


def max_column(node_column_map: Mapping[str, int]) -> int:
    return max(node_column_map.values(), default=0)


# ─── Drag-to-reorder ──────────────────────────────────────────────────────────
#
# The UI tracks the mouse; these helpers turn a horizontal drag distance into
# the new branch order that is fed back in as ``branch_order``.


def drag_column_offset(delta_x: float, column_width: float) -> int:
    """Number of lanes a horizontal drag covers, rounding halves up."""
    return math.floor(delta_x / column_width + 0.5)


def drag_target_index(branch_lane_map: Mapping[str, int], branch: str, column_offset: int) -> int | None:
    """Lane position a dragged branch would land on, clamped to the lane range.

    Returns None if ``branch`` is not in the layout.
    """
    ordered = sorted(branch_lane_map, key=branch_lane_map.__getitem__)
    if branch not in ordered:
        return None
    current = ordered.index(branch)
    return max(0, min(len(ordered) - 1, current + column_offset))


def reorder_branches(branch_lane_map: Mapping[str, int], branch: str, column_offset: int) -> list[str] | None:
    """New branch order after dragging ``branch`` by ``column_offset`` lanes.

    The dragged branch swaps places with the branch at the target lane.
    Returns None when nothing moves.
    """
    target = drag_target_index(branch_lane_map, branch, column_offset)
    if target is None:
        return None

    ordered = sorted(branch_lane_map, key=branch_lane_map.__getitem__)
    current = ordered.index(branch)
    if target == current:
        return None

    ordered[current], ordered[target] = ordered[target], ordered[current]
    return ordered

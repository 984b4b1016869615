"""Tests for layout/lanes.py and layout/colors.py — lanes, reordering, drag helpers, colours."""

from __future__ import annotations

from grid_graph.layout.colors import create_color_map
from grid_graph.layout.lanes import (
    apply_branch_order,
    assign_lanes,
    drag_column_offset,
    drag_target_index,
    max_column,
    reorder_branches,
)

# ─── Helpers ──────────────────────────────────────────────────────────────────

SORTED = ["1", "3a", "3b", "4"]
BRANCHES = {"1": "main", "3a": "feat-a", "3b": "feat-b", "4": "main"}
LANES = {"main": 0, "feat-a": 1, "feat-b": 2}


# ─── assign_lanes Tests ───────────────────────────────────────────────────────


class TestAssignLanes:
    def test_first_seen_order(self):
        """Branches get lanes 0, 1, 2 in order of first encounter."""
        columns, lanes = assign_lanes(SORTED, BRANCHES)
        assert lanes == LANES
        assert columns == {"1": 0, "3a": 1, "3b": 2, "4": 0}

    def test_lane_permanence(self):
        """Every node of a branch sits in its branch's lane."""
        columns, lanes = assign_lanes(SORTED, BRANCHES)
        for node_id, branch in BRANCHES.items():
            assert columns[node_id] == lanes[branch]

    def test_empty(self):
        assert assign_lanes([], {}) == ({}, {})

    def test_max_column(self):
        """Highest lane in use, 0 when there are no nodes."""
        assert max_column({"a": 0, "b": 3, "c": 1}) == 3
        assert max_column({}) == 0


# ─── apply_branch_order Tests ─────────────────────────────────────────────────


class TestApplyBranchOrder:
    def test_listed_first_rest_appended(self):
        """feat-b, main listed; feat-a follows at lane 2."""
        columns, lanes = apply_branch_order(["feat-b", "main"], LANES, BRANCHES)
        assert lanes == {"feat-b": 0, "main": 1, "feat-a": 2}
        assert columns == {"1": 1, "3a": 2, "3b": 0, "4": 1}

    def test_no_order_is_identity(self):
        """None or [] keeps first-seen lanes."""
        for order in (None, []):
            columns, lanes = apply_branch_order(order, LANES, BRANCHES)
            assert lanes == LANES
            assert columns == {"1": 0, "3a": 1, "3b": 2, "4": 0}

    def test_unknown_and_repeated_names_skipped(self):
        """Unknown names leave no gaps; repeats keep the first position."""
        _, lanes = apply_branch_order(["ghost", "feat-a", "feat-a", "main"], LANES, BRANCHES)
        assert lanes == {"feat-a": 0, "main": 1, "feat-b": 2}

    def test_membership_unchanged(self):
        """Reordering only moves lanes; the branch map is not touched."""
        before = dict(BRANCHES)
        apply_branch_order(["feat-b"], LANES, BRANCHES)
        assert BRANCHES == before


# ─── Drag Helper Tests ────────────────────────────────────────────────────────


class TestDrag:
    def test_column_offset_rounds_half_up(self):
        """Half a column or more counts as a full lane to the right."""
        assert drag_column_offset(9, 18) == 1
        assert drag_column_offset(8.9, 18) == 0
        assert drag_column_offset(-9, 18) == 0
        assert drag_column_offset(-9.1, 18) == -1
        assert drag_column_offset(40, 18) == 2

    def test_target_index_clamped(self):
        """Targets stay within the lane range."""
        assert drag_target_index(LANES, "main", 5) == 2
        assert drag_target_index(LANES, "feat-b", -7) == 0
        assert drag_target_index(LANES, "ghost", 1) is None

    def test_reorder_swaps(self):
        """Dragging main one lane right swaps it with feat-a."""
        assert reorder_branches(LANES, "main", 1) == ["feat-a", "main", "feat-b"]

    def test_reorder_far_swap(self):
        """Dragging feat-b to lane 0 swaps it with main only."""
        assert reorder_branches(LANES, "feat-b", -2) == ["feat-b", "feat-a", "main"]

    def test_reorder_no_move(self):
        """No movement, or an unknown branch, yields None."""
        assert reorder_branches(LANES, "main", 0) is None
        assert reorder_branches(LANES, "main", -1) is None
        assert reorder_branches(LANES, "ghost", 1) is None

    def test_reorder_feeds_back(self):
        """The drag result is a valid branch order for apply_branch_order."""
        order = reorder_branches(LANES, "main", 1)
        _, lanes = apply_branch_order(order, LANES, BRANCHES)
        assert lanes == {"feat-a": 0, "main": 1, "feat-b": 2}


# ─── create_color_map Tests ───────────────────────────────────────────────────


class TestColorMap:
    def test_first_seen_order(self):
        """Colours follow branch discovery order."""
        colors = create_color_map(BRANCHES, ["red", "green", "blue"])
        assert colors == {"main": "red", "feat-a": "green", "feat-b": "blue"}

    def test_palette_cycles(self):
        """A short palette wraps around."""
        colors = create_color_map(BRANCHES, ["red", "green"])
        assert colors == {"main": "red", "feat-a": "green", "feat-b": "red"}

    def test_unaffected_by_lane_order(self):
        """Colours depend on the branch map only, not on lanes."""
        before = create_color_map(BRANCHES, ["red", "green", "blue"])
        apply_branch_order(["feat-b", "main"], LANES, BRANCHES)
        assert create_color_map(BRANCHES, ["red", "green", "blue"]) == before

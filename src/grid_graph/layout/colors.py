"""Branch colour assignment."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


def create_color_map(node_branch_map: Mapping[str, str], colors: Sequence[str]) -> dict[str, str]:
    """Cycle the palette over branches in first-seen (render) order.

    Lane reordering does not affect colours.
    """
    unique_branches = list(dict.fromkeys(node_branch_map.values()))
    return {branch: colors[i % len(colors)] for i, branch in enumerate(unique_branches)}

"""Layout errors.

Every failure the engine can report is a deterministic, input-derived
validation error. They are raised as exceptions inside the pipeline and
returned as values by ``compute_layout``; nothing is retried and no partial
layout is ever produced.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error taxonomy for graph validation and layout."""

    UNKNOWN_NODE_REFERENCE = "UnknownNodeReference"
    MISSING_BRANCH_ON_MERGE = "MissingBranchOnMerge"
    ROOT_BRANCH_POINT_MISSING_BRANCH = "RootBranchPointMissingBranch"
    AMBIGUOUS_BRANCH_CHILDREN = "AmbiguousBranchChildren"
    CYCLE_DETECTED = "CycleDetected"
    DUPLICATE_AUTO_BRANCH_NAME = "DuplicateAutoBranchName"


class LayoutError(Exception):
    """Base error for graph validation and layout.

    Attributes:
        kind: Which rule was violated.
        message: Human-readable description.
        node_ids: Offending node ids, in the order they were found.
        edge_ids: Offending edge ids, in the order they were found.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        node_ids: list[str] | None = None,
        edge_ids: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.node_ids = list(node_ids or [])
        self.edge_ids = list(edge_ids or [])

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result: dict = {"kind": self.kind.value, "message": self.message}
        if self.node_ids:
            result["node_ids"] = list(self.node_ids)
        if self.edge_ids:
            result["edge_ids"] = list(self.edge_ids)
        return result


class UnknownNodeReference(LayoutError):
    """An edge endpoint names a node that is not in the node set."""

    kind = ErrorKind.UNKNOWN_NODE_REFERENCE


class MissingBranchOnMerge(LayoutError):
    """A merge node (more than one parent) has no explicit branch."""

    kind = ErrorKind.MISSING_BRANCH_ON_MERGE


class RootBranchPointMissingBranch(LayoutError):
    """A root with more than one child has no explicit branch."""

    kind = ErrorKind.ROOT_BRANCH_POINT_MISSING_BRANCH


class AmbiguousBranchChildren(LayoutError):
    """More than one child of a branch point lacks an explicit branch."""

    kind = ErrorKind.AMBIGUOUS_BRANCH_CHILDREN

    def __init__(
        self,
        message: str,
        count: int,
        node_ids: list[str] | None = None,
        edge_ids: list[str] | None = None,
    ) -> None:
        super().__init__(message, node_ids=node_ids, edge_ids=edge_ids)
        self.count = count

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["count"] = self.count
        return result


class CycleDetected(LayoutError):
    """The graph is not acyclic."""

    kind = ErrorKind.CYCLE_DETECTED


class DuplicateAutoBranchName(LayoutError):
    """The branch naming function produced the same name for different branches."""

    kind = ErrorKind.DUPLICATE_AUTO_BRANCH_NAME

    def __init__(
        self,
        message: str,
        names: list[str],
        node_ids: list[str] | None = None,
        edge_ids: list[str] | None = None,
    ) -> None:
        super().__init__(message, node_ids=node_ids, edge_ids=edge_ids)
        self.names = list(names)

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["names"] = list(self.names)
        return result

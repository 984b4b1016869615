"""grid-graph CLI - lay out a JSON graph document and print the result as JSON.

Input document:
    {"nodes": [...], "edges": [...], "config": {...}, "branch_order": [...]}
Only "nodes" is required. Pass "-" to read from stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from grid_graph.api import compute_layout
from grid_graph.models import AutoBranchConfig, GraphDocument

EXIT_OK = 0
EXIT_LAYOUT_ERROR = 1
EXIT_BAD_INPUT = 2


def _json_out(data: dict, code: int) -> int:
    print(json.dumps(data, indent=2))
    return code


def _read_document(source: str) -> dict:
    text = sys.stdin.read() if source == "-" else Path(source).read_text()
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("graph document must be a JSON object")
    return data


def cmd_layout(args: argparse.Namespace) -> int:
    try:
        doc = GraphDocument.model_validate(_read_document(args.file))
    except (OSError, ValueError) as e:
        # pydantic.ValidationError is a ValueError
        return _json_out({"status": "error", "error": {"kind": "BadInput", "message": str(e)}}, EXIT_BAD_INPUT)

    branch_order = doc.branch_order
    if args.branch_order:
        branch_order = [b.strip() for b in args.branch_order.split(",") if b.strip()]

    auto = None
    if args.auto_branches or args.merge_continues:
        auto = AutoBranchConfig(merge_creates_branch=not args.merge_continues)

    outcome = compute_layout(
        doc.nodes,
        doc.edges,
        config=doc.config,
        branch_order=branch_order,
        auto_branches=auto,
    )
    return _json_out(outcome.to_dict(), EXIT_OK if outcome.ok else EXIT_LAYOUT_ERROR)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grid-graph", description="Git-log-style DAG lane layout")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("layout", help="Lay out a JSON graph document")
    p.add_argument("file", help="path to the JSON document, or - for stdin")
    p.add_argument("--branch-order", help="comma-separated lane order by branch name")
    p.add_argument("--auto-branches", action="store_true", help="generate branch names automatically")
    p.add_argument(
        "--merge-continues",
        action="store_true",
        help="auto mode: merges continue the shallowest parent branch instead of starting one",
    )
    p.set_defaults(func=cmd_layout)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

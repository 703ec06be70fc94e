"""Command line inspection of filters, board graphs and sample files."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

import numpy as np

from . import diagnostics
from .buffers import reverse_buffer
from .config import load_board
from .filters import normalize_filters
from .graph import connected_set, sequential_steps


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="echocore", description="Soundboard core inspection tools")
    parser.add_argument("--trace", action="store_true", help="Append call traces to the diagnostics log")
    parser.add_argument("--trace-path", type=Path, help="Override the diagnostics log location")
    sub = parser.add_subparsers(dest="command", required=True)

    filters = sub.add_parser("filters", help="Print the canonical form of raw filter JSON")
    filters.add_argument("path", nargs="?", type=Path, help="JSON file (defaults to stdin)")

    connected = sub.add_parser("connected", help="Print ids reachable from START")
    connected.add_argument("board", type=Path, help="Board snapshot JSON")
    connected.add_argument("start", help="Start item id")
    connected.add_argument(
        "--all-kinds",
        action="store_true",
        help="Follow links through textboxes as well as soundboards",
    )

    steps = sub.add_parser("steps", help="Print the sequential playback order from START")
    steps.add_argument("board", type=Path, help="Board snapshot JSON")
    steps.add_argument("start", help="Start item id")
    steps.add_argument("--all-kinds", action="store_true", help="Follow links through textboxes as well")

    reverse = sub.add_parser("reverse", help="Time-reverse a .npy sample array")
    reverse.add_argument("input", type=Path, help="Source .npy file shaped (F,) or (C, F)")
    reverse.add_argument("output", type=Path, help="Destination .npy file")
    return parser


def _read_json(path: Path | None):
    if path is None:
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf8") as fh:
        return json.load(fh)


def _run(args: argparse.Namespace) -> None:
    if args.command == "filters":
        config = normalize_filters(_read_json(args.path))
        print(json.dumps(config.to_dict(), indent=2))
        return
    if args.command in ("connected", "steps"):
        board = load_board(args.board, soundboards_only=not args.all_kinds)
        if args.command == "connected":
            print(json.dumps(sorted(connected_set(board.graph, args.start))))
        else:
            payload = [
                {"id": step.id, "parentId": step.parent_id, "depth": step.depth}
                for step in sequential_steps(board.graph, args.start)
            ]
            print(json.dumps(payload, indent=2))
        return
    if args.command == "reverse":
        samples = np.load(args.input, allow_pickle=False)
        np.save(args.output, reverse_buffer(samples))
        print(f"Reversed {samples.shape} -> {args.output}")
        return
    raise ValueError(f"Unknown command '{args.command}'")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.trace_path is not None:
        diagnostics.set_log_path(args.trace_path)
    if args.trace:
        diagnostics.enable_call_logging(True)

    try:
        _run(args)
    except (OSError, ValueError) as exc:
        print(f"echocore: {exc}", file=sys.stderr)
        return 2
    return 0


__all__ = ["main", "build_parser"]

"""Command line entry point for replaying engine command tables."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .config import HEAP_TYPES, WorkbenchConfig
from .runner import run_script


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay data-structure commands and record their traces.")
    parser.add_argument("input", type=Path, help="CSV or Excel file with engine, operation and args columns")
    parser.add_argument("output", type=Path, help="Path where the annotated results will be written")
    parser.add_argument(
        "--tree-mode",
        choices=("avl", "bst"),
        default="avl",
        help="Rebalance the ordered tree (avl) or keep plain BST semantics (default: avl)",
    )
    parser.add_argument(
        "--heap-type",
        choices=HEAP_TYPES,
        default=os.getenv("STRUCTVIZ_HEAP_TYPE", "min"),
        help="Initial heap polarity (default: min)",
    )
    parser.add_argument("--dsu-size", type=int, default=None, help="Number of disjoint-set elements (default: 8)")
    parser.add_argument(
        "--no-path-compression",
        dest="path_compression",
        action="store_false",
        help="Leave walked disjoint-set chains untouched",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print per-command progress")
    parser.add_argument(
        "--disable-tqdm",
        action="store_true",
        help="Disable progress bars even if tqdm is installed",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])

    config = WorkbenchConfig(
        verbose=not args.quiet,
        use_tqdm=not args.disable_tqdm,
        balanced=args.tree_mode == "avl",
        heap_type=args.heap_type,
        dsu_size=args.dsu_size,
        path_compression=args.path_compression,
    )

    run = run_script(args.input, args.output, config)
    return 0 if run is not None else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

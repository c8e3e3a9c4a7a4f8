from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .playback import drag_plan
from .puzzle import Puzzle
from .solver import SolveTimeoutError, solve_puzzle
from .viz import write_plotly_html

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="flowshapes", description="Flow puzzle solver + visualizer")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_viz = sub.add_parser("visualize", help="Render the cell graph to an HTML file")
    p_viz.add_argument("puzzle", type=str, help="Path to .flow or .json puzzle file")
    p_viz.add_argument("--out", type=str, default="out/graph.html", help="Output HTML path")

    p_solve = sub.add_parser("solve", help="Solve a puzzle and render the solution to an HTML file")
    p_solve.add_argument("puzzle", type=str, help="Path to .flow or .json puzzle file")
    p_solve.add_argument("--out", type=str, default=None, help="Output HTML path (skip rendering if omitted)")
    p_solve.add_argument("--timeout-ms", type=int, default=30_000, help="Solver timeout in milliseconds")
    p_solve.add_argument("--max-steps", type=int, default=None, help="Give up after this many search steps")
    p_solve.add_argument("--plan", action="store_true", help="Print the pointer drag plan for each path")

    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    puzzle_path = Path(args.puzzle)
    try:
        puzzle = Puzzle.from_file(puzzle_path)
    except (OSError, ValueError) as e:
        print(f"Cannot load {puzzle_path}: {e}")
        return 2
    logger.debug("Loaded %s: cells=%d colors=%s", puzzle_path, len(puzzle.graph), puzzle.all_colors())

    if args.cmd == "visualize":
        out = write_plotly_html(puzzle, out_path=args.out, title=f"Graph: {puzzle_path.name}")
        print(f"Wrote graph visualization: {out}")
        return 0

    if args.cmd == "solve":
        try:
            res = solve_puzzle(puzzle, timeout_ms=args.timeout_ms, max_steps=args.max_steps)
        except SolveTimeoutError as e:
            print(f"Gave up on {puzzle_path.name}: {e}")
            return 2

        if not res.solved:
            print(f"No solution for {puzzle_path.name}: {res.reason}")
            return 1

        print(
            f"Solved {puzzle_path.name}: colors={len(res.paths)}, cells={len(puzzle.graph)}, "
            f"steps={res.stats.steps}, elapsed={res.stats.elapsed_ms:.1f}ms"
        )
        for c, path in res.paths.items():
            print(f"  {c}: path_len={len(path)} cells={path}")
        if args.plan:
            for stroke in drag_plan(puzzle.graph):
                print(f"  drag {stroke.color}: " + " ".join(f"{e.action}({e.x:g},{e.y:g})" for e in stroke.events()))
        if args.out:
            out = write_plotly_html(puzzle, out_path=args.out, result=res, title=f"Solution: {puzzle_path.name}")
            print(f"Wrote solution visualization: {out}")
        return 0

    raise AssertionError("unreachable")

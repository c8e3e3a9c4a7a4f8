from __future__ import annotations

from typing import Optional

from ..playback import extract_paths
from ..puzzle import Puzzle
from .search import (
    Solver,
    SolveTimeoutError,
    TooManyTerminalsOfColor,
    UnpairedTerminal,
    assign_terminals,
)
from .types import SolveResult, SolveStats


def solve_puzzle(
    puzzle: Puzzle,
    *,
    timeout_ms: Optional[int] = 30_000,
    max_steps: Optional[int] = None,
) -> SolveResult:
    """Solve `puzzle` in place and summarise the outcome.

    Any links left from an earlier (possibly abandoned) run are cleared first.
    An unsolvable puzzle yields `solved=False`; running out of budget raises
    `SolveTimeoutError`.
    """
    graph = puzzle.graph
    graph.reset()
    solver = Solver(graph, timeout_ms=timeout_ms, max_steps=max_steps)
    solved = solver.solve()
    return SolveResult(
        solved=solved,
        cell_color={c.index: c.color for c in graph},
        paths=extract_paths(graph) if solved else {},
        reason=solver.reason,
        stats=solver.stats,
    )


__all__ = [
    "SolveResult",
    "SolveStats",
    "SolveTimeoutError",
    "Solver",
    "TooManyTerminalsOfColor",
    "UnpairedTerminal",
    "assign_terminals",
    "solve_puzzle",
]

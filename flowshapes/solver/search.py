from __future__ import annotations

import logging
import sys
import time
from typing import Dict, Optional, Tuple

from ..graph import CellGraph, CellId, Color
from ..rules import can_connect, connect, disconnect, has_escape, has_income, is_valid
from .types import SolveStats

logger = logging.getLogger(__name__)


class TooManyTerminalsOfColor(ValueError):
    pass


class UnpairedTerminal(ValueError):
    pass


class SolveTimeoutError(ValueError):
    pass


def assign_terminals(graph: CellGraph) -> Dict[Color, Tuple[CellId, CellId]]:
    """Mark the first-seen terminal of each color as source and the second as sink.

    Returns `color -> (source, sink)`.
    """

    seen: Dict[Color, list] = {}
    for cell in graph:
        if not cell.is_terminal:
            continue
        found = seen.setdefault(cell.color, [])  # type: ignore[arg-type]
        found.append(cell.index)
        if len(found) > 2:
            raise TooManyTerminalsOfColor(
                f"Color {cell.color!r} has more than two terminals (cells {found})"
            )
        cell.is_sink = len(found) == 2

    unpaired = [color for color, found in seen.items() if len(found) != 2]
    if unpaired:
        raise UnpairedTerminal(f"Colors with a single terminal: {', '.join(map(repr, unpaired))}")
    return {color: (found[0], found[1]) for color, found in seen.items()}


class Solver:
    """Depth-first cover search over cells in index order.

    Each call handles one target cell: if it is already satisfied the search
    moves on, otherwise every legal link to a neighbor is tried, pruned by
    loop and reachability checks, and undone when the deeper search fails.
    The graph is mutated in place. On success it holds the solution links;
    on failure every tentative link has been undone.
    """

    def __init__(
        self,
        graph: CellGraph,
        *,
        timeout_ms: Optional[int] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        self.graph = graph
        self.timeout_ms = timeout_ms
        self.max_steps = max_steps
        self.terminals: Dict[Color, Tuple[CellId, CellId]] = {}
        self.reason: Optional[str] = None
        self.stats = SolveStats()
        self._start = 0.0

    def solve(self) -> bool:
        graph = self.graph
        if len(graph) == 0:
            self.reason = "empty puzzle"
            return False

        try:
            self.terminals = assign_terminals(graph)
        except (TooManyTerminalsOfColor, UnpairedTerminal) as e:
            self.reason = str(e)
            logger.warning("Puzzle is unsolvable: %s", e)
            return False
        logger.debug("Terminal pairs: %s", self.terminals)

        self._start = time.monotonic()
        # Never lowered: concurrent solves share the interpreter-wide limit.
        if sys.getrecursionlimit() < len(graph) + 200:
            sys.setrecursionlimit(len(graph) + 200)
        try:
            solved = self._recurse(0)
        finally:
            self.stats.elapsed_ms = (time.monotonic() - self._start) * 1000.0

        if not solved:
            self.reason = "search exhausted"
        logger.info(
            "Search %s: cells=%d colors=%d steps=%d backtracks=%d elapsed=%.1fms",
            "solved" if solved else "failed",
            len(graph),
            len(self.terminals),
            self.stats.steps,
            self.stats.backtracks,
            self.stats.elapsed_ms,
        )
        return solved

    def _check_budget(self) -> None:
        if self.max_steps is not None and self.stats.steps > self.max_steps:
            raise SolveTimeoutError(f"Search gave up after {self.max_steps} steps")
        if self.timeout_ms is not None and self.stats.steps % 1000 == 0:
            elapsed_ms = (time.monotonic() - self._start) * 1000.0
            if elapsed_ms > self.timeout_ms:
                raise SolveTimeoutError(f"Search timed out after {self.timeout_ms}ms")

    def _recurse(self, target: int) -> bool:
        self.stats.steps += 1
        self._check_budget()
        graph = self.graph

        if target == len(graph):
            return all(is_valid(graph, i) for i in range(len(graph)))

        if is_valid(graph, target):
            return self._recurse(target + 1)

        for n in graph.neighbors(target):
            if self._tail_back(target, n):
                continue
            if not can_connect(graph, target, n):
                continue
            connect(graph, target, n)
            if (
                self._start_has_income(target)
                and self._end_has_escape(n)
                and not self._chains_touch(target, n)
            ):
                if self._recurse(target + 1):
                    return True
            disconnect(graph, target)
            self.stats.backtracks += 1
        return False

    def _tail_back(self, current: CellId, nxt: CellId) -> bool:
        """True if `nxt` touches the chain behind `current` anywhere but `current`."""
        tail = set(self.graph.backward_chain(current))
        return any(m != current and m in tail for m in self.graph.neighbors(nxt))

    def _chains_touch(self, current: CellId, nxt: CellId) -> bool:
        """True if the chain ahead of `nxt` is adjacent to the chain behind `current`."""
        graph = self.graph
        behind = graph.backward_chain(current)
        ahead = graph.forward_chain(nxt)[1:]
        return any(graph.is_adjacent(m, b) for m in ahead for b in behind)

    def _start_has_income(self, u: CellId) -> bool:
        return has_income(self.graph, self.graph.backward_chain(u)[-1])

    def _end_has_escape(self, u: CellId) -> bool:
        return has_escape(self.graph, self.graph.forward_chain(u)[-1])

"""Read a solved graph back out as paths and pointer strokes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Literal, Tuple

from .graph import CellGraph, CellId, Color, Position

PointerAction = Literal["move", "down", "up"]


@dataclass(frozen=True)
class PointerEvent:
    action: PointerAction
    x: float
    y: float


@dataclass
class DragStroke:
    color: Color
    points: List[Position]

    def events(self) -> Iterator[PointerEvent]:
        """Move to the source, press, drag through every cell, release."""
        if not self.points:
            return
        x0, y0 = self.points[0]
        yield PointerEvent("move", x0, y0)
        yield PointerEvent("down", x0, y0)
        for x, y in self.points[1:]:
            yield PointerEvent("move", x, y)
        x1, y1 = self.points[-1]
        yield PointerEvent("up", x1, y1)


def extract_paths(graph: CellGraph) -> Dict[Color, List[CellId]]:
    """Follow `next` links from every source terminal, in cell order."""
    paths: Dict[Color, List[CellId]] = {}
    for cell in graph:
        if not cell.is_terminal or cell.is_sink or cell.next is None:
            continue
        paths[cell.color] = graph.forward_chain(cell.index)  # type: ignore[index]
    return paths


def drag_plan(graph: CellGraph, *, origin: Tuple[float, float] = (0.0, 0.0)) -> List[DragStroke]:
    ox, oy = origin
    strokes: List[DragStroke] = []
    for color, path in extract_paths(graph).items():
        points = [(graph[i].pos[0] + ox, graph[i].pos[1] + oy) for i in path]
        strokes.append(DragStroke(color=color, points=points))
    return strokes

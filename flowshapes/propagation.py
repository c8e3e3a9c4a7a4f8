"""Keep every linked chain monochrome.

A chain is anchored by at most one color: terminals can only sit at its ends
(a source at the start, a sink at the end) and the connection rules refuse
to join two different colors. Neutral cells take the anchor's color while
they are linked to it and fall back to NEUTRAL once cut loose.

All walks are loops over `prev`/`next`, bounded by the chain length.
"""

from __future__ import annotations

from typing import Optional

from .graph import NEUTRAL, CellGraph, CellId, Color


def chain_color(graph: CellGraph, u: CellId) -> Optional[Color]:
    """Color of the terminal anchoring the chain through `u`, or NEUTRAL."""
    head = graph[graph.backward_chain(u)[-1]]
    if head.is_terminal:
        return head.color
    tail = graph[graph.forward_chain(u)[-1]]
    if tail.is_terminal:
        return tail.color
    return NEUTRAL


def paint_backward(graph: CellGraph, u: Optional[CellId], color: Optional[Color]) -> None:
    cur = u
    while cur is not None:
        cell = graph[cur]
        if cell.is_terminal or cell.color == color:
            return
        cell.color = color
        cur = cell.prev


def paint_forward(graph: CellGraph, u: Optional[CellId], color: Optional[Color]) -> None:
    cur = u
    while cur is not None:
        cell = graph[cur]
        if cell.is_terminal or cell.color == color:
            return
        cell.color = color
        cur = cell.next


def on_connect(graph: CellGraph, frm: CellId, to: CellId) -> None:
    a, b = graph[frm], graph[to]
    if b.is_terminal or (a.color is NEUTRAL and b.color is not NEUTRAL):
        paint_backward(graph, frm, b.color)
    elif a.color is not NEUTRAL:
        paint_forward(graph, to, a.color)


def on_disconnect(graph: CellGraph, frm: CellId, to: CellId) -> None:
    """Repaint both halves of a chain that was just cut between `frm` and `to`."""
    paint_forward(graph, to, chain_color(graph, to))
    paint_backward(graph, frm, chain_color(graph, frm))

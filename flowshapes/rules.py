"""Legality of directed links between cells, and link commit/undo."""

from __future__ import annotations

from .graph import NEUTRAL, CellGraph, CellId
from . import propagation


def can_connect(graph: CellGraph, frm: CellId, to: CellId) -> bool:
    a, b = graph[frm], graph[to]
    if a.color is not NEUTRAL and b.color is not NEUTRAL and b.color != a.color:
        return False
    if not graph.is_adjacent(frm, to):
        return False
    if a.next == to:
        return False
    # two-cell loop in either direction
    if b.prev == frm or b.next == frm:
        return False
    if b.prev is not None:
        return False
    # only a sink may receive into a terminal
    if b.is_terminal and not b.is_sink:
        return False
    if a.next is not None:
        return False
    if a.is_terminal and a.is_sink:
        return False
    # `to` heading the chain that ends in `frm` would close a cycle
    if b.next is not None and graph.backward_chain(frm)[-1] == to:
        return False
    return True


def connect(graph: CellGraph, frm: CellId, to: CellId) -> None:
    a, b = graph[frm], graph[to]
    if a.next == to:
        return
    if not graph.is_adjacent(frm, to):
        raise AssertionError(f"cells {frm} and {to} are not adjacent")
    if a.next is not None:
        raise AssertionError(f"cell {frm} already links to {a.next}")
    if b.prev is not None:
        raise AssertionError(f"cell {to} already linked from {b.prev}")
    a.next = to
    b.prev = frm
    propagation.on_connect(graph, frm, to)


def disconnect(graph: CellGraph, frm: CellId) -> None:
    a = graph[frm]
    if a.next is None:
        raise AssertionError(f"cell {frm} has no outgoing link")
    to = a.next
    graph[to].prev = None
    a.next = None
    propagation.on_disconnect(graph, frm, to)


def try_connect(graph: CellGraph, frm: CellId, to: CellId) -> bool:
    if not can_connect(graph, frm, to):
        return False
    connect(graph, frm, to)
    return True


def is_valid(graph: CellGraph, u: CellId) -> bool:
    """A sink terminal is always satisfied; every other cell must link forward.

    Sinks count as satisfied whether or not a link has reached them.
    """
    cell = graph[u]
    if cell.is_terminal and cell.is_sink:
        return True
    return cell.next is not None


def has_escape(graph: CellGraph, u: CellId) -> bool:
    """Whether the chain ending at `u` can still be extended forward."""
    cell = graph[u]
    if cell.is_terminal and cell.is_sink:
        return True
    if cell.next is not None:
        return True
    return any(can_connect(graph, u, n) for n in cell.neighbors)


def has_income(graph: CellGraph, u: CellId) -> bool:
    """Whether the chain starting at `u` can still be entered from behind."""
    cell = graph[u]
    if cell.is_terminal and not cell.is_sink:
        return True
    if cell.prev is not None:
        return True
    return any(can_connect(graph, n, u) for n in cell.neighbors)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

CellId = int
Color = str
Position = Tuple[float, float]

# Uncolored cell. Terminals always carry a real color.
NEUTRAL: Optional[Color] = None


class InvalidGraph(ValueError):
    pass


@dataclass(frozen=True)
class CellSpec:
    """A cell descriptor as produced by cell extraction (or a grid builder)."""

    color: Optional[Color]
    pos: Position = (0.0, 0.0)
    neighbors: Tuple[CellId, ...] = ()


@dataclass
class Cell:
    index: CellId
    color: Optional[Color]
    pos: Position = (0.0, 0.0)
    is_terminal: bool = False
    is_sink: bool = False
    next: Optional[CellId] = None
    prev: Optional[CellId] = None
    neighbors: List[CellId] = field(default_factory=list)
    _adjacent: Set[CellId] = field(default_factory=set, repr=False)


class CellGraph:
    """Flat arena of cells with a static, symmetric adjacency.

    Cells are addressed by their integer index; `next`/`prev` links hold
    indices, never objects. The index order is the order cells were
    discovered and is also the order the search visits them. Neighbor lists
    keep insertion order, which decides which move the search tries first.
    """

    def __init__(self) -> None:
        self.cells: List[Cell] = []

    @classmethod
    def from_specs(cls, specs: Sequence[CellSpec]) -> "CellGraph":
        g = cls()
        for spec in specs:
            g.add_cell(spec.color, spec.pos)

        n = len(specs)
        for i, spec in enumerate(specs):
            seen: Set[CellId] = set()
            for j in spec.neighbors:
                if isinstance(j, bool) or not isinstance(j, int) or not 0 <= j < n:
                    raise InvalidGraph(f"Cell {i} lists unknown neighbor {j!r}")
                if j == i:
                    raise InvalidGraph(f"Cell {i} lists itself as a neighbor")
                if j in seen:
                    raise InvalidGraph(f"Cell {i} lists neighbor {j} twice")
                if i not in specs[j].neighbors:
                    raise InvalidGraph(f"Adjacency is not symmetric: {i} -> {j} but not {j} -> {i}")
                seen.add(j)
                g.cells[i].neighbors.append(j)
                g.cells[i]._adjacent.add(j)
        return g

    def add_cell(self, color: Optional[Color], pos: Position = (0.0, 0.0)) -> CellId:
        index = len(self.cells)
        self.cells.append(
            Cell(index=index, color=color, pos=(float(pos[0]), float(pos[1])), is_terminal=color is not NEUTRAL)
        )
        return index

    def add_edge(self, u: CellId, v: CellId) -> None:
        if u == v:
            raise InvalidGraph("Self-loops are not supported")
        if not (0 <= u < len(self.cells) and 0 <= v < len(self.cells)):
            raise InvalidGraph(f"Both endpoints must exist (u={u!r}, v={v!r})")
        a, b = self.cells[u], self.cells[v]
        if v in a._adjacent:
            return
        a.neighbors.append(v)
        a._adjacent.add(v)
        b.neighbors.append(u)
        b._adjacent.add(u)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, index: CellId) -> Cell:
        return self.cells[index]

    def neighbors(self, u: CellId) -> List[CellId]:
        return self.cells[u].neighbors

    def is_adjacent(self, u: CellId, v: CellId) -> bool:
        return v in self.cells[u]._adjacent

    def edges(self) -> Iterator[Tuple[CellId, CellId]]:
        """Yield undirected adjacency edges once (u < v)."""
        for cell in self.cells:
            for v in cell.neighbors:
                if cell.index < v:
                    yield (cell.index, v)

    def solution_edges(self) -> Iterator[Tuple[CellId, CellId]]:
        """Yield the directed `next` links currently committed."""
        for cell in self.cells:
            if cell.next is not None:
                yield (cell.index, cell.next)

    def terminal_cells(self) -> Dict[CellId, Color]:
        return {c.index: c.color for c in self.cells if c.is_terminal}  # type: ignore[misc]

    def colors(self) -> List[Color]:
        out: List[Color] = []
        for c in self.cells:
            if c.is_terminal and c.color not in out:
                out.append(c.color)  # type: ignore[arg-type]
        return out

    def backward_chain(self, u: CellId) -> List[CellId]:
        """`u` followed by every cell reached through `prev` links."""
        chain = [u]
        cur = self.cells[u].prev
        while cur is not None and cur != u:
            chain.append(cur)
            cur = self.cells[cur].prev
        return chain

    def forward_chain(self, u: CellId) -> List[CellId]:
        """`u` followed by every cell reached through `next` links."""
        chain = [u]
        cur = self.cells[u].next
        while cur is not None and cur != u:
            chain.append(cur)
            cur = self.cells[cur].next
        return chain

    def link_state(self) -> Tuple[Tuple[Optional[Color], Optional[CellId], Optional[CellId]], ...]:
        return tuple((c.color, c.next, c.prev) for c in self.cells)

    def reset(self) -> None:
        for c in self.cells:
            c.next = None
            c.prev = None
            c.is_sink = False
            if not c.is_terminal:
                c.color = NEUTRAL

    def to_networkx(self):
        """Convert to a networkx.Graph (adjacency) for ad-hoc experimentation.

        Committed links are exposed as a boolean `link` edge attribute.
        """
        import networkx as nx

        g = nx.Graph()
        for c in self.cells:
            g.add_node(c.index, pos=c.pos, color=c.color, terminal=c.is_terminal)
        for u, v in self.edges():
            linked = self.cells[u].next == v or self.cells[v].next == u
            g.add_edge(u, v, link=linked)
        return g

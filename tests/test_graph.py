import pytest

from flowshapes.graph import NEUTRAL, CellGraph, CellSpec, InvalidGraph


def _line_specs():
    return [
        CellSpec("A", (0, 0), (1,)),
        CellSpec(None, (1, 0), (2, 0)),
        CellSpec("A", (2, 0), (1,)),
    ]


def test_from_specs_keeps_order_and_flags():
    g = CellGraph.from_specs(_line_specs())
    assert len(g) == 3
    assert [c.index for c in g] == [0, 1, 2]
    assert g.neighbors(1) == [2, 0]
    assert g[0].is_terminal and g[2].is_terminal
    assert not g[1].is_terminal
    assert g[1].color is NEUTRAL
    assert g[1].pos == (1.0, 0.0)
    assert g.is_adjacent(0, 1) and not g.is_adjacent(0, 2)


@pytest.mark.parametrize(
    "specs",
    [
        [CellSpec("A", (0, 0), (1,)), CellSpec("A", (1, 0), ())],  # asymmetric
        [CellSpec("A", (0, 0), (0,))],  # self-loop
        [CellSpec("A", (0, 0), (5,))],  # unknown index
        [CellSpec("A", (0, 0), (1, 1)), CellSpec("A", (1, 0), (0,))],  # duplicate
    ],
)
def test_from_specs_rejects_malformed_adjacency(specs):
    with pytest.raises(InvalidGraph):
        CellGraph.from_specs(specs)


def test_add_edge_is_symmetric_and_rejects_self_loops():
    g = CellGraph()
    a = g.add_cell("A")
    b = g.add_cell(None, (1, 0))
    g.add_edge(a, b)
    g.add_edge(b, a)
    assert g.neighbors(a) == [b]
    assert g.neighbors(b) == [a]
    with pytest.raises(InvalidGraph):
        g.add_edge(a, a)
    with pytest.raises(InvalidGraph):
        g.add_edge(a, 7)


def test_edges_and_colors():
    g = CellGraph.from_specs(
        [
            CellSpec("B", (0, 0), (1,)),
            CellSpec("A", (1, 0), (0, 2)),
            CellSpec("B", (2, 0), (1,)),
        ]
    )
    assert sorted(g.edges()) == [(0, 1), (1, 2)]
    assert g.colors() == ["B", "A"]
    assert g.terminal_cells() == {0: "B", 1: "A", 2: "B"}


def test_chains_and_reset():
    g = CellGraph.from_specs(_line_specs())
    g[0].next, g[1].prev = 1, 0
    g[1].next, g[2].prev = 2, 1
    g[1].color = "A"
    g[2].is_sink = True
    assert g.backward_chain(2) == [2, 1, 0]
    assert g.forward_chain(0) == [0, 1, 2]
    assert list(g.solution_edges()) == [(0, 1), (1, 2)]

    g.reset()
    assert g.link_state() == (("A", None, None), (None, None, None), ("A", None, None))
    assert not g[2].is_sink


def test_to_networkx_marks_links():
    g = CellGraph.from_specs(_line_specs())
    g[0].next, g[1].prev = 1, 0
    nxg = g.to_networkx()
    assert nxg.number_of_nodes() == 3
    assert nxg.number_of_edges() == 2
    assert nxg.edges[0, 1]["link"] is True
    assert nxg.edges[1, 2]["link"] is False

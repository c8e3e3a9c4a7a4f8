from flowshapes.solver import solve_puzzle
from flowshapes.viz import build_plotly_figure


def test_figure_layers(grid):
    puzzle = grid("AB", "AB")
    fig = build_plotly_figure(puzzle)
    assert [t.name for t in fig.data] == ["neighbors", "cells"]

    res = solve_puzzle(puzzle)
    fig = build_plotly_figure(puzzle, result=res, title="solved")
    assert [t.name for t in fig.data] == ["neighbors", "path A", "path B", "cells"]
    assert list(fig.data[1].x) == [0.0, 0.0]
    assert list(fig.data[-1].marker.size) == [14, 14, 14, 14]

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..puzzle import Puzzle
from ..solver.types import SolveResult


_PALETTE = [
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
    "#9467bd",  # purple
    "#8c564b",  # brown
    "#e377c2",  # pink
    "#7f7f7f",  # gray
    "#bcbd22",  # olive
    "#17becf",  # cyan
]


def build_plotly_figure(
    puzzle: Puzzle,
    *,
    result: Optional[SolveResult] = None,
    title: str = "Flow Shapes",
):
    import plotly.graph_objects as go

    graph = puzzle.graph
    colors = puzzle.all_colors()
    color_to_hex = {c: _PALETTE[i % len(_PALETTE)] for i, c in enumerate(colors)}

    # Adjacency (light)
    ex, ey = [], []
    for u, v in graph.edges():
        pu, pv = graph[u].pos, graph[v].pos
        ex += [pu[0], pv[0], None]
        ey += [pu[1], pv[1], None]

    traces = [
        go.Scatter(
            x=ex,
            y=ey,
            mode="lines",
            line=dict(width=1, color="rgba(160,160,160,0.5)"),
            hoverinfo="none",
            name="neighbors",
        )
    ]

    # Solution links (colored, thicker), drawn along each path
    if result is not None and result.solved:
        for color, path in result.paths.items():
            traces.append(
                go.Scatter(
                    x=[graph[i].pos[0] for i in path],
                    y=[graph[i].pos[1] for i in path],
                    mode="lines",
                    line=dict(width=6, color=color_to_hex[color]),
                    hoverinfo="none",
                    name=f"path {color}",
                )
            )

    nx, ny, ntext, ncolor, nsize = [], [], [], [], []
    for cell in graph:
        nx.append(cell.pos[0])
        ny.append(cell.pos[1])

        label_bits = [f"cell={cell.index}"]
        if cell.is_terminal:
            label_bits.append(f"terminal={cell.color}")
            if result is not None:
                label_bits.append("sink" if cell.is_sink else "source")
        ntext.append("<br>".join(label_bits))

        shown = cell.color
        if result is not None:
            shown = result.cell_color.get(cell.index, cell.color)
        ncolor.append(color_to_hex[shown] if shown is not None else "#cccccc")
        nsize.append(14 if cell.is_terminal else 7)

    traces.append(
        go.Scatter(
            x=nx,
            y=ny,
            mode="markers",
            marker=dict(size=nsize, color=ncolor, line=dict(width=0)),
            text=ntext,
            hoverinfo="text",
            name="cells",
        )
    )
    fig = go.Figure(data=traces)
    fig.update_layout(
        title=title,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def write_plotly_html(
    puzzle: Puzzle,
    *,
    out_path: str | Path,
    result: Optional[SolveResult] = None,
    title: str = "Flow Shapes",
) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig = build_plotly_figure(puzzle, result=result, title=title)
    fig.write_html(str(out_path), include_plotlyjs="cdn", full_html=True)
    return out_path

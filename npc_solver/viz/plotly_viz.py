from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from ..graph import Color, Graph
from ..reduction import Reduction

Pos = Tuple[float, float]

_COLOR_HEX = {
    Color.GREEN: "#2ca02c",
    Color.BLUE: "#1f77b4",
    Color.RED: "#d62728",
}
_UNCOLORED = "#cccccc"


def layout_positions(graph: Graph, *, reduction: Optional[Reduction] = None, seed: int = 7) -> Dict[int, Pos]:
    """Node positions for plotting.

    Reduced graphs get a layered layout: base on top, then the literal row,
    the negation row and one triangle per clause at the bottom. Everything
    else uses a seeded networkx spring layout.
    """

    if reduction is None:
        import networkx as nx

        if graph.num_vertices == 0:
            return {}
        pos = nx.spring_layout(graph.to_networkx(), seed=seed)
        return {int(v): (float(p[0]), float(p[1])) for v, p in pos.items()}

    n = reduction.num_literals
    k = reduction.num_clauses
    width = max(n, 3 * k, 1)
    out: Dict[int, Pos] = {0: ((width - 1) / 2.0, 3.0)}
    for i in range(1, n + 1):
        x = (i - 1) * (width - 1) / (n - 1) if n > 1 else (width - 1) / 2.0
        out[i] = (x, 2.0)
        out[n + i] = (x, 1.0)
    for idx in range(k):
        a, b, c = reduction.clause_vertices(idx)
        x0 = 3.0 * idx
        out[a] = (x0, -0.2)
        out[b] = (x0 + 1.0, -0.2)
        out[c] = (x0 + 0.5, -1.0)
    return out


def _node_label(v: int, reduction: Optional[Reduction]) -> str:
    if reduction is None:
        return f"v{v}"
    role = reduction.role(v)
    if role == "base":
        return "base"
    lit = reduction.literal_of[v]
    if lit is not None:
        return f"x{lit}" if lit > 0 else f"¬x{-lit}"
    first = 1 + 2 * reduction.num_literals
    idx, pos = divmod(v - first, 3)
    return f"C{idx + 1}.{pos + 1} ({reduction.formula.clauses[idx].literals[pos]})"


def build_plotly_figure(
    graph: Graph,
    *,
    coloring: Optional[Sequence[Color]] = None,
    reduction: Optional[Reduction] = None,
    title: str = "3-Coloring",
):
    import plotly.graph_objects as go

    pos = layout_positions(graph, reduction=reduction)

    ex, ey = [], []
    for u, v in graph.edges():
        pu, pv = pos[u], pos[v]
        ex += [pu[0], pv[0], None]
        ey += [pu[1], pv[1], None]

    xs, ys, text, colors, sizes = [], [], [], [], []
    for v in range(graph.num_vertices):
        xs.append(pos[v][0])
        ys.append(pos[v][1])
        bits = [f"id={v}", _node_label(v, reduction), f"degree={graph.degree(v)}"]
        if coloring is not None:
            bits.append(f"color={coloring[v].name}")
        text.append("<br>".join(bits))
        colors.append(_COLOR_HEX[coloring[v]] if coloring is not None else _UNCOLORED)
        sizes.append(14 if reduction is not None and v == 0 else 10)

    traces = [
        go.Scatter(
            x=ex,
            y=ey,
            mode="lines",
            line=dict(width=1, color="rgba(160,160,160,0.5)"),
            hoverinfo="none",
            name="edges",
        ),
        go.Scatter(
            x=xs,
            y=ys,
            mode="markers",
            marker=dict(size=sizes, color=colors, line=dict(width=0)),
            text=text,
            hoverinfo="text",
            name="vertices",
        ),
    ]
    fig = go.Figure(data=traces)
    fig.update_layout(
        title=title,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def write_plotly_html(
    graph: Graph,
    *,
    out_path: str | Path,
    coloring: Optional[Sequence[Color]] = None,
    reduction: Optional[Reduction] = None,
    title: str = "3-Coloring",
) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig = build_plotly_figure(graph, coloring=coloring, reduction=reduction, title=title)
    fig.write_html(str(out_path), include_plotlyjs="cdn", full_html=True)
    return out_path

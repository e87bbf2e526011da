from __future__ import annotations

from conftest import complete_graph
from npc_solver.formula import Formula
from npc_solver.graph import Color, Graph
from npc_solver.reduction import reduce_formula, solve_naesat_by_reduction
from npc_solver.viz import build_plotly_figure, layout_positions, write_plotly_html


class TestLayout:
    def test_spring_layout_covers_all_vertices(self):
        pos = layout_positions(complete_graph(5))
        assert sorted(pos) == [0, 1, 2, 3, 4]

    def test_empty_graph(self):
        assert layout_positions(Graph([])) == {}

    def test_reduction_layers(self):
        red = reduce_formula(Formula.from_clauses([[1, -2, 3], [2, 3, 1]]))
        pos = layout_positions(red.graph, reduction=red)
        assert len(pos) == red.graph.num_vertices
        assert pos[0][1] > pos[1][1] > pos[4][1] > pos[7][1]


class TestFigure:
    def test_uncolored(self, triangle):
        fig = build_plotly_figure(triangle)
        assert len(fig.data) == 2
        assert list(fig.data[1].marker.color) == ["#cccccc"] * 3

    def test_colored_reduction(self):
        f = Formula.from_clauses([[1, 2, 3]])
        _assignment, red, coloring = solve_naesat_by_reduction(f)
        fig = build_plotly_figure(red.graph, coloring=coloring, reduction=red, title="r")
        texts = list(fig.data[1].text)
        assert "base" in texts[0]
        assert "¬x1" in texts[4]
        assert "C1.1 (1)" in texts[7]

    def test_write_html(self, triangle, tmp_path):
        out = write_plotly_html(
            triangle,
            out_path=tmp_path / "sub" / "g.html",
            coloring=[Color.GREEN, Color.BLUE, Color.RED],
        )
        assert out.exists()
        assert "<html" in out.read_text(encoding="utf-8")

from __future__ import annotations

import pytest

from npc_solver.cli import EXIT_INPUT_ERROR, EXIT_TIMEOUT, main
from npc_solver.graph import Color


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "graphs.txt"
    path.write_text("3\n0 1 1\n1 0 1\n1 1 0\n4\n0 1 1 1\n1 0 1 1\n1 1 0 1\n1 1 1 0\n0\n", encoding="utf-8")
    return path


@pytest.fixture
def cnf_file(tmp_path):
    path = tmp_path / "cnf.txt"
    path.write_text("1 2 3\n1 1 1\n", encoding="utf-8")
    return path


class TestColorCommand:
    def test_reports_each_graph(self, graph_file, capsys):
        assert main(["color", str(graph_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"** Find 3-Color plans for graphs in {graph_file}")
        assert "G1:(|V|=3,|E|=3) (ms=" in out
        assert "  G B R" in out
        assert "G2:(|V|=4,|E|=6) Not 3-colorable" in out

    def test_z3_backend(self, graph_file, capsys):
        assert main(["color", "--solver", "z3", str(graph_file)]) == 0
        assert "Not 3-colorable" in capsys.readouterr().out

    def test_step_budget(self, graph_file, capsys):
        assert main(["color", "--max-steps", "2", str(graph_file)]) == EXIT_TIMEOUT
        assert "error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["color", str(tmp_path / "nope.txt")]) == EXIT_INPUT_ERROR
        assert "error:" in capsys.readouterr().err

    def test_malformed_file(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("2\n0 1\n0 0\n", encoding="utf-8")
        assert main(["color", str(path)]) == EXIT_INPUT_ERROR
        assert "not symmetric" in capsys.readouterr().err


class TestNaesatCommands:
    def test_naesat(self, cnf_file, capsys):
        assert main(["naesat", "--seed", "1", str(cnf_file)]) == 0
        out = capsys.readouterr().out
        assert "(by backtracking)" in out
        assert "3CNF No.1:[n=3 k=1]" in out
        assert "NAE certificate = [1:T 2:T 3:F]" in out
        assert "3CNF No.2:[n=1 k=1]" in out
        assert "No NAE positive certificate!" in out

    def test_reduce(self, cnf_file, capsys):
        assert main(["reduce", "--seed", "1", str(cnf_file)]) == 0
        out = capsys.readouterr().out
        assert "(reduced to 3-Color Problem)" in out
        assert "3CNF No.1:[n=3 k=1] -> [V=10, E=15]" in out
        assert "NAE certificate = [1:T 2:T 3:F]" in out
        assert "3CNF No.2:[n=1 k=1] -> [V=6, E=9]" in out

    def test_reduce_runs_translation_self_check(self, cnf_file, monkeypatch):
        import npc_solver.reduction as reduction_mod

        monkeypatch.setattr(reduction_mod, "solve_coloring", lambda graph, **kw: [Color.GREEN] * graph.num_vertices)
        with pytest.raises(RuntimeError, match="NAE-satisfying"):
            main(["reduce", str(cnf_file)])

    def test_bad_formula(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("1 2\n", encoding="utf-8")
        assert main(["naesat", str(path)]) == EXIT_INPUT_ERROR


class TestVisualizeCommand:
    def test_graph(self, graph_file, tmp_path, capsys):
        out = tmp_path / "g.html"
        assert main(["visualize", "--solve", "--out", str(out), str(graph_file)]) == 0
        assert out.exists()
        assert "Wrote graph visualization" in capsys.readouterr().out

    def test_reduced_formula(self, cnf_file, tmp_path):
        out = tmp_path / "r.html"
        assert main(["visualize", "--formula", "--index", "2", "--solve", "--out", str(out), str(cnf_file)]) == 0
        assert out.exists()

    def test_index_out_of_range(self, graph_file, tmp_path):
        assert main(["visualize", "--index", "5", "--out", str(tmp_path / "x.html"), str(graph_file)]) == EXIT_INPUT_ERROR

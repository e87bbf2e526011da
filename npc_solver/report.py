from __future__ import annotations

import random
from typing import List, Mapping, Optional, Sequence

from .formula import Assignment, Formula, literal_value
from .graph import Color, Graph
from .reduction import Reduction

# Graphs this large print their color plan inline instead of the full matrix.
PRINT_THRESHOLD = 20


def _tf(value: bool) -> str:
    return "T" if value else "F"


def format_graph_report(graph: Graph, coloring: Optional[Sequence[Color]], elapsed_ms: float) -> List[str]:
    label = graph.label if graph.label is not None else "?"
    head = f"G{label}:(|V|={graph.num_vertices},|E|={graph.num_edges}) "
    ms = f"(ms={int(elapsed_ms)})"

    if coloring is None:
        return [head + "Not 3-colorable " + ms]

    letters = [c.short for c in coloring]
    if graph.num_vertices >= PRINT_THRESHOLD:
        return [head + "".join(f"{x} " for x in letters) + ms]

    out = [head + ms, "  " + " ".join(letters)]
    for i in range(graph.num_vertices):
        cells = []
        for j in range(graph.num_vertices):
            if i == j:
                cells.append("X")
            elif graph.adjacent(i, j):
                cells.append("1")
            else:
                cells.append(" ")
        out.append(letters[i] + " " + " ".join(cells))
    return out


def format_assignment(assignment: Mapping[int, bool], num_literals: int) -> str:
    return " ".join(f"{v}:{_tf(assignment[v])}" for v in range(1, num_literals + 1))


def random_assignment(formula: Formula, rng: random.Random) -> Assignment:
    return {v: rng.random() < 0.5 for v in formula.variables()}


def format_formula_report(
    index: int,
    formula: Formula,
    assignment: Optional[Assignment],
    elapsed_ms: float,
    *,
    rng: Optional[random.Random] = None,
    reduction: Optional[Reduction] = None,
) -> List[str]:
    """Render one formula's verdict.

    Without a certificate a random assignment is shown instead, drawn from
    ``rng``.
    """

    head = f"3CNF No.{index}:[n={formula.num_literals} k={formula.num_clauses}]"
    if reduction is not None:
        head += f" -> [V={reduction.graph.num_vertices}, E={reduction.graph.num_edges}]"

    ms = f"({int(elapsed_ms)} ms)"
    if assignment is not None:
        shown = assignment
        cert = f"{ms} NAE certificate = [{format_assignment(shown, formula.num_literals)}]"
    else:
        shown = random_assignment(formula, rng or random.Random())
        cert = f"{ms} No NAE positive certificate!  Using random assignment = [{format_assignment(shown, formula.num_literals)}]"

    clauses_line = "^".join(str(c) for c in formula.clauses) + " ==>"
    values_line = "^".join(
        "(" + "|".join(" " + _tf(literal_value(x, shown)) for x in c) + ")" for c in formula.clauses
    )
    return [head, cert, clauses_line, values_line, ""]

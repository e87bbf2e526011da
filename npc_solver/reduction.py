"""NAE-3SAT to 3-coloring reduction.

Vertex layout for a formula with ``n`` variables and ``k`` clauses:

- ``0``: the base vertex
- ``1..n``: positive literal ``i`` at vertex ``i``
- ``n+1..2n``: negated literal ``-i`` at vertex ``n+i``
- ``2n+1..2n+3k``: one triangle per clause, in clause order

The base is joined to every literal vertex and each literal to its own
negation, so every variable's pair takes the two non-base colors. Each
clause triangle vertex is joined to the literal in the same clause position,
which rules out the case where all three literals share a color.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Set, Tuple

from .formula import Assignment, Formula, MalformedFormulaError
from .graph import Color, Graph, VertexId
from .solver import SolverName, solve_coloring

logger = logging.getLogger(__name__)

BASE_VERTEX: VertexId = 0

VertexRole = Literal["base", "literal", "negation", "clause"]


@dataclass(frozen=True)
class Reduction:
    # Copy of the formula as reduced; the caller may keep growing its own.
    formula: Formula
    graph: Graph
    # Signed literal carried by each vertex; None for the base and clause vertices.
    literal_of: Tuple[Optional[int], ...]
    num_literals: int
    num_clauses: int

    def vertex_of_literal(self, literal: int) -> VertexId:
        n = self.num_literals
        var = abs(literal)
        if literal == 0 or var > n:
            raise MalformedFormulaError(f"Literal {literal} is out of range 1..{n}")
        return var if literal > 0 else n + var

    def clause_vertices(self, clause_index: int) -> Tuple[VertexId, VertexId, VertexId]:
        if not 0 <= clause_index < self.num_clauses:
            raise IndexError(f"Clause index {clause_index} out of range")
        first = 1 + 2 * self.num_literals + 3 * clause_index
        return (first, first + 1, first + 2)

    def role(self, v: VertexId) -> VertexRole:
        n = self.num_literals
        if not 0 <= v < self.graph.num_vertices:
            raise IndexError(f"Vertex {v} out of range")
        if v == BASE_VERTEX:
            return "base"
        if v <= n:
            return "literal"
        if v <= 2 * n:
            return "negation"
        return "clause"

    def assignment_from_coloring(self, coloring: Sequence[Color]) -> Assignment:
        """Read a truth assignment off a proper coloring of ``graph``.

        Whatever color vertex 1 received counts as true.
        """

        if len(coloring) != self.graph.num_vertices:
            raise ValueError(
                f"Coloring has {len(coloring)} entries, expected {self.graph.num_vertices}"
            )
        n = self.num_literals
        if n == 0:
            return {}
        true_color = coloring[1]
        return {v: coloring[v] == true_color for v in range(1, n + 1)}


def reduce_formula(formula: Formula, *, label: Optional[str] = None) -> Reduction:
    formula.validate()
    n = formula.num_literals
    k = formula.num_clauses
    total = 1 + 2 * n + 3 * k

    edges: Set[Tuple[VertexId, VertexId]] = set()

    def join(u: VertexId, v: VertexId) -> None:
        edges.add((min(u, v), max(u, v)))

    for i in range(1, n + 1):
        join(BASE_VERTEX, i)
        join(BASE_VERTEX, n + i)
        join(i, n + i)

    literal_of: List[Optional[int]] = [None] * total
    for i in range(1, n + 1):
        literal_of[i] = i
        literal_of[n + i] = -i

    for idx, clause in enumerate(formula.clauses):
        first = 1 + 2 * n + 3 * idx
        a, b, c = first, first + 1, first + 2
        join(a, b)
        join(b, c)
        join(a, c)
        for pos, lit in enumerate(clause):
            join(first + pos, lit if lit > 0 else n - lit)

    graph = Graph.from_edges(total, sorted(edges), label=label)
    logger.debug("Reduced 3CNF[n=%d k=%d] -> %r", n, k, graph)
    return Reduction(
        formula=Formula(list(formula.clauses), num_literals=n),
        graph=graph,
        literal_of=tuple(literal_of),
        num_literals=n,
        num_clauses=k,
    )


def solve_naesat_by_reduction(
    formula: Formula,
    *,
    solver: SolverName = "dfs",
    timeout_ms: int | None = None,
    max_steps: int | None = None,
    label: Optional[str] = None,
) -> Tuple[Optional[Assignment], Reduction, Optional[List[Color]]]:
    """Decide NAE-satisfiability by 3-coloring the reduced graph."""

    reduction = reduce_formula(formula, label=label)
    coloring = solve_coloring(reduction.graph, solver=solver, timeout_ms=timeout_ms, max_steps=max_steps)
    if coloring is None:
        return None, reduction, None
    assignment = reduction.assignment_from_coloring(coloring)
    if not reduction.formula.is_nae_satisfied(assignment):
        raise RuntimeError("Coloring did not translate into a NAE-satisfying assignment (reduction bug)")
    return assignment, reduction, coloring

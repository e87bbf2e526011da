from __future__ import annotations

import itertools
import random
from typing import List, Optional

import pytest

from npc_solver.formula import Formula
from npc_solver.graph import COLORS, Color, Graph


def complete_graph(n: int) -> Graph:
    return Graph.from_edges(n, itertools.combinations(range(n), 2), label=f"K{n}")


def random_graph(rng: random.Random, n: int, p: float) -> Graph:
    edges = [(u, v) for u, v in itertools.combinations(range(n), 2) if rng.random() < p]
    return Graph.from_edges(n, edges)


def random_formula(rng: random.Random, n: int, k: int) -> Formula:
    formula = Formula()
    for _ in range(k):
        formula.add_clause([rng.choice([-1, 1]) * rng.randint(1, n) for _ in range(3)])
    return formula


def brute_force_coloring(graph: Graph) -> Optional[List[Color]]:
    for combo in itertools.product(COLORS, repeat=graph.num_vertices):
        if graph.is_proper_coloring(list(combo)):
            return list(combo)
    return None


def brute_force_naesat(formula: Formula) -> bool:
    for values in itertools.product([True, False], repeat=formula.num_literals):
        assignment = {i + 1: v for i, v in enumerate(values)}
        if formula.is_nae_satisfied(assignment):
            return True
    return False


@pytest.fixture
def triangle() -> Graph:
    return Graph([[0, 1, 1], [1, 0, 1], [1, 1, 0]], label="1")

from __future__ import annotations

import time
from typing import Callable, List, Optional, TypeVar

from ..formula import Assignment, Formula
from ..graph import Color, Graph
from .dfs_solver import DfsTimeoutError, SearchBudget, backtrack, color_with_dfs, naesat_with_dfs
from .types import Decision, SolverName
from .z3_solver import color_with_z3, naesat_with_z3

SOLVER_CHOICES: tuple[SolverName, ...] = ("dfs", "z3")

W = TypeVar("W")


def _check_solver(solver: str) -> None:
    if solver not in SOLVER_CHOICES:
        raise ValueError(f"Unknown solver {solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")


def solve_coloring(
    graph: Graph,
    *,
    solver: SolverName = "dfs",
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> Optional[List[Color]]:
    _check_solver(solver)
    if solver == "z3":
        return color_with_z3(graph, timeout_ms=timeout_ms)
    return color_with_dfs(graph, timeout_ms=timeout_ms, max_steps=max_steps)


def solve_naesat(
    formula: Formula,
    *,
    solver: SolverName = "dfs",
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> Optional[Assignment]:
    _check_solver(solver)
    if solver == "z3":
        return naesat_with_z3(formula, timeout_ms=timeout_ms)
    return naesat_with_dfs(formula, timeout_ms=timeout_ms, max_steps=max_steps)


def timed(fn: Callable[[], Optional[W]]) -> Decision[W]:
    """Run one decision procedure and record its wall time."""
    start = time.monotonic()
    witness = fn()
    return Decision(witness=witness, elapsed_ms=(time.monotonic() - start) * 1000.0)


__all__ = [
    "Decision",
    "DfsTimeoutError",
    "SearchBudget",
    "SolverName",
    "SOLVER_CHOICES",
    "backtrack",
    "color_with_dfs",
    "color_with_z3",
    "naesat_with_dfs",
    "naesat_with_z3",
    "solve_coloring",
    "solve_naesat",
    "timed",
]

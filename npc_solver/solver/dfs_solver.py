from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence, TypeVar

from ..formula import Assignment, Formula
from ..graph import COLORS, Color, Graph

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TIMEOUT_CHECK_EVERY = 1000


class DfsTimeoutError(ValueError):
    pass


class SearchBudget:
    """Wall-clock and step limits for one search call."""

    def __init__(self, *, timeout_ms: int | None = None, max_steps: int | None = None) -> None:
        self.timeout_ms = timeout_ms
        self.max_steps = max_steps
        self.steps = 0
        self._start = time.monotonic()

    def check_timeout(self) -> None:
        if self.timeout_ms is None:
            return
        elapsed_ms = (time.monotonic() - self._start) * 1000.0
        if elapsed_ms > self.timeout_ms:
            raise DfsTimeoutError(f"DFS search timed out after {self.timeout_ms}ms ({self.steps} steps)")

    def tick(self) -> None:
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise DfsTimeoutError(f"DFS search exceeded its budget of {self.max_steps} steps")
        if self.steps % _TIMEOUT_CHECK_EVERY == 0:
            self.check_timeout()


def backtrack(
    size: int,
    options: Sequence[T],
    *,
    consistent: Callable[[List[Optional[T]], int], bool],
    complete: Callable[[List[Optional[T]]], bool],
    budget: SearchBudget,
) -> Optional[List[T]]:
    """Depth-first search over positions ``0..size-1``.

    Each position tries ``options`` in order. ``consistent(values, pos)`` is
    asked right after ``values[pos]`` is set; ``complete(values)`` decides a
    fully assigned leaf. Positions past the current one are always ``None``.
    Returns the first accepted assignment, or None once every branch fails.
    """

    values: List[Optional[T]] = [None] * size
    next_option = [0] * size
    pos = 0
    while pos >= 0:
        budget.tick()
        if pos == size:
            if complete(values):
                return list(values)  # type: ignore[arg-type]
            pos -= 1
            continue

        k = next_option[pos]
        if k == len(options):
            # Exhausted this position; reset it and back up.
            values[pos] = None
            next_option[pos] = 0
            pos -= 1
            continue

        next_option[pos] = k + 1
        values[pos] = options[k]
        if consistent(values, pos):
            pos += 1
    return None


def color_with_dfs(
    graph: Graph,
    *,
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> Optional[List[Color]]:
    """Decide 3-colorability by backtracking over vertices in index order."""

    budget = SearchBudget(timeout_ms=timeout_ms, max_steps=max_steps)
    neighbors = [graph.neighbors(v) for v in range(graph.num_vertices)]

    def no_conflict(colors: List[Optional[Color]], v: int) -> bool:
        color = colors[v]
        for u in neighbors[v]:
            if u != v and colors[u] == color:
                return False
        return True

    budget.check_timeout()
    coloring = backtrack(
        graph.num_vertices,
        COLORS,
        consistent=no_conflict,
        complete=lambda _colors: True,
        budget=budget,
    )
    logger.debug(
        "3-color search on %r: %s after %d steps",
        graph,
        "colorable" if coloring is not None else "not colorable",
        budget.steps,
    )
    if coloring is not None and not graph.is_proper_coloring(coloring):
        raise RuntimeError("Invalid coloring found!")
    return coloring


def naesat_with_dfs(
    formula: Formula,
    *,
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> Optional[Assignment]:
    """Decide NAE-satisfiability by backtracking over variables ``1..n``.

    ``True`` is tried before ``False``. Clauses are only checked once every
    variable has a value.
    """

    formula.validate()
    budget = SearchBudget(timeout_ms=timeout_ms, max_steps=max_steps)

    def as_assignment(values: Sequence[Optional[bool]]) -> Assignment:
        return {i + 1: bool(v) for i, v in enumerate(values)}

    budget.check_timeout()
    values = backtrack(
        formula.num_literals,
        (True, False),
        consistent=lambda _values, _pos: True,
        complete=lambda vals: formula.is_nae_satisfied(as_assignment(vals)),
        budget=budget,
    )
    logger.debug(
        "NAE search on n=%d k=%d: %s after %d steps",
        formula.num_literals,
        formula.num_clauses,
        "satisfiable" if values is not None else "unsatisfiable",
        budget.steps,
    )
    if values is None:
        return None
    assignment = as_assignment(values)
    if not formula.is_nae_satisfied(assignment):
        raise RuntimeError("Invalid assignment found!")
    return assignment

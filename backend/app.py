from __future__ import annotations

import logging
import os
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Allow running `python backend/app.py` from repo root.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from npc_solver.formula import Assignment, Formula
from npc_solver.graph import Color, Graph
from npc_solver.parsing import parse_formulas, parse_graphs
from npc_solver.reduction import Reduction, reduce_formula, solve_naesat_by_reduction
from npc_solver.report import random_assignment
from npc_solver.solver import SOLVER_CHOICES, solve_coloring, solve_naesat, timed

logger = logging.getLogger(__name__)

MAX_TIMEOUT_MS = 1_000_000
DEFAULT_TIMEOUT_MS = int(os.environ.get("NPC_SOLVER_TIMEOUT_MS", "30000"))


def _letters(coloring: Optional[List[Color]]) -> Optional[List[str]]:
    if coloring is None:
        return None
    return [c.short for c in coloring]


def _assignment_payload(assignment: Optional[Assignment]) -> Optional[Dict[str, bool]]:
    if assignment is None:
        return None
    return {str(v): val for v, val in sorted(assignment.items())}


def _formula_payload(formula: Formula) -> Dict[str, Any]:
    return {
        "n": formula.num_literals,
        "k": formula.num_clauses,
        "clauses": [list(c.literals) for c in formula.clauses],
    }


def _graph_payload(graph: Graph, reduction: Optional[Reduction] = None) -> Dict[str, Any]:
    nodes = []
    for v in range(graph.num_vertices):
        node: Dict[str, Any] = {"id": v, "degree": graph.degree(v)}
        if reduction is not None:
            node["role"] = reduction.role(v)
            node["literal"] = reduction.literal_of[v]
        nodes.append(node)
    return {
        "label": graph.label,
        "num_vertices": graph.num_vertices,
        "num_edges": graph.num_edges,
        "nodes": nodes,
        "edges": [[u, v] for u, v in graph.edges()],
    }


def _reject(e: Exception) -> HTTPException:
    logger.info("Rejected request: %s", e)
    return HTTPException(status_code=400, detail=str(e))


class TextRequest(BaseModel):
    text: str


class SolveRequest(TextRequest):
    solver: str = Field(default="dfs")
    timeout_ms: Optional[int] = Field(default=DEFAULT_TIMEOUT_MS, ge=1, le=MAX_TIMEOUT_MS)
    max_steps: Optional[int] = Field(default=None, ge=1)


class NaeSolveRequest(SolveRequest):
    seed: Optional[int] = None


app = FastAPI(title="NPC Solver API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok", "solvers": list(SOLVER_CHOICES)}


@app.post("/color")
def color(req: SolveRequest) -> Dict[str, Any]:
    try:
        graphs = parse_graphs(req.text, source_name="<request>")
        results = []
        for graph in graphs:
            decision = timed(
                lambda: solve_coloring(graph, solver=req.solver, timeout_ms=req.timeout_ms, max_steps=req.max_steps)
            )
            results.append(
                {
                    "label": graph.label,
                    "num_vertices": graph.num_vertices,
                    "num_edges": graph.num_edges,
                    "colorable": decision.positive,
                    "coloring": _letters(decision.witness),
                    "elapsed_ms": decision.elapsed_ms,
                }
            )
        return {"results": results}
    except ValueError as e:
        raise _reject(e) from e


@app.post("/naesat")
def naesat(req: NaeSolveRequest) -> Dict[str, Any]:
    try:
        formulas = parse_formulas(req.text, source_name="<request>")
        rng = random.Random(req.seed)
        results = []
        for formula in formulas:
            decision = timed(
                lambda: solve_naesat(formula, solver=req.solver, timeout_ms=req.timeout_ms, max_steps=req.max_steps)
            )
            entry = _formula_payload(formula)
            entry["satisfiable"] = decision.positive
            entry["assignment"] = _assignment_payload(decision.witness)
            if not decision.positive:
                entry["random_assignment"] = _assignment_payload(random_assignment(formula, rng))
            entry["elapsed_ms"] = decision.elapsed_ms
            results.append(entry)
        return {"results": results}
    except ValueError as e:
        raise _reject(e) from e


@app.post("/reduce")
def reduce_naesat(req: SolveRequest) -> Dict[str, Any]:
    try:
        formulas = parse_formulas(req.text, source_name="<request>")
        results = []
        for idx, formula in enumerate(formulas, start=1):
            decision = timed(
                lambda: solve_naesat_by_reduction(
                    formula,
                    solver=req.solver,
                    timeout_ms=req.timeout_ms,
                    max_steps=req.max_steps,
                    label=str(idx),
                )
            )
            assignment, reduction, coloring = decision.witness
            entry = _formula_payload(formula)
            entry.update(
                {
                    "num_vertices": reduction.graph.num_vertices,
                    "num_edges": reduction.graph.num_edges,
                    "satisfiable": assignment is not None,
                    "coloring": _letters(coloring),
                    "assignment": _assignment_payload(assignment),
                    "elapsed_ms": decision.elapsed_ms,
                }
            )
            results.append(entry)
        return {"results": results}
    except ValueError as e:
        raise _reject(e) from e


@app.post("/graph")
def build_graph(req: TextRequest) -> Dict[str, Any]:
    try:
        formulas = parse_formulas(req.text, source_name="<request>")
        graphs = []
        for idx, formula in enumerate(formulas, start=1):
            reduction = reduce_formula(formula, label=str(idx))
            graphs.append(_graph_payload(reduction.graph, reduction))
        return {"graphs": graphs}
    except ValueError as e:
        raise _reject(e) from e

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Optional, Sequence

from .parsing import read_formulas, read_graphs
from .reduction import reduce_formula, solve_naesat_by_reduction
from .report import format_formula_report, format_graph_report
from .solver import SOLVER_CHOICES, DfsTimeoutError, solve_coloring, solve_naesat, timed
from .viz import write_plotly_html

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2
EXIT_TIMEOUT = 3


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", type=str, help="Path to the input file")
    p.add_argument("--solver", choices=SOLVER_CHOICES, default="dfs", help="Search backend")
    p.add_argument("--timeout-ms", type=int, default=None, help="Abort a single search after this many milliseconds")
    p.add_argument("--max-steps", type=int, default=None, help="Abort a single DFS search after this many steps")


def _emit(lines: Sequence[str]) -> None:
    for ln in lines:
        print(ln)


def _cmd_color(args: argparse.Namespace) -> int:
    graphs = read_graphs(args.input)
    print(f"** Find 3-Color plans for graphs in {args.input}\n")
    for graph in graphs:
        decision = timed(
            lambda: solve_coloring(graph, solver=args.solver, timeout_ms=args.timeout_ms, max_steps=args.max_steps)
        )
        _emit(format_graph_report(graph, decision.witness, decision.elapsed_ms))
    return 0


def _cmd_naesat(args: argparse.Namespace) -> int:
    formulas = read_formulas(args.input)
    rng = random.Random(args.seed)
    print(f"** Find 3NAESAT in {args.input} (by backtracking):\n")
    for idx, formula in enumerate(formulas, start=1):
        decision = timed(
            lambda: solve_naesat(formula, solver=args.solver, timeout_ms=args.timeout_ms, max_steps=args.max_steps)
        )
        _emit(format_formula_report(idx, formula, decision.witness, decision.elapsed_ms, rng=rng))
    return 0


def _cmd_reduce(args: argparse.Namespace) -> int:
    formulas = read_formulas(args.input)
    rng = random.Random(args.seed)
    print(f"** Find 3NAESAT in {args.input} (reduced to 3-Color Problem):\n")
    for idx, formula in enumerate(formulas, start=1):
        decision = timed(
            lambda: solve_naesat_by_reduction(
                formula, solver=args.solver, timeout_ms=args.timeout_ms, max_steps=args.max_steps, label=str(idx)
            )
        )
        assignment, reduction, _ = decision.witness
        _emit(
            format_formula_report(
                idx, formula, assignment, decision.elapsed_ms, rng=rng, reduction=reduction
            )
        )
    return 0


def _cmd_visualize(args: argparse.Namespace) -> int:
    reduction = None
    if args.formula:
        formulas = read_formulas(args.input)
        if not 1 <= args.index <= len(formulas):
            raise ValueError(f"--index {args.index} is out of range 1..{len(formulas)}")
        reduction = reduce_formula(formulas[args.index - 1], label=str(args.index))
        graph = reduction.graph
    else:
        graphs = read_graphs(args.input)
        if not 1 <= args.index <= len(graphs):
            raise ValueError(f"--index {args.index} is out of range 1..{len(graphs)}")
        graph = graphs[args.index - 1]

    coloring = None
    if args.solve:
        coloring = solve_coloring(graph, solver=args.solver, timeout_ms=args.timeout_ms, max_steps=args.max_steps)
        if coloring is None:
            print(f"G{graph.label}: Not 3-colorable; rendering uncolored")

    name = Path(args.input).name
    out = write_plotly_html(
        graph,
        out_path=args.out,
        coloring=coloring,
        reduction=reduction,
        title=f"{'Reduced 3CNF' if reduction else 'Graph'} {args.index}: {name}",
    )
    print(f"Wrote graph visualization: {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="npc_solver", description="Backtracking deciders for 3-coloring and NAE-3SAT"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_color = sub.add_parser("color", help="Decide 3-colorability of each adjacency matrix in a file")
    _add_search_args(p_color)

    p_nae = sub.add_parser("naesat", help="Decide NAE-satisfiability of each 3CNF line in a file")
    _add_search_args(p_nae)
    p_nae.add_argument("--seed", type=int, default=None, help="Seed for the fallback random assignment")

    p_red = sub.add_parser("reduce", help="Decide NAE-3SAT by reduction to 3-coloring")
    _add_search_args(p_red)
    p_red.add_argument("--seed", type=int, default=None, help="Seed for the fallback random assignment")

    p_viz = sub.add_parser("visualize", help="Render a graph (or a reduced formula) to an HTML file")
    _add_search_args(p_viz)
    p_viz.add_argument("--formula", action="store_true", help="Treat the input as 3CNF lines and render the reduction")
    p_viz.add_argument("--index", type=int, default=1, help="1-based index of the graph/formula in the file")
    p_viz.add_argument("--solve", action="store_true", help="Color the graph before rendering")
    p_viz.add_argument("--out", type=str, default="out/graph.html", help="Output HTML path")

    return parser


_COMMANDS = {
    "color": _cmd_color,
    "naesat": _cmd_naesat,
    "reduce": _cmd_reduce,
    "visualize": _cmd_visualize,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return _COMMANDS[args.cmd](args)
    except DfsTimeoutError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_TIMEOUT
    except (OSError, ValueError) as e:
        logger.info("Input rejected: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

from .formula import Assignment, Clause, Formula, MalformedFormulaError
from .graph import COLORS, Color, Graph, MalformedGraphError, VertexColoring
from .parsing import MalformedInputError, parse_formulas, parse_graphs, read_formulas, read_graphs
from .reduction import BASE_VERTEX, Reduction, reduce_formula, solve_naesat_by_reduction
from .solver import DfsTimeoutError, color_with_dfs, naesat_with_dfs, solve_coloring, solve_naesat

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "BASE_VERTEX",
    "COLORS",
    "Clause",
    "Color",
    "DfsTimeoutError",
    "Formula",
    "Graph",
    "MalformedFormulaError",
    "MalformedGraphError",
    "MalformedInputError",
    "Reduction",
    "VertexColoring",
    "color_with_dfs",
    "naesat_with_dfs",
    "parse_formulas",
    "parse_graphs",
    "read_formulas",
    "read_graphs",
    "reduce_formula",
    "solve_coloring",
    "solve_naesat",
    "solve_naesat_by_reduction",
]

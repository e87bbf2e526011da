from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .formula import CLAUSE_WIDTH, Formula
from .graph import Graph

logger = logging.getLogger(__name__)


class MalformedInputError(ValueError):
    pass


def _is_comment(raw: str) -> bool:
    return raw.startswith("#") or raw == "c" or raw.startswith("c ")


def parse_graphs(text: str, *, source_name: str = "<text>") -> List[Graph]:
    """Parse a stream of adjacency matrices.

    Each block is a vertex-count line followed by that many rows of 0/1
    tokens. A count of 0 (or end of input) ends the stream. ``X`` may stand
    on the diagonal as the self-pair marker.
    """

    lines = text.splitlines()
    graphs: List[Graph] = []
    i = 0

    def next_content_line() -> Optional[int]:
        nonlocal i
        while i < len(lines):
            raw = lines[i].strip()
            i += 1
            if raw and not raw.startswith("#"):
                return i - 1
        return None

    while True:
        header_idx = next_content_line()
        if header_idx is None:
            break
        header = lines[header_idx].strip()
        try:
            n = int(header)
        except ValueError as e:
            raise MalformedInputError(
                f"{source_name}:{header_idx + 1}: expected a vertex count, got {header!r}"
            ) from e
        if n < 0:
            raise MalformedInputError(f"{source_name}:{header_idx + 1}: vertex count must be >= 0 (got {n})")
        if n == 0:
            break

        graph_num = len(graphs) + 1
        matrix: List[List[int]] = []
        for row in range(n):
            row_idx = next_content_line()
            if row_idx is None:
                raise MalformedInputError(
                    f"{source_name}: graph {graph_num} is missing row {row} (expected {n} rows)"
                )
            toks = lines[row_idx].split()
            if len(toks) != n:
                raise MalformedInputError(
                    f"{source_name}:{row_idx + 1}: expected {n} columns, got {len(toks)}"
                )
            values: List[int] = []
            for col, tok in enumerate(toks):
                if tok.upper() == "X":
                    if col != row:
                        raise MalformedInputError(
                            f"{source_name}:{row_idx + 1}: 'X' is only allowed on the diagonal (column {col})"
                        )
                    values.append(0)
                elif tok in {"0", "1"}:
                    values.append(int(tok))
                else:
                    raise MalformedInputError(
                        f"{source_name}:{row_idx + 1}: expected 0 or 1 at column {col}, got {tok!r}"
                    )
            matrix.append(values)

        graphs.append(Graph(matrix, label=str(graph_num)))

    logger.debug("Parsed %d graph(s) from %s", len(graphs), source_name)
    return graphs


def parse_formula_line(line: str, *, where: str = "<line>") -> Formula:
    toks = line.split()
    if len(toks) % CLAUSE_WIDTH != 0:
        raise MalformedInputError(
            f"{where}: {len(toks)} literals is not a multiple of {CLAUSE_WIDTH}"
        )
    try:
        literals = [int(t) for t in toks]
    except ValueError as e:
        raise MalformedInputError(f"{where}: literals must be integers ({e})") from e

    formula = Formula()
    for start in range(0, len(literals), CLAUSE_WIDTH):
        clause = literals[start : start + CLAUSE_WIDTH]
        if 0 in clause:
            raise MalformedInputError(f"{where}: literal 0 is not allowed (clause {start // CLAUSE_WIDTH + 1})")
        formula.add_clause(clause)
    return formula


def parse_formulas(text: str, *, source_name: str = "<text>") -> List[Formula]:
    """Parse one 3-CNF formula per non-blank line."""
    formulas: List[Formula] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        raw = line.strip()
        if not raw or _is_comment(raw):
            continue
        formulas.append(parse_formula_line(raw, where=f"{source_name}:{lineno}"))
    logger.debug("Parsed %d formula(s) from %s", len(formulas), source_name)
    return formulas


def read_graphs(path: str | Path) -> List[Graph]:
    path = Path(path)
    return parse_graphs(path.read_text(encoding="utf-8"), source_name=str(path))


def read_formulas(path: str | Path) -> List[Formula]:
    path = Path(path)
    return parse_formulas(path.read_text(encoding="utf-8"), source_name=str(path))

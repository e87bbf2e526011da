from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

VertexId = int


class MalformedGraphError(ValueError):
    pass


class Color(Enum):
    """The three colors available to a coloring, in trial order."""

    GREEN = "G"
    BLUE = "B"
    RED = "R"

    @property
    def short(self) -> str:
        return self.value


COLORS: Tuple[Color, ...] = tuple(Color)

VertexColoring = List[Color]


class Graph:
    """A simple undirected graph over vertices ``0..num_vertices-1``.

    The structure is fixed at construction. Colorings live outside the graph
    and are owned by whoever runs a search over it; ``label`` is only used
    when rendering reports.
    """

    def __init__(self, adjacency: Sequence[Sequence[int | bool]], *, label: Optional[str] = None) -> None:
        n = len(adjacency)
        rows: List[Tuple[bool, ...]] = []
        for i, row in enumerate(adjacency):
            if len(row) != n:
                raise MalformedGraphError(f"Adjacency matrix is not square: row {i} has {len(row)} entries, expected {n}")
            parsed: List[bool] = []
            for j, val in enumerate(row):
                if val not in (0, 1):
                    raise MalformedGraphError(f"Invalid adjacency entry {val!r} at row {i}, column {j} (expected 0 or 1)")
                parsed.append(bool(val))
            rows.append(tuple(parsed))

        for i in range(n):
            if rows[i][i]:
                raise MalformedGraphError(f"Self-loops are not supported (vertex {i})")
            for j in range(i + 1, n):
                if rows[i][j] != rows[j][i]:
                    raise MalformedGraphError(f"Adjacency matrix is not symmetric at ({i}, {j})")

        self.label = label
        self._rows: Tuple[Tuple[bool, ...], ...] = tuple(rows)
        self._adj: Tuple[Tuple[VertexId, ...], ...] = tuple(
            tuple(j for j in range(n) if rows[i][j]) for i in range(n)
        )
        self.num_vertices = n
        self.num_edges = sum(len(nbs) for nbs in self._adj) // 2

    @classmethod
    def from_edges(
        cls,
        num_vertices: int,
        edges: Iterable[Tuple[VertexId, VertexId]],
        *,
        label: Optional[str] = None,
    ) -> "Graph":
        if num_vertices < 0:
            raise MalformedGraphError(f"Vertex count must be >= 0 (got {num_vertices})")
        matrix = [[0] * num_vertices for _ in range(num_vertices)]
        for u, v in edges:
            if not (0 <= u < num_vertices and 0 <= v < num_vertices):
                raise MalformedGraphError(f"Edge ({u}, {v}) has an endpoint outside 0..{num_vertices - 1}")
            if u == v:
                raise MalformedGraphError(f"Self-loops are not supported (vertex {u})")
            matrix[u][v] = 1
            matrix[v][u] = 1
        return cls(matrix, label=label)

    def adjacent(self, u: VertexId, v: VertexId) -> bool:
        return self._rows[u][v]

    def neighbors(self, v: VertexId) -> Tuple[VertexId, ...]:
        return self._adj[v]

    def degree(self, v: VertexId) -> int:
        return len(self._adj[v])

    def edges(self) -> Iterator[Tuple[VertexId, VertexId]]:
        """Yield undirected edges once (u < v), in ascending order."""
        for u, nbs in enumerate(self._adj):
            for v in nbs:
                if u < v:
                    yield (u, v)

    def adjacency_matrix(self) -> List[List[int]]:
        return [[int(x) for x in row] for row in self._rows]

    def is_proper_coloring(self, coloring: Sequence[Optional[Color]]) -> bool:
        if len(coloring) != self.num_vertices:
            return False
        if any(c is None for c in coloring):
            return False
        return all(coloring[u] != coloring[v] for u, v in self.edges())

    def __len__(self) -> int:
        return self.num_vertices

    def __repr__(self) -> str:
        return f"Graph(label={self.label!r}, num_vertices={self.num_vertices}, num_edges={self.num_edges})"

    def to_networkx(self):
        """Convert to a networkx.Graph for ad-hoc experimentation."""
        import networkx as nx

        g = nx.Graph()
        g.add_nodes_from(range(self.num_vertices))
        g.add_edges_from(self.edges())
        return g

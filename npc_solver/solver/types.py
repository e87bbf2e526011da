from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, Optional, TypeVar

SolverName = Literal["dfs", "z3"]

W = TypeVar("W")


@dataclass
class Decision(Generic[W]):
    """A verdict plus how long it took; ``witness`` is None for a negative verdict."""

    witness: Optional[W]
    elapsed_ms: float

    @property
    def positive(self) -> bool:
        return self.witness is not None

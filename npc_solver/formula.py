from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

Assignment = Dict[int, bool]

CLAUSE_WIDTH = 3


class MalformedFormulaError(ValueError):
    pass


def literal_value(literal: int, assignment: Mapping[int, bool]) -> bool:
    """Truth value of a signed literal under ``assignment``."""
    var = abs(literal)
    try:
        value = assignment[var]
    except KeyError as e:
        raise MalformedFormulaError(f"Assignment has no value for variable {var}") from e
    return (not value) if literal < 0 else bool(value)


@dataclass(frozen=True)
class Clause:
    """Exactly three signed literals; ``-v`` is the negation of variable ``v``."""

    literals: Tuple[int, int, int]

    def __post_init__(self) -> None:
        for x in self.literals:
            if isinstance(x, bool) or not isinstance(x, numbers.Integral):
                raise MalformedFormulaError(f"Literal {x!r} is not an integer")
        lits = tuple(int(x) for x in self.literals)
        if len(lits) != CLAUSE_WIDTH:
            raise MalformedFormulaError(f"A clause needs exactly {CLAUSE_WIDTH} literals (got {len(lits)})")
        if any(x == 0 for x in lits):
            raise MalformedFormulaError(f"Literal 0 is not allowed in clause {lits}")
        object.__setattr__(self, "literals", lits)

    @property
    def variables(self) -> Tuple[int, int, int]:
        return tuple(abs(x) for x in self.literals)  # type: ignore[return-value]

    def evaluate(self, assignment: Mapping[int, bool]) -> Tuple[bool, bool, bool]:
        # Repeated variables are evaluated once per position.
        return tuple(literal_value(x, assignment) for x in self.literals)  # type: ignore[return-value]

    def is_nae_satisfied(self, assignment: Mapping[int, bool]) -> bool:
        values = self.evaluate(assignment)
        return any(values) and not all(values)

    def __iter__(self):
        return iter(self.literals)

    def __str__(self) -> str:
        return "(" + "|".join(f"{x}" if x < 0 else f" {x}" for x in self.literals) + ")"


@dataclass
class Formula:
    """A 3-CNF formula over variables ``1..num_literals``.

    Clauses are appended in order; ``num_literals`` grows to the largest
    variable seen. It may also be raised explicitly with ``grow_to``.
    Passing ``num_literals`` to the constructor declares it up front, in
    which case ``validate`` reports clauses that exceed it.
    """

    clauses: List[Clause] = field(default_factory=list)
    num_literals: Optional[int] = None

    def __post_init__(self) -> None:
        self.clauses = [c if isinstance(c, Clause) else Clause(tuple(c)) for c in self.clauses]
        if self.num_literals is None:
            self.num_literals = max((max(c.variables) for c in self.clauses), default=0)
        elif self.num_literals < 0:
            raise MalformedFormulaError(f"num_literals must be >= 0 (got {self.num_literals})")

    @classmethod
    def from_clauses(cls, clauses: Iterable[Sequence[int]]) -> "Formula":
        formula = cls()
        for lits in clauses:
            formula.add_clause(lits)
        return formula

    @property
    def num_clauses(self) -> int:
        return len(self.clauses)

    def add_clause(self, literals: Sequence[int]) -> Clause:
        clause = Clause(tuple(literals))
        self.clauses.append(clause)
        self.grow_to(max(clause.variables))
        return clause

    def grow_to(self, num_literals: int) -> None:
        if num_literals > self.num_literals:
            self.num_literals = num_literals

    def variables(self) -> range:
        return range(1, self.num_literals + 1)

    def validate(self) -> None:
        for idx, clause in enumerate(self.clauses):
            for lit in clause:
                if abs(lit) > self.num_literals:
                    raise MalformedFormulaError(
                        f"Clause {idx} literal {lit} is out of range 1..{self.num_literals}"
                    )

    def evaluate(self, assignment: Mapping[int, bool]) -> List[Tuple[bool, bool, bool]]:
        return [c.evaluate(assignment) for c in self.clauses]

    def is_nae_satisfied(self, assignment: Mapping[int, bool]) -> bool:
        return all(c.is_nae_satisfied(assignment) for c in self.clauses)

    def __str__(self) -> str:
        return "^".join(str(c) for c in self.clauses)

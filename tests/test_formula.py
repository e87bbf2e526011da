from __future__ import annotations

import pytest

from npc_solver.formula import Clause, Formula, MalformedFormulaError, literal_value


class TestClause:
    def test_requires_three_literals(self):
        with pytest.raises(MalformedFormulaError, match="exactly 3"):
            Clause((1, 2))

    def test_rejects_zero(self):
        with pytest.raises(MalformedFormulaError, match="Literal 0"):
            Clause((1, 0, 2))

    @pytest.mark.parametrize("bad", [1.7, 2.0, "1", True])
    def test_rejects_non_integer_literals(self, bad):
        with pytest.raises(MalformedFormulaError, match="not an integer"):
            Clause((bad, 2, 3))

    def test_add_clause_rejects_fractional_literal(self):
        f = Formula()
        with pytest.raises(MalformedFormulaError):
            f.add_clause([1, 2.5, 3])
        assert f.num_clauses == 0

    def test_evaluate_applies_signs(self):
        clause = Clause((1, -2, 3))
        assert clause.evaluate({1: True, 2: True, 3: False}) == (True, False, False)

    def test_nae_mixed(self):
        assert Clause((1, 2, 3)).is_nae_satisfied({1: True, 2: True, 3: False})

    def test_nae_all_true_or_all_false(self):
        clause = Clause((1, 2, 3))
        assert not clause.is_nae_satisfied({1: True, 2: True, 3: True})
        assert not clause.is_nae_satisfied({1: False, 2: False, 3: False})

    def test_repeated_literal_is_not_collapsed(self):
        clause = Clause((1, 1, 1))
        assert not clause.is_nae_satisfied({1: True})
        assert not clause.is_nae_satisfied({1: False})

    def test_variable_and_its_negation(self):
        clause = Clause((1, -1, 1))
        assert clause.is_nae_satisfied({1: True})
        assert clause.is_nae_satisfied({1: False})

    def test_str(self):
        assert str(Clause((1, -2, 13))) == "( 1|-2| 13)"


class TestFormula:
    def test_empty(self):
        f = Formula()
        assert f.num_literals == 0
        assert f.num_clauses == 0
        assert f.is_nae_satisfied({})

    def test_add_clause_grows_num_literals(self):
        f = Formula()
        f.add_clause([1, -2, 3])
        assert f.num_literals == 3
        f.add_clause([-5, 1, 2])
        assert f.num_literals == 5
        assert f.num_clauses == 2
        assert list(f.variables()) == [1, 2, 3, 4, 5]

    def test_grow_to_never_shrinks(self):
        f = Formula.from_clauses([[1, 2, 3]])
        f.grow_to(6)
        assert f.num_literals == 6
        f.grow_to(2)
        assert f.num_literals == 6

    def test_constructor_derives_num_literals(self):
        f = Formula([[1, 2, -4]])
        assert f.num_literals == 4
        assert isinstance(f.clauses[0], Clause)

    def test_declared_num_literals_is_validated(self):
        f = Formula([[1, 2, -4]], num_literals=3)
        with pytest.raises(MalformedFormulaError, match="out of range"):
            f.validate()

    def test_missing_variable_in_assignment(self):
        f = Formula.from_clauses([[1, 2, 3]])
        with pytest.raises(MalformedFormulaError, match="variable 3"):
            f.is_nae_satisfied({1: True, 2: False})

    def test_evaluate(self):
        f = Formula.from_clauses([[1, 2, 3], [-1, -2, -3]])
        assert f.evaluate({1: True, 2: False, 3: False}) == [(True, False, False), (False, True, True)]
        assert f.is_nae_satisfied({1: True, 2: False, 3: False})

    def test_str(self):
        f = Formula.from_clauses([[1, 2, 3], [-1, 2, -3]])
        assert str(f) == "( 1| 2| 3)^(-1| 2|-3)"


def test_literal_value():
    assert literal_value(2, {2: True}) is True
    assert literal_value(-2, {2: True}) is False

"""
Tests for evaluating trees against a scope.
"""

import pytest

from ComplexCalc.ComplexNumber import I, PI, ComplexNumber
from ComplexCalc import MathEngine
from ComplexCalc import ScientificEngine as SE
from ComplexCalc.MathEngine import BinOp, Constant, Number, eval_complex, evaluate, parse
from ComplexCalc.error import CalculationError, ParseError, UnboundVariableError, UnknownConstantError


class TestEvalComplex:
    """Parse and evaluate in one go."""

    @pytest.mark.parametrize("source, expected", [
        ("2+3*4", 14),
        ("2(3+4)", 14),
        ("8/2/2", 2),
        ("2^3^2", 512),
        ("-2^2", 4),
        ("i^2", -1),
        ("(1+2i)(3-i)", ComplexNumber.create(5, 5)),
        ("2 3", 6),
    ])
    def test_values(self, source, expected):
        assert eval_complex(source) == expected

    def test_constants(self):
        assert eval_complex("π") is PI
        assert eval_complex("i") is I

    def test_variables_from_scope(self):
        assert eval_complex("2x", {"x": 3}) == 6
        assert eval_complex("xi", {"x": 2}) == ComplexNumber.create(0, 2)
        assert eval_complex("xy", {"x": 2, "y": 4}) == 8

    def test_variable_returns_its_binding(self):
        value = ComplexNumber.create(1.5, -2)
        assert evaluate(parse("x"), {"x": value}) == value

    @pytest.mark.parametrize("a, b", [(1, 2), (0.1, 0.2), (2.5, 7)])
    def test_sum_matches_add(self, a, b):
        assert eval_complex(f"{a}+{b}") == SE.add(a, b)

    def test_zero_is_a_valid_binding(self):
        assert eval_complex("x + 1", {"x": 0}) == 1

    def test_list_binding_is_lifted(self):
        assert eval_complex("x + 1", {"x": [1, 2]}) == [2, 3]


class TestEvaluateErrors:
    """Evaluation failures carry their codes."""

    def test_unbound_variable(self):
        with pytest.raises(UnboundVariableError) as excinfo:
            eval_complex("y + 1")
        assert excinfo.value.code == "3034"

    def test_none_counts_as_unbound(self):
        with pytest.raises(UnboundVariableError):
            eval_complex("y", {"y": None})

    def test_division_by_zero(self):
        with pytest.raises(CalculationError) as excinfo:
            eval_complex("1/(2-2)")
        assert excinfo.value.code == "3003"

    def test_unknown_constant(self):
        with pytest.raises(UnknownConstantError) as excinfo:
            Constant("q").evaluate({})
        assert excinfo.value.code == "3035"

    def test_unknown_operator(self):
        with pytest.raises(CalculationError) as excinfo:
            BinOp(Number(I), "%", Number(I)).evaluate({})
        assert excinfo.value.code == "3004"

    def test_not_a_node(self):
        with pytest.raises(CalculationError) as excinfo:
            evaluate("2+2", {})
        assert excinfo.value.code == "3036"

    def test_long_sum_fails_cleanly(self):
        with pytest.raises(ParseError) as excinfo:
            eval_complex("+".join(["1"] * 1500))
        assert excinfo.value.code == "3033"

    def test_deep_tree_fails_cleanly(self, monkeypatch):
        tree = Number(ComplexNumber.create(1))
        for _ in range(5000):
            tree = BinOp(tree, "+", Number(ComplexNumber.create(1)))
        monkeypatch.setattr(MathEngine, "parse", lambda source: tree)

        with pytest.raises(CalculationError) as excinfo:
            eval_complex("ignored")
        assert excinfo.value.code == "3033"


# =============================================================================
# Plus-minus
# =============================================================================


class TestPlusMinus:
    """'±' yields both the sum and the difference."""

    def test_both_values(self):
        tree = BinOp(Number(ComplexNumber.create(5)), "±", Number(ComplexNumber.create(2)))
        assert tree.evaluate({}) == [7, 3]

    def test_equal_values_are_deduplicated(self):
        tree = BinOp(Number(ComplexNumber.create(5)), "±", Number(ComplexNumber.create(0)))
        assert tree.evaluate({}) == [5]

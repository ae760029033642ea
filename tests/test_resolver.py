"""
Tests for the equation resolver (Cas.resolve).
"""

import pytest

from ComplexCalc import ScientificEngine as SE
from ComplexCalc.Cas import has_variable, resolve, resolve_equation
from ComplexCalc.ComplexNumber import PI, ComplexNumber
from ComplexCalc.MathEngine import BinOp, Number, Variable, parse
from ComplexCalc.error import EquationShapeError, ParseError, SolverError


# =============================================================================
# Linear and simple non-linear equations
# =============================================================================


class TestResolve:
    """Isolating the variable operator by operator."""

    @pytest.mark.parametrize("source, expected", [
        ("x=5", 5),
        ("5=x", 5),
        ("x+2=5", 3),
        ("5=x+1", 4),
        ("2x=10", 5),
        ("2x+4=10", 3),
        ("x/2=3", 6),
        ("(x+1)/2=3", 5),
        ("1/x=4", 0.25),
        ("10-x=4", 6),
        ("x-3=4", 7),
        ("2^x=8", 3),
        ("3(x-1)=9", 4),
    ])
    def test_single_solution(self, source, expected):
        assert resolve(source)["x"] == expected

    def test_complex_solution(self):
        assert resolve("x-3=i")["x"] == ComplexNumber.create(3, 1)
        assert resolve("ix=2")["x"] == ComplexNumber.create(0, -2)

    def test_variable_in_denominator_with_complex_right_side(self):
        assert resolve("4/x=1+i")["x"] == ComplexNumber.create(2, -2)
        assert resolve("2/x=3i")["x"] == ComplexNumber.create(0, -2 / 3)

    def test_constant_exponent(self):
        assert resolve("x^π=2")["x"] == SE.power(2, SE.divide(1, PI))

    def test_plus_minus_gives_both_solutions(self):
        left = BinOp(Variable("x"), "±", Number(ComplexNumber.create(2)))
        scope = resolve_equation(left, Number(ComplexNumber.create(5)), {})
        assert scope["x"] == [7, 3]

    def test_plus_minus_with_variable_on_the_right(self):
        left = BinOp(Number(ComplexNumber.create(2)), "±", Variable("x"))
        scope = resolve_equation(left, Number(ComplexNumber.create(5)), {})
        assert scope["x"] == [3, -3]

    def test_all_square_roots(self):
        assert resolve("x^2=4")["x"] == [2, -2]
        assert resolve("x^2=-4")["x"] == [ComplexNumber.create(0, 2), ComplexNumber.create(0, -2)]

    def test_expression_without_equals(self):
        assert resolve("2+3") == 5

    def test_scope_is_filled_in_place(self):
        scope = {}
        assert resolve("x=3", scope) is scope
        resolve("x+y=5", scope)
        assert scope == {"x": 3, "y": 2}

    def test_bound_variable_is_used(self):
        assert resolve("2x", {"x": 4}) == 8


# =============================================================================
# Shape errors
# =============================================================================


class TestResolveErrors:
    """Equations that cannot be resolved."""

    def test_more_than_one_equals(self):
        with pytest.raises(EquationShapeError) as excinfo:
            resolve("x=1=2")
        assert excinfo.value.code == "3012"

    @pytest.mark.parametrize("source", ["x=y", "2=3", "x+1=x", "0x=5"])
    def test_exactly_one_side_needs_a_variable(self, source):
        with pytest.raises(EquationShapeError) as excinfo:
            resolve(source)
        assert excinfo.value.code == "3037"

    @pytest.mark.parametrize("source", ["xy=2", "x+x=2", "x^x=4"])
    def test_non_linear(self, source):
        with pytest.raises(SolverError) as excinfo:
            resolve(source)
        assert excinfo.value.code == "3005"


class TestHasVariable:
    """Variable detection anywhere in a tree."""

    def test_nested(self):
        assert has_variable(parse("2(3+x)^2"))
        assert not has_variable(parse("2(3+i)^2"))

    def test_long_sum_fails_cleanly(self):
        with pytest.raises(ParseError) as excinfo:
            resolve("+".join(["1"] * 1500))
        assert excinfo.value.code == "3033"

    def test_moderate_sum(self):
        assert resolve("+".join(["1"] * 50)) == 50

"""
Tests for ScientificEngine: complex primitives, roots and list lifting.
"""

import pytest

from ComplexCalc import ScientificEngine as SE
from ComplexCalc.ComplexNumber import I, PI, ZERO, ComplexNumber
from ComplexCalc.error import CalculationError


# =============================================================================
# Arithmetic primitives
# =============================================================================


class TestArithmetic:
    """add / subtract / multiply / divide / power on complex values."""

    def test_basic_operations(self):
        assert SE.add(0.1, 0.2) == 0.3
        assert SE.subtract(ComplexNumber.create(3, 2), I) == ComplexNumber.create(3, 1)
        assert SE.multiply(I, I) == -1
        assert SE.divide(1, 4) == 0.25
        assert SE.negative(ComplexNumber.create(1, -1)) == ComplexNumber.create(-1, 1)

    def test_division_by_zero(self):
        with pytest.raises(CalculationError) as excinfo:
            SE.divide(1, 0)
        assert excinfo.value.code == "3003"

    def test_integer_power_is_exact(self):
        assert SE.power(2, 9) == 512
        assert SE.power(I, 2) == -1

    def test_zero_to_negative_power(self):
        with pytest.raises(CalculationError) as excinfo:
            SE.power(0, -1)
        assert excinfo.value.code == "3003"

    def test_principal_square_root(self):
        assert SE.square(9) == 3

    def test_plus_minus(self):
        assert SE.plus_minus(5, 2) == [7, 3]


class TestTranscendental:
    """exp / log / trigonometry."""

    def test_euler_identity(self):
        assert SE.exp(SE.multiply(I, PI)) == -1

    def test_log(self):
        assert SE.log(1) is ZERO
        with pytest.raises(CalculationError) as excinfo:
            SE.log(0)
        assert excinfo.value.code == "2002"

    def test_trigonometry_snaps_noise(self):
        assert SE.sin(PI) is ZERO
        assert SE.cos(PI) == -1
        assert SE.tan(0) is ZERO


class TestComparison:
    """equals / is_int / polar form."""

    def test_equals(self):
        assert SE.equals(0.1 + 0.2, 0.3)
        assert not SE.equals(I, 1)

    def test_is_int(self):
        assert SE.is_int(3)
        assert not SE.is_int(2.5)
        assert not SE.is_int(I)

    def test_polar_round_trip(self):
        polar = SE.polar_from(I)
        assert polar.magnitude == 1
        assert polar.to_complex_number() is I


# =============================================================================
# Multi-valued helpers
# =============================================================================


class TestSquareMultidata:
    """All n-th roots, in order of k."""

    def test_square_roots_of_four(self):
        assert SE.square_multidata(4, 2) == [2, -2]

    def test_square_roots_of_negative_four(self):
        assert SE.square_multidata(-4, 2) == [ComplexNumber.create(0, 2), ComplexNumber.create(0, -2)]

    def test_fourth_roots_of_one(self):
        assert SE.square_multidata(1, 4) == [1, I, -1, ComplexNumber.create(0, -1)]

    def test_cube_roots_count(self):
        roots = SE.square_multidata(8, 3)
        assert len(roots) == 3
        assert roots[0] == 2

    def test_non_integer_index_stops_at_first_repeat(self):
        assert SE.square_multidata(2, 0.5) == [4]


class TestMultiNumberFunction:
    """Lifting a binary function over lists."""

    def test_single_values_give_a_list(self):
        assert SE.multi_number_function(SE.add)(1, 2) == [3]

    def test_cartesian_product_without_duplicates(self):
        assert SE.multi_number_function(SE.add)([1, 2], [2, 1]) == [3, 2, 4]

    def test_list_results_are_flattened(self):
        assert SE.multi_number_function(SE.plus_minus)(5, [1, 1]) == [6, 4]


# =============================================================================
# Rounding, ordering and part access
# =============================================================================


class TestRounding:
    """floor / round_number / modulo work part-wise."""

    def test_floor(self):
        assert SE.floor(ComplexNumber.create(2.5, -1.5)) == ComplexNumber.create(2, -2)

    def test_round_number(self):
        assert SE.round_number(ComplexNumber.create(1.234, 5.678), 1) == ComplexNumber.create(1.2, 5.7)
        assert SE.round_number(2.4) == 2

    def test_modulo(self):
        assert SE.modulo(7, 3) == 1
        assert SE.modulo(-7, 3) == 2

    def test_modulo_by_zero(self):
        with pytest.raises(CalculationError):
            SE.modulo(1, 0)


class TestReciprocalTrigonometry:
    """cot / sec / csc."""

    def test_values(self):
        assert SE.sec(0) == 1
        assert SE.csc(SE.divide(PI, 2)) == 1
        assert SE.cot(SE.divide(PI, 4)) == 1

    def test_cot_of_zero(self):
        with pytest.raises(CalculationError) as excinfo:
            SE.cot(0)
        assert excinfo.value.code == "3003"


class TestOrdering:
    """Real part first, imaginary part breaks ties."""

    def test_less_and_greater(self):
        assert SE.less_than(1, 2)
        assert SE.less_than(I, 1)
        assert not SE.less_than(ComplexNumber.create(1, 1), 1)
        assert SE.greater_than(ComplexNumber.create(1, 1), 1)

    def test_or_equal(self):
        assert SE.less_than_or_equal(2, 2)
        assert SE.greater_than_or_equal(I, I)
        assert not SE.greater_than_or_equal(1, 2)

    def test_parts(self):
        assert SE.get_real(ComplexNumber.create(3, 4)) == 3.0
        assert SE.get_imaginary(ComplexNumber.create(3, 4)) == 4.0
        assert SE.get_imaginary(5) == 0.0

# ScientificEngine
"""""
Complex arithmetic primitives used by MathEngine and Cas.

Every function takes real numbers or ComplexNumber values and returns a normalized
ComplexNumber (or a list of them for the multi-valued helpers).
Python's complex type does the float work; ComplexNumber.create snaps the result.
"""""

import cmath
import math

from . import error as E
from .ComplexNumber import ComplexNumber, I, PI


MAX_ROOTS = 100  # hard cap for square_multidata on non-integer indices


def _complex(x):
    return ComplexNumber.from_value(x).to_complex()


def _result(value):
    return ComplexNumber.create(value.real, value.imag)


def absolute(x):
    return abs(_complex(x))


def add(x, y):
    return _result(_complex(x) + _complex(y))


def subtract(x, y):
    return _result(_complex(x) - _complex(y))


def multiply(x, y):
    return _result(_complex(x) * _complex(y))


def divide(x, y):
    numerator = _complex(x)
    denominator = _complex(y)
    if denominator == 0:
        raise E.CalculationError("Division by zero", code="3003")
    return _result(numerator / denominator)


def negative(x):
    return _result(-_complex(x))


def plus_minus(x, y):
    """Return [x + y, x - y]."""
    return [add(x, y), subtract(x, y)]


def power(base, exponent=2):
    base = _complex(base)
    exponent = _complex(exponent)
    if base == 0 and (exponent.real < 0 or exponent.imag != 0):
        raise E.CalculationError("Division by zero", code="3003")
    try:
        return _result(base ** exponent)
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")


def square(x, y=2):
    """Principal y-th root of x."""
    return power(x, divide(1, y))


def exp(x):
    try:
        return _result(cmath.exp(_complex(x)))
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")


def log(x):
    value = _complex(x)
    if value == 0:
        raise E.CalculationError("Logarithm of zero.", code="2002")
    return _result(cmath.log(value))


def sin(x):
    try:
        return _result(cmath.sin(_complex(x)))
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")


def cos(x):
    try:
        return _result(cmath.cos(_complex(x)))
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")


def tan(x):
    return divide(sin(x), cos(x))


def cot(x):
    return divide(cos(x), sin(x))


def sec(x):
    return divide(1, cos(x))


def csc(x):
    return divide(1, sin(x))


def modulo(x, y):
    """Remainder of x / y, using the part-wise floor of the quotient."""
    return subtract(x, multiply(floor(divide(x, y)), y))


def floor(x):
    x = ComplexNumber.from_value(x)
    if not (math.isfinite(x.real) and math.isfinite(x.imaginary)):
        return x
    return ComplexNumber.create(math.floor(x.real), math.floor(x.imaginary))


def round_number(x, decimal_places=0):
    """Round real and imaginary part separately; a complex decimal_places uses its real part."""
    x = ComplexNumber.from_value(x)
    decimal_places = int(ComplexNumber.from_value(decimal_places).real)
    return ComplexNumber.create(round(x.real, decimal_places), round(x.imaginary, decimal_places))


def get_real(x):
    return ComplexNumber.from_value(x).real


def get_imaginary(x):
    return ComplexNumber.from_value(x).imaginary


def equals(x, y):
    """Exact field comparison; the epsilon snapping already happened in ComplexNumber.create."""
    x = ComplexNumber.from_value(x)
    y = ComplexNumber.from_value(y)
    return x.real == y.real and x.imaginary == y.imaginary


# Ordering: real part first, imaginary part breaks ties
def less_than(x, y):
    x = ComplexNumber.from_value(x)
    y = ComplexNumber.from_value(y)
    return x.real < y.real or (x.real == y.real and x.imaginary < y.imaginary)


def less_than_or_equal(x, y):
    return less_than(x, y) or equals(x, y)


def greater_than(x, y):
    return less_than(y, x)


def greater_than_or_equal(x, y):
    return less_than(y, x) or equals(x, y)


def is_int(x):
    x = ComplexNumber.from_value(x)
    return math.isfinite(x.real) and x.real == int(x.real) and x.imaginary == 0


class Polar:
    """Complex value in polar form, angle in radians."""
    def __init__(self, magnitude, angle):
        self.magnitude = magnitude
        self.angle = angle

    def to_complex_number(self):
        return _result(cmath.rect(self.magnitude, self.angle))

    def __repr__(self):
        return f"Polar({self.magnitude!r}, {self.angle!r})"


def polar_from(value):
    magnitude, angle = cmath.polar(_complex(value))
    return Polar(magnitude, angle)


def square_multidata(base, index=2):
    """Return the distinct index-th roots of base, in order of k = 0, 1, 2, ...

    Stops at the first candidate that exactly equals a root already found.
    A positive integer index never yields more than index roots; any other
    index is capped at MAX_ROOTS candidates.
    """
    index = ComplexNumber.from_value(index)
    if is_int(index) and index.real > 0:
        limit = min(int(index.real), MAX_ROOTS)
    else:
        limit = MAX_ROOTS

    polar_base = polar_from(base)
    r_n = power(polar_base.magnitude, divide(1, index))

    data = []
    for k in range(limit):
        angle = divide(polar_base.angle + 2 * PI.real * k, index)
        cis = add(cos(angle), multiply(I, sin(angle)))
        value = multiply(r_n, cis)
        if any(equals(found, value) for found in data):
            break
        data.append(value)

    return data


def multi_number_function(fn):
    """Lift fn(x, y) over single values or lists of values.

    The result is always a list: every combination of x and y, with exact
    duplicates dropped. fn may itself return a list.
    """
    def wrapper(x, y):
        x_values = x if isinstance(x, (list, tuple)) else [x]
        y_values = y if isinstance(y, (list, tuple)) else [y]
        result = []
        for x_value in x_values:
            for y_value in y_values:
                fn_result = fn(x_value, y_value)
                items = fn_result if isinstance(fn_result, list) else [fn_result]
                for item in items:
                    if not any(equals(value, item) for value in result):
                        result.append(item)
        return result

    return wrapper

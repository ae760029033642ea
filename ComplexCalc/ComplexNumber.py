# ComplexNumber.py
"""""
Value type of the calculator: an immutable (real, imaginary) pair of floats.

Every value is normalized on construction:
- parts smaller than EPSILON snap to exactly 0
- parts that already agree at half precision are rounded, so 0.1+0.2 becomes 0.3
- NaN and infinite parts collapse into the matching canonical constant
"""""

import math

from .error import InvalidValueError

PRECISION = 14
MIDDLE_PRECISION = round(PRECISION / 2)
EPSILON = float(f"1e-{PRECISION}")


def normalize_part(value):
    """Snap float noise in one component (see module docstring)."""
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return value
    if abs(value) < EPSILON:
        return 0.0

    # Same number at 14 and at 7 significant digits -> the tail is noise
    if float(f"{value:.{PRECISION}g}") == float(f"{value:.{MIDDLE_PRECISION}g}"):
        value = round(value, PRECISION - 2)

    if value == 0:
        return 0.0
    return value


class ComplexNumber:
    """Normalized complex value. Use ComplexNumber.create / from_value, not the constructor."""

    __slots__ = ("real", "imaginary")

    def __init__(self, real=0.0, imaginary=0.0):
        object.__setattr__(self, "real", float(real))
        object.__setattr__(self, "imaginary", float(imaginary))

    def __setattr__(self, name, value):
        raise AttributeError("ComplexNumber is immutable")

    @staticmethod
    def create(real, imaginary=0.0):
        real = normalize_part(real)
        imaginary = normalize_part(imaginary)

        if math.isnan(real) or math.isnan(imaginary):
            return NAN
        if real == math.inf or imaginary == math.inf:
            return INFINITY
        if real == -math.inf or imaginary == -math.inf:
            return NEGATIVE_INFINITY

        for constant in _CANONICAL:
            if constant.real == real and constant.imaginary == imaginary:
                return constant

        return ComplexNumber(real, imaginary)

    @staticmethod
    def from_value(value, imaginary=0.0):
        """Build a ComplexNumber from int, float, complex or ComplexNumber."""
        if isinstance(value, ComplexNumber):
            return ComplexNumber.create(value.real, value.imaginary)
        if isinstance(value, complex):
            return ComplexNumber.create(value.real, value.imag)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return ComplexNumber.create(value, imaginary)
        raise InvalidValueError(f"Invalid value: {value!r}", code="3031")

    def to_complex(self):
        return complex(self.real, self.imaginary)

    def is_nan(self):
        return math.isnan(self.real) or math.isnan(self.imaginary)

    def __iter__(self):
        yield self.real
        yield self.imaginary

    def __eq__(self, other):
        if isinstance(other, ComplexNumber):
            return self.real == other.real and self.imaginary == other.imaginary
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.real == other and self.imaginary == 0
        if isinstance(other, complex):
            return self.real == other.real and self.imaginary == other.imag
        return NotImplemented

    def __hash__(self):
        # Same hash as the equal int / float / complex
        return hash(self.to_complex())

    def __repr__(self):
        return f"ComplexNumber({self.real!r}, {self.imaginary!r})"

    def __str__(self):
        real = _render_part(self.real)
        if self.imaginary == 0:
            return real
        if abs(self.imaginary) == 1:
            imaginary = "i"
        else:
            imaginary = _render_part(abs(self.imaginary)) + "i"

        if self.real == 0:
            return ("-" if self.imaginary < 0 else "") + imaginary
        return real + ("-" if self.imaginary < 0 else "+") + imaginary


def _render_part(value):
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


# Canonical values, created once at import
ZERO = ComplexNumber(0.0)
ONE = ComplexNumber(1.0)
TWO = ComplexNumber(2.0)
E = ComplexNumber(math.e)
PI = ComplexNumber(math.pi)
I = ComplexNumber(0.0, 1.0)
ONE_HALF = ComplexNumber(0.5)
NAN = ComplexNumber(math.nan)
INFINITY = ComplexNumber(math.inf)
NEGATIVE_INFINITY = ComplexNumber(-math.inf)

_CANONICAL = (ZERO, ONE, TWO, E, PI, I, ONE_HALF)

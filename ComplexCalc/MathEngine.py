# MathEngine.py
"""""
Core expression engine of the complex calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens (Tokenizer.py).
2) Parser (AST): builds an expression tree (recursive-descent, precedence aware,
   implicit multiplication for '2x', 'xy', '2(x+1)', 'xi').
3) Evaluator: computes the value of a tree when every variable has a value in the scope.
4) Simplifier: folds everything the scope allows and leaves unbound variables as
   symbolic residue, applying one set of algebraic identities per operator.
5) Formatter: renders results with the configured number of decimal places.

The equation resolver on top of this lives in Cas.py.
"""""

from contextlib import contextmanager
from dataclasses import dataclass

from . import config_manager as config_manager
from . import ScientificEngine as SE
from . import error as E
from .ComplexNumber import ComplexNumber, ZERO, ONE, TWO, I, PI
from .ComplexNumber import E as EULER
from .Tokenizer import TokenType, tokenize

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True

# Letters that are constants and can never name a variable
RESERVED_NAMES = ("e", "i")
VARIABLE_NAMES = tuple(chr(c) for c in range(ord("a"), ord("z") + 1) if chr(c) not in RESERVED_NAMES)

CONSTANTS = {"i": I, "e": EULER, "π": PI}

OPEN_BRACKETS = {
    TokenType.OpenParen: TokenType.CloseParen,
    TokenType.OpenBracket: TokenType.CloseBracket,
    TokenType.OpenBrace: TokenType.CloseBrace,
}
CLOSE_BRACKETS = tuple(OPEN_BRACKETS.values())

# Tokens that start a new value; directly after a value they mean '*'
IMPLICIT_MULTIPLICATION = (
    TokenType.OpenParen,
    TokenType.OpenBracket,
    TokenType.OpenBrace,
    TokenType.Constant,
    TokenType.Variable,
    TokenType.Number,
)

DEFAULT_MAX_DEPTH = 120


def is_multiplication(token):
    """True if `token` can begin a value, i.e. '2x' / '2(x)' / 'xy' / '2i'."""
    return token is not None and token.type in IMPLICIT_MULTIPLICATION


# -----------------------------
# AST node types
# -----------------------------

@dataclass(frozen=True)
class Number:
    """AST node for a numeric literal (or a folded value)."""
    value: ComplexNumber

    def evaluate(self, scope):
        return self.value


@dataclass(frozen=True)
class Variable:
    """AST node for `coefficient * name`; the parser always creates coefficient 1."""
    name: str
    coefficient: ComplexNumber = ONE

    def evaluate(self, scope):
        value = scope.get(self.name) if scope else None
        if value is None:
            raise E.UnboundVariableError(f"Variable {self.name} not found", code="3034")
        if isinstance(value, (list, tuple)):
            return [SE.multiply(self.coefficient, item) for item in value]
        return SE.multiply(self.coefficient, value)


@dataclass(frozen=True)
class Constant:
    """AST node for one of the constants i, e, π."""
    name: str

    def evaluate(self, scope):
        if self.name in CONSTANTS:
            return CONSTANTS[self.name]
        raise E.UnknownConstantError(f"Constant {self.name} not found", code="3035")


@dataclass(frozen=True)
class BinOp:
    """AST node for a binary operation: left <operator> right."""
    left: object
    operator: str
    right: object

    def evaluate(self, scope):
        """Evaluate both subtrees and apply the operator; lists are combined element-wise."""
        left_value = self.left.evaluate(scope)
        right_value = self.right.evaluate(scope)

        function = OPERATIONS.get(self.operator)
        if function is None:
            raise E.CalculationError(f"Unknown operator: {self.operator}", code="3004")

        if isinstance(left_value, list) or isinstance(right_value, list) or self.operator == '±':
            return SE.multi_number_function(function)(left_value, right_value)
        return function(left_value, right_value)


@dataclass(frozen=True)
class ValueList:
    """AST node for a multi-valued result, e.g. both roots of x^2 = 4."""
    values: tuple

    def evaluate(self, scope):
        return list(self.values)


OPERATIONS = {
    '+': SE.add,
    '-': SE.subtract,
    '*': SE.multiply,
    '/': SE.divide,
    '^': SE.power,
    '±': SE.plus_minus,
}

NODE_TYPES = (Number, Variable, Constant, BinOp, ValueList)


# -----------------------------
# Parser (recursive descent)
# -----------------------------

class Parser:
    """Parses one expression (no '=') into an AST.

    Grammar, lowest precedence first:
        expression     := addition [implicit expression]
        addition       := multiplication (('+'|'-') multiplication)*
        multiplication := power (('*'|'/') power)* [implicit multiplication]
        power          := value ['^' power_value]
        power_value    := power [implicit multiplication]
        value          := '(' expression ')' | '[' expression ']' | '{' expression '}'
                        | constant | variable | number | '-' value

    Tokens are read through a cursor (at / eat / next); the token list is never modified.
    """

    def __init__(self, source, max_depth=None):
        self.source = source
        self.tokens = tokenize(source)
        self.cursor = 0
        self.depth = 0
        if max_depth is None:
            max_depth = config_manager.load_setting_value("max_depth") or DEFAULT_MAX_DEPTH
        self.max_depth = max_depth

        if debug == True:
            print(self.tokens)

    def at(self):
        if self.cursor < len(self.tokens):
            return self.tokens[self.cursor]
        return None

    def next(self):
        if self.cursor + 1 < len(self.tokens):
            return self.tokens[self.cursor + 1]
        return None

    def eat(self):
        token = self.at()
        if token is None:
            raise E.ParseError("Missing Number.", code="3027")
        self.cursor += 1
        return token

    def deepen(self):
        self.depth += 1
        if self.depth > self.max_depth:
            raise E.ParseError(f"Expression nested deeper than {self.max_depth} levels.", code="3033")

    @contextmanager
    def nested(self):
        """Count recursion so absurdly nested input fails cleanly instead of overflowing the stack."""
        self.deepen()
        try:
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def chained(self):
        """Count the links of a left-associative chain: 'a+b+c' is a tree two levels deep."""
        start = self.depth
        try:
            yield
        finally:
            self.depth = start

    def parse(self):
        if not self.tokens:
            raise E.ParseError("Missing Number.", code="3027")

        tree = self.parse_expression()

        token = self.at()
        if token is not None:
            if token.type in CLOSE_BRACKETS:
                raise E.ParseError(f"Missing opening bracket for '{token.value}' at position {token.position}",
                                   code="3010")
            raise E.ParseError(f"Unexpected token: '{token.value}' at position {token.position}", code="3012")

        if debug == True:
            print("Final AST:")
            print(tree)

        return tree

    def parse_expression(self):
        left = self.parse_addition()
        if is_multiplication(self.at()):
            return BinOp(left, '*', self.parse_expression())
        return left

    def parse_addition(self):
        tree = self.parse_multiplication()
        with self.chained():
            while self._at_operator('+', '-'):
                self.deepen()
                operator = self.eat().value
                right = self.parse_multiplication()
                tree = BinOp(tree, operator, right)
        return tree

    def parse_multiplication(self):
        with self.nested(), self.chained():
            tree = self.parse_power()
            while True:
                if self._at_operator('*', '/'):
                    self.deepen()
                    operator = self.eat().value
                    right = self.parse_power()
                    tree = BinOp(tree, operator, right)
                elif is_multiplication(self.at()):
                    # '2x y' -> 2 * (x * y)
                    return BinOp(tree, '*', self.parse_multiplication())
                else:
                    return tree

    def parse_power(self):
        with self.nested():
            base = self.parse_value()
            if self._at_operator('^'):
                self.eat()
                exponent = self.parse_power_value()
                return BinOp(base, '^', exponent)
            return base

    def parse_power_value(self):
        # The exponent keeps a trailing implicit factor: 2^3x == 2^(3*x)
        exponent = self.parse_power()
        if is_multiplication(self.at()):
            return BinOp(exponent, '*', self.parse_multiplication())
        return exponent

    def parse_value(self):
        with self.nested():
            token = self.at()
            if token is None:
                raise E.ParseError("Missing Number.", code="3027")

            # Bracketed sub-expression
            if token.type in OPEN_BRACKETS:
                self.eat()
                inner = self.parse_expression()
                closing = self.at()
                if closing is None or closing.type != OPEN_BRACKETS[token.type]:
                    raise E.ParseError(f"Missing closing bracket for '{token.value}' at position {token.position}",
                                       code="3009")
                self.eat()
                return inner

            if token.type == TokenType.Constant:
                self.eat()
                return Constant(token.value)

            if token.type == TokenType.Variable:
                self.eat()
                name = token.value.lower()
                if name in RESERVED_NAMES:
                    raise E.ParseError(f"'{token.value}' at position {token.position} is a reserved constant",
                                       code="3032")
                return Variable(name)

            if token.type == TokenType.Number:
                self.eat()
                return Number(ComplexNumber.create(float(token.value)))

            # Unary minus becomes 0 - operand
            if token.type == TokenType.Operator and token.value == '-':
                self.eat()
                return BinOp(Number(ZERO), '-', self.parse_value())

            raise E.ParseError(f"Unexpected token: '{token.value}' at position {token.position}", code="3012")

    def _at_operator(self, *operators):
        token = self.at()
        return token is not None and token.type == TokenType.Operator and token.value in operators


def parse(source):
    return Parser(source).parse()


# -----------------------------
# Evaluation
# -----------------------------

def evaluate(node, scope):
    """Return the value (or list of values) of `node`; every variable must be bound in scope."""
    if not isinstance(node, NODE_TYPES):
        raise E.CalculationError(f"Invalid expression node: {node!r}", code="3036")
    return node.evaluate(scope)


def eval_complex(source, scope=None):
    """Parse and evaluate `source` in one go."""
    try:
        return evaluate(parse(source), scope or {})
    except RecursionError:
        raise E.CalculationError("Expression nested too deeply.", code="3033")


# -----------------------------
# Simplification
# -----------------------------

def simplify(node, scope):
    """Reduce `node` as far as `scope` allows; unbound variables stay symbolic."""
    scope = scope or {}

    if isinstance(node, Variable):
        value = scope.get(node.name)
        if value is None:
            return node
        if isinstance(value, (list, tuple)):
            values = tuple(SE.multiply(node.coefficient, item) for item in value)
            if len(values) == 1:
                return Number(values[0])
            return ValueList(values)
        return Number(SE.multiply(node.coefficient, value))

    if not isinstance(node, BinOp):
        return node

    left = simplify(node.left, scope)
    right = simplify(node.right, scope)

    rule = SIMPLIFY_RULES.get(node.operator)
    if rule is None:
        return BinOp(left, node.operator, right)
    return rule(left, right)


def _is_value(node, value):
    return isinstance(node, Number) and SE.equals(node.value, value)


def _is_atom(node):
    return not isinstance(node, BinOp)


def _scaled(coefficient, term):
    if SE.equals(coefficient, ZERO):
        return Number(ZERO)
    if SE.equals(coefficient, ONE):
        return term
    return BinOp(Number(coefficient), '*', term)


def _combine(operator, left, right):
    if operator == '+':
        return add_var(left, right)
    return subtract_var(left, right)


def multiply_var(left, right):
    if isinstance(left, Number) and isinstance(right, Number):
        return Number(SE.multiply(left.value, right.value))
    if _is_value(left, ONE):
        return right
    if _is_value(right, ONE):
        return left
    if _is_value(left, ZERO) or _is_value(right, ZERO):
        return Number(ZERO)

    if isinstance(left, Variable) and isinstance(right, Variable):
        coefficient = SE.multiply(left.coefficient, right.coefficient)
        if left.name == right.name:
            return _scaled(coefficient, BinOp(Variable(left.name), '^', Number(TWO)))
        return _scaled(coefficient, BinOp(Variable(left.name), '*', Variable(right.name)))

    if isinstance(left, Variable) and isinstance(right, Number):
        return Variable(left.name, SE.multiply(left.coefficient, right.value))
    if isinstance(left, Number) and isinstance(right, Variable):
        return Variable(right.name, SE.multiply(left.value, right.coefficient))

    if isinstance(left, Number) and isinstance(right, BinOp):
        return _push_number(left, right)
    if isinstance(right, Number) and isinstance(left, BinOp):
        return _push_number(right, left)

    # x * (a ± b) = x*a ± x*b
    if _is_atom(left) and isinstance(right, BinOp) and right.operator in ('+', '-'):
        return _combine(right.operator, multiply_var(left, right.left), multiply_var(left, right.right))
    if _is_atom(right) and isinstance(left, BinOp) and left.operator in ('+', '-'):
        return _combine(left.operator, multiply_var(left.left, right), multiply_var(left.right, right))

    return BinOp(left, '*', right)


def _push_number(number, node):
    """Multiply an operator node by a number, folding it into the node where possible."""
    operator = node.operator
    if operator in ('+', '-'):
        return _combine(operator, multiply_var(number, node.left), multiply_var(number, node.right))

    # n * (a * b) = (n*a) * b, only one factor takes the number
    if operator == '*':
        if isinstance(node.left, (Number, Variable)):
            return multiply_var(multiply_var(number, node.left), node.right)
        if isinstance(node.right, (Number, Variable)):
            return multiply_var(node.left, multiply_var(number, node.right))
    if operator == '/' and isinstance(node.left, (Number, Variable)):
        return divide_var(multiply_var(number, node.left), node.right)

    return BinOp(number, '*', node)


def divide_var(left, right):
    if isinstance(left, Number) and isinstance(right, Number):
        return Number(SE.divide(left.value, right.value))
    if _is_value(right, ONE):
        return left

    if isinstance(left, Variable) and isinstance(right, Variable):
        ratio = SE.divide(left.coefficient, right.coefficient)
        if left.name == right.name:
            return Number(ratio)
        return _scaled(ratio, BinOp(Variable(left.name), '/', Variable(right.name)))

    if isinstance(left, Variable) and isinstance(right, Number):
        return Variable(left.name, SE.divide(left.coefficient, right.value))

    # (a ± b) / d = a/d ± b/d
    if isinstance(left, BinOp) and left.operator in ('+', '-') and _is_atom(right):
        return _combine(left.operator, divide_var(left.left, right), divide_var(left.right, right))

    return BinOp(left, '/', right)


def add_var(left, right):
    if isinstance(left, Number) and isinstance(right, Number):
        return Number(SE.add(left.value, right.value))
    if _is_value(left, ZERO):
        return right
    if _is_value(right, ZERO):
        return left
    if isinstance(left, Variable) or isinstance(right, Variable):
        return BinOp(left, '+', right)

    folded = _fold_terms(left, '+', right)
    if folded is not None:
        return folded
    return BinOp(left, '+', right)


def subtract_var(left, right):
    if isinstance(left, Number) and isinstance(right, Number):
        return Number(SE.subtract(left.value, right.value))
    if _is_value(right, ZERO):
        return left
    if isinstance(left, Variable) or isinstance(right, Variable):
        return BinOp(left, '-', right)

    folded = _fold_terms(left, '-', right)
    if folded is not None:
        return folded
    return BinOp(left, '-', right)


def _signed(value, sign):
    if sign > 0:
        return value
    return SE.negative(value)


def _split_sum(node, sign):
    """Split a '+'/'-' node with a Number operand into (signed number, other operand, sign of other operand)."""
    inner_sign = 1 if node.operator == '+' else -1
    if isinstance(node.left, Number):
        return _signed(node.left.value, sign), node.right, sign * inner_sign
    if isinstance(node.right, Number):
        return _signed(node.right.value, sign * inner_sign), node.left, sign
    return None, None, None


def _fold_terms(left, operator, right):
    """Re-associate `n ± (a ± m)` and `(a ± m) ± n` so that n and m fold; None if nothing folds."""
    outer_sign = 1 if operator == '+' else -1

    if isinstance(left, Number) and isinstance(right, BinOp) and right.operator in ('+', '-'):
        number, term, term_sign = _split_sum(right, outer_sign)
        if term is None:
            return None
        total = SE.add(left.value, number)
    elif isinstance(right, Number) and isinstance(left, BinOp) and left.operator in ('+', '-'):
        number, term, term_sign = _split_sum(left, 1)
        if term is None:
            return None
        total = SE.add(number, _signed(right.value, outer_sign))
    else:
        return None

    if term_sign > 0:
        return add_var(Number(total), term)
    return subtract_var(Number(total), term)


def power_var(left, right):
    if _is_value(right, ZERO):
        return Number(ONE)
    if _is_value(right, ONE):
        return left
    if isinstance(left, Number) and isinstance(right, Number):
        return Number(SE.power(left.value, right.value))

    if isinstance(left, BinOp):
        if left.operator == '*':
            return multiply_var(power_var(left.left, right), power_var(left.right, right))
        if left.operator == '/':
            return divide_var(power_var(left.left, right), power_var(left.right, right))
        if left.operator == '^':
            # (b^m)^n = b^(m*n)
            return power_var(left.left, multiply_var(left.right, right))

    return BinOp(left, '^', right)


SIMPLIFY_RULES = {
    '*': multiply_var,
    '/': divide_var,
    '+': add_var,
    '-': subtract_var,
    '^': power_var,
}


def multiple_root_var(node, index):
    """All `index`-th roots of the value(s) of `node`: a Number if there is one, else a ValueList."""
    values = node.evaluate({})
    roots = SE.multi_number_function(SE.square_multidata)(values, index)
    if len(roots) == 1:
        return Number(roots[0])
    return ValueList(tuple(roots))


# -----------------------------
# Result formatting
# -----------------------------

def cleanup(ergebnis, decimal_places):
    """Round a value (or list of values) for display.

    Returns:
        (rendered_string, rounding_flag)
    where rounding_flag indicates whether any part had to be rounded.
    """
    if isinstance(ergebnis, (list, tuple)):
        rendered = [cleanup(value, decimal_places) for value in ergebnis]
        text = ", ".join(part for part, _ in rendered)
        rounding = any(flag for _, flag in rendered)
        return text, rounding

    value = ComplexNumber.from_value(ergebnis)
    if value.is_nan():
        return "NaN", False

    real = round(value.real, decimal_places)
    imaginary = round(value.imaginary, decimal_places)
    rounding = real != value.real or imaginary != value.imaginary
    return str(ComplexNumber.create(real, imaginary)), rounding

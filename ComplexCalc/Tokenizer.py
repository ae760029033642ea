# Tokenizer.py
"""""
Turns an expression string into a flat list of typed tokens.

Rules are tried in order; the first rule that matches the current character wins:
brackets, operators, the constants i/e/π, numbers, whitespace (skipped), variables.
Tokens only carry their literal text; numbers are converted later by the parser.
"""""

import re
from enum import Enum

from . import error as E


class TokenType(Enum):
    Number = "Number"
    Operator = "Operator"
    OpenParen = "OpenParen"
    CloseParen = "CloseParen"
    OpenBracket = "OpenBracket"
    CloseBracket = "CloseBracket"
    OpenBrace = "OpenBrace"
    CloseBrace = "CloseBrace"
    Constant = "Constant"
    Variable = "Variable"


class Token:
    """One lexeme with its 0-based position in the source string."""
    def __init__(self, type, value, position):
        self.type = type
        self.value = value
        self.position = position

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.value, self.position) == (other.type, other.value, other.position)

    def __repr__(self):
        return f"Token({self.type.value}, {self.value!r}, {self.position})"


BRACKETS = {
    "(": TokenType.OpenParen,
    ")": TokenType.CloseParen,
    "[": TokenType.OpenBracket,
    "]": TokenType.CloseBracket,
    "{": TokenType.OpenBrace,
    "}": TokenType.CloseBrace,
}

OPERATOR_PATTERN = re.compile(r"[+\-*/^]")
CONSTANT_PATTERN = re.compile(r"[ieπ]")
DIGIT_PATTERN = re.compile(r"[0-9]")
WHITESPACE_PATTERN = re.compile(r"\s")
VARIABLE_PATTERN = re.compile(r"[a-z]", re.IGNORECASE | re.ASCII)


def scan_number(source, start):
    """Read a digit run with at most one '.' starting at `start`.

    Returns (number_text, position_after_number).
    """
    b = start
    hat_schon_komma = False  # Only one dot allowed in a numeric literal
    while b < len(source) and (DIGIT_PATTERN.match(source[b]) or source[b] == "."):
        if source[b] == ".":
            if hat_schon_komma:
                raise E.TokenizationError(
                    f"Invalid number, second decimal point at position {b}: {source[start:b + 1]}",
                    code="3008")
            hat_schon_komma = True
        b += 1
    return source[start:b], b


def tokenize(source):
    """Convert raw input into a list of Token objects."""
    tokens = []
    b = 0

    while b < len(source):
        current_char = source[b]

        # --- Brackets ---
        if current_char in BRACKETS:
            tokens.append(Token(BRACKETS[current_char], current_char, b))

        # --- Operators ---
        elif OPERATOR_PATTERN.match(current_char):
            tokens.append(Token(TokenType.Operator, current_char, b))

        # --- Constants i, e, π ---
        elif CONSTANT_PATTERN.match(current_char):
            tokens.append(Token(TokenType.Constant, current_char, b))

        # --- Numbers: digits and one decimal separator ---
        elif DIGIT_PATTERN.match(current_char):
            number, end = scan_number(source, b)
            tokens.append(Token(TokenType.Number, number, b))
            b = end
            continue

        # --- Whitespace (ignored) ---
        elif WHITESPACE_PATTERN.match(current_char):
            pass

        # --- Variables (fallback for letters) ---
        elif VARIABLE_PATTERN.match(current_char):
            tokens.append(Token(TokenType.Variable, current_char, b))

        else:
            raise E.TokenizationError(f"Unknown character '{current_char}' at position {b}", code="3011")

        b += 1

    return tokens

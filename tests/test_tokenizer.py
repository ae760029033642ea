"""
Tests for the Tokenizer.
"""

import pytest

from ComplexCalc.Tokenizer import Token, TokenType, tokenize
from ComplexCalc.error import TokenizationError


class TestTokenize:
    """Token types, literal text and positions."""

    def test_mixed_expression(self):
        assert tokenize("2x + (3.5)") == [
            Token(TokenType.Number, "2", 0),
            Token(TokenType.Variable, "x", 1),
            Token(TokenType.Operator, "+", 3),
            Token(TokenType.OpenParen, "(", 5),
            Token(TokenType.Number, "3.5", 6),
            Token(TokenType.CloseParen, ")", 9),
        ]

    def test_constants(self):
        assert [token.type for token in tokenize("iπe")] == [TokenType.Constant] * 3

    def test_all_bracket_kinds(self):
        assert [token.type for token in tokenize("[{()}]")] == [
            TokenType.OpenBracket,
            TokenType.OpenBrace,
            TokenType.OpenParen,
            TokenType.CloseParen,
            TokenType.CloseBrace,
            TokenType.CloseBracket,
        ]

    def test_uppercase_letter_is_a_variable(self):
        assert tokenize("X") == [Token(TokenType.Variable, "X", 0)]

    def test_whitespace_only(self):
        assert tokenize("  \t ") == []
        assert tokenize("") == []


class TestTokenizeErrors:
    """Malformed input."""

    def test_second_decimal_point(self):
        with pytest.raises(TokenizationError) as excinfo:
            tokenize("3.1.4")
        assert excinfo.value.code == "3008"

    @pytest.mark.parametrize("source", ["2 $ 3", "ä", "x % 2"])
    def test_unknown_character(self, source):
        with pytest.raises(TokenizationError) as excinfo:
            tokenize(source)
        assert excinfo.value.code == "3011"

"""
Unit tests for the formula lexer and parser.

Covers the closed grammar: precedence, unary signs, ceil() calls and the
ParseError diagnostics (message plus character position).
"""

import pytest

from chemodose.engine import ParseError, free_variables, parse
from chemodose.engine.ast_nodes import BinaryOp, Call, Number, UnaryOp, Variable
from chemodose.engine.lexer import TokenType, tokenize
from chemodose.engine.parser import MAX_NESTING


class TestTokenize:
    """Tokenizer output and lexical errors."""

    def test_tokens_with_positions(self):
        tokens = tokenize("weight * 2.5")
        assert [t.type for t in tokens] == [
            TokenType.IDENT,
            TokenType.STAR,
            TokenType.NUMBER,
            TokenType.EOF,
        ]
        assert [t.position for t in tokens] == [0, 7, 9, 12]
        assert tokens[2].value == "2.5"

    @pytest.mark.parametrize("source", ["42", "0.5", ".5", "1e3", "2.5E-2"])
    def test_number_forms(self, source):
        tokens = tokenize(source)
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == source

    @pytest.mark.parametrize("source", ["1.", "1.2.3", "2e", "2weight", "."])
    def test_malformed_numbers(self, source):
        with pytest.raises(ParseError) as exc_info:
            tokenize(source)
        assert "Malformed number" in exc_info.value.message
        assert exc_info.value.position == 0

    def test_unexpected_character_position(self):
        with pytest.raises(ParseError) as exc_info:
            tokenize("weight ^ 2")
        assert exc_info.value.message == "Unexpected character '^'"
        assert exc_info.value.position == 7


class TestParsePrecedence:
    """Tree shape follows the usual arithmetic precedence."""

    def test_multiplication_binds_tighter(self):
        tree = parse("1 + 2 * 3")
        assert tree == BinaryOp("+", Number(1.0), BinaryOp("*", Number(2.0), Number(3.0)))

    def test_left_associative_subtraction(self):
        tree = parse("10 - 4 - 3")
        assert tree == BinaryOp("-", BinaryOp("-", Number(10.0), Number(4.0)), Number(3.0))

    def test_left_associative_division(self):
        tree = parse("8 / 4 / 2")
        assert tree == BinaryOp("/", BinaryOp("/", Number(8.0), Number(4.0)), Number(2.0))

    def test_parentheses_override(self):
        tree = parse("(1 + 2) * 3")
        assert tree == BinaryOp("*", BinaryOp("+", Number(1.0), Number(2.0)), Number(3.0))

    def test_unary_minus(self):
        assert parse("-weight") == UnaryOp("-", Variable("weight", 1))

    def test_nested_unary(self):
        assert parse("--2") == UnaryOp("-", UnaryOp("-", Number(2.0)))

    def test_ceil_call(self):
        tree = parse("ceil(weight / 2)")
        assert tree == Call("ceil", BinaryOp("/", Variable("weight", 5), Number(2.0)))

    def test_whitespace_is_ignored(self):
        assert parse(" weight*2 ") == parse("weight * 2")

    def test_positions_kept_but_not_compared(self):
        assert parse("  weight").position == 2
        assert Variable("weight", 0) == Variable("weight", 5)
        assert parse("weight+1") == parse("  weight + 1")

    def test_parse_is_deterministic(self):
        source = "ceil((((4*weight)+7)/(weight+90)*dose_m2)/0.2)"
        assert parse(source) == parse(source)


class TestParseErrors:
    """Invalid formulas raise ParseError with a position."""

    def test_empty_formula(self):
        with pytest.raises(ParseError, match="Empty formula"):
            parse("")

    def test_whitespace_only_formula(self):
        with pytest.raises(ParseError, match="Empty formula"):
            parse("   ")

    def test_unclosed_paren(self):
        with pytest.raises(ParseError) as exc_info:
            parse("(weight + 2")
        assert "Unbalanced '('" in exc_info.value.message
        assert exc_info.value.position == 0

    def test_extra_closing_paren(self):
        with pytest.raises(ParseError) as exc_info:
            parse("weight + 2)")
        assert exc_info.value.message == "Unbalanced ')'"
        assert exc_info.value.position == 10

    def test_dangling_operator(self):
        with pytest.raises(ParseError, match="end of formula"):
            parse("weight *")

    def test_adjacent_operands(self):
        with pytest.raises(ParseError) as exc_info:
            parse("weight dose")
        assert exc_info.value.message == "Unexpected 'dose'"

    def test_unknown_function(self):
        with pytest.raises(ParseError, match="Unknown function 'floor'"):
            parse("floor(weight)")

    def test_ceil_without_call(self):
        with pytest.raises(ParseError, match="must be called with parentheses"):
            parse("ceil + 1")

    def test_ceil_without_argument(self):
        with pytest.raises(ParseError, match="got 0"):
            parse("ceil()")

    def test_ceil_with_two_arguments(self):
        with pytest.raises(ParseError, match="exactly 1 argument"):
            parse("ceil(1, 2)")

    def test_stray_comma(self):
        with pytest.raises(ParseError):
            parse("1, 2")

    def test_non_text_input(self):
        with pytest.raises(ParseError, match="must be text"):
            parse(None)

    def test_deep_nesting_is_rejected(self):
        source = "(" * (MAX_NESTING + 5) + "1" + ")" * (MAX_NESTING + 5)
        with pytest.raises(ParseError, match="nested deeper"):
            parse(source)

    def test_nesting_within_limit(self):
        depth = MAX_NESTING // 2
        tree = parse("(" * depth + "weight" + ")" * depth)
        assert tree == Variable("weight", depth)

    def test_error_str_includes_position(self):
        with pytest.raises(ParseError) as exc_info:
            parse("2 $ 3")
        assert str(exc_info.value) == "Unexpected character '$' (at position 2)"


class TestFreeVariables:
    def test_collects_identifiers(self):
        tree = parse("ceil((((4*weight)+7)/(weight+90)*dose_m2)/0.2)")
        assert free_variables(tree) == frozenset({"weight", "dose_m2"})

    def test_literal_has_none(self):
        assert free_variables(parse("-(1 + 2)")) == frozenset()

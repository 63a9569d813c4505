"""
Tests for tokenization and grammar checks.
"""

import pytest

from core.errors import ParseError, ParseErrorKind
from core.token_system import NEGATE, SUBTRACT, TOKEN_DEFINITIONS, Operand, OperatorKind, TokenType, X
from core.tokenizer import (
    check_function_arg_count,
    find_unmatched_parenthesis,
    is_inside_function,
    tokenize,
)

T = TOKEN_DEFINITIONS


def spellings(tokens):
    return [t.spelling for t in tokens]


def parse_error(definition):
    with pytest.raises(ParseError) as exc_info:
        tokenize(definition)
    return exc_info.value


class TestFindUnmatchedParenthesis:
    """Tests for the parenthesis pre-scan."""

    @pytest.mark.parametrize("text,expected", [
        ("", -1),
        ("x", -1),
        ("(x)", -1),
        ("((x)(x))", -1),
        ("1+2)", 3),
        (")(", 0),
        ("(1+2", 3),
        ("((x)", 3),
    ])
    def test_positions(self, text, expected):
        assert find_unmatched_parenthesis(text) == expected


class TestBackwardScans:
    """Tests for is_inside_function and check_function_arg_count."""

    def test_inside_function(self):
        assert is_inside_function([T["sin"], T["("], X])
        assert is_inside_function([T["atan2"], T["("], X, T[","], T["("], X, T[")"]])

    def test_not_inside_function(self):
        assert not is_inside_function([])
        assert not is_inside_function([X])
        assert not is_inside_function([T["("], X])
        assert not is_inside_function([T["sin"], T["("], X, T[")"]])

    def test_arg_count_matches(self):
        one = Operand("1", 1.0)
        assert check_function_arg_count([T["atan2"], T["("], one, T[","], one])
        assert check_function_arg_count([T["sin"], T["("], one])

    def test_arg_count_mismatch(self):
        one = Operand("1", 1.0)
        assert not check_function_arg_count([T["atan2"], T["("], one])
        assert not check_function_arg_count([T["sin"], T["("], one, T[","], one])

    def test_nested_arguments_not_counted(self):
        one = Operand("1", 1.0)
        tokens = [T["pow"], T["("], T["atan2"], T["("], one, T[","], one, T[")"], T[","], one]
        assert check_function_arg_count(tokens)

    def test_plain_parentheses_always_pass(self):
        one = Operand("1", 1.0)
        assert check_function_arg_count([T["("], one])
        assert check_function_arg_count([one])


class TestTokenize:
    """Tests for successful tokenization."""

    def test_simple_expression(self):
        assert spellings(tokenize("x + 2*x")) == ["x", "+", "2", "*", "x"]

    def test_longest_match_function(self):
        tokens = tokenize("atan2(1,2)")
        assert spellings(tokens) == ["atan2", "(", "1", ",", "2", ")"]
        assert tokens[0].kind == OperatorKind.ATAN2

    def test_case_insensitive(self):
        tokens = tokenize("EXPM1(X) * Pi")
        assert tokens[0].kind == OperatorKind.EXPM1
        assert tokens[2] is X

    def test_whitespace_ignored(self):
        assert spellings(tokenize("  sin ( x )\t")) == ["sin", "(", "x", ")"]

    def test_numbers(self):
        tokens = tokenize(".5+1.+10.25")
        assert [t.value for t in tokens if t.type == TokenType.OPERAND] == [0.5, 1.0, 10.25]

    def test_leading_minus_is_negate(self):
        tokens = tokenize("-2+3")
        assert tokens[0] is NEGATE
        assert tokens[2].kind == OperatorKind.ADD

    def test_binary_minus_is_subtract(self):
        assert tokenize("2-3")[1] is SUBTRACT

    def test_minus_after_operator_is_negate(self):
        tokens = tokenize("2--3")
        assert tokens[1] is SUBTRACT
        assert tokens[2] is NEGATE

    def test_minus_after_paren_and_comma(self):
        tokens = tokenize("pow(-x,-2)")
        assert tokens[2] is NEGATE
        assert tokens[5] is NEGATE

    def test_negated_function_and_group(self):
        assert tokenize("-sin(x)")[0] is NEGATE
        assert tokenize("-(x)")[0] is NEGATE


class TestTokenizeErrors:
    """Tests for each error kind and its reported position."""

    def test_empty(self):
        err = parse_error("")
        assert err.kind == ParseErrorKind.EMPTY_DEFINITION
        assert err.position == -1

    def test_unmatched_left(self):
        err = parse_error("(1+2")
        assert err.kind == ParseErrorKind.UNMATCHED_PARENTHESIS
        assert err.position == 3

    def test_unmatched_right(self):
        err = parse_error("1+2)")
        assert err.kind == ParseErrorKind.UNMATCHED_PARENTHESIS
        assert err.position == 3

    def test_multiple_decimal_points(self):
        err = parse_error("x+1.2.3")
        assert err.kind == ParseErrorKind.MALFORMED_NUMBER
        assert err.position == 2
        assert "multiple decimal points" in err.reason

    def test_lone_decimal_point(self):
        err = parse_error("x+.")
        assert err.kind == ParseErrorKind.MALFORMED_NUMBER
        assert err.position == 2
        assert err.reason == "Invalid number operand"

    def test_unrecognized(self):
        err = parse_error("2 + y")
        assert err.kind == ParseErrorKind.UNRECOGNIZED_TOKEN
        assert err.position == 4

    def test_scientific_notation_not_supported(self):
        err = parse_error("1e3")
        assert err.kind == ParseErrorKind.UNRECOGNIZED_TOKEN
        assert err.position == 1

    @pytest.mark.parametrize("text,position", [
        ("x*\u00b2", 2),
        ("\u0663", 0),
        ("1\u0663", 1),
    ])
    def test_non_ascii_digits_unrecognized(self, text, position):
        err = parse_error(text)
        assert err.kind == ParseErrorKind.UNRECOGNIZED_TOKEN
        assert err.position == position

    @pytest.mark.parametrize("text,position", [
        ("2 3", 2),
        ("*2", 0),
        ("2(3)", 1),
        ("x pi", 2),
        ("sin x", 4),
        ("()", 1),
        ("sin()", 4),
        ("--3", 1),
        ("2+*3", 2),
        ("atan2(,1)", 6),
    ])
    def test_misplaced(self, text, position):
        err = parse_error(text)
        assert err.kind == ParseErrorKind.MISPLACED_TOKEN
        assert err.position == position
        assert err.reason == "Token not allowed at this position"

    @pytest.mark.parametrize("text,position", [
        ("atan2(1,2,3)", 11),
        ("sin(1,2)", 7),
        ("atan2(1)", 7),
        ("pow(2)", 5),
    ])
    def test_wrong_argument_count(self, text, position):
        err = parse_error(text)
        assert err.kind == ParseErrorKind.WRONG_ARGUMENT_COUNT
        assert err.position == position

    @pytest.mark.parametrize("text,position", [
        ("1,2", 1),
        ("(1,2)", 2),
        ("sin((1,2))", 6),
    ])
    def test_invalid_comma(self, text, position):
        err = parse_error(text)
        assert err.kind == ParseErrorKind.INVALID_COMMA
        assert err.position == position

    def test_no_tokens(self):
        err = parse_error("   ")
        assert err.kind == ParseErrorKind.INCOMPLETE_EXPRESSION
        assert err.position == 0

    @pytest.mark.parametrize("text,position", [
        ("2+", 1),
        ("2+ ", 2),
        ("sin", 2),
        ("-", 0),
    ])
    def test_incomplete(self, text, position):
        err = parse_error(text)
        assert err.kind == ParseErrorKind.INCOMPLETE_EXPRESSION
        assert err.position == position

    def test_error_carries_definition(self):
        assert parse_error("2 +* 3").definition == "2 +* 3"

"""core/tokenizer.py - 将函数字符串切分为Token序列并做语法检查"""
import logging

from core.errors import ParseError, ParseErrorKind
from core.token_system import (
    TokenCategory, TokenType, Operand, OperatorKind, NEGATE, category_of, lookup
)

logger = logging.getLogger(__name__)

# previous-token categories after which each kind of token may appear
_BEFORE_OPERAND = frozenset({
    TokenCategory.NONE, TokenCategory.LEFT_PAREN, TokenCategory.NEGATE,
    TokenCategory.BINARY, TokenCategory.COMMA,
})
# no negate directly after negate ("--x")
_BEFORE_NEGATE = _BEFORE_OPERAND - {TokenCategory.NEGATE}
_BEFORE_LEFT_PAREN = _BEFORE_OPERAND | {TokenCategory.FUNCTION}
_BEFORE_BINARY = frozenset({TokenCategory.OPERAND, TokenCategory.RIGHT_PAREN})


def find_unmatched_parenthesis(definition):
    """Index of an unmatched ")" , the last index for an unmatched "(", or -1."""
    depth = 0
    for i, c in enumerate(definition):
        if c == '(':
            depth += 1
        elif c == ')':
            if depth == 0:
                return i
            depth -= 1
    return -1 if depth == 0 else len(definition) - 1


def _scan_to_open_paren(tokens):
    """
    向后扫描到第一个未匹配的左括号
    Returns:
        (index of that left paren or -1, argument count seen at depth 0)
    """
    depth = 0
    n_args = 0
    pos = len(tokens) - 1
    while pos >= 0:
        tk = tokens[pos]
        kind = getattr(tk, 'kind', None)
        if kind == OperatorKind.RIGHT_PAREN:
            depth -= 1
        elif kind == OperatorKind.COMMA and depth == 0:
            n_args += 1
        elif kind == OperatorKind.LEFT_PAREN:
            if depth == 0:
                return pos, n_args
            depth += 1
        elif n_args == 0:
            n_args = 1
        pos -= 1
    return -1, n_args


def is_inside_function(tokens):
    """True if the next token lands inside a function's argument list."""
    pos, _ = _scan_to_open_paren(tokens)
    return pos > 0 and category_of(tokens[pos - 1]) == TokenCategory.FUNCTION


def check_function_arg_count(tokens):
    """
    Called when a ")" is about to be accepted. False only when the enclosing
    parentheses delimit a function's argument list and the number of arguments
    does not match that function's arity.
    """
    pos, n_args = _scan_to_open_paren(tokens)
    if pos <= 0:
        return True
    prev = tokens[pos - 1]
    return category_of(prev) != TokenCategory.FUNCTION or prev.arity == n_args


class Tokenizer:
    """Splits a definition into tokens, enforcing grammar admissibility token by token."""

    def __init__(self, definition):
        self.definition = definition
        self.tokens = []

    def _error(self, kind, position, reason):
        return ParseError(kind, position, reason, self.definition)

    def tokenize(self):
        definition = self.definition
        if not definition:
            raise self._error(ParseErrorKind.EMPTY_DEFINITION, -1, "Function string is empty")

        unmatched = find_unmatched_parenthesis(definition)
        if unmatched >= 0:
            raise self._error(ParseErrorKind.UNMATCHED_PARENTHESIS, unmatched, "Unmatched parenthesis")

        self.tokens = []
        length = len(definition)
        pos = 0
        while pos < length:
            if definition[pos].isspace():
                pos += 1
                continue

            start = pos
            c = definition[pos]
            if c == '.' or '0' <= c <= '9':
                token, pos = self._read_number(start)
            else:
                token = lookup(definition, pos)
                if token is None:
                    raise self._error(ParseErrorKind.UNRECOGNIZED_TOKEN, start, "Unrecognized token")
                pos += len(token.spelling)

            self.tokens.append(self._admit(token, start))

        if not self.tokens:
            raise self._error(ParseErrorKind.INCOMPLETE_EXPRESSION, 0, "No valid tokens found")
        if category_of(self.tokens[-1]) not in _BEFORE_BINARY:
            raise self._error(ParseErrorKind.INCOMPLETE_EXPRESSION, length - 1,
                              "Must end with an operand or )")

        logger.debug(f"Tokenized '{definition}' into {len(self.tokens)} tokens")
        return self.tokens

    def _read_number(self, start):
        """读取数字常数：最多一个小数点，不支持科学计数法"""
        definition = self.definition
        got_point = False
        pos = start
        while pos < len(definition) and (definition[pos] == '.' or '0' <= definition[pos] <= '9'):
            if definition[pos] == '.':
                if got_point:
                    raise self._error(ParseErrorKind.MALFORMED_NUMBER, start,
                                      "Number operand has multiple decimal points")
                got_point = True
            pos += 1

        literal = definition[start:pos]
        try:
            value = float(literal)
        except ValueError:
            # a lone "." lands here
            raise self._error(ParseErrorKind.MALFORMED_NUMBER, start, "Invalid number operand")
        return Operand(literal, value), pos

    def _admit(self, token, start):
        """Check ``token`` against the previous token's category; may turn "-" into negate."""
        prev = category_of(self.tokens[-1] if self.tokens else None)

        if token.type == TokenType.OPERAND or token.is_function:
            valid = prev in _BEFORE_OPERAND
        elif token.kind == OperatorKind.LEFT_PAREN:
            valid = prev in _BEFORE_LEFT_PAREN
        elif token.kind == OperatorKind.RIGHT_PAREN:
            valid = prev in _BEFORE_BINARY
            if valid and not check_function_arg_count(self.tokens):
                raise self._error(ParseErrorKind.WRONG_ARGUMENT_COUNT, start,
                                  "Function op has wrong number of args")
        elif token.kind == OperatorKind.COMMA:
            valid = prev in _BEFORE_BINARY
            if valid and not is_inside_function(self.tokens):
                raise self._error(ParseErrorKind.INVALID_COMMA, start, "Invalid comma")
        else:
            valid = prev in _BEFORE_BINARY
            if not valid and token.kind == OperatorKind.SUBTRACT and prev in _BEFORE_NEGATE:
                token = NEGATE
                valid = True

        if not valid:
            raise self._error(ParseErrorKind.MISPLACED_TOKEN, start, "Token not allowed at this position")
        return token


def tokenize(definition):
    """
    Args:
        definition: 函数字符串, e.g. "x + 2*x*sin(100*pi*x)"
    Returns:
        list of Token in infix order
    Raises:
        ParseError: on the first grammar violation
    """
    return Tokenizer(definition).tokenize()

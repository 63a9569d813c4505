"""core/errors.py"""
from enum import Enum


class ParseErrorKind(Enum):
    EMPTY_DEFINITION = "empty_definition"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    MALFORMED_NUMBER = "malformed_number"
    UNRECOGNIZED_TOKEN = "unrecognized_token"
    MISPLACED_TOKEN = "misplaced_token"
    WRONG_ARGUMENT_COUNT = "wrong_argument_count"
    INVALID_COMMA = "invalid_comma"
    INCOMPLETE_EXPRESSION = "incomplete_expression"


class ParseError(Exception):
    """A definition string violates the grammar.

    ``position`` is a character index into ``definition``, or -1 when no single
    character is to blame (empty definition).
    """

    def __init__(self, kind, position, reason, definition=""):
        super().__init__(f"{reason} (index {position})")
        self.kind = kind
        self.position = position
        self.reason = reason
        self.definition = definition


class MalformedFunctionError(RuntimeError):
    """A postfix sequence that passed the grammar checks does not reduce to one value."""

"""
core/function_parser.py

A one-variable function f(x) given as a string, e.g. "x + 2*x*sin(100*pi*x)".
The letter x (case is ignored throughout) is the independent variable. The
definition is tokenized, checked, and stored as a postfix token sequence that
can be evaluated for any x.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from config.config import PARSER_CONFIG
from core.errors import ParseError, ParseErrorKind
from core.postfix import to_postfix
from core.rpn_evaluator import RPNEvaluator
from core.token_system import Token
from core.tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledFunction:
    """
    Result of compiling a definition string.

    Either valid (non-empty ``postfix``, ``error_position == -1``, empty
    ``error_reason``) or invalid (empty ``postfix``, error fields set).
    """
    definition: str
    postfix: Tuple[Token, ...] = ()
    error_position: int = -1
    error_reason: str = ""
    error_kind: Optional[ParseErrorKind] = None

    @property
    def is_valid(self) -> bool:
        return bool(self.postfix) and self.error_kind is None

    def evaluate(self, x: float) -> float:
        return FunctionParser.evaluate(self, x)

    def postfix_string(self) -> str:
        return ' '.join(t.spelling for t in self.postfix)

    def describe_error(self) -> str:
        if self.is_valid:
            return ""
        return PARSER_CONFIG["error_format"].format(position=self.error_position, reason=self.error_reason)


class FunctionParser:
    """compile / evaluate entry points"""

    @staticmethod
    def compile(definition: Optional[str]) -> CompiledFunction:
        """
        Parse ``definition`` into a new CompiledFunction. Never raises on bad
        input: grammar errors are reported through the returned object.
        """
        definition = "" if definition is None else definition
        try:
            tokens = tokenize(definition)
        except ParseError as e:
            logger.debug(f"Parse failed at index {e.position}: {e.reason} in '{definition}'")
            return CompiledFunction(definition=definition, error_position=e.position,
                                    error_reason=e.reason, error_kind=e.kind)

        return CompiledFunction(definition=definition, postfix=to_postfix(tokens))

    @staticmethod
    def evaluate(compiled: CompiledFunction, x: float) -> float:
        """
        f(x) for a compiled function. NaN if the function is invalid or x is
        NaN; otherwise finite, +/-inf, or NaN when a sub-expression is undefined.
        """
        if not compiled.is_valid:
            return math.nan
        return RPNEvaluator.evaluate(compiled.postfix, x)


def compile_function(definition: Optional[str]) -> CompiledFunction:
    return FunctionParser.compile(definition)


def evaluate_function(compiled: CompiledFunction, x: float) -> float:
    return FunctionParser.evaluate(compiled, x)

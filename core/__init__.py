"""核心模块 - Token系统、中缀解析、RPN评估器和操作符"""
from .token_system import (
    TokenType, TokenCategory, OperatorKind, Token, Operand, Operator,
    TOKEN_DEFINITIONS, LOOKUP_TABLE, TOTAL_TOKENS, lookup, category_of
)
from .errors import ParseError, ParseErrorKind, MalformedFunctionError
from .operators import Operators
from .tokenizer import tokenize
from .postfix import to_postfix
from .rpn_evaluator import RPNEvaluator
from .function_parser import CompiledFunction, FunctionParser, compile_function, evaluate_function

__all__ = [
    'TokenType', 'TokenCategory', 'OperatorKind', 'Token', 'Operand', 'Operator',
    'TOKEN_DEFINITIONS', 'LOOKUP_TABLE', 'TOTAL_TOKENS', 'lookup', 'category_of',
    'ParseError', 'ParseErrorKind', 'MalformedFunctionError',
    'Operators', 'tokenize', 'to_postfix', 'RPNEvaluator',
    'CompiledFunction', 'FunctionParser', 'compile_function', 'evaluate_function'
]

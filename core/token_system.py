"""core/token_system.py"""
import math
from enum import Enum


class TokenType(Enum):
    OPERAND = "operand"    # number, x, pi
    OPERATOR = "operator"  # symbolic, function and grouping operators


class OperatorKind(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    NEGATE = "negate"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "power"
    MODULO = "modulo"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    COMMA = "comma"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ATAN2 = "atan2"
    SQRT = "sqrt"
    POW = "pow"
    EXP = "exp"
    EXPM1 = "expm1"
    LOG = "log"
    LOG1P = "log1p"
    LOG10 = "log10"
    ABS = "abs"
    FLOOR = "floor"
    CEIL = "ceil"
    RINT = "rint"


GROUPING_KINDS = frozenset({OperatorKind.LEFT_PAREN, OperatorKind.RIGHT_PAREN, OperatorKind.COMMA})

# precedence levels, larger binds tighter
PREC_GROUPING = 0
PREC_ADDITIVE = 1
PREC_MULTIPLICATIVE = 2
PREC_POWER = 3
PREC_NEGATE = 4
PREC_FUNCTION = 5


class Token:
    type = None

    def __init__(self, spelling):
        spelling = spelling or ""
        if any(c.isspace() for c in spelling):
            raise ValueError(f"Token spelling cannot contain whitespace: {spelling!r}")
        self._spelling = spelling

    @property
    def spelling(self):
        return self._spelling

    def __repr__(self):
        return f"{type(self).__name__}({self._spelling!r})"


class Operand(Token):
    """Leaf token. ``value is None`` marks the independent variable x."""
    type = TokenType.OPERAND

    def __init__(self, spelling, value=None):
        super().__init__(spelling)
        if value is not None:
            value = float(value)
            if math.isnan(value):
                raise ValueError("Operand value cannot be NaN")
        self._value = value

    @property
    def value(self):
        return self._value

    @property
    def is_variable(self):
        return self._value is None

    def value_at(self, x):
        return x if self._value is None else self._value


class Operator(Token):
    type = TokenType.OPERATOR

    def __init__(self, kind, spelling, arity, precedence, is_function=False):
        super().__init__(spelling)
        if arity <= 0:
            raise ValueError("Number of operands <= 0")
        self._kind = kind
        self._arity = arity
        self._precedence = precedence
        self._is_function = is_function

    @property
    def kind(self):
        return self._kind

    @property
    def arity(self):
        return self._arity

    @property
    def precedence(self):
        return self._precedence

    @property
    def is_function(self):
        return self._is_function

    @property
    def is_grouping(self):
        return self._kind in GROUPING_KINDS

    @property
    def is_binary(self):
        return not self._is_function and self._arity == 2


def _function(kind, arity=1):
    return Operator(kind, kind.value, arity, PREC_FUNCTION, is_function=True)


# Operator catalog. Grouping operators carry a nominal arity of 1 and are never evaluated.
ADD = Operator(OperatorKind.ADD, '+', 2, PREC_ADDITIVE)
SUBTRACT = Operator(OperatorKind.SUBTRACT, '-', 2, PREC_ADDITIVE)
NEGATE = Operator(OperatorKind.NEGATE, '-', 1, PREC_NEGATE)
MULTIPLY = Operator(OperatorKind.MULTIPLY, '*', 2, PREC_MULTIPLICATIVE)
DIVIDE = Operator(OperatorKind.DIVIDE, '/', 2, PREC_MULTIPLICATIVE)
MODULO = Operator(OperatorKind.MODULO, '%', 2, PREC_MULTIPLICATIVE)
POWER = Operator(OperatorKind.POWER, '^', 2, PREC_POWER)
LEFT_PAREN = Operator(OperatorKind.LEFT_PAREN, '(', 1, PREC_GROUPING)
RIGHT_PAREN = Operator(OperatorKind.RIGHT_PAREN, ')', 1, PREC_GROUPING)
COMMA = Operator(OperatorKind.COMMA, ',', 1, PREC_GROUPING)

X = Operand('x')
PI = Operand('pi', math.pi)

# Token定义字典 (NEGATE is left out: it shares "-" with SUBTRACT and is chosen by context)
TOKEN_DEFINITIONS = {
    # 操作数
    'x': X,
    'pi': PI,

    # 二元操作符
    '+': ADD,
    '-': SUBTRACT,
    '*': MULTIPLY,
    '/': DIVIDE,
    '%': MODULO,
    '^': POWER,

    # 分组操作符
    '(': LEFT_PAREN,
    ')': RIGHT_PAREN,
    ',': COMMA,

    # 函数
    'sin': _function(OperatorKind.SIN),
    'cos': _function(OperatorKind.COS),
    'tan': _function(OperatorKind.TAN),
    'asin': _function(OperatorKind.ASIN),
    'acos': _function(OperatorKind.ACOS),
    'atan': _function(OperatorKind.ATAN),
    'atan2': _function(OperatorKind.ATAN2, arity=2),
    'sqrt': _function(OperatorKind.SQRT),
    'pow': _function(OperatorKind.POW, arity=2),
    'exp': _function(OperatorKind.EXP),
    'expm1': _function(OperatorKind.EXPM1),
    'log': _function(OperatorKind.LOG),
    'log1p': _function(OperatorKind.LOG1P),
    'log10': _function(OperatorKind.LOG10),
    'abs': _function(OperatorKind.ABS),
    'floor': _function(OperatorKind.FLOOR),
    'ceil': _function(OperatorKind.CEIL),
    'rint': _function(OperatorKind.RINT),
}

# Probe order for the tokenizer: longest spelling first, so "atan2" wins over "atan",
# "expm1" over "exp" and "log1p"/"log10" over "log". sorted() is stable for ties.
LOOKUP_TABLE = tuple(sorted(TOKEN_DEFINITIONS.values(), key=lambda t: -len(t.spelling)))

TOTAL_TOKENS = len(TOKEN_DEFINITIONS)


def lookup(definition, position):
    """Return the catalog token whose spelling matches ``definition`` at ``position`` (case-insensitive)."""
    for token in LOOKUP_TABLE:
        end = position + len(token.spelling)
        if end <= len(definition) and definition[position:end].lower() == token.spelling:
            return token
    return None


class TokenCategory(Enum):
    """Category of a previously accepted token, as seen by the grammar checks."""
    NONE = "none"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    COMMA = "comma"
    NEGATE = "negate"
    BINARY = "binary"
    FUNCTION = "function"
    OPERAND = "operand"


_GROUPING_CATEGORIES = {
    OperatorKind.LEFT_PAREN: TokenCategory.LEFT_PAREN,
    OperatorKind.RIGHT_PAREN: TokenCategory.RIGHT_PAREN,
    OperatorKind.COMMA: TokenCategory.COMMA,
}


def category_of(token):
    if token is None:
        return TokenCategory.NONE
    if token.type == TokenType.OPERAND:
        return TokenCategory.OPERAND
    if token.kind in _GROUPING_CATEGORIES:
        return _GROUPING_CATEGORIES[token.kind]
    if token.kind == OperatorKind.NEGATE:
        return TokenCategory.NEGATE
    if token.is_function:
        return TokenCategory.FUNCTION
    return TokenCategory.BINARY

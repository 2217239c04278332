"""
Arithmetic Evaluator

Binary operations on operand strings:
- Doubles, rounded to 12 significant digits for display
- Trailing zeros stripped
- Non-finite results (divide by zero, overflow) clamp to '0'
"""

import math
from decimal import Decimal
from enum import Enum

from .formatter import strip_trailing_zeros

PRECISION = 12


class Operator(Enum):
    """Binary operators, valued by their display symbol."""
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '×'
    DIVIDE = '÷'
    
    @property
    def symbol(self) -> str:
        return self.value


def parse_operand(operand: str) -> float:
    """Parse an operand; anything unparsable is NaN."""
    try:
        return float(operand)
    except ValueError:
        return math.nan


def round_significant(value: float, digits: int = PRECISION) -> float:
    """Round to a number of significant digits."""
    return float(f"{value:.{digits}g}")


def to_operand(value: float) -> str:
    """
    Render a finite double as an operand string.
    
    Positional notation with trailing zeros stripped for exponents in
    (-7, 21), scientific notation ('1e+21', '1.5e-7') outside that range.
    """
    if value == 0:
        return '0'
    
    number = Decimal(repr(value))
    exponent = number.adjusted()
    if -7 < exponent < 21:
        return strip_trailing_zeros(format(number, 'f'))
    return format(number.normalize(), 'e')


def evaluate(a: str, b: str, op: Operator) -> str:
    """Apply op to two operands, returning the result as an operand."""
    left = parse_operand(a)
    right = parse_operand(b)
    
    if op is Operator.ADD:
        result = left + right
    elif op is Operator.SUBTRACT:
        result = left - right
    elif op is Operator.MULTIPLY:
        result = left * right
    elif op is Operator.DIVIDE:
        result = math.nan if right == 0 else left / right
    else:
        result = right
    
    if not math.isfinite(result):
        return '0'
    
    return to_operand(round_significant(result))

"""
Number Formatter

Converts operand strings to grouped display text.
"""


def strip_trailing_zeros(value: str) -> str:
    """Drop trailing fractional zeros (and a bare decimal point)."""
    if '.' not in value:
        return value
    
    int_part, decimal_part = value.split('.', 1)
    trimmed = decimal_part.rstrip('0')
    if not trimmed:
        return int_part
    return f"{int_part}.{trimmed}"


def to_display(operand: str) -> str:
    """
    Format an operand for the screen.
    
    Groups the integer part with thousands separators and keeps the
    fractional part as typed. Scientific notation is passed through.
    
    Args:
        operand: Decimal string, e.g. '-1234.50'
    
    Returns:
        Display string, e.g. '-1,234.50'
    """
    if operand == '':
        return '0'
    if 'e' in operand:
        return operand
    
    negative = operand.startswith('-')
    int_part, _, decimal_part = operand.lstrip('-').partition('.')
    grouped = f"{int(int_part or '0'):,}"
    sign = '-' if negative else ''
    
    # A trailing point shows as the bare integer
    if not decimal_part:
        return f"{sign}{grouped}"
    return f"{sign}{grouped}.{decimal_part}"

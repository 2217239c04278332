"""
Keyboard to calculator command mapping.

Digits, '.', '+', '-', '*', 'x', 'X', '/', '=', '%' plus Enter,
Backspace and Escape. Other keys are not calculator commands.
"""

from typing import Optional

from ..engine.evaluator import Operator
from ..engine.state import Command, DECIMAL, CLEAR, DELETE, PERCENT, EQUALS
from .cardkb import KeyEvent, KeyCode

CHAR_COMMANDS = {
    '.': DECIMAL,
    '+': Command.operator(Operator.ADD),
    '-': Command.operator(Operator.SUBTRACT),
    '*': Command.operator(Operator.MULTIPLY),
    'x': Command.operator(Operator.MULTIPLY),
    'X': Command.operator(Operator.MULTIPLY),
    '/': Command.operator(Operator.DIVIDE),
    '=': EQUALS,
    '%': PERCENT,
}

CODE_COMMANDS = {
    KeyCode.ENTER: EQUALS,
    KeyCode.BACKSPACE: DELETE,
    KeyCode.ESC: CLEAR,
}


def command_for_key(event: KeyEvent) -> Optional[Command]:
    """Map a key event to a calculator command, or None."""
    if event.char:
        if event.char in '0123456789':
            return Command.digit(event.char)
        return CHAR_COMMANDS.get(event.char)
    
    return CODE_COMMANDS.get(event.code)

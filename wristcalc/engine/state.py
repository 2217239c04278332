"""
Input State Machine

Pure transition function for calculator keystrokes:
- Digit/decimal entry with overwrite mode and a 16 digit cap
- Strict left-to-right operator chaining
- Equals, clear, delete, sign toggle and percent

dispatch(state, command) never mutates its input and never raises for
user input; degenerate keystrokes are no-ops.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple, Optional

from .evaluator import Operator, evaluate, parse_operand, round_significant, to_operand
from .formatter import to_display

MAX_DIGITS = 16


class CommandKind(Enum):
    """Logical calculator commands, shared by every input adapter."""
    DIGIT = 'digit'
    DECIMAL = 'decimal'
    OPERATOR = 'operator'
    CLEAR = 'clear'
    DELETE = 'delete'
    SIGN = 'sign'
    PERCENT = 'percent'
    EQUALS = 'equals'


@dataclass(frozen=True)
class Command:
    """A tagged command. value is a digit string or an Operator."""
    kind: CommandKind
    value: object = None

    @classmethod
    def digit(cls, d: str) -> 'Command':
        if len(d) != 1 or d not in '0123456789':
            raise ValueError(f"Not a digit: {d!r}")
        return cls(CommandKind.DIGIT, d)

    @classmethod
    def operator(cls, op: Operator) -> 'Command':
        return cls(CommandKind.OPERATOR, op)


DECIMAL = Command(CommandKind.DECIMAL)
CLEAR = Command(CommandKind.CLEAR)
DELETE = Command(CommandKind.DELETE)
SIGN = Command(CommandKind.SIGN)
PERCENT = Command(CommandKind.PERCENT)
EQUALS = Command(CommandKind.EQUALS)


@dataclass(frozen=True)
class EngineState:
    """Calculator state. pending_operator is set iff previous is set."""
    current: str = '0'
    previous: Optional[str] = None
    pending_operator: Optional[Operator] = None
    overwrite: bool = True


INITIAL_STATE = EngineState()


@dataclass(frozen=True)
class Calculation:
    """A completed calculation, ready to be pushed to history."""
    expression: str
    result: str


class Transition(NamedTuple):
    state: EngineState
    calculation: Optional[Calculation] = None


def digit_count(operand: str) -> int:
    """Count digits, ignoring sign and decimal point."""
    return sum(1 for ch in operand if ch.isdigit())


def _digit(state: EngineState, d: str) -> EngineState:
    if state.overwrite:
        return replace(state, current=d, overwrite=False)
    if state.current == '0':
        return replace(state, current=d)
    # Results in scientific notation are not extended
    if 'e' in state.current:
        return state
    if digit_count(state.current) >= MAX_DIGITS:
        return state
    return replace(state, current=state.current + d)


def _decimal(state: EngineState) -> EngineState:
    if state.overwrite:
        return replace(state, current='0.', overwrite=False)
    if '.' in state.current or 'e' in state.current:
        return state
    return replace(state, current=state.current + '.')


def _operator(state: EngineState, op: Operator) -> EngineState:
    if state.pending_operator and not state.overwrite and state.previous is not None:
        resolved = evaluate(state.previous, state.current, state.pending_operator)
        return EngineState(current=resolved, previous=resolved,
                           pending_operator=op, overwrite=True)

    # First operator, or a replacement for one just pressed
    return replace(state, previous=state.current, pending_operator=op, overwrite=True)


def _equals(state: EngineState) -> Transition:
    if not state.pending_operator or state.previous is None or state.overwrite:
        return Transition(state)

    result = evaluate(state.previous, state.current, state.pending_operator)
    calculation = Calculation(
        expression=(f"{to_display(state.previous)} "
                    f"{state.pending_operator.symbol} "
                    f"{to_display(state.current)}"),
        result=to_display(result),
    )
    return Transition(EngineState(current=result), calculation)


def _delete(state: EngineState) -> EngineState:
    if state.overwrite or len(state.current) == 1:
        return replace(state, current='0', overwrite=True)

    trimmed = state.current[:-1]
    # A bare sign or a cut exponent ('-', '1e+') is not a number
    if not math.isfinite(parse_operand(trimmed)):
        return replace(state, current='0', overwrite=True)
    return replace(state, current=trimmed)


def _sign(state: EngineState) -> EngineState:
    if state.current == '0':
        return state
    if state.current.startswith('-'):
        return replace(state, current=state.current[1:], overwrite=False)
    return replace(state, current='-' + state.current, overwrite=False)


def _percent(state: EngineState) -> EngineState:
    value = parse_operand(state.current) / 100
    if not math.isfinite(value):
        return replace(state, overwrite=True)
    return replace(state, current=to_operand(round_significant(value)), overwrite=True)


def dispatch(state: EngineState, command: Command) -> Transition:
    """
    Apply one command to a state.

    Args:
        state: Current engine state
        command: Command to apply

    Returns:
        Transition with the next state, and the completed calculation
        when the command was a successful equals.
    """
    kind = command.kind

    if kind is CommandKind.DIGIT:
        return Transition(_digit(state, command.value))
    elif kind is CommandKind.DECIMAL:
        return Transition(_decimal(state))
    elif kind is CommandKind.OPERATOR:
        return Transition(_operator(state, command.value))
    elif kind is CommandKind.EQUALS:
        return _equals(state)
    elif kind is CommandKind.CLEAR:
        return Transition(INITIAL_STATE)
    elif kind is CommandKind.DELETE:
        return Transition(_delete(state))
    elif kind is CommandKind.SIGN:
        return Transition(_sign(state))
    elif kind is CommandKind.PERCENT:
        return Transition(_percent(state))

    return Transition(state)


def formatted_current(state: EngineState) -> str:
    """Current operand as display text."""
    return to_display(state.current)


def live_expression(state: EngineState) -> str:
    """Pending expression, e.g. '12 +' or '12 + 3'. Empty when idle."""
    if state.previous is None or not state.pending_operator:
        return ''

    trailing = '' if state.overwrite else to_display(state.current)
    return f"{to_display(state.previous)} {state.pending_operator.symbol} {trailing}".strip()

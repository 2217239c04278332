# Engine Module
from .formatter import to_display, strip_trailing_zeros
from .evaluator import Operator, evaluate
from .state import (Command, CommandKind, EngineState, Calculation, Transition,
                    dispatch, formatted_current, live_expression,
                    DECIMAL, CLEAR, DELETE, SIGN, PERCENT, EQUALS, INITIAL_STATE)
from .history import HistoryLedger, HistoryRecord
from .session import CalculatorSession

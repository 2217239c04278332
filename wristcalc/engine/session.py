"""
Calculator Session

Owns the engine state and history ledger for one calculator screen.
"""

from typing import Callable, Optional, Tuple

from .history import HISTORY_LIMIT, HistoryLedger, HistoryRecord
from .state import (INITIAL_STATE, Command, EngineState, dispatch,
                    formatted_current, live_expression)


class CalculatorSession:
    """Sequences commands through the state machine one at a time."""
    
    def __init__(self, id_factory: Optional[Callable[[], str]] = None,
                 history_limit: int = HISTORY_LIMIT):
        self.state: EngineState = INITIAL_STATE
        self.ledger = HistoryLedger(id_factory, history_limit)
    
    def press(self, command: Command) -> EngineState:
        """Apply a command and record any completed calculation."""
        transition = dispatch(self.state, command)
        self.state = transition.state
        
        if transition.calculation:
            self.ledger.push(transition.calculation.expression,
                             transition.calculation.result)
        
        return self.state
    
    def clear_history(self):
        self.ledger.clear()
    
    @property
    def formatted_current(self) -> str:
        return formatted_current(self.state)
    
    @property
    def live_expression(self) -> str:
        return live_expression(self.state)
    
    @property
    def history(self) -> Tuple[HistoryRecord, ...]:
        return self.ledger.records

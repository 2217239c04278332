"""
Calculator Application

Four-function calculator with:
- Left-to-right chaining, percent, sign toggle
- Keypad grid (cursor/touch or arrow keys + Space)
- History of the last 8 calculations (Tab to view, Del to clear)
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..ui.framework import App, AppInfo, Rect
from ..ui.display import Display
from ..input.cardkb import KeyEvent, KeyCode, is_arrow
from ..input.keymap import command_for_key
from ..engine.evaluator import Operator
from ..engine.session import CalculatorSession
from ..engine.state import (Command, CommandKind, DECIMAL, CLEAR, DELETE,
                            PERCENT, SIGN, EQUALS)


@dataclass(frozen=True)
class KeypadButton:
    """A keypad button and the command it sends."""
    label: str
    command: Command
    style: str = 'digit'  # digit, operator, action, equals


def _digit(d: str) -> KeypadButton:
    return KeypadButton(d, Command.digit(d))


def _op(op: Operator) -> KeypadButton:
    return KeypadButton(op.symbol, Command.operator(op), 'operator')


BUTTON_GRID = [
    [KeypadButton('AC', CLEAR, 'action'), KeypadButton('⌫', DELETE, 'action'),
     KeypadButton('%', PERCENT, 'action'), _op(Operator.DIVIDE)],
    [_digit('7'), _digit('8'), _digit('9'), _op(Operator.MULTIPLY)],
    [_digit('4'), _digit('5'), _digit('6'), _op(Operator.SUBTRACT)],
    [_digit('1'), _digit('2'), _digit('3'), _op(Operator.ADD)],
    [KeypadButton('±', SIGN, 'action'), _digit('0'),
     KeypadButton('.', DECIMAL), KeypadButton('=', EQUALS, 'equals')],
]

BUTTON_COLORS = {
    'digit': ('#333333', '#0066cc'),
    'operator': ('#cc6600', '#ff8800'),
    'action': ('#2a2a3a', '#4a4a6a'),
    'equals': ('#0088cc', '#00aaff'),
}


class CalculatorApp(App):
    """Calculator application."""

    MARGIN = 10
    GAP = 5
    READOUT_HEIGHT = 60
    BUTTON_HEIGHT = 38
    HISTORY_ROW_HEIGHT = 24

    def __init__(self, ui, session: CalculatorSession = None):
        super().__init__(ui)
        self.info = AppInfo(
            id='calculator',
            name='Calc',
            icon='🔢',
            color='#00cc88'
        )

        self.session = session or CalculatorSession()
        self.buttons = BUTTON_GRID
        self.selected_row = 1
        self.selected_col = 0
        self.mode = 'keypad'  # 'keypad', 'history'

    def on_enter(self):
        self.mode = 'keypad'

    def on_exit(self):
        pass

    def press(self, command: Command):
        """Send a command to the calculator."""
        self.session.press(command)

    def on_key(self, event: KeyEvent) -> bool:
        command = command_for_key(event)
        if command is not None:
            self.press(command)
            return True

        if event.code == KeyCode.TAB:
            self.mode = 'history' if self.mode == 'keypad' else 'keypad'
            return True

        if event.code == KeyCode.DEL:
            self.session.clear_history()
            return True

        if self.mode != 'keypad':
            return False

        if is_arrow(event.code):
            self._move_selection(event.code)
            return True

        if event.code == KeyCode.SPACE:
            self.press(self.buttons[self.selected_row][self.selected_col].command)
            return True

        return False

    def _move_selection(self, code: int):
        """Move the keypad selection, clamped to the grid."""
        if code == KeyCode.UP:
            self.selected_row = max(0, self.selected_row - 1)
        elif code == KeyCode.DOWN:
            self.selected_row = min(len(self.buttons) - 1, self.selected_row + 1)
        elif code == KeyCode.LEFT:
            self.selected_col = max(0, self.selected_col - 1)
        elif code == KeyCode.RIGHT:
            self.selected_col = min(len(self.buttons[0]) - 1, self.selected_col + 1)

    def on_click(self, x: int, y: int) -> bool:
        if self.mode != 'keypad':
            return False

        hit = self.button_at(x, y)
        if hit is None:
            return False

        self.selected_row, self.selected_col = hit
        self.press(self.buttons[hit[0]][hit[1]].command)
        return True

    # Layout

    def _readout_rect(self) -> Rect:
        content = self.ui.content_rect
        return Rect(self.MARGIN, content.y + self.GAP,
                    content.width - 2 * self.MARGIN, self.READOUT_HEIGHT)

    def button_rect(self, row: int, col: int) -> Rect:
        """Screen rectangle of a keypad button."""
        readout = self._readout_rect()
        cols = len(self.buttons[0])
        width = (readout.width - (cols - 1) * self.GAP) // cols
        top = readout.y + readout.height + 2 * self.GAP
        return Rect(readout.x + col * (width + self.GAP),
                    top + row * (self.BUTTON_HEIGHT + self.GAP),
                    width, self.BUTTON_HEIGHT)

    def button_at(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """(row, col) of the button under a point, or None."""
        for row_idx, row in enumerate(self.buttons):
            for col_idx in range(len(row)):
                if self.button_rect(row_idx, col_idx).contains(x, y):
                    return row_idx, col_idx
        return None

    # Drawing

    def draw(self, display: Display):
        """Draw calculator."""
        content = self.ui.content_rect
        display.rect(content.x, content.y, content.width, content.height,
                     fill='#111111', color='#111111')

        self._draw_readout(display)

        if self.mode == 'history':
            self._draw_history(display)
        else:
            self._draw_keypad(display)

    def _draw_readout(self, display: Display):
        r = self._readout_rect()
        display.rect(r.x, r.y, r.width, r.height, fill='#1a1a1a', color='#333333')

        right = r.x + r.width - 5
        expression = self.session.live_expression
        if expression:
            display.text(right, r.y + 14, expression, '#888888', 12, 'rm')

        value = self.session.formatted_current
        size = display.fit_text_size(value, r.width - 10, 28)
        display.text(right, r.y + 40, value, '#00ff88', size, 'rm')

    def _draw_keypad(self, display: Display):
        active = self.session.state.pending_operator

        for row_idx, row in enumerate(self.buttons):
            for col_idx, button in enumerate(row):
                rect = self.button_rect(row_idx, col_idx)
                selected = (row_idx == self.selected_row and
                            col_idx == self.selected_col)
                normal, highlight = BUTTON_COLORS[button.style]
                is_active = (button.command.kind is CommandKind.OPERATOR and
                             button.command.value is active)
                display.draw_button(rect.x, rect.y, rect.width, rect.height,
                                    button.label,
                                    bg=highlight if selected else normal,
                                    selected=selected, active=is_active)

    def _draw_history(self, display: Display):
        readout = self._readout_rect()
        x = readout.x
        y = readout.y + readout.height + 2 * self.GAP

        display.text(x, y, 'Activity', 'white', 14)
        display.text(x + readout.width, y, 'Del: clear', '#666666', 10, 'rt')
        y += 22

        history = self.session.history
        if not history:
            display.text(display.width // 2, y + 40, 'No calculations yet.',
                         '#666666', 12, 'mt')
            return

        for record in history:
            if y + self.HISTORY_ROW_HEIGHT > display.height:
                break
            # One line per record so the full history fits on screen
            middle = y + (self.HISTORY_ROW_HEIGHT - 4) // 2
            display.rect(x, y, readout.width, self.HISTORY_ROW_HEIGHT - 4,
                         fill='#1a1a1a', color='#2a2a2a')
            display.text(x + 5, middle, record.expression, '#888888', 10, 'lm')
            display.text(x + readout.width - 5, middle, record.result, 'white', 14, 'rm')
            y += self.HISTORY_ROW_HEIGHT

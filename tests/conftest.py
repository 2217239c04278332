import io
import itertools
import pytest

from wristcalc.ui.display import Display
from wristcalc.ui.framework import UI
from wristcalc.input.terminal import TerminalKeyboard
from wristcalc.engine.session import CalculatorSession
from wristcalc.engine.state import INITIAL_STATE, dispatch
from wristcalc.apps.calculator import CalculatorApp


@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def run_commands():
    """Dispatch a sequence of commands from the initial state."""
    def _run(commands, state=INITIAL_STATE):
        calculations = []
        for command in commands:
            state, calculation = dispatch(state, command)
            if calculation:
                calculations.append(calculation)
        return state, calculations
    return _run


@pytest.fixture
def headless_display():
    return Display({'headless': True})


@pytest.fixture
def keyboard():
    return TerminalKeyboard(stream=io.StringIO(''))


@pytest.fixture
def ui(headless_display, keyboard):
    return UI(headless_display, keyboard, {'fps': 60})


@pytest.fixture
def calc_app(ui, id_factory):
    app = CalculatorApp(ui, CalculatorSession(id_factory=id_factory))
    ui.register_app(app)
    ui.launch_app('calculator')
    return app

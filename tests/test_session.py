from wristcalc.engine.evaluator import Operator
from wristcalc.engine.session import CalculatorSession
from wristcalc.engine.state import Command, EQUALS, CLEAR


def press_all(session, text):
    ops = {'+': Operator.ADD, '-': Operator.SUBTRACT,
           '*': Operator.MULTIPLY, '/': Operator.DIVIDE}
    for ch in text:
        if ch in ops:
            session.press(Command.operator(ops[ch]))
        elif ch == '=':
            session.press(EQUALS)
        else:
            session.press(Command.digit(ch))


def test_equals_pushes_history(id_factory):
    session = CalculatorSession(id_factory=id_factory)
    press_all(session, "2+3*4=")
    assert session.formatted_current == "20"
    assert len(session.history) == 1
    record = session.history[0]
    assert (record.expression, record.result, record.id) == ("5 × 4", "20", "id-1")

def test_live_expression_tracks_state(id_factory):
    session = CalculatorSession(id_factory=id_factory)
    press_all(session, "1200/")
    assert session.live_expression == "1,200 ÷"
    press_all(session, "3")
    assert session.live_expression == "1,200 ÷ 3"
    press_all(session, "=")
    assert session.live_expression == ""
    assert session.formatted_current == "400"

def test_history_limit_is_configurable(id_factory):
    session = CalculatorSession(id_factory=id_factory, history_limit=2)
    for _ in range(5):
        press_all(session, "1+1=")
    assert len(session.history) == 2

def test_clear_keeps_history_and_clear_history_empties(id_factory):
    session = CalculatorSession(id_factory=id_factory)
    press_all(session, "1+1=")
    session.press(CLEAR)
    assert len(session.history) == 1
    session.clear_history()
    assert session.history == ()

def test_noop_equals_does_not_push(id_factory):
    session = CalculatorSession(id_factory=id_factory)
    press_all(session, "5=")
    press_all(session, "5+=")
    assert session.history == ()

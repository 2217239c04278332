import pytest
from wristcalc.engine.evaluator import Operator
from wristcalc.engine.state import Command, DECIMAL, CLEAR, DELETE, PERCENT, EQUALS
from wristcalc.input.cardkb import KeyCode, make_event
from wristcalc.input.keymap import command_for_key


@pytest.mark.parametrize("digit", list("0123456789"))
def test_digits(digit):
    assert command_for_key(make_event(ord(digit))) == Command.digit(digit)

@pytest.mark.parametrize("char, operator", [
    ("+", Operator.ADD),
    ("-", Operator.SUBTRACT),
    ("*", Operator.MULTIPLY),
    ("x", Operator.MULTIPLY),
    ("X", Operator.MULTIPLY),
    ("/", Operator.DIVIDE),
])
def test_operators(char, operator):
    assert command_for_key(make_event(ord(char))) == Command.operator(operator)

@pytest.mark.parametrize("key, command", [
    (ord("."), DECIMAL),
    (ord("="), EQUALS),
    (ord("%"), PERCENT),
    (KeyCode.ENTER, EQUALS),
    (KeyCode.BACKSPACE, DELETE),
    (KeyCode.ESC, CLEAR),
])
def test_actions(key, command):
    assert command_for_key(make_event(key)) == command

@pytest.mark.parametrize("key", [ord("a"), ord("c"), ord(" "), KeyCode.TAB,
                                 KeyCode.DEL, KeyCode.UP, KeyCode.LEFT])
def test_other_keys_are_not_commands(key):
    assert command_for_key(make_event(key)) is None

def test_special_keys_have_no_char():
    event = make_event(KeyCode.ENTER, now=1.0)
    assert event.is_special
    assert event.char == ""
    assert event.timestamp == 1.0

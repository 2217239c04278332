import io
import threading
from wristcalc.input.cardkb import KeyCode
from wristcalc.input.terminal import TerminalKeyboard


def test_control_characters_map_to_key_codes():
    assert TerminalKeyboard.to_event("\n").code == KeyCode.ENTER
    assert TerminalKeyboard.to_event("\x7f").code == KeyCode.BACKSPACE
    assert TerminalKeyboard.to_event("\x1b").code == KeyCode.ESC
    event = TerminalKeyboard.to_event("7")
    assert event.char == "7"
    assert not event.is_special

def test_poll_delivers_one_key_at_a_time(keyboard):
    received = []
    keyboard.on_key(received.append)
    keyboard.feed("12")
    assert keyboard.poll().char == "1"
    assert [e.char for e in received] == ["1"]
    assert keyboard.poll().char == "2"
    assert keyboard.poll() is None

def test_callback_errors_do_not_stop_delivery(keyboard, capsys):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    keyboard.on_key(broken)
    keyboard.on_key(received.append)
    keyboard.feed("5")
    keyboard.poll()
    assert len(received) == 1
    assert "boom" in capsys.readouterr().out

def test_reader_thread_drains_stream():
    keyboard = TerminalKeyboard(stream=io.StringIO("9+1\n"))
    keyboard.start()
    assert keyboard.closed.wait(timeout=2)
    chars = []
    while keyboard.pending:
        chars.append(keyboard.poll())
    assert [e.code for e in chars] == [ord("9"), ord("+"), ord("1"), KeyCode.ENTER]
    keyboard.shutdown()

def test_disabled_keyboard_does_not_start():
    keyboard = TerminalKeyboard({'enabled': False}, stream=io.StringIO("1"))
    keyboard.start()
    assert not keyboard.closed.is_set()

class BlockingStream:
    """Stream whose read(1) waits until released."""

    def __init__(self):
        self.release = threading.Event()

    def read(self, n):
        self.release.wait(timeout=2)
        return "7"


def test_shutdown_drops_key_read_while_blocked():
    stream = BlockingStream()
    keyboard = TerminalKeyboard(stream=stream)
    keyboard.start()
    keyboard.shutdown()
    stream.release.set()
    assert keyboard.closed.wait(timeout=2)
    assert not keyboard.pending

def test_shutdown_before_start_is_safe():
    keyboard = TerminalKeyboard(stream=io.StringIO("1"))
    keyboard.shutdown()
    keyboard.start()
    assert keyboard.closed.wait(timeout=2)

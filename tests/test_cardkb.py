import pytest
from wristcalc.input import cardkb
from wristcalc.input.cardkb import CardKB, KeyCode


class FakeBus:
    """Replays a sequence of key bytes."""

    def __init__(self, bus_num):
        self.keys = []
        self.closed = False

    def read_byte(self, address):
        return self.keys.pop(0) if self.keys else 0

    def close(self):
        self.closed = True


@pytest.fixture
def kb(monkeypatch):
    monkeypatch.setattr(cardkb.smbus2, 'SMBus', FakeBus)
    return CardKB({'repeat_rate': 0.15})


def test_reads_printable_and_special_keys(kb):
    kb._bus.keys = [ord('7'), 0, KeyCode.ENTER]
    event = kb.poll()
    assert (event.char, event.is_special) == ('7', False)
    assert kb.poll() is None  # released
    event = kb.poll()
    assert event.code == KeyCode.ENTER
    assert event.is_special

def test_held_key_is_throttled(kb, monkeypatch):
    now = [100.0]
    monkeypatch.setattr(cardkb.time, 'time', lambda: now[0])
    kb._bus.keys = [ord('1'), ord('1'), ord('1')]
    assert kb.poll() is not None
    now[0] += 0.05
    assert kb.poll() is None
    now[0] += 0.2
    assert kb.poll() is not None

def test_callbacks_receive_events(kb):
    received = []
    kb.on_key(received.append)
    kb._bus.keys = [ord('+')]
    kb.poll()
    assert [e.char for e in received] == ['+']

def test_bus_failure_disables_keyboard(monkeypatch, capsys):
    def no_bus(bus_num):
        raise FileNotFoundError("/dev/i2c-1")

    monkeypatch.setattr(cardkb.smbus2, 'SMBus', no_bus)
    kb = CardKB({})
    assert not kb.enabled
    assert kb.poll() is None
    assert "Failed to init I2C bus" in capsys.readouterr().out

def test_shutdown_closes_bus(kb):
    bus = kb._bus
    kb.shutdown()
    assert bus.closed
    assert kb.poll() is None

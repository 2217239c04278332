"""
CardKB I2C Keyboard Driver

M5Stack CardKB mini keyboard connected via I2C.
Address: 0x5F

Keys are polled from the UI loop, so each KeyEvent is delivered to the
callbacks before the next byte is read.
"""

import smbus2
import time
from typing import Optional, Callable
from dataclasses import dataclass
from enum import IntEnum


class KeyCode(IntEnum):
    """Special key codes from CardKB."""
    NONE = 0x00
    BACKSPACE = 0x08
    TAB = 0x09
    ENTER = 0x0D
    ESC = 0x1B
    SPACE = 0x20
    DEL = 0x7F
    
    # Arrow keys (Fn + direction)
    UP = 0xB5
    DOWN = 0xB6
    LEFT = 0xB4
    RIGHT = 0xB7


@dataclass
class KeyEvent:
    """Key event data."""
    code: int
    char: str
    is_special: bool
    timestamp: float


def make_event(code: int, now: float = None) -> KeyEvent:
    """Build a KeyEvent from a raw key byte."""
    is_special = code < 0x20 or code >= 0x7F
    return KeyEvent(
        code=code,
        char='' if is_special else chr(code),
        is_special=is_special,
        timestamp=time.time() if now is None else now
    )


class CardKB:
    """CardKB I2C keyboard driver."""
    
    I2C_ADDRESS = 0x5F
    
    def __init__(self, config: dict):
        """
        Initialize CardKB.
        
        Args:
            config: Configuration with:
                - i2c_bus: I2C bus number (default 1)
                - address: I2C address (default 0x5F)
                - repeat_rate: Minimum seconds between repeats of a held key
        """
        self.bus_num = config.get('i2c_bus', 1)
        self.address = config.get('address', self.I2C_ADDRESS)
        self.enabled = config.get('enabled', True)
        
        self._bus = None
        self._callbacks = []
        self._last_key = 0
        self._last_time = 0
        self._repeat_rate = config.get('repeat_rate', 0.15)
        
        if self.enabled:
            self._init_bus()
    
    def _init_bus(self):
        """Initialize I2C bus."""
        try:
            self._bus = smbus2.SMBus(self.bus_num)
        except OSError as e:
            print(f"CardKB: Failed to init I2C bus {self.bus_num}: {e}")
            self.enabled = False
    
    def on_key(self, callback: Callable[[KeyEvent], None]):
        """Register key event callback."""
        self._callbacks.append(callback)
    
    def read(self) -> Optional[KeyEvent]:
        """
        Read a key from the keyboard.
        
        Returns:
            KeyEvent if key pressed, None otherwise.
        """
        if not self.enabled or not self._bus:
            return None
        
        try:
            key = self._bus.read_byte(self.address)
        except OSError:
            return None
        
        if key == 0:
            self._last_key = 0
            self._last_time = 0
            return None
        
        now = time.time()
        
        # Throttle a held key, let a new key through immediately
        if key == self._last_key:
            if now - self._last_time < self._repeat_rate:
                return None
        else:
            self._last_key = key
        self._last_time = now
        
        event = make_event(key, now)
        dispatch_event(self._callbacks, event, 'CardKB')
        return event
    
    def poll(self) -> Optional[KeyEvent]:
        """Alias for read()."""
        return self.read()
    
    def shutdown(self):
        """Clean up resources."""
        if self._bus:
            self._bus.close()
            self._bus = None


def dispatch_event(callbacks, event: KeyEvent, source: str):
    """Send an event to every callback; one failing callback does not stop the rest."""
    for cb in callbacks:
        try:
            cb(event)
        except Exception as e:
            print(f"{source} callback error: {e}")


def is_arrow(code: int) -> bool:
    """Check if key code is an arrow key."""
    return code in (KeyCode.UP, KeyCode.DOWN, KeyCode.LEFT, KeyCode.RIGHT)

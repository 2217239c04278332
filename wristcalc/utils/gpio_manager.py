"""
GPIO Manager - Centralized GPIO handling for the LCD control pins.

Owns GPIO.setmode() and tracks which pins the display has claimed.
Off the Pi, RPi.GPIO is missing (or refuses to import) and every call
becomes a no-op; the display runs headless in that case.
"""

import threading

try:
    import RPi.GPIO as GPIO
    GPIO_AVAILABLE = True
except (ImportError, RuntimeError):
    GPIO_AVAILABLE = False
    GPIO = None


class GPIOManager:
    """Singleton GPIO manager."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
                    cls._instance._allocated_pins = set()
                    cls._instance._error_printed = set()
        return cls._instance

    def _report(self, key: str, message: str):
        """Print an error once per key."""
        if key not in self._error_printed:
            print(message)
            self._error_printed.add(key)

    def initialize(self) -> bool:
        """Set BCM numbering once."""
        if not GPIO_AVAILABLE:
            self._report('unavailable', "GPIO not available (not running on Pi?)")
            return False

        with self._lock:
            if not self._initialized:
                try:
                    GPIO.setmode(GPIO.BCM)
                    GPIO.setwarnings(False)
                    self._initialized = True
                except (RuntimeError, ValueError) as e:
                    self._report('init', f"GPIO init failed: {e}")
                    return False
            return True

    def setup_output(self, pin: int) -> bool:
        """Setup a pin as output."""
        if not self.initialize():
            return False

        with self._lock:
            if pin in self._allocated_pins:
                return True
            try:
                GPIO.setup(pin, GPIO.OUT)
            except RuntimeError as e:
                self._report(f"pin_{pin}", f"GPIO setup output pin {pin} failed: {e}")
                return False
            self._allocated_pins.add(pin)
            return True

    def output(self, pin: int, value: bool):
        """Set output pin value."""
        if not self.setup_output(pin):
            return
        try:
            GPIO.output(pin, GPIO.HIGH if value else GPIO.LOW)
        except RuntimeError as e:
            self._report(f"pin_{pin}", f"GPIO output pin {pin} failed: {e}")

    def setup_pwm(self, pin: int, frequency: int = 1000):
        """Setup PWM on a pin. Returns the PWM object or None."""
        if not self.setup_output(pin):
            return None
        try:
            return GPIO.PWM(pin, frequency)
        except RuntimeError as e:
            self._report(f"pin_{pin}", f"GPIO PWM setup pin {pin} failed: {e}")
            return None

    def cleanup(self, pins: list = None):
        """Release GPIO pins (all pins when none are given)."""
        if not GPIO_AVAILABLE:
            return

        with self._lock:
            if pins:
                GPIO.cleanup(pins)
                self._allocated_pins.difference_update(pins)
            else:
                GPIO.cleanup()
                self._allocated_pins.clear()
                self._initialized = False

    @property
    def available(self) -> bool:
        """Check if GPIO is available."""
        return GPIO_AVAILABLE


# Global instance
gpio = GPIOManager()

"""
ST7789V 240x320 LCD Display Driver

Direct SPI driver using spidev and PIL - no luma dependency.

With headless: true the SPI/GPIO side is skipped and frames only live
in the PIL framebuffer (optionally saved to snapshot_path as PNG).
"""

from PIL import Image, ImageDraw, ImageFont
import time

# Use centralized GPIO manager
from ..utils.gpio_manager import gpio

# Default font path
FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
FONT_SIZES = [10, 12, 14, 16, 18, 20, 24, 28, 32]

# ST7789 Commands
ST7789_SWRESET = 0x01
ST7789_SLPOUT = 0x11
ST7789_NORON = 0x13
ST7789_INVOFF = 0x20
ST7789_INVON = 0x21
ST7789_DISPON = 0x29
ST7789_CASET = 0x2A
ST7789_RASET = 0x2B
ST7789_RAMWR = 0x2C
ST7789_MADCTL = 0x36
ST7789_COLMOD = 0x3A

# MADCTL value per rotation, and whether width/height swap
ROTATIONS = {
    0: (0x00, False),
    90: (0x60, True),
    180: (0xC0, False),
    270: (0xA0, True),
}


class Display:
    """ST7789V LCD Display driver with drawing utilities."""

    def __init__(self, config: dict):
        """
        Initialize the display.

        Args:
            config: Display configuration dict with:
                - width, height: Display dimensions
                - headless: Skip the LCD, render to the framebuffer only
                - snapshot_path: PNG written on refresh when headless
                - spi_port, spi_device: SPI settings
                - gpio_dc, gpio_rst, gpio_bl: GPIO pins
                - brightness: 0-100
                - rotation: 0, 90, 180, 270
        """
        self.width = config.get('width', 240)
        self.height = config.get('height', 320)
        self.rotation = config.get('rotation', 0)
        self.brightness = config.get('brightness', 100)
        self.invert_colors = config.get('invert_colors', True)
        self.headless = config.get('headless', False)
        self.snapshot_path = config.get('snapshot_path')

        self.gpio_dc = config.get('gpio_dc', 25)
        self.gpio_rst = config.get('gpio_rst', 27)
        self.gpio_bl = config.get('gpio_bl', 24)

        self._spi = None
        self._pwm = None
        self.frames = 0

        if ROTATIONS.get(self.rotation, (0, False))[1]:
            self.width, self.height = self.height, self.width

        if not self.headless:
            self._init_hardware(config)

        # Create framebuffer
        self._buffer = Image.new('RGB', (self.width, self.height), 'black')
        self._draw = ImageDraw.Draw(self._buffer)

        # Load fonts
        self._fonts = {}
        self._load_fonts()

    def _init_hardware(self, config: dict):
        """Open SPI, claim GPIO pins and initialize the panel."""
        import spidev

        gpio.setup_output(self.gpio_dc)
        gpio.setup_output(self.gpio_rst)

        # Backlight PWM, plain output if PWM is unavailable
        self._pwm = gpio.setup_pwm(self.gpio_bl, 1000)
        if self._pwm:
            self._pwm.start(self.brightness)
        else:
            gpio.output(self.gpio_bl, True)

        self._spi = spidev.SpiDev()
        self._spi.open(config.get('spi_port', 0), config.get('spi_device', 0))
        self._spi.max_speed_hz = 40000000  # 40MHz
        self._spi.mode = 0

        self._init_display()

    def _reset(self):
        """Hardware reset the display."""
        gpio.output(self.gpio_rst, True)
        time.sleep(0.05)
        gpio.output(self.gpio_rst, False)
        time.sleep(0.05)
        gpio.output(self.gpio_rst, True)
        time.sleep(0.15)

    def _command(self, cmd):
        """Send command byte."""
        gpio.output(self.gpio_dc, False)
        self._spi.writebytes([cmd])

    def _data(self, data):
        """Send data bytes."""
        gpio.output(self.gpio_dc, True)
        if isinstance(data, int):
            self._spi.writebytes([data])
        else:
            # Send in chunks for large data
            chunk_size = 4096
            for i in range(0, len(data), chunk_size):
                self._spi.writebytes(list(data[i:i + chunk_size]))

    def _init_display(self):
        """Initialize ST7789 display."""
        self._reset()

        self._command(ST7789_SWRESET)
        time.sleep(0.15)

        self._command(ST7789_SLPOUT)
        time.sleep(0.5)

        # Color mode: 16-bit
        self._command(ST7789_COLMOD)
        self._data(0x55)
        time.sleep(0.01)

        self._command(ST7789_MADCTL)
        self._data(ROTATIONS.get(self.rotation, (0x00, False))[0])

        self._command(ST7789_INVON if self.invert_colors else ST7789_INVOFF)
        time.sleep(0.01)

        self._command(ST7789_NORON)
        time.sleep(0.01)

        self._command(ST7789_DISPON)
        time.sleep(0.1)

    def _set_window(self, x0, y0, x1, y1):
        """Set the drawing window."""
        self._command(ST7789_CASET)
        self._data(bytes([x0 >> 8, x0 & 0xFF, x1 >> 8, x1 & 0xFF]))

        self._command(ST7789_RASET)
        self._data(bytes([y0 >> 8, y0 & 0xFF, y1 >> 8, y1 & 0xFF]))

        self._command(ST7789_RAMWR)

    def _load_fonts(self):
        """Load default fonts."""
        try:
            for size in FONT_SIZES:
                self._fonts[size] = ImageFont.truetype(FONT_PATH, size)
        except OSError:
            # Fallback to default font
            for size in FONT_SIZES:
                self._fonts[size] = ImageFont.load_default(size)

    def get_font(self, size: int = 14) -> ImageFont:
        """Get font of specified size."""
        closest = min(self._fonts, key=lambda x: abs(x - size))
        return self._fonts[closest]

    def clear(self, color='black'):
        """Clear the framebuffer."""
        self._draw.rectangle([0, 0, self.width, self.height], fill=color)

    def refresh(self):
        """Push framebuffer to the panel, or to snapshot_path when headless."""
        self.frames += 1

        if self.headless:
            if self.snapshot_path:
                self._buffer.save(self.snapshot_path, 'PNG')
            return

        # RGB888 to RGB565, big endian
        data = bytearray()
        for r, g, b in self._buffer.getdata():
            rgb565 = ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)
            data.append(rgb565 >> 8)
            data.append(rgb565 & 0xFF)

        self._set_window(0, 0, self.width - 1, self.height - 1)
        self._data(bytes(data))

    def snapshot(self) -> Image.Image:
        """Copy of the current framebuffer."""
        return self._buffer.copy()

    # Drawing primitives

    def rect(self, x: int, y: int, w: int, h: int, color='white', fill=None, width: int = 1):
        """Draw a rectangle (outline or filled)."""
        if fill:
            self._draw.rectangle([x, y, x + w, y + h], fill=fill, outline=color, width=width)
        else:
            self._draw.rectangle([x, y, x + w, y + h], outline=color, width=width)

    def text(self, x: int, y: int, text: str, color='white', size: int = 14, anchor='lt'):
        """
        Draw text.

        Args:
            x, y: Position
            text: Text string
            color: Text color
            size: Font size
            anchor: Anchor point (lt=left-top, mm=middle-middle, etc.)
        """
        font = self.get_font(size)
        self._draw.text((x, y), text, fill=color, font=font, anchor=anchor)

    def text_size(self, text: str, size: int = 14) -> tuple:
        """Get text dimensions."""
        font = self.get_font(size)
        bbox = self._draw.textbbox((0, 0), text, font=font)
        return bbox[2] - bbox[0], bbox[3] - bbox[1]

    def fit_text_size(self, text: str, max_width: int, size: int, min_size: int = 10) -> int:
        """Largest font size <= size that fits text into max_width."""
        while size > min_size and self.text_size(text, size)[0] > max_width:
            size -= 2
        return size

    # High-level UI elements

    def draw_status_bar(self, title: str, time_str: str):
        """Draw status bar at top of screen."""
        bar_height = 20
        self.rect(0, 0, self.width, bar_height, fill='#222222', color='#222222')
        self.text(5, 3, title, color='#888888', size=12)
        self.text(self.width - 5, 3, time_str, color='white', size=12, anchor='rt')

    def draw_button(self, x: int, y: int, w: int, h: int, text: str,
                    bg: str = '#333333', selected: bool = False, active: bool = False):
        """Draw a keypad button."""
        border = '#0088ff' if selected else ('#ffffff' if active else '#444444')
        self.rect(x, y, w, h, fill=bg, color=border, width=2 if (selected or active) else 1)
        self.text(x + w // 2, y + h // 2, text, color='white', size=16, anchor='mm')

    def shutdown(self):
        """Clean up resources."""
        if self.headless:
            return
        if self._pwm:
            self._pwm.stop()
        if self._spi:
            self._spi.close()
        gpio.cleanup([self.gpio_dc, self.gpio_rst, self.gpio_bl])

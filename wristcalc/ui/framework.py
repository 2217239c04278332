"""
UI Framework

Provides the core UI system with:
- App management
- Input routing
- Frame loop

Key events are delivered from keyboard.poll() inside update(), so each
keystroke is fully handled before the next one is read.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from dataclasses import dataclass
from datetime import datetime
import time

from .display import Display
from ..input.cardkb import KeyEvent


@dataclass
class Rect:
    """Rectangle for layout."""
    x: int
    y: int
    width: int
    height: int

    def contains(self, px: int, py: int) -> bool:
        return (self.x <= px < self.x + self.width and
                self.y <= py < self.y + self.height)

    @property
    def center(self) -> tuple:
        return (self.x + self.width // 2, self.y + self.height // 2)


@dataclass
class AppInfo:
    """Application metadata."""
    id: str
    name: str
    icon: str  # Single character or emoji
    color: str = '#ffffff'
    description: str = ''


class App(ABC):
    """Base class for applications."""

    def __init__(self, ui: 'UI'):
        self.ui = ui
        self.info: AppInfo = AppInfo(id='base', name='App', icon='?')

    @abstractmethod
    def on_enter(self):
        """Called when app becomes active."""
        pass

    @abstractmethod
    def on_exit(self):
        """Called when app is closed."""
        pass

    @abstractmethod
    def draw(self, display: Display):
        """Draw the app content."""
        pass

    def on_key(self, event: KeyEvent) -> bool:
        """Handle key input. Return True if consumed."""
        return False

    def on_click(self, x: int, y: int) -> bool:
        """Handle click. Return True if consumed."""
        return False

    def update(self, dt: float):
        """Update app state. dt = time since last update."""
        pass


class UI:
    """Main UI manager."""

    STATUS_BAR_HEIGHT = 20

    def __init__(self, display: Display, keyboard, config: dict = None):
        """
        Args:
            display: Display to draw on
            keyboard: Key source with on_key()/poll()/shutdown() (CardKB or
                      TerminalKeyboard)
            config: UI configuration (fps)
        """
        self.display = display
        self.keyboard = keyboard
        self.config = config or {}
        self.fps = self.config.get('fps', 30)

        self.content_rect = Rect(
            0, self.STATUS_BAR_HEIGHT,
            display.width, display.height - self.STATUS_BAR_HEIGHT
        )

        self.apps: Dict[str, App] = {}
        self.current_app: Optional[App] = None

        self.time_str = '00:00'
        self._last_update = time.time()
        self._running = False

        self.keyboard.on_key(self._on_key)

    def _on_key(self, event: KeyEvent):
        """Route keyboard input to the current app."""
        if self.current_app:
            self.current_app.on_key(event)

    def click(self, x: int, y: int) -> bool:
        """Route a click/touch at screen coordinates."""
        if self.current_app:
            return self.current_app.on_click(x, y)
        return False

    def register_app(self, app: App):
        """Register an application."""
        self.apps[app.info.id] = app

    def launch_app(self, app_id: str):
        """Launch an application."""
        if app_id not in self.apps:
            print(f"Unknown app: {app_id}")
            return

        if self.current_app:
            self.current_app.on_exit()

        self.current_app = self.apps[app_id]
        self.current_app.on_enter()

    def update(self):
        """Update UI state and poll the keyboard."""
        now = time.time()
        dt = now - self._last_update
        self._last_update = now
        self.time_str = datetime.now().strftime('%H:%M')

        if self.current_app:
            self.current_app.update(dt)

        self.keyboard.poll()

    def draw(self):
        """Draw the entire UI."""
        self.display.clear()

        title = self.current_app.info.name if self.current_app else ''
        self.display.draw_status_bar(title, self.time_str)

        if self.current_app:
            self.current_app.draw(self.display)

        self.display.refresh()

    def step(self):
        """Run one frame."""
        self.update()
        self.draw()

    def run(self):
        """Main loop. Runs until stop() or Ctrl+C."""
        self._running = True
        try:
            while self._running:
                self.step()
                time.sleep(1 / self.fps)
        except KeyboardInterrupt:
            pass
        finally:
            self.shutdown()

    def stop(self):
        self._running = False

    def shutdown(self):
        """Clean shutdown."""
        if self.current_app:
            self.current_app.on_exit()
            self.current_app = None
        self.display.shutdown()
        self.keyboard.shutdown()

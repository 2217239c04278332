#!/usr/bin/env python3
"""
Wrist Calc - Main Entry Point

Calculator for the Pi wrist computer:
- ST7789V 240x320 LCD display
- CardKB I2C keyboard

Demo mode runs headless with keys read from the terminal.
"""

import yaml
import time
import signal
import sys

from wristcalc.ui.display import Display
from wristcalc.ui.framework import UI
from wristcalc.input.cardkb import CardKB
from wristcalc.input.terminal import TerminalKeyboard
from wristcalc.engine.session import CalculatorSession
from wristcalc.apps.calculator import CalculatorApp


def load_config(path: str) -> dict:
    """Load configuration from YAML file."""
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"Config file {path} not found, using defaults")
        return {}
    except yaml.YAMLError as e:
        print(f"Error loading config: {e}")
        return {}


class WristCalc:
    """Main application class."""

    def __init__(self, config: dict, demo: bool = False):
        """Initialize display, keyboard and the calculator app."""
        self.config = config
        self.demo = demo
        display_config = dict(self.config.get('display', {}))
        input_config = self.config.get('input', {})

        if demo:
            display_config['headless'] = True

        print("Initializing display...")
        self.display = Display(display_config)

        if demo:
            print("Initializing terminal keyboard...")
            self.keyboard = TerminalKeyboard(input_config.get('terminal', {}))
        else:
            print("Initializing CardKB...")
            self.keyboard = CardKB(input_config.get('cardkb', {}))

        print("Initializing UI framework...")
        self.ui = UI(self.display, self.keyboard, self.config.get('ui', {}))

        calc_config = self.config.get('calculator', {})
        self.session = CalculatorSession(
            history_limit=calc_config.get('history_limit', 8)
        )
        self.ui.register_app(CalculatorApp(self.ui, self.session))

        if demo:
            # Registered after the UI so the echo sees the updated state
            self.keyboard.on_key(self._echo)

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, sig, frame):
        """Handle shutdown signals."""
        print("\nShutting down...")
        self._running = False
        self.ui.stop()

    def _echo(self, event):
        """Print the readout after each key (demo mode)."""
        expression = self.session.live_expression
        line = f"{expression} | {self.session.formatted_current}" if expression \
            else self.session.formatted_current
        print(line)

    def _run_demo(self):
        """Run until stdin is exhausted and every queued key is handled."""
        self.keyboard.start()
        self._running = True
        fps = self.ui.fps
        try:
            while self._running and not (self.keyboard.closed.is_set() and not self.keyboard.pending):
                self.ui.step()
                time.sleep(1 / fps)
        except KeyboardInterrupt:
            pass
        finally:
            self.ui.shutdown()

        for record in self.session.history:
            print(f"{record.expression} = {record.result}")

    def run(self):
        """Main run loop."""
        print("Starting Wrist Calc...")
        self.ui.launch_app('calculator')

        if self.demo:
            self._run_demo()
        else:
            self.ui.run()

        print("Goodbye!")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description='Wrist Calc')
    parser.add_argument('-c', '--config', default='config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--demo', action='store_true',
                        help='Run headless with keys read from stdin')
    parser.add_argument('--snapshot', metavar='PATH',
                        help='Save each frame as PNG (demo mode)')
    args = parser.parse_args()

    config = load_config(args.config)
    if args.snapshot:
        if not args.demo:
            print("--snapshot requires --demo")
            sys.exit(1)
        config.setdefault('display', {})['snapshot_path'] = args.snapshot

    WristCalc(config, demo=args.demo).run()


if __name__ == '__main__':
    main()

"""
Terminal Keyboard

Key source for demo mode: reads characters from a text stream (stdin by
default) and hands them out as KeyEvents with the same interface as CardKB.

A reader thread fills a queue; events are only delivered from poll(),
on the UI thread, one per call.
"""

import queue
import sys
import threading
from typing import Callable, Optional, TextIO

from .cardkb import KeyCode, KeyEvent, make_event, dispatch_event

CONTROL_CODES = {
    '\n': KeyCode.ENTER,
    '\r': KeyCode.ENTER,
    '\x08': KeyCode.BACKSPACE,
    '\x7f': KeyCode.BACKSPACE,
    '\x1b': KeyCode.ESC,
    '\t': KeyCode.TAB,
}


class TerminalKeyboard:
    """Keyboard backed by a character stream."""
    
    def __init__(self, config: dict = None, stream: TextIO = None):
        config = config or {}
        self.enabled = config.get('enabled', True)
        self._stream = stream or sys.stdin
        self._queue: 'queue.Queue[str]' = queue.Queue()
        self._callbacks = []
        self._running = False
        self._thread = None
        self.closed = threading.Event()
    
    def start(self):
        """Start reading the stream in the background."""
        if not self.enabled or self._running:
            return
        self._running = True
        self._thread = threading.Thread(target=self._read_loop, daemon=True)
        self._thread.start()
    
    def _read_loop(self):
        while self._running:
            ch = self._stream.read(1)
            if not ch or not self._running:
                break
            self._queue.put(ch)
        self.closed.set()
    
    def feed(self, text: str):
        """Queue characters directly."""
        for ch in text:
            self._queue.put(ch)
    
    def on_key(self, callback: Callable[[KeyEvent], None]):
        """Register key event callback."""
        self._callbacks.append(callback)
    
    @staticmethod
    def to_event(ch: str) -> KeyEvent:
        """Convert one character to a KeyEvent."""
        code = CONTROL_CODES.get(ch)
        if code is not None:
            return make_event(code)
        return make_event(ord(ch))
    
    def read(self) -> Optional[KeyEvent]:
        """Deliver at most one queued key."""
        try:
            ch = self._queue.get_nowait()
        except queue.Empty:
            return None
        
        event = self.to_event(ch)
        dispatch_event(self._callbacks, event, 'Terminal')
        return event
    
    def poll(self) -> Optional[KeyEvent]:
        """Alias for read()."""
        return self.read()
    
    @property
    def pending(self) -> bool:
        return not self._queue.empty()
    
    def shutdown(self):
        """
        Stop queuing keys.

        The reader thread is not joined: it may be blocked in read(1) and
        exits after its current read returns, at EOF, or with the process.
        Keys it read before stopping are dropped.
        """
        self._running = False

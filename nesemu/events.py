"""Events shared between NES components and keyboard input channels."""

from __future__ import annotations

import enum
import logging
import queue
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)

KEYBOARD_CHANNEL_CAPACITY = 100


class Event(enum.Enum):
    """Events components can signal to each other."""

    SWITCH_OFF = enum.auto()
    """Gracefully stops the whole system."""
    RESET = enum.auto()
    NMI = enum.auto()
    """Non-maskable interrupt raised by the PPU at vertical blank."""
    FRAME_READY = enum.auto()
    """The PPU finished computing the next frame."""


class SharedEventBus:
    """Thread-safe set of event flags.

    Every holder of the same instance sees the same flags.
    """

    def __init__(self) -> None:
        self._flags = {event: threading.Event() for event in Event}

    def emit(self, event: Event) -> None:
        """Raise the flag of an event."""
        self._flags[event].set()

    def emitted(self, event: Event) -> bool:
        """Tell whether an event has been emitted and not processed yet."""
        return self._flags[event].is_set()

    def mark_as_processed(self, event: Event) -> None:
        """Clear the flag of an event."""
        self._flags[event].clear()


class KeyEventKind(enum.Enum):
    PRESSED = "pressed"
    RELEASED = "released"


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release."""

    kind: KeyEventKind
    char: str


class KeyboardPublisher:
    """Sending end of a keyboard channel."""

    def __init__(self, channel: queue.Queue) -> None:
        self._channel = channel

    def _send(self, event: KeyEvent) -> None:
        try:
            self._channel.put_nowait(event)
        except queue.Full:
            logger.warning("Keyboard channel full, dropping char: %s", event.char)

    def pressed_char(self, c: str) -> None:
        self._send(KeyEvent(KeyEventKind.PRESSED, c))

    def released_char(self, c: str) -> None:
        self._send(KeyEvent(KeyEventKind.RELEASED, c))


class KeyboardListener:
    """Receiving end of a keyboard channel."""

    def __init__(self, channel: queue.Queue) -> None:
        self._channel = channel

    def _events(self):
        while True:
            try:
                yield self._channel.get_nowait()
            except queue.Empty:
                return

    def read(self) -> list[KeyEvent]:
        """Return all buffered keyboard events, oldest first."""
        return list(self._events())

    def flush(self) -> None:
        """Discard all buffered keyboard events."""
        for _ in self._events():
            pass


class KeyboardChannel:
    """Bounded channel carrying keyboard events from a UI to the NES."""

    def __init__(self, capacity: int = KEYBOARD_CHANNEL_CAPACITY) -> None:
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)

    def publisher(self) -> KeyboardPublisher:
        return KeyboardPublisher(self._queue)

    def listener(self) -> KeyboardListener:
        return KeyboardListener(self._queue)
"""Standard NES controllers read through ports $4016 and $4017."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields, replace

from nesemu.events import KeyEvent, KeyEventKind, KeyboardListener
from nesemu.memory import Memory

_PORT_ONE = 0
_PORT_TWO = 1


class ControllerState(enum.IntFlag):
    """Buttons of a controller, in the order the shift register reports them."""

    A = 0b1000_0000
    B = 0b0100_0000
    SELECT = 0b0010_0000
    START = 0b0001_0000
    UP = 0b0000_1000
    DOWN = 0b0000_0100
    LEFT = 0b0000_0010
    RIGHT = 0b0000_0001


_NO_BUTTONS = ControllerState(0)


@dataclass(frozen=True)
class ControllerButtons:
    """Keyboard characters mapped to each controller button."""

    left: str = "S"
    down: str = "D"
    right: str = "F"
    up: str = "E"
    select: str = "G"
    start: str = "H"
    a: str = "J"
    b: str = "K"

    def to_ascii_uppercase(self) -> ControllerButtons:
        """Return a copy with ASCII characters upper-cased; others unchanged."""
        return replace(
            self,
            **{
                f.name: _ascii_upper(getattr(self, f.name))
                for f in fields(self)
            },
        )

    def _button_for(self, c: str) -> ControllerState | None:
        mapping = (
            (self.left, ControllerState.LEFT),
            (self.down, ControllerState.DOWN),
            (self.right, ControllerState.RIGHT),
            (self.up, ControllerState.UP),
            (self.select, ControllerState.SELECT),
            (self.start, ControllerState.START),
            (self.a, ControllerState.A),
            (self.b, ControllerState.B),
        )
        return next((button for key, button in mapping if key == c), None)

    def parse_input(
        self, events: list[KeyEvent]
    ) -> tuple[ControllerState, ControllerState]:
        """Return the (pressed, released) buttons that ``events`` leave behind."""
        pressed = _NO_BUTTONS
        released = _NO_BUTTONS
        for event in events:
            button = self._button_for(event.char.upper()[:1])
            if button is None:
                continue
            if event.kind is KeyEventKind.PRESSED:
                pressed |= button
                released &= ~button
            else:
                released |= button
                pressed &= ~button
        return pressed, released


def _ascii_upper(c: str) -> str:
    return c.upper() if c.isascii() else c


@dataclass
class _Controller:
    enabled: bool = False
    buttons: ControllerButtons = field(default_factory=ControllerButtons)
    # filled on poll, then shifted out one bit per read
    port_latch: ControllerState = _NO_BUTTONS
    # last state seen when the controller was polled
    snapshot: ControllerState = _NO_BUTTONS


class Controllers(Memory):
    """Both controller ports, fed by a keyboard listener."""

    def __init__(self, keyboard_listener: KeyboardListener) -> None:
        self._one = _Controller()
        self._two = _Controller()
        self._keyboard_listener = keyboard_listener

    def connect_controller_one(self, buttons: ControllerButtons) -> None:
        self._one.enabled = True
        self._one.buttons = buttons.to_ascii_uppercase()

    def disconnect_controller_one(self) -> None:
        self._one.enabled = False

    def connect_controller_two(self, buttons: ControllerButtons) -> None:
        self._two.enabled = True
        self._two.buttons = buttons.to_ascii_uppercase()

    def disconnect_controller_two(self) -> None:
        self._two.enabled = False

    def read(self, address: int) -> int:
        if address == _PORT_ONE:
            controller = self._one
        elif address == _PORT_TWO:
            controller = self._two
        else:
            raise ValueError(f"No controller port at offset {address}")

        if not controller.enabled:
            return 0

        latch = int(controller.port_latch)
        controller.port_latch = ControllerState((latch << 1) & 0xFF)
        return (latch >> 7) & 1

    def write(self, address: int, data: int) -> None:
        if address == _PORT_TWO:
            # $4017 writes belong to the APU, not to the controllers
            return
        if address != _PORT_ONE:
            raise ValueError(f"No controller port at offset {address}")

        if data & 0x01:
            # polling; input is already buffered by the keyboard listener
            return

        events = self._keyboard_listener.read()
        controllers = [c for c in (self._one, self._two) if c.enabled]
        if events:
            for controller in controllers:
                pressed, released = controller.buttons.parse_input(events)
                controller.snapshot = (controller.snapshot & ~released) | pressed
        for controller in controllers:
            controller.port_latch = controller.snapshot

    def size(self) -> int:
        return 2
import threading

from nesemu.events import (
    Event,
    KeyboardChannel,
    KeyEvent,
    KeyEventKind,
    SharedEventBus,
)


def test_events():
    event_bus = SharedEventBus()

    assert not event_bus.emitted(Event.NMI)

    event_bus.emit(Event.NMI)
    assert event_bus.emitted(Event.NMI)

    event_bus.mark_as_processed(Event.NMI)
    assert not event_bus.emitted(Event.NMI)


def test_events_are_independent():
    event_bus = SharedEventBus()
    event_bus.emit(Event.FRAME_READY)
    assert event_bus.emitted(Event.FRAME_READY)
    assert not event_bus.emitted(Event.RESET)
    assert not event_bus.emitted(Event.SWITCH_OFF)


def test_event_bus_visible_across_threads():
    event_bus = SharedEventBus()
    worker = threading.Thread(target=event_bus.emit, args=(Event.SWITCH_OFF,))
    worker.start()
    worker.join()
    assert event_bus.emitted(Event.SWITCH_OFF)


def test_keyboard_round_trip():
    channel = KeyboardChannel()
    publisher = channel.publisher()
    listener = channel.listener()

    publisher.pressed_char("a")
    publisher.released_char("a")

    assert listener.read() == [
        KeyEvent(KeyEventKind.PRESSED, "a"),
        KeyEvent(KeyEventKind.RELEASED, "a"),
    ]
    assert listener.read() == []


def test_keyboard_flush():
    channel = KeyboardChannel()
    channel.publisher().pressed_char("x")
    listener = channel.listener()
    listener.flush()
    assert listener.read() == []


def test_keyboard_full_channel_drops_events():
    channel = KeyboardChannel()
    publisher = channel.publisher()
    for _ in range(100):
        publisher.pressed_char("a")
    publisher.pressed_char("b")

    events = channel.listener().read()
    assert len(events) == 100
    assert all(event.char == "a" for event in events)
"""Exceptions raised by the NES emulator."""

from __future__ import annotations


class NesError(Exception):
    """Base class of every error the NES can produce."""


class NoCartridgeInsertedError(NesError):
    """The NES was asked to run without a cartridge."""

    def __init__(self) -> None:
        super().__init__("NES can't run without a cartridge!")


class MemoryAccessError(NesError, IndexError):
    """An address lies outside the bounds of a memory."""

    def __init__(self, address: int, memory_size: int) -> None:
        self.address = address
        self.memory_size = memory_size
        super().__init__(
            f"Address out of bounds, index is ${address:04X} "
            f"but memory size is ${memory_size:04X}"
        )


class NesInternalError(NesError):
    """An unexpected failure inside the emulated system."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"NES internal error: {details}")


class BusError(Exception):
    """Base class of bus errors."""


class AlreadyAttachedError(BusError):
    """A device is already attached to the bus."""

    def __init__(self, bus_id: str, device_id: str) -> None:
        self.bus_id = bus_id
        self.device_id = device_id
        super().__init__(f"Device {device_id} already attached to bus {bus_id}")


class MissingBusDeviceError(BusError):
    """No device is attached at the requested address."""

    def __init__(self, bus_id: str, address: int) -> None:
        self.bus_id = bus_id
        self.address = address
        super().__init__(
            f"Bus '{bus_id}' doesn't have an attached device for address ${address:04X}"
        )


class BusReadError(BusError):
    """Reading from a device on the bus failed."""

    def __init__(self, bus_id: str, device_id: str, address: int, details: str) -> None:
        self.bus_id = bus_id
        self.device_id = device_id
        self.address = address
        self.details = details
        super().__init__(
            f"Bus '{bus_id}' failed while reading from device '{device_id}' "
            f"on address ${address:04X}: {details}"
        )


class BusWriteError(BusError):
    """Writing to a device on the bus failed."""

    def __init__(self, bus_id: str, device_id: str, address: int, details: str) -> None:
        self.bus_id = bus_id
        self.device_id = device_id
        self.address = address
        self.details = details
        super().__init__(
            f"Bus '{bus_id}' failed while writing to device '{device_id}' "
            f"on address ${address:04X}: {details}"
        )


class UiError(Exception):
    """Base class of user interface errors."""


class UiAlreadyStartedError(UiError):
    """The UI was started twice."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"UI already started: {details}")


class UiNotStartedError(UiError):
    """An action needs the UI to be started first."""

    def __init__(self) -> None:
        super().__init__(
            "UI is not started yet, consider starting it before doing this action"
        )


class UiUnhandledError(UiError):
    """An unexpected UI failure."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"unhandled UI error: {details}")


class NesBusError(NesError):
    """A bus failure seen at the NES level."""

    def __init__(self, details: str, source: BusError) -> None:
        self.details = details
        self.source = source
        super().__init__(f"Bus error: {details}")
        self.__cause__ = source


class NesUiError(NesError):
    """A UI failure seen at the NES level."""

    def __init__(self, details: str, source: UiError) -> None:
        self.details = details
        self.source = source
        super().__init__(f"NES UI error: {details}")
        self.__cause__ = source
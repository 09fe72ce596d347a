import pytest

from nesemu.errors import (
    AlreadyAttachedError,
    BusError,
    BusReadError,
    BusWriteError,
    MemoryAccessError,
    MissingBusDeviceError,
    NesBusError,
    NesError,
    NesInternalError,
    NesUiError,
    NoCartridgeInsertedError,
    UiAlreadyStartedError,
    UiError,
    UiNotStartedError,
    UiUnhandledError,
)


def test_memory_access_error_message_and_fields():
    error = MemoryAccessError(0x10, 0x8)
    assert str(error) == "Address out of bounds, index is $0010 but memory size is $0008"
    assert error.address == 0x10
    assert error.memory_size == 0x8


def test_memory_access_error_is_nes_error_and_index_error():
    error = MemoryAccessError(1, 0)
    assert isinstance(error, NesError)
    assert isinstance(error, IndexError)
    assert str(error) == "Address out of bounds, index is $0001 but memory size is $0000"
    assert (error.address, error.memory_size) == (1, 0)


def test_missing_bus_device_message():
    error = MissingBusDeviceError("main", 0x4018)
    assert str(error) == "Bus 'main' doesn't have an attached device for address $4018"
    assert error.bus_id == "main"


def test_already_attached_message():
    error = AlreadyAttachedError("main", "Controllers")
    assert str(error) == "Device Controllers already attached to bus main"


def test_bus_read_and_write_errors_keep_details():
    read_error = BusReadError("graphics", "CHR", 0x1234, "boom")
    write_error = BusWriteError("graphics", "CHR", 0x1234, "boom")
    for error in (read_error, write_error):
        assert isinstance(error, BusError)
        assert error.device_id == "CHR"
        assert error.address == 0x1234
        assert str(error).endswith(": boom")
        assert "$1234" in str(error)


def test_nes_bus_error_chains_source():
    source = MissingBusDeviceError("main", 0)
    error = NesBusError("attach failed", source)
    assert error.source is source
    assert error.__cause__ is source
    assert str(error) == "Bus error: attach failed"


def test_nes_ui_error_chains_source():
    source = UiNotStartedError()
    error = NesUiError("Failed to start UI", source)
    assert error.__cause__ is source
    assert str(error) == "NES UI error: Failed to start UI"


def test_ui_errors_share_base():
    errors = [UiAlreadyStartedError("x"), UiNotStartedError(), UiUnhandledError("y")]
    assert all(isinstance(error, UiError) for error in errors)
    assert str(errors[0]).endswith("x")
    assert "not started" in str(errors[1])
    assert str(errors[2]).endswith("y")


def test_ui_error_details_in_message():
    assert "already started" in str(UiAlreadyStartedError("twice"))
    assert str(UiUnhandledError("oops")).endswith("oops")


def test_nes_errors_hierarchy():
    with pytest.raises(NesError):
        raise NoCartridgeInsertedError()
    internal = NesInternalError("cpu fault")
    assert internal.details == "cpu fault"
    assert str(internal).endswith("cpu fault")
    assert not isinstance(MissingBusDeviceError("b", 0), NesError)
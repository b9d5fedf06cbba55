"""Tests for the HID handle wrapper."""

import threading
from unittest.mock import Mock

import pytest

from mutebutton.device import HidDeviceHandle
from mutebutton.exceptions import DeviceIOError


@pytest.fixture
def hid_device():
    return Mock()


@pytest.fixture
def handle(hid_device, identity):
    return HidDeviceHandle(hid_device, identity)


@pytest.mark.unit
class TestHidDeviceHandle:
    """Test read/write/close behaviour and error conversion."""

    def test_read_returns_bytes(self, handle, hid_device):
        hid_device.read.return_value = [0, 0, 0, 0, 1, 0, 0, 0]
        assert handle.read(8, 100) == b'\x00\x00\x00\x00\x01\x00\x00\x00'
        hid_device.read.assert_called_once_with(8, 100)

    def test_read_timeout_returns_empty(self, handle, hid_device):
        hid_device.read.return_value = []
        assert handle.read(8, 100) == b''

    def test_read_error_wrapped(self, handle, hid_device):
        hid_device.read.side_effect = OSError("read error")
        with pytest.raises(DeviceIOError) as exc_info:
            handle.read(8, 100)
        assert exc_info.value.operation == "read"
        assert "read error" in exc_info.value.technical_message

    def test_write(self, handle, hid_device):
        hid_device.write.return_value = 2
        assert handle.write(b'\x00\x01') == 2
        hid_device.write.assert_called_once_with(b'\x00\x01')

    def test_write_negative_result_raises(self, handle, hid_device):
        hid_device.write.return_value = -1
        with pytest.raises(DeviceIOError):
            handle.write(b'\x00\x01')

    def test_write_error_wrapped(self, handle, hid_device):
        hid_device.write.side_effect = ValueError("not open")
        with pytest.raises(DeviceIOError) as exc_info:
            handle.write(b'\x00\x01')
        assert exc_info.value.operation == "write"

    def test_close_is_idempotent(self, handle, hid_device):
        handle.close()
        handle.close()
        hid_device.close.assert_called_once()
        assert handle.is_open is False

    def test_closed_handle_raises(self, handle):
        handle.close()
        with pytest.raises(DeviceIOError):
            handle.read(8, 100)
        with pytest.raises(DeviceIOError):
            handle.write(b'\x00\x00')

    def test_close_error_logged_not_raised(self, handle, hid_device):
        hid_device.close.side_effect = OSError("gone")
        handle.close()
        assert handle.is_open is False

    def test_context_manager_closes(self, hid_device, identity):
        with HidDeviceHandle(hid_device, identity) as handle:
            assert handle.is_open
        hid_device.close.assert_called_once()


@pytest.mark.unit
class TestHandleSerialization:
    """Reads, writes and close never overlap on the device."""

    @pytest.fixture
    def blocked_read(self, hid_device):
        """Make hid_device.read block until the returned event is set."""
        entered = threading.Event()
        release = threading.Event()

        def slow_read(length, timeout_ms):
            entered.set()
            release.wait(2.0)
            return []

        hid_device.read.side_effect = slow_read
        hid_device.write.return_value = 2
        return entered, release

    def test_write_waits_for_in_flight_read(self, handle, hid_device, blocked_read):
        entered, release = blocked_read
        reader = threading.Thread(target=handle.read, args=(8, 100), daemon=True)
        reader.start()
        assert entered.wait(1.0)

        writer = threading.Thread(target=handle.write, args=(b'\x00\x01',), daemon=True)
        writer.start()
        writer.join(timeout=0.1)

        assert writer.is_alive()
        hid_device.write.assert_not_called()

        release.set()
        writer.join(timeout=1.0)
        reader.join(timeout=1.0)
        hid_device.write.assert_called_once_with(b'\x00\x01')

    def test_close_waits_for_in_flight_read(self, handle, hid_device, blocked_read):
        entered, release = blocked_read
        reader = threading.Thread(target=handle.read, args=(8, 100), daemon=True)
        reader.start()
        assert entered.wait(1.0)

        closer = threading.Thread(target=handle.close, daemon=True)
        closer.start()
        closer.join(timeout=0.1)

        assert closer.is_alive()
        hid_device.close.assert_not_called()

        release.set()
        closer.join(timeout=1.0)
        hid_device.close.assert_called_once()
        assert handle.is_open is False

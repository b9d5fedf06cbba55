"""Open HID handle to a mute button."""

import logging
import threading

import hid

from mutebutton.exceptions import wrap_hid_error
from mutebutton.models import DeviceIdentity

logger = logging.getLogger(__name__)


class HidDeviceHandle:
    """
    Thin wrapper over an open ``hid.device``.

    Converts hidapi's OSError/ValueError failures into DeviceIOError and
    makes close() idempotent. Every read, write and close runs under the
    handle's own lock, so the device stream is never used from two threads
    at once: a write waits for an in-flight read to time out, and close
    never races a read.
    """

    def __init__(self, device: "hid.device", identity: DeviceIdentity):
        self._device = device
        self._identity = identity
        self._io_lock = threading.Lock()
        self._closed = False

    @property
    def identity(self) -> DeviceIdentity:
        return self._identity

    @property
    def is_open(self) -> bool:
        return not self._closed

    def read(self, length: int, timeout_ms: int) -> bytes:
        """
        Read one input report.

        Returns:
            The report bytes, or b'' if nothing arrived within timeout_ms

        Raises:
            DeviceIOError: If the device is gone or the handle is closed
        """
        with self._io_lock:
            if self._closed:
                raise wrap_hid_error(ValueError("device is closed"), "read", self._identity)
            try:
                data = self._device.read(length, timeout_ms)
            except (OSError, ValueError) as e:
                raise wrap_hid_error(e, "read", self._identity) from e
        return bytes(data) if data else b''

    def write(self, report: bytes) -> int:
        """
        Write one output report (first byte is the report ID).

        Raises:
            DeviceIOError: If the write fails or the handle is closed
        """
        with self._io_lock:
            if self._closed:
                raise wrap_hid_error(ValueError("device is closed"), "write", self._identity)
            try:
                written = self._device.write(report)
            except (OSError, ValueError) as e:
                raise wrap_hid_error(e, "write", self._identity) from e
        if written < 0:
            raise wrap_hid_error(OSError(f"hid_write returned {written}"), "write", self._identity)
        return written

    def close(self) -> None:
        """Close the device. Safe to call more than once."""
        with self._io_lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._device.close()
            except (OSError, ValueError) as e:
                logger.warning(f"Error closing mute button {self._identity}: {e}")
        logger.debug(f"Closed mute button {self._identity}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

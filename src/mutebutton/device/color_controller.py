"""LED color output for the mute button."""

import logging
import threading
from collections.abc import Callable

from mutebutton.exceptions import DeviceIOError
from mutebutton.models import ButtonColor, ButtonMode

from .handle import HidDeviceHandle
from .protocol import encode_command

logger = logging.getLogger(__name__)


class ColorController:
    """
    Writes LED commands to the attached button.

    Writes are serialized through the lock shared with the session's touch
    handling. A failed write is logged, the handle is detached and
    ``on_write_failed`` is called; it is never raised to the caller, since
    losing the device is handled by reconnection.
    """

    def __init__(
        self,
        lock: threading.RLock,
        on_write_failed: Callable[[DeviceIOError], None] | None = None,
    ):
        """
        Initialize the color controller.

        Args:
            lock: Device lock shared with the read loop's decoding
            on_write_failed: Called (with the lock held) after a write fails
        """
        self._lock = lock
        self._on_write_failed = on_write_failed
        self._handle: HidDeviceHandle | None = None
        self._last_command: bytes | None = None

    def attach(self, handle: HidDeviceHandle) -> None:
        """Start sending commands to an open handle."""
        with self._lock:
            self._handle = handle
            self._last_command = None

    def detach(self, handle: HidDeviceHandle | None = None) -> None:
        """
        Stop sending commands; subsequent set() calls are no-ops.

        Args:
            handle: Only detach if this handle is the attached one (None = any)
        """
        with self._lock:
            if handle is None or self._handle is handle:
                self._handle = None

    @property
    def is_attached(self) -> bool:
        with self._lock:
            return self._handle is not None

    @property
    def last_command(self) -> bytes | None:
        """The last report successfully written since attach()."""
        with self._lock:
            return self._last_command

    def set(self, color: ButtonColor, mode: ButtonMode = ButtonMode.FULL_BRIGHT) -> bool:
        """
        Set the LED color.

        Returns:
            True if the command was written, False if no button is attached
            or the write failed
        """
        report = encode_command(color, mode)
        with self._lock:
            if self._handle is None:
                return False
            try:
                self._handle.write(report)
            except DeviceIOError as e:
                logger.error(f"Failed to set button color {color.value}: {e.technical_message}")
                self._handle = None
                if self._on_write_failed:
                    self._on_write_failed(e)
                return False
            self._last_command = report
        logger.debug(f"Button color set to {color.value} ({mode.value})")
        return True

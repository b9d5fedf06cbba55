"""
Mute button session.

Architecture Overview
=====================

::

    monitor thread ──► DeviceLocator.find / still_present / open
         │
         ├── starts ──► reader thread ──► TouchDecoder ──► Microphone
         │                                      │
         │                                      └──► ColorController ──► HID write
         │
         └── starts once ──► UI listener thread ◄── UiChannel (requests)
                                    │
                                    └──► ColorController

    every state change ──► UiChannel (notifications)

The monitor loop is the supervisor. It polls for the button every few
seconds, opens it, and re-enters discovery when the button disappears or a
read/write fails. The reader thread owns the open handle and closes it on
exit; the monitor joins the reader before opening a new handle.

Touch decoding, the resulting mute toggle, and every LED write are
serialized through one re-entrant device lock.
"""

import logging
import queue
import threading

from mutebutton.audio import Microphone
from mutebutton.channel import UiChannel
from mutebutton.device import REPORT_LENGTH, ColorController, DeviceLocator, HidDeviceHandle
from mutebutton.exceptions import (
    ColorParseError,
    DeviceBusyError,
    DeviceIOError,
    DeviceNotFoundError,
    MicrophoneError,
    OperationCancelledError,
    UnsupportedUiMessageError,
)
from mutebutton.models import (
    AppConfig,
    ButtonColor,
    ButtonToUiMessage,
    ConnectionState,
    DeviceIdentity,
    InboundUiMessage,
    MuteState,
    TouchState,
    UiToButtonMessageType,
)

from .connection import ConnectionStateTracker
from .touch import TouchDecoder

logger = logging.getLogger(__name__)

# Pause between empty reads so LED writes are not starved of the handle
WRITE_TURN_SECONDS = 0.002

# How long shutdown waits for the UI listener to notice cancellation
UI_LISTENER_JOIN_SECONDS = 1.0

# Order used by cycle_colors()
CYCLE_COLORS = (
    ButtonColor.BLUE,
    ButtonColor.CYAN,
    ButtonColor.GREEN,
    ButtonColor.PURPLE,
    ButtonColor.RED,
    ButtonColor.WHITE,
    ButtonColor.YELLOW,
    ButtonColor.NO_COLOR,
)


class ButtonSession:
    """
    Keeps one mute button connected and in sync with the microphone.

    Call ``start()``/``stop()`` to run the monitor loop on a background
    thread, or ``monitor()`` to run it on the calling thread until
    ``stop()`` is called from elsewhere.
    """

    def __init__(
        self,
        microphone: Microphone,
        channel: UiChannel,
        locator: DeviceLocator | None = None,
        muted_color: ButtonColor = ButtonColor.RED,
        unmuted_color: ButtonColor = ButtonColor.GREEN,
        device_check_interval: float = 3.0,
        open_retry_delay: float = 5.0,
        read_timeout_ms: int = 100,
        ui_send_timeout: float = 1.0,
    ):
        """
        Initialize the session.

        Args:
            microphone: Microphone whose mute state the button toggles
            channel: Channel to and from the user interface
            locator: Device discovery (defaults to the known MuteMe identities)
            muted_color: LED color while muted
            unmuted_color: LED color while unmuted
            device_check_interval: Seconds between monitor ticks
            open_retry_delay: Seconds to wait after a found button fails to open
            read_timeout_ms: HID read timeout, bounds cancellation latency of the reader
            ui_send_timeout: Seconds a notification may wait for room in the UI queue
        """
        self._microphone = microphone
        self._channel = channel
        self._locator = locator or DeviceLocator()
        self._device_check_interval = device_check_interval
        self._open_retry_delay = open_retry_delay
        self._read_timeout_ms = read_timeout_ms
        self._ui_send_timeout = ui_send_timeout

        # Shared by touch decoding and every device write
        self._lock = threading.RLock()
        self._colors = ColorController(self._lock, on_write_failed=self._on_write_failed)
        self._connection = ConnectionStateTracker()
        self._touch = TouchDecoder()

        self._muted_color = muted_color
        self._unmuted_color = unmuted_color
        self._mute_state = MuteState.UNMUTED
        self._identity: DeviceIdentity | None = None
        self._handle: HidDeviceHandle | None = None

        self._cancel = threading.Event()
        self._monitor_thread: threading.Thread | None = None
        self._reader_thread: threading.Thread | None = None
        self._reader_stop: threading.Event | None = None
        self._ui_thread: threading.Thread | None = None

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        microphone: Microphone,
        channel: UiChannel,
        locator: DeviceLocator | None = None,
    ) -> "ButtonSession":
        """Create a session from a configuration snapshot."""
        return cls(
            microphone=microphone,
            channel=channel,
            locator=locator or DeviceLocator(config.devices),
            muted_color=config.muted_color,
            unmuted_color=config.unmuted_color,
            device_check_interval=config.device_check_interval,
            open_retry_delay=config.open_retry_delay,
            read_timeout_ms=config.read_timeout_ms,
            ui_send_timeout=config.ui_send_timeout,
        )

    # ================================================================
    # STATE
    # ================================================================

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def mute_state(self) -> MuteState:
        with self._lock:
            return self._mute_state

    @property
    def is_muted(self) -> bool:
        return self.mute_state is MuteState.MUTED

    @property
    def touch_state(self) -> TouchState:
        with self._lock:
            return self._touch.state

    @property
    def muted_color(self) -> ButtonColor:
        with self._lock:
            return self._muted_color

    @property
    def unmuted_color(self) -> ButtonColor:
        with self._lock:
            return self._unmuted_color

    @property
    def identity(self) -> DeviceIdentity | None:
        """Identity of the button currently in use, if any."""
        return self._identity

    @property
    def cancel_event(self) -> threading.Event:
        """Event that stops every loop of this session once set."""
        return self._cancel

    # ================================================================
    # LIFECYCLE
    # ================================================================

    def start(self) -> None:
        """Run the monitor loop on a background thread."""
        if self._monitor_thread and self._monitor_thread.is_alive():
            logger.warning("ButtonSession is already running")
            return

        self._cancel.clear()
        self._monitor_thread = threading.Thread(
            target=self.monitor, name="mutebutton-monitor", daemon=True
        )
        self._monitor_thread.start()
        logger.debug("ButtonSession started")

    def stop(self, timeout: float | None = None) -> None:
        """
        Cancel all loops, close the device and wait for the monitor thread.

        Args:
            timeout: Seconds to wait for the monitor to finish its shutdown
                (default: long enough for the reader and UI listener to exit)
        """
        if timeout is None:
            timeout = self._shutdown_timeout() + 1.0
        self._cancel.set()
        if self._monitor_thread and self._monitor_thread.is_alive():
            self._monitor_thread.join(timeout=timeout)
        self._monitor_thread = None
        logger.debug("ButtonSession stopped")

    def monitor(self, cancel: threading.Event | None = None) -> None:
        """
        Supervise the button connection until cancelled.

        Never returns because of a device fault: unexpected errors in a
        tick are logged and the next tick runs as usual.

        Args:
            cancel: Event that stops the session (defaults to the session's own)
        """
        if cancel is not None:
            self._cancel = cancel
        self._reset_state()
        logger.info("Monitoring for mute button")

        try:
            while not self._cancel.is_set():
                try:
                    delay = self.check_connection()
                except Exception as e:
                    logger.exception(f"Error in mute button monitoring: {e}")
                    delay = self._device_check_interval
                self._cancel.wait(delay)
        finally:
            self.shutdown()

    def check_connection(self) -> float:
        """
        Run one monitor tick.

        Returns:
            Seconds to wait before the next tick
        """
        if self._connection.is_connected:
            identity = self._identity
            reader = self._reader_thread
            reader_alive = reader is not None and reader.is_alive()
            if reader_alive and identity is not None and self._locator.still_present(identity):
                return self._device_check_interval

            if reader_alive:
                logger.warning(f"Mute button {identity} was unplugged")
            else:
                logger.warning(f"Reader for mute button {identity} exited, reconnecting")
            self._mark_disconnected()
            self._release_connection()
            self._identity = None
            return self._device_check_interval

        # Searching: make sure the previous handle is closed first
        if not self._release_connection():
            return self._device_check_interval

        identity = self._locator.find()
        if identity is None:
            self._identity = None
            self._set_connection(ConnectionState.DISCONNECTED)
            return self._device_check_interval

        try:
            handle = self._locator.open(identity)
        except DeviceNotFoundError:
            self._identity = None
            self._set_connection(ConnectionState.DISCONNECTED)
            return self._device_check_interval
        except DeviceBusyError as e:
            logger.warning(
                f"{e.technical_message}; waiting {self._open_retry_delay:g} seconds before retrying ..."
            )
            self._identity = identity
            self._set_connection(ConnectionState.DISCONNECTED)
            return self._open_retry_delay

        self._connect(identity, handle)
        return self._device_check_interval

    def _reset_state(self) -> None:
        self._connection.reset()
        with self._lock:
            self._touch.reset()
            self._mute_state = MuteState.UNMUTED
        self._identity = None
        if self._ui_thread and not self._ui_thread.is_alive():
            self._ui_thread = None

    def _connect(self, identity: DeviceIdentity, handle: HidDeviceHandle) -> None:
        with self._lock:
            self._identity = identity
            self._handle = handle
            self._touch.reset()
            self._colors.attach(handle)

        # Connected before the reader starts, so a read that fails at once
        # is recorded after it and the next tick reopens the button
        self._set_connection(ConnectionState.CONNECTED)
        self.sync_with_microphone()
        self._start_reader(handle)
        self._start_ui_listener()

    def _mark_disconnected(self) -> None:
        """Detach the device and ask the reader to close it."""
        with self._lock:
            self._colors.detach()
            self._touch.reset()
            self._mute_state = MuteState.UNMUTED
            if self._reader_stop is not None:
                self._reader_stop.set()
        self._set_connection(ConnectionState.DISCONNECTED)

    def _release_connection(self) -> bool:
        """
        Wait for the reader to exit and the handle to be closed.

        Returns:
            False if the reader did not exit in time (the handle may still be open)
        """
        thread = self._reader_thread
        if thread is not None:
            if self._reader_stop is not None:
                self._reader_stop.set()
            thread.join(timeout=self._reader_join_timeout())
            if thread.is_alive():
                logger.warning("Mute button reader did not stop, retrying later")
                return False
            self._reader_thread = None
            self._reader_stop = None

        with self._lock:
            handle, self._handle = self._handle, None
            self._colors.detach()
        if handle is not None:
            handle.close()
        return True

    def _reader_join_timeout(self) -> float:
        # One read, plus a notification that may block on a full UI queue
        return self._read_timeout_ms / 1000 + self._ui_send_timeout + 1.0

    def _shutdown_timeout(self) -> float:
        return self._reader_join_timeout() + UI_LISTENER_JOIN_SECONDS

    def shutdown(self) -> None:
        """Cancel the loops, report the button disconnected and close it."""
        logger.info("Stopping mute button session")
        self._cancel.set()
        self._mark_disconnected()
        self._release_connection()
        if self._ui_thread and self._ui_thread.is_alive():
            self._ui_thread.join(timeout=UI_LISTENER_JOIN_SECONDS)

    def _set_connection(self, state: ConnectionState) -> None:
        event = self._connection.update(state)
        if event is ConnectionState.CONNECTED:
            self._notify_ui(ButtonToUiMessage.CONNECTED)
        elif event is ConnectionState.DISCONNECTED:
            self._notify_ui(ButtonToUiMessage.DISCONNECTED)

    def _on_write_failed(self, error: DeviceIOError) -> None:
        # Called by ColorController with the device lock held
        self._mark_disconnected()

    def _notify_ui(self, message: ButtonToUiMessage) -> None:
        try:
            self._channel.send_to_ui(message, timeout=self._ui_send_timeout)
        except queue.Full:
            logger.error(f"UI queue is full, dropped '{message.value}' notification")

    # ================================================================
    # READ LOOP
    # ================================================================

    def _start_reader(self, handle: HidDeviceHandle) -> None:
        stop = threading.Event()
        thread = threading.Thread(
            target=self._read_loop, args=(handle, stop), name="mutebutton-reader", daemon=True
        )
        self._reader_stop = stop
        self._reader_thread = thread
        thread.start()

    def _read_loop(self, handle: HidDeviceHandle, stop: threading.Event) -> None:
        logger.debug(f"Reading from mute button {handle.identity}")
        try:
            while not (self._cancel.is_set() or stop.is_set()):
                try:
                    report = handle.read(REPORT_LENGTH, self._read_timeout_ms)
                except DeviceIOError as e:
                    logger.warning(f"Lost connection to mute button: {e.technical_message}")
                    self._mark_disconnected()
                    break
                if report:
                    self.process_report(report)
                else:
                    # Give writers waiting on the handle lock a turn
                    stop.wait(WRITE_TURN_SECONDS)
        except Exception as e:
            logger.exception(f"Error in mute button reader: {e}")
            self._mark_disconnected()
        finally:
            with self._lock:
                self._colors.detach(handle)
                handle.close()
                if self._handle is handle:
                    self._handle = None
            logger.debug(f"Reader for mute button {handle.identity} stopped")

    def process_report(self, report: bytes) -> None:
        """Decode one input report and toggle mute on a completed touch."""
        with self._lock:
            if self._touch.feed_report(report):
                self._toggle_mute()

    def _toggle_mute(self) -> None:
        # Device lock held
        if self._mute_state is MuteState.MUTED:
            logger.info("Unmuting")
            try:
                self._microphone.unmute()
            except MicrophoneError as e:
                logger.error(f"Could not unmute: {e.technical_message}")
                return
            self._mute_state = MuteState.UNMUTED
            self._colors.set(self._unmuted_color)
            self._notify_ui(ButtonToUiMessage.UNMUTED)
            return

        logger.info("Muting")
        try:
            self._microphone.mute()
        except MicrophoneError as e:
            logger.error(f"Could not mute: {e.technical_message}")
            return
        self._mute_state = MuteState.MUTED
        self._colors.set(self._muted_color)
        self._notify_ui(ButtonToUiMessage.MUTED)

    def sync_with_microphone(self) -> None:
        """Adopt the microphone's current mute state and show it on the LED."""
        try:
            muted = self._microphone.is_muted()
        except MicrophoneError as e:
            logger.error(f"Could not read microphone state, assuming unmuted: {e.technical_message}")
            muted = False

        with self._lock:
            self._mute_state = MuteState.MUTED if muted else MuteState.UNMUTED
            self._render()
        self._notify_ui(ButtonToUiMessage.MUTED if muted else ButtonToUiMessage.UNMUTED)

    def _render(self) -> None:
        with self._lock:
            if self._mute_state is MuteState.MUTED:
                self._colors.set(self._muted_color)
            else:
                self._colors.set(self._unmuted_color)

    # ================================================================
    # UI LISTENER
    # ================================================================

    def _start_ui_listener(self) -> None:
        # One listener per session, even across reconnects
        if self._ui_thread is not None:
            return
        self._ui_thread = threading.Thread(
            target=self._ui_loop, name="mutebutton-ui-listener", daemon=True
        )
        self._ui_thread.start()

    def _ui_loop(self) -> None:
        try:
            while not self._cancel.is_set():
                message = self._channel.receive_from_ui(self._cancel)
                self.handle_ui_message(message)
        except OperationCancelledError:
            logger.debug("UI listener cancelled")
        except Exception as e:
            logger.exception(f"Error in UI listener loop: {e}")

    def handle_ui_message(self, message: InboundUiMessage) -> None:
        """
        Apply one request from the UI.

        Raises:
            UnsupportedUiMessageError: If the message kind is not handled
        """
        kind = message.kind

        if kind is UiToButtonMessageType.MUTE_COLOR:
            logger.info(f"Received MuteColor request: {message.data}")
            color = self._parse_color(message.data)
            if color is not None:
                with self._lock:
                    self._muted_color = color
                    self._render()

        elif kind is UiToButtonMessageType.UNMUTE_COLOR:
            logger.info(f"Received UnmuteColor request: {message.data}")
            color = self._parse_color(message.data)
            if color is not None:
                with self._lock:
                    self._unmuted_color = color
                    self._render()

        elif kind is UiToButtonMessageType.SHUTTING_DOWN:
            logger.info(f"Received OnShutdown request: {message.data}")
            self.turn_off_colors()

        elif kind is UiToButtonMessageType.MODE:
            # Only FullBright is driven; the request is logged and otherwise ignored
            logger.info(f"Received Mode request: {message.data}")

        else:
            raise UnsupportedUiMessageError(kind)

    @staticmethod
    def _parse_color(name: str) -> ButtonColor | None:
        try:
            return ButtonColor.parse(name)
        except ColorParseError as e:
            logger.error(f"Ignoring color request: {e.get_full_message()}")
            return None

    def turn_off_colors(self) -> None:
        """Switch both color slots to NoColor. The mute state is unchanged."""
        with self._lock:
            self._muted_color = ButtonColor.NO_COLOR
            self._unmuted_color = ButtonColor.NO_COLOR
            self._render()

    # ================================================================
    # HARDWARE CHECK
    # ================================================================

    def cycle_colors(self, delay: float = 0.5) -> None:
        """
        Show every color on the button in turn, then turn the LED off.

        Opens the button directly; do not call while the monitor loop is running.

        Raises:
            DeviceNotFoundError: If no button is attached
            DeviceBusyError: If the button cannot be opened
        """
        identity = self._locator.find()
        if identity is None:
            raise DeviceNotFoundError()

        with self._locator.open(identity) as handle:
            self._colors.attach(handle)
            try:
                for color in CYCLE_COLORS:
                    self._colors.set(color)
                    if self._cancel.wait(delay):
                        break
                self._colors.set(ButtonColor.NO_COLOR)
            finally:
                self._colors.detach(handle)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
